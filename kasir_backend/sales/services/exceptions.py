# sales/services/exceptions.py

"""
CHECKOUT / REPORT DOMAIN ERRORS

Every error carries a machine `code`; views put it next to the human
`detail` in the response body.

Taxonomy:
- validation (400):    EmptyCheckoutError, InvalidItemError, InvalidQuantityError
- not found (400):     ProductNotFoundError
- business rule (400): InsufficientStockError, AmountOverflowError
- retryable (409):     CheckoutConflictError
- storage (500):       CheckoutStorageError
"""

from __future__ import annotations


class CheckoutError(Exception):
    """Base checkout exception"""

    code = "checkout_error"


class EmptyCheckoutError(CheckoutError):
    code = "empty_items"

    def __init__(self, message: str = "items must not be empty"):
        super().__init__(message)


class InvalidItemError(CheckoutError):
    code = "invalid_item"


class InvalidQuantityError(InvalidItemError):
    code = "invalid_quantity"


class ProductNotFoundError(CheckoutError):
    code = "product_not_found"

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"product ID {product_id} not found")


class InsufficientStockError(CheckoutError):
    code = "insufficient_stock"

    def __init__(self, *, product_id, product_name: str, requested: int, available: int):
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(f"insufficient stock for product: {product_name}")


class AmountOverflowError(CheckoutError):
    code = "amount_too_large"

    def __init__(self, message: str = "checkout total exceeds the largest storable amount"):
        super().__init__(message)


class CheckoutConflictError(CheckoutError):
    """
    Lock wait timeout, deadlock or serialization failure.
    Nothing was committed; the client may retry the same request.
    """

    code = "checkout_conflict"
    retryable = True

    def __init__(self, message: str = "checkout conflicted with a concurrent checkout, retry", retry_after: int = 1):
        self.retry_after = retry_after
        super().__init__(message)


class CheckoutStorageError(CheckoutError):
    code = "storage_error"

    def __init__(self, message: str = "failed to persist checkout"):
        super().__init__(message)


class ReportValidationError(ValueError):
    code = "invalid_report_range"
