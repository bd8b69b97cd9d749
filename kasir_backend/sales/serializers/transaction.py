# sales/serializers/transaction.py

from rest_framework import serializers

from sales.models import Transaction, TransactionDetail


class TransactionDetailSerializer(serializers.ModelSerializer):
    transaction_id = serializers.IntegerField(read_only=True)
    product_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = TransactionDetail
        fields = [
            "id",
            "transaction_id",
            "product_id",
            "product_name",
            "unit_price",
            "quantity",
            "subtotal",
        ]
        read_only_fields = fields


class TransactionSerializer(serializers.ModelSerializer):
    """
    Read-only Transaction representation (header + ordered details).
    """

    details = TransactionDetailSerializer(many=True, read_only=True)

    class Meta:
        model = Transaction
        fields = ["id", "total_amount", "created_at", "details"]
        read_only_fields = fields
