# sales/serializers/checkout.py

from rest_framework import serializers


class CheckoutItemSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class CheckoutInputSerializer(serializers.Serializer):
    """
    Explicit checkout input serializer.

    Documents ONLY what the client is allowed to send: product ids and
    quantities. Prices and totals are always computed server-side.

    An empty list passes here on purpose so the checkout service can reject
    it with its own `empty_items` code.
    """

    items = CheckoutItemSerializer(many=True, allow_empty=True)
