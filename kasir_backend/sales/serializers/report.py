# sales/serializers/report.py

from rest_framework import serializers


class BestSellerSerializer(serializers.Serializer):
    nama = serializers.CharField()
    qty_terjual = serializers.IntegerField()


class ReportSerializer(serializers.Serializer):
    """Response shape of GET /api/report/ (used for the OpenAPI schema)."""

    total_revenue = serializers.IntegerField()
    total_transaksi = serializers.IntegerField()
    produk_terlaris = BestSellerSerializer(allow_null=True)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
