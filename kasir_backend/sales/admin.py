# sales/admin.py

from django.contrib import admin

from sales.models import Transaction, TransactionDetail


# ======================================================
# TRANSACTION ADMIN (fully read-only)
# ======================================================


class TransactionDetailInline(admin.TabularInline):
    model = TransactionDetail
    extra = 0
    can_delete = False
    fields = ("product", "product_name", "unit_price", "quantity", "subtotal")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ("id", "total_amount", "created_at")
    readonly_fields = ("total_amount", "created_at")
    list_filter = ("created_at",)
    date_hierarchy = "created_at"
    inlines = [TransactionDetailInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
