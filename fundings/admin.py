from django.contrib import admin
from django.db.models import Sum

from .models import Funding


@admin.register(Funding)
class FundingAdmin(admin.ModelAdmin):
    list_display = ['user', 'amount', 'status', 'payment_method', 'transaction_id', 'created_at']
    list_filter = ['status', 'payment_method']
    search_fields = ['user__email', 'user__name', 'transaction_id']
    ordering = ['-created_at']
    readonly_fields = ['transaction_id', 'created_at']
    raw_id_fields = ['user']

    def changelist_view(self, request, extra_context=None):
        # Show the completed total above the list
        extra_context = extra_context or {}
        total = Funding.objects.filter(status=Funding.STATUS_COMPLETED).aggregate(total=Sum('amount'))['total']
        extra_context['title'] = f'Fundings (completed total: {total or 0})'
        return super().changelist_view(request, extra_context=extra_context)
