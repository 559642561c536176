from django.contrib import admin

from .models import DonationRequest


@admin.register(DonationRequest)
class DonationRequestAdmin(admin.ModelAdmin):
    list_display = ['recipient_name', 'blood_group', 'recipient_district', 'hospital_name',
                    'donation_date', 'status', 'requester', 'donor']
    list_filter = ['status', 'blood_group', 'recipient_district']
    search_fields = ['recipient_name', 'hospital_name', 'requester__email', 'donor__email']
    ordering = ['-created_at']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['requester', 'donor']

    fieldsets = (
        ('Recipient', {
            'fields': ('recipient_name', 'recipient_district', 'recipient_upazila',
                       'hospital_name', 'full_address')
        }),
        ('Request', {
            'fields': ('requester', 'blood_group', 'donation_date', 'donation_time', 'request_message')
        }),
        ('Fulfilment', {
            'fields': ('status', 'donor')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )
