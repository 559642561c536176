from django.contrib import admin

from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'name', 'blood_group', 'district', 'role', 'status')
    search_fields = ('email', 'name', 'district', 'upazila')
    list_filter = ('role', 'status', 'blood_group')
    ordering = ('-created_at',)
    readonly_fields = ('created_at', 'updated_at', 'last_login')
    exclude = ('password',)

    actions = ['block_users', 'unblock_users']

    @admin.action(description='Block selected users')
    def block_users(self, request, queryset):
        updated = queryset.update(status=User.STATUS_BLOCKED)
        self.message_user(request, f'{updated} user(s) blocked.')

    @admin.action(description='Unblock selected users')
    def unblock_users(self, request, queryset):
        updated = queryset.update(status=User.STATUS_ACTIVE)
        self.message_user(request, f'{updated} user(s) unblocked.')
