from django.contrib import admin

from users.models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ["id", "email", "name", "is_staff", "account_verified", "kyc_status"]
    list_filter = ["is_staff", "account_verified", "kyc_status"]
    search_fields = ["email", "name"]
    readonly_fields = ["date_joined", "last_login"]
