from django.contrib import admin

from .models import Job


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ('role', 'company', 'location', 'salary', 'posted_days_ago', 'applicants')
    list_filter = ('company', 'location')
    search_fields = ('role', 'company')
