import re

import django_filters
from django.db.models import Q

from .models import Job


class JobFilter(django_filters.FilterSet):
    """
    Query parameters accepted by GET /api.
    Every parameter is optional; empty values are ignored.
    """
    searchTerm = django_filters.CharFilter(method='filter_search_term')
    location = django_filters.CharFilter(lookup_expr='icontains')
    company = django_filters.CharFilter(lookup_expr='icontains')
    role = django_filters.CharFilter(lookup_expr='icontains')

    # Custom Skills Filter (Search inside JSON List)
    skills = django_filters.CharFilter(method='filter_skills')

    class Meta:
        model = Job
        fields = ['location', 'company', 'role', 'skills']

    def filter_search_term(self, queryset, name, value):
        if not value:
            return queryset

        return queryset.filter(
            Q(role__icontains=value) |
            Q(company__icontains=value) |
            Q(skills__icontains=value)
        )

    def filter_skills(self, queryset, name, value):
        """
        Searches for a specific skill inside the JSONField list.
        Example: 'react' matches ["React", "AWS"] but NOT ["React Native"].
        """
        if not value:
            return queryset

        # The exact string wrapped in quotes inside the JSON structure
        return queryset.filter(skills__iregex=f'"{re.escape(value)}"')
