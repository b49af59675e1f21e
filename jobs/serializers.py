from rest_framework import serializers

from .models import Job

DESCRIPTION_KEYS = ('responsibilities', 'requirements', 'niceToHave')


class JobSerializer(serializers.ModelSerializer):
    """
    Wire format of a job record. Field names are camelCase on the wire.
    The stored id is issued by the database; a client-sent id is ignored.
    """
    aboutCompany = serializers.CharField(source='about_company', required=False, allow_blank=True)
    postedDaysAgo = serializers.IntegerField(source='posted_days_ago', required=False, min_value=0)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    skills = serializers.ListField(child=serializers.CharField(), required=False)
    description = serializers.DictField(child=serializers.CharField(allow_blank=True), required=False)

    class Meta:
        model = Job
        fields = [
            'id', 'role', 'company', 'experience', 'location', 'salary',
            'skills', 'description', 'aboutCompany', 'postedDaysAgo',
            'applicants', 'createdAt', 'updatedAt',
        ]
        read_only_fields = ['id']

    def validate_description(self, value):
        unknown = sorted(set(value) - set(DESCRIPTION_KEYS))
        if unknown:
            raise serializers.ValidationError(f"unknown keys: {', '.join(unknown)}")
        # Always store all three sections
        return {key: value.get(key, '') for key in DESCRIPTION_KEYS}
