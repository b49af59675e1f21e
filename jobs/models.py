from django.core.serializers.json import DjangoJSONEncoder
from django.db import models


class JobJSONEncoder(DjangoJSONEncoder):
    """
    Keeps non-ASCII text as-is, so skill lookups on the stored JSON text
    match "Café" rather than "Caf\\u00e9".
    """

    def __init__(self, *args, **kwargs):
        kwargs['ensure_ascii'] = False
        super().__init__(*args, **kwargs)


def default_description():
    return {"responsibilities": "", "requirements": "", "niceToHave": ""}


class Job(models.Model):
    role = models.CharField(max_length=200)
    company = models.CharField(max_length=200, db_index=True)
    experience = models.CharField(max_length=100, blank=True, default="")
    location = models.CharField(max_length=200, blank=True, default="")
    # Free text ("15-25 LPA"), never parsed
    salary = models.CharField(max_length=100, blank=True, default="")
    skills = models.JSONField(default=list, blank=True, encoder=JobJSONEncoder)
    description = models.JSONField(default=default_description, blank=True, encoder=JobJSONEncoder)
    about_company = models.TextField(blank=True, default="")
    posted_days_ago = models.PositiveIntegerField(default=0)
    applicants = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['posted_days_ago', '-created_at']
        indexes = [
            models.Index(fields=['posted_days_ago', 'role'], name='job_posted_role_idx'),
        ]

    def __str__(self):
        return f"{self.role} at {self.company}"
