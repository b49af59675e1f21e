from django.db import migrations, models

import jobs.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Job',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(max_length=200)),
                ('company', models.CharField(db_index=True, max_length=200)),
                ('experience', models.CharField(blank=True, default='', max_length=100)),
                ('location', models.CharField(blank=True, default='', max_length=200)),
                ('salary', models.CharField(blank=True, default='', max_length=100)),
                ('skills', models.JSONField(blank=True, default=list, encoder=jobs.models.JobJSONEncoder)),
                ('description', models.JSONField(blank=True, default=jobs.models.default_description, encoder=jobs.models.JobJSONEncoder)),
                ('about_company', models.TextField(blank=True, default='')),
                ('posted_days_ago', models.PositiveIntegerField(default=0)),
                ('applicants', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['posted_days_ago', '-created_at'],
                'indexes': [models.Index(fields=['posted_days_ago', 'role'], name='job_posted_role_idx')],
            },
        ),
    ]
