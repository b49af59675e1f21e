from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient
from rest_framework import status
from .models import Job


class JobListTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse('job-list')
        # Create test data
        Job.objects.create(
            role="Frontend Engineer",
            company="CredePath Tech",
            location="Bengaluru",
            skills=["React", "TypeScript"],
            posted_days_ago=1,
        )
        Job.objects.create(
            role="Backend Developer",
            company="DataFlow Systems",
            location="Remote",
            skills=["Node.js", "AWS"],
            posted_days_ago=3,
        )
        Job.objects.create(
            role="Full Stack Developer",
            company="CredePath Tech",
            location="New Delhi",
            skills=["React Native", "Node.js"],
            posted_days_ago=2,
        )

    def test_list_returns_plain_array(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsInstance(response.data, list)
        # Most recently posted first
        self.assertEqual(
            [job['role'] for job in response.data],
            ["Frontend Engineer", "Full Stack Developer", "Backend Developer"],
        )

    def test_list_uses_camel_case_fields(self):
        response = self.client.get(self.url)
        job = response.data[0]

        for key in ('aboutCompany', 'postedDaysAgo', 'createdAt', 'updatedAt', 'description'):
            self.assertIn(key, job)
        self.assertEqual(
            set(job['description']),
            {'responsibilities', 'requirements', 'niceToHave'},
        )

    def test_filter_by_company(self):
        response = self.client.get(self.url, {'company': 'credepath'})

        self.assertEqual(len(response.data), 2)
        self.assertTrue(all(job['company'] == "CredePath Tech" for job in response.data))

    def test_filter_by_role(self):
        response = self.client.get(self.url, {'role': 'developer'})
        self.assertEqual(len(response.data), 2)

    def test_filter_skills_matches_whole_skill(self):
        """
        'react' matches ["React", ...] but NOT ["React Native", ...].
        """
        response = self.client.get(self.url, {'skills': 'react'})

        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['role'], "Frontend Engineer")

    def test_search_term_covers_role_company_and_skills(self):
        self.assertEqual(len(self.client.get(self.url, {'searchTerm': 'backend'}).data), 1)
        self.assertEqual(len(self.client.get(self.url, {'searchTerm': 'dataflow'}).data), 1)
        self.assertEqual(len(self.client.get(self.url, {'searchTerm': 'typescript'}).data), 1)

    def test_non_ascii_skills_are_searchable(self):
        Job.objects.create(role="Barista", company="Bean Co", skills=["Café", "React"])

        for params in ({'skills': 'café'}, {'skills': 'Café'}, {'searchTerm': 'Café'}):
            response = self.client.get(self.url, params)
            self.assertEqual([job['role'] for job in response.data], ["Barista"], params)

    def test_filters_combine(self):
        response = self.client.get(self.url, {'company': 'CredePath Tech', 'location': 'delhi'})

        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['role'], "Full Stack Developer")

    def test_empty_parameters_are_ignored(self):
        response = self.client.get(self.url, {'company': '', 'skills': ''})
        self.assertEqual(len(response.data), 3)


class JobCreateTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse('job-list')

    def payload(self, **overrides):
        data = {
            "id": 1760000000000,
            "role": "Backend Developer",
            "company": "Acme",
            "experience": "2-4 years",
            "location": "Remote",
            "salary": "15-25 LPA",
            "skills": ["Node.js", "AWS"],
            "description": {"responsibilities": "Build APIs", "requirements": "", "niceToHave": ""},
            "aboutCompany": "We make everything.",
            "postedDaysAgo": 0,
            "applicants": 0,
        }
        data.update(overrides)
        return data

    def test_create_job(self):
        response = self.client.post(self.url, self.payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        job = Job.objects.get()
        self.assertEqual(job.company, "Acme")
        self.assertEqual(job.about_company, "We make everything.")
        self.assertEqual(job.skills, ["Node.js", "AWS"])
        self.assertEqual(response.data['id'], job.pk)

    def test_client_id_is_ignored(self):
        response = self.client.post(self.url, self.payload(id=42), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertNotEqual(Job.objects.get().pk, 42)

    def test_missing_role_returns_error_message(self):
        data = self.payload()
        del data['role']
        response = self.client.post(self.url, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': "role: This field is required."})
        self.assertFalse(Job.objects.exists())

    def test_blank_company_is_rejected(self):
        response = self.client.post(self.url, self.payload(company="   "), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(response.data['error'].startswith("company:"))

    def test_partial_description_is_completed(self):
        response = self.client.post(
            self.url, self.payload(description={"requirements": "Python"}), format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(
            Job.objects.get().description,
            {"responsibilities": "", "requirements": "Python", "niceToHave": ""},
        )

    def test_unknown_description_key_is_rejected(self):
        response = self.client.post(
            self.url, self.payload(description={"perks": "Free lunch"}), format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], "description: unknown keys: perks")

    def test_minimal_job_uses_defaults(self):
        response = self.client.post(
            self.url, {"role": "DevOps Engineer", "company": "CloudWorks"}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['skills'], [])
        self.assertEqual(response.data['postedDaysAgo'], 0)
