from unittest import mock

import requests
from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse

from .api_client import JobsApiClient, JobsApiError
from .board import FilterDropdown, FilterState, JobBoard, SearchPayload, filter_jobs
from .intake import FAILURE_MESSAGE, SUCCESS_MESSAGE, JobDraft, JobIntake, new_draft_id
from .presentation import card_skills, company_initials
from .records import FILTER_OPTIONS, JobPosting


def job_record(id, **fields):
    record = {
        "id": id,
        "role": "Frontend Engineer",
        "company": "CredePath Tech",
        "experience": "2+ years",
        "location": "Bengaluru",
        "salary": "15-25 LPA",
        "skills": ["React"],
        "description": {"responsibilities": "", "requirements": "", "niceToHave": ""},
        "aboutCompany": "",
        "postedDaysAgo": 1,
        "applicants": 10,
    }
    record.update(fields)
    return record


RECORDS = [
    job_record(1, company="CredePath Tech", role="Frontend Engineer", skills=["React", "TypeScript"]),
    job_record(2, company="DataFlow Systems", role="Backend Developer", skills=["Node.js"], location="Remote"),
    job_record(3, company="CredePath Tech", role="DevOps Engineer", skills=["AWS", "Docker"], salary="> 25 LPA"),
    job_record(4, company="CloudWorks", role="Full Stack Developer", skills=["react", "Node.js"], location="Hyderabad"),
]


def fake_client(records=None, error=None):
    client = mock.Mock(spec=JobsApiClient)
    if error is not None:
        client.list_jobs.side_effect = error
    else:
        client.list_jobs.return_value = list(records or [])
    return client


# --- 1. Filtering ---

class FilterStateTests(SimpleTestCase):
    def test_toggle_law_for_every_option(self):
        for category, options in FILTER_OPTIONS.items():
            for value in options:
                selected = FilterState().toggle(category, value)
                self.assertEqual(selected.get(category), value)
                self.assertEqual(selected.toggle(category, value).get(category), "")

                other = next(option for option in options if option != value)
                self.assertEqual(selected.toggle(category, other).get(category), other)

    def test_toggle_leaves_other_categories(self):
        filters = FilterState(company="CloudWorks").toggle("Skills", "AWS")
        self.assertEqual(filters, FilterState(company="CloudWorks", skills="AWS"))

    def test_unknown_category_is_rejected(self):
        with self.assertRaises(ValueError):
            FilterState().toggle("Seniority", "Senior")

    def test_query_round_trip_skips_empty(self):
        filters = FilterState.from_query({"company": " CloudWorks ", "jobs": "", "open": "Company"})
        self.assertEqual(filters, FilterState(company="CloudWorks"))
        self.assertEqual(filters.to_query(), {"company": "CloudWorks"})


class FilterJobsTests(SimpleTestCase):
    def setUp(self):
        self.jobs = [JobPosting.from_api(record) for record in RECORDS]

    def ids(self, filters):
        return [job.id for job in filter_jobs(self.jobs, filters)]

    def test_no_filters_keeps_everything(self):
        self.assertEqual(self.ids(FilterState()), [1, 2, 3, 4])

    def test_company_exact_match_keeps_order(self):
        self.assertEqual(self.ids(FilterState(company="CredePath Tech")), [1, 3])
        self.assertEqual(self.ids(FilterState(company="credepath tech")), [])

    def test_role_is_case_insensitive_substring(self):
        self.assertEqual(self.ids(FilterState(jobs="developer")), [2, 4])

    def test_skills_is_case_insensitive_membership(self):
        self.assertEqual(self.ids(FilterState(skills="react")), [1, 4])
        self.assertEqual(self.ids(FilterState(skills="Reac")), [])

    def test_location_and_salary_exact_match(self):
        self.assertEqual(self.ids(FilterState(location="Remote")), [2])
        self.assertEqual(self.ids(FilterState(salary="> 25 LPA")), [3])

    def test_filters_combine(self):
        self.assertEqual(self.ids(FilterState(company="CredePath Tech", skills="aws")), [3])

    def test_filtering_is_deterministic(self):
        filters = FilterState(skills="node.js")
        self.assertEqual(filter_jobs(self.jobs, filters), filter_jobs(self.jobs, filters))


# --- 2. Board state ---

class JobBoardTests(SimpleTestCase):
    def loaded_board(self, records=RECORDS, **kwargs):
        board = JobBoard(**kwargs)
        board.fetch(fake_client(records))
        return board

    def test_fetch_selects_first_job(self):
        board = self.loaded_board()

        self.assertEqual(len(board.jobs), 4)
        self.assertEqual(board.active_job.id, 1)

    def test_fetch_sends_search_and_server_filters_only(self):
        client = fake_client(RECORDS)
        board = JobBoard(filters=FilterState(
            company="CloudWorks", jobs="Backend", skills="AWS", location="Remote", salary="> 25 LPA",
        ))
        board.fetch(client, SearchPayload(search_term="python", location="Pune"))

        client.list_jobs.assert_called_once_with({
            "searchTerm": "python",
            "location": "Pune",
            "company": "CloudWorks",
            "role": "Backend",
            "skills": "AWS",
        })

    def test_fetch_omits_empty_parameters(self):
        client = fake_client(RECORDS)
        JobBoard().fetch(client, SearchPayload())
        client.list_jobs.assert_called_once_with({})

    def test_failed_fetch_clears_list_and_active_job(self):
        board = self.loaded_board()
        with self.assertLogs("core.board", level="WARNING"):
            board.fetch(fake_client(error=JobsApiError(status=500)))

        self.assertEqual(board.jobs, [])
        self.assertEqual(board.filtered_jobs, [])
        self.assertIsNone(board.active_job)

    def test_malformed_record_fails_the_fetch(self):
        board = JobBoard()
        with self.assertLogs("core.board", level="WARNING"):
            board.fetch(fake_client([{"role": "No id"}]))
        self.assertEqual(board.jobs, [])

    def test_non_list_skills_fail_the_fetch(self):
        board = self.loaded_board()
        with self.assertLogs("core.board", level="WARNING"):
            board.fetch(fake_client([job_record(1, skills="React")]))

        self.assertEqual(board.jobs, [])
        self.assertIsNone(board.active_job)

    def test_stale_response_is_discarded(self):
        board = JobBoard()
        first = board.begin_fetch()
        second = board.begin_fetch()

        self.assertTrue(board.complete_fetch(second, RECORDS[:1]))
        self.assertFalse(board.complete_fetch(first, RECORDS))
        self.assertFalse(board.fail_fetch(first, JobsApiError()))
        self.assertEqual([job.id for job in board.jobs], [1])

    def test_filter_change_picks_new_default(self):
        board = self.loaded_board()
        board.select_job(2)

        board.set_filter("Company", "CredePath Tech")
        self.assertEqual([job.id for job in board.filtered_jobs], [1, 3])
        self.assertEqual(board.active_job.id, 1)

    def test_toggling_filter_off_restores_view(self):
        board = self.loaded_board()
        board.set_filter("Skills", "react")
        board.set_filter("Skills", "react")

        self.assertEqual(board.filters.skills, "")
        self.assertEqual(len(board.filtered_jobs), 4)

    def test_empty_view_clears_active_job(self):
        board = self.loaded_board()
        board.set_filter("Location", "New Delhi")

        self.assertEqual(board.filtered_jobs, [])
        self.assertIsNone(board.active_job)

    def test_active_job_always_in_view(self):
        board = self.loaded_board()
        for category, value in [("Company", "CredePath Tech"), ("Skills", "AWS"),
                                ("Skills", "AWS"), ("Location", "Remote"), ("Company", "CredePath Tech")]:
            board.set_filter(category, value)
            if board.filtered_jobs:
                self.assertIn(board.active_job, board.filtered_jobs)
            else:
                self.assertIsNone(board.active_job)

    def test_select_job_from_view(self):
        board = self.loaded_board(filters=FilterState(company="CredePath Tech"))

        self.assertTrue(board.select_job(3))
        self.assertEqual(board.active_job.id, 3)
        # Job 2 is filtered out
        self.assertFalse(board.select_job(2))
        self.assertEqual(board.active_job.id, 3)

    def test_filtered_view_is_memoized(self):
        board = self.loaded_board()
        self.assertIs(board.filtered_jobs, board.filtered_jobs)

        view = board.filtered_jobs
        board.set_filter("Company", "CloudWorks")
        self.assertIsNot(board.filtered_jobs, view)

    def test_tabs(self):
        board = JobBoard(tab="Saved")
        self.assertEqual(board.tab, "Saved")

        board.set_tab("Applied")
        self.assertEqual(board.tab, "Applied")
        with self.assertRaises(ValueError):
            board.set_tab("Archived")

    def test_tab_does_not_filter(self):
        board = self.loaded_board(tab="Applied")
        self.assertEqual(len(board.filtered_jobs), 4)


class FilterDropdownTests(SimpleTestCase):
    def test_toggle_open_flag(self):
        dropdown = FilterDropdown("Company", FILTER_OPTIONS["Company"])
        dropdown.toggle()
        self.assertTrue(dropdown.is_open)
        dropdown.toggle()
        self.assertFalse(dropdown.is_open)

    def test_choose_calls_back_and_closes(self):
        board = JobBoard()
        dropdown = board.dropdowns(open_category="Location")[3]
        self.assertTrue(dropdown.is_open)

        dropdown.choose("Remote", board.set_filter)

        self.assertEqual(board.filters.location, "Remote")
        self.assertFalse(dropdown.is_open)

    def test_label_shows_selection(self):
        board = JobBoard(filters=FilterState(salary="15-25 LPA"))
        labels = [dropdown.label for dropdown in board.dropdowns()]
        self.assertEqual(labels, ["Company", "Jobs", "Skills", "Location", "15-25 LPA"])


# --- 3. Presentation ---

class PresentationTests(SimpleTestCase):
    def test_company_initials(self):
        self.assertEqual(company_initials("CredePath Tech"), "CT")
        self.assertEqual(company_initials("webcrafters llc extra"), "WL")
        self.assertEqual(company_initials("CloudWorks"), "C")
        self.assertEqual(company_initials("  Data   Flow "), "DF")

    def test_company_initials_placeholder(self):
        self.assertEqual(company_initials(""), "?")
        self.assertEqual(company_initials("   "), "?")
        self.assertEqual(company_initials(None), "?")

    def test_card_skills_overflow(self):
        self.assertEqual(card_skills(["React", "AWS"]), (["React", "AWS"], 0))
        self.assertEqual(card_skills(["a", "b", "c", "d", "e"]), (["a", "b", "c"], 2))


# --- 4. Intake ---

class JobIntakeTests(SimpleTestCase):
    def test_blank_draft(self):
        draft = JobDraft.blank()

        self.assertEqual(draft.role, "")
        self.assertEqual(draft.skills, [])
        self.assertEqual(draft.description, {"responsibilities": "", "requirements": "", "niceToHave": ""})
        self.assertEqual((draft.posted_days_ago, draft.applicants), (0, 0))

    def test_draft_ids_never_repeat(self):
        ids = [new_draft_id() for _ in range(100)]
        self.assertEqual(len(set(ids)), 100)
        self.assertEqual(ids, sorted(ids))

    def test_set_field_and_description(self):
        intake = JobIntake()
        intake.set_field("skills", ["React", "AWS"])
        intake.set_description("niceToHave", "Go")

        payload = intake.draft.to_payload()
        self.assertEqual(payload["skills"], ["React", "AWS"])
        self.assertEqual(payload["description"]["niceToHave"], "Go")
        self.assertIn("aboutCompany", payload)
        self.assertIn("postedDaysAgo", payload)

    def test_unknown_fields_are_rejected(self):
        intake = JobIntake()
        with self.assertRaises(ValueError):
            intake.set_field("id", 1)
        with self.assertRaises(ValueError):
            intake.set_description("perks", "Free lunch")

    def test_successful_submit_resets_draft(self):
        intake = JobIntake()
        intake.set_field("company", "Acme")
        intake.set_field("role", "Backend Developer")
        submitted_id = intake.draft.id
        client = mock.Mock(spec=JobsApiClient)
        client.create_job.return_value = {"id": 7}

        self.assertTrue(intake.submit(client))

        sent = client.create_job.call_args.args[0]
        self.assertEqual((sent["company"], sent["role"], sent["id"]), ("Acme", "Backend Developer", submitted_id))
        self.assertEqual(intake.message, SUCCESS_MESSAGE)
        self.assertEqual(intake.draft.company, "")
        self.assertNotEqual(intake.draft.id, submitted_id)

    def test_failed_submit_shows_server_error_and_keeps_draft(self):
        intake = JobIntake()
        intake.set_field("company", "Acme")
        draft_id = intake.draft.id
        client = mock.Mock(spec=JobsApiClient)
        client.create_job.side_effect = JobsApiError("role required", 400)

        self.assertFalse(intake.submit(client))

        self.assertEqual(intake.message, "role required")
        self.assertEqual(intake.draft.company, "Acme")
        self.assertEqual(intake.draft.id, draft_id)

    def test_failed_submit_without_message_is_generic(self):
        intake = JobIntake()
        client = mock.Mock(spec=JobsApiClient)
        client.create_job.side_effect = JobsApiError(status=None)

        intake.submit(client)
        self.assertEqual(intake.message, FAILURE_MESSAGE)

    def test_unreadable_success_keeps_draft(self):
        intake = JobIntake()
        intake.set_field("company", "Acme")
        draft_id = intake.draft.id
        session = mock.Mock(spec=requests.Session)
        session.post.return_value = http_response(status=201, json_error=True)

        self.assertFalse(intake.submit(JobsApiClient(base_url="http://jobs.test/api", timeout=5, session=session)))

        self.assertEqual(intake.message, FAILURE_MESSAGE)
        self.assertEqual((intake.draft.company, intake.draft.id), ("Acme", draft_id))

    def test_draft_dict_round_trip(self):
        draft = JobDraft(company="Acme", skills=["AWS"])
        self.assertEqual(JobDraft.from_dict({**draft.to_dict(), "stale": 1}), draft)


# --- 5. HTTP client ---

def http_response(status=200, json_data=None, json_error=False):
    response = mock.Mock(spec=requests.Response)
    response.status_code = status
    response.ok = status < 400
    if json_error:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = json_data
    return response


class JobsApiClientTests(SimpleTestCase):
    def setUp(self):
        self.session = mock.Mock(spec=requests.Session)
        self.client = JobsApiClient(base_url="http://jobs.test/api", timeout=5, session=self.session)

    def test_list_jobs(self):
        self.session.get.return_value = http_response(json_data=[{"id": 1}])

        self.assertEqual(self.client.list_jobs({"company": "Acme"}), [{"id": 1}])
        self.session.get.assert_called_once_with(
            "http://jobs.test/api", params={"company": "Acme"}, timeout=5
        )

    def test_list_jobs_errors(self):
        cases = [
            http_response(status=503, json_error=True),
            http_response(json_error=True),
            http_response(json_data={"jobs": []}),
        ]
        for response in cases:
            self.session.get.return_value = response
            with self.assertRaises(JobsApiError):
                self.client.list_jobs()

    def test_transport_error(self):
        self.session.get.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(JobsApiError) as ctx:
            self.client.list_jobs()
        self.assertIsNone(ctx.exception.status)
        self.assertIsNone(ctx.exception.message)

    def test_create_job(self):
        self.session.post.return_value = http_response(status=201, json_data={"id": 3})

        self.assertEqual(self.client.create_job({"role": "x"}), {"id": 3})
        self.session.post.assert_called_once_with("http://jobs.test/api", json={"role": "x"}, timeout=5)

    def test_create_job_server_error_message(self):
        self.session.post.return_value = http_response(status=400, json_data={"error": "role required"})

        with self.assertRaises(JobsApiError) as ctx:
            self.client.create_job({})
        self.assertEqual(ctx.exception.message, "role required")
        self.assertEqual(ctx.exception.status, 400)

    def test_create_job_error_without_message(self):
        self.session.post.return_value = http_response(status=500, json_data={})

        with self.assertRaises(JobsApiError) as ctx:
            self.client.create_job({})
        self.assertIsNone(ctx.exception.message)

    def test_create_job_transport_error(self):
        self.session.post.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(JobsApiError) as ctx:
            self.client.create_job({"role": "x"})
        self.assertIsNone(ctx.exception.status)
        self.assertIsNone(ctx.exception.message)

    def test_create_job_success_without_json(self):
        self.session.post.return_value = http_response(status=201, json_error=True)
        with self.assertRaises(JobsApiError) as ctx:
            self.client.create_job({"role": "x"})
        self.assertEqual(ctx.exception.status, 201)
        self.assertIsNone(ctx.exception.message)

    @override_settings(JOBS_API_URL="http://configured.test/api", JOBS_API_TIMEOUT=2.5)
    def test_defaults_come_from_settings(self):
        client = JobsApiClient(session=self.session)
        self.assertEqual((client.base_url, client.timeout), ("http://configured.test/api", 2.5))


# --- 6. Pages ---

class JobBoardViewTests(TestCase):
    def setUp(self):
        patcher = mock.patch("core.views.JobsApiClient")
        self.client_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.api = self.client_cls.return_value
        self.api.list_jobs.return_value = RECORDS
        self.url = reverse("job_board")

    def test_board_lists_jobs_and_shows_first(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "core/job_board.html")
        self.assertEqual(len(response.context["cards"]), 4)
        self.assertEqual(response.context["active_job"].id, 1)
        self.assertContains(response, "CT")

    def test_board_applies_query_filters(self):
        response = self.client.get(self.url, {"company": "CredePath Tech", "q": "engineer", "loc": "Pune"})

        self.api.list_jobs.assert_called_once_with(
            {"searchTerm": "engineer", "location": "Pune", "company": "CredePath Tech"}
        )
        self.assertEqual([card["job"].id for card in response.context["cards"]], [1, 3])

    def test_board_selects_job_from_query(self):
        response = self.client.get(self.url, {"job": "3"})
        self.assertEqual(response.context["active_job"].id, 3)

    def test_unknown_job_falls_back_to_first(self):
        response = self.client.get(self.url, {"job": "999"})
        self.assertEqual(response.context["active_job"].id, 1)

    def test_option_links_toggle_filter(self):
        response = self.client.get(self.url, {"company": "CloudWorks", "open": "Company", "job": "4"})

        company = response.context["dropdowns"][0]
        self.assertTrue(company["dropdown"].is_open)
        links = {option["value"]: option["url"] for option in company["options"]}
        # Picking the selected value clears it; links never carry the job or open menu
        self.assertEqual(links["CloudWorks"], self.url)
        self.assertEqual(links["CredePath Tech"], f"{self.url}?company=CredePath+Tech")

    def test_dropdown_button_toggles_open(self):
        response = self.client.get(self.url, {"open": "Skills"})
        skills = response.context["dropdowns"][2]
        self.assertEqual(skills["toggle_url"], f"{self.url}?job=1")

    def test_api_failure_shows_empty_board(self):
        self.api.list_jobs.side_effect = JobsApiError(status=502)

        with self.assertLogs("core.board", level="WARNING"):
            response = self.client.get(self.url)

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.context["active_job"])
        self.assertContains(response, "No jobs match your current filters.")

    def test_inert_controls_render(self):
        response = self.client.get(self.url)

        self.assertContains(response, "Sort by: Most recent", count=1)
        self.assertContains(response, "All Filters", count=1)
        # One per card plus the detail pane
        self.assertContains(response, "View similar jobs", count=len(RECORDS) + 1)

    def test_htmx_request_renders_partial(self):
        response = self.client.get(self.url, {"tab": "Saved"}, HTTP_HX_REQUEST="true")

        self.assertTemplateUsed(response, "core/partials/board_content.html")
        self.assertTemplateNotUsed(response, "core/job_board.html")
        self.assertEqual(response.context["board"].tab, "Saved")


class AddJobViewTests(TestCase):
    def setUp(self):
        patcher = mock.patch("core.views.JobsApiClient")
        self.client_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.api = self.client_cls.return_value
        self.url = reverse("add_job")

    def form_data(self, **overrides):
        data = {"company": "CloudWorks", "role": "Backend Developer", "skills": ["AWS", "Docker"]}
        data.update(overrides)
        return data

    def draft_id(self):
        return self.client.session["job_draft"]["id"]

    def test_get_renders_blank_form(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Select Company")
        self.assertIn("job_draft", self.client.session)

    def test_success_resets_draft(self):
        self.client.get(self.url)
        first_id = self.draft_id()
        self.api.create_job.return_value = {"id": 1}

        response = self.client.post(self.url, self.form_data(requirements="Python"), follow=True)

        self.assertRedirects(response, self.url)
        self.assertContains(response, "Job created successfully!")
        payload = self.api.create_job.call_args.args[0]
        self.assertEqual(payload["id"], first_id)
        self.assertEqual(payload["skills"], ["AWS", "Docker"])
        self.assertEqual(payload["description"]["requirements"], "Python")
        self.assertNotEqual(self.draft_id(), first_id)
        self.assertEqual(self.client.session["job_draft"]["company"], "")

    def test_failure_keeps_draft(self):
        self.client.get(self.url)
        first_id = self.draft_id()
        self.api.create_job.side_effect = JobsApiError("role required", 400)

        response = self.client.post(self.url, self.form_data())

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "role required")
        self.assertEqual(self.draft_id(), first_id)
        self.assertEqual(self.client.session["job_draft"]["company"], "CloudWorks")

    def test_unreadable_success_keeps_draft(self):
        self.client.get(self.url)
        first_id = self.draft_id()
        self.api.create_job.side_effect = JobsApiError(status=201)

        response = self.client.post(self.url, self.form_data())

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, FAILURE_MESSAGE)
        self.assertEqual(self.draft_id(), first_id)

    def test_company_and_role_are_required(self):
        response = self.client.post(self.url, {"experience": "3 years"})

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.context["form"].errors)
        self.api.create_job.assert_not_called()
