"""
Job board state.

A `JobBoard` holds the list fetched from the jobs API, the active filters and
tab, and the job shown in the detail pane. The filtered view is derived from
(list, filters) and recomputed only when either changes.

All five filter categories apply locally. Salary is an exact match on the
salary text, which the intake form writes from the same option table.
"""
import logging
from dataclasses import dataclass, fields, replace

from .api_client import JobsApiError
from .records import FILTER_OPTIONS, JobPosting

logger = logging.getLogger(__name__)

TABS = ("Recommended", "Applied", "Saved")
DEFAULT_TAB = "Recommended"

# Filter category -> FilterState attribute (also the board's query parameter)
CATEGORY_FIELDS = {
    "Company": "company",
    "Jobs": "jobs",
    "Skills": "skills",
    "Location": "location",
    "Salary": "salary",
}

# Only these filters are forwarded to GET /api; Location and Salary stay local
SERVER_PARAMS = {
    "Company": "company",
    "Jobs": "role",
    "Skills": "skills",
}


@dataclass(frozen=True)
class FilterState:
    """One selected value (or "") per filter category."""
    company: str = ""
    jobs: str = ""
    skills: str = ""
    location: str = ""
    salary: str = ""

    @classmethod
    def from_query(cls, query):
        return cls(**{f.name: (query.get(f.name) or "").strip() for f in fields(cls)})

    def get(self, category):
        return getattr(self, _field_for(category))

    def toggle(self, category, value):
        """Selecting the current value clears it; any other value replaces it."""
        name = _field_for(category)
        current = getattr(self, name)
        return replace(self, **{name: "" if current == value else value})

    def to_query(self):
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}


def _field_for(category):
    try:
        return CATEGORY_FIELDS[category]
    except KeyError:
        raise ValueError(f"Unknown filter category: {category!r}") from None


@dataclass
class SearchPayload:
    search_term: str = ""
    location: str = ""


def matches(job, filters):
    if filters.company and job.company != filters.company:
        return False
    if filters.jobs and filters.jobs.lower() not in job.role.lower():
        return False
    if filters.location and job.location != filters.location:
        return False
    if filters.skills and filters.skills.lower() not in [s.lower() for s in job.skills]:
        return False
    if filters.salary and job.salary != filters.salary:
        return False
    return True


def filter_jobs(jobs, filters):
    """Jobs passing every active filter, in their original order."""
    return [job for job in jobs if matches(job, filters)]


@dataclass
class FilterDropdown:
    category: str
    options: list
    selected: str = ""
    is_open: bool = False

    @property
    def label(self):
        return self.selected or self.category

    def toggle(self):
        self.is_open = not self.is_open

    def choose(self, value, on_select):
        on_select(self.category, value)
        self.is_open = False


class JobBoard:
    def __init__(self, filters=None, tab=DEFAULT_TAB):
        self.filters = filters or FilterState()
        self.tab = DEFAULT_TAB
        self.set_tab(tab)
        self.jobs = []
        self.active_job = None

        self._jobs_version = 0
        self._filtered_key = None
        self._filtered = []
        self._latest_token = 0

    # --- Derived view ---

    @property
    def filtered_jobs(self):
        key = (self._jobs_version, self.filters)
        if key != self._filtered_key:
            self._filtered = filter_jobs(self.jobs, self.filters)
            self._filtered_key = key
        return self._filtered

    def _sync_active_job(self):
        view = self.filtered_jobs
        if not view:
            self.active_job = None
        elif self.active_job is None:
            self.active_job = view[0]

    # --- User actions ---

    def set_filter(self, category, value):
        self.filters = self.filters.toggle(category, value)
        self.active_job = None
        self._sync_active_job()

    def set_tab(self, tab):
        if tab not in TABS:
            raise ValueError(f"Unknown tab: {tab!r}")
        self.tab = tab

    def select_job(self, job_id):
        """Show a card's job in the detail pane. Unknown ids leave it unchanged."""
        for job in self.filtered_jobs:
            if job.id == job_id:
                self.active_job = job
                return True
        return False

    def dropdowns(self, open_category=None):
        return [
            FilterDropdown(
                category=category,
                options=options,
                selected=self.filters.get(category),
                is_open=category == open_category,
            )
            for category, options in FILTER_OPTIONS.items()
        ]

    # --- Fetching ---

    def query_params(self, search=None):
        params = {}
        if search and search.search_term:
            params["searchTerm"] = search.search_term
        if search and search.location:
            params["location"] = search.location
        for category, param in SERVER_PARAMS.items():
            value = self.filters.get(category)
            if value:
                params[param] = value
        return params

    def begin_fetch(self):
        """Issue a request token; only the latest token's response is applied."""
        self._latest_token += 1
        return self._latest_token

    def complete_fetch(self, token, records):
        if token != self._latest_token:
            logger.debug("Discarding stale job list (token %d, latest %d)", token, self._latest_token)
            return False
        self.jobs = [JobPosting.from_api(record) for record in records]
        self._jobs_version += 1
        self.active_job = None
        self._sync_active_job()
        return True

    def fail_fetch(self, token, exc):
        if token != self._latest_token:
            return False
        logger.warning("Failed to fetch jobs: %s", exc)
        self.jobs = []
        self._jobs_version += 1
        self.active_job = None
        return True

    def fetch(self, client, search=None):
        token = self.begin_fetch()
        try:
            records = client.list_jobs(self.query_params(search))
            self.complete_fetch(token, records)
        except (JobsApiError, KeyError, TypeError, AttributeError) as exc:
            # Malformed records fail the whole fetch
            self.fail_fetch(token, exc)
