"""
Job intake: a draft job posting and its submission to the jobs API.
"""
import logging
import threading
import time
from dataclasses import asdict, dataclass, field, fields

from .api_client import JobsApiError
from .records import DESCRIPTION_KEYS

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Job created successfully!"
FAILURE_MESSAGE = "Failed to create job"

_id_lock = threading.Lock()
_last_id = 0


def new_draft_id():
    """Millisecond timestamp, bumped past the last id handed out."""
    global _last_id
    with _id_lock:
        _last_id = max(int(time.time() * 1000), _last_id + 1)
        return _last_id


def _blank_description():
    return {key: "" for key in DESCRIPTION_KEYS}


@dataclass
class JobDraft:
    id: int = field(default_factory=new_draft_id)
    role: str = ""
    company: str = ""
    experience: str = ""
    location: str = ""
    salary: str = ""
    skills: list = field(default_factory=list)
    description: dict = field(default_factory=_blank_description)
    about_company: str = ""
    posted_days_ago: int = 0
    applicants: int = 0

    @classmethod
    def blank(cls):
        return cls()

    @classmethod
    def from_dict(cls, data):
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self):
        return asdict(self)

    def to_payload(self):
        """The draft as a camelCase job record for POST /api."""
        return {
            "id": self.id,
            "role": self.role,
            "company": self.company,
            "experience": self.experience,
            "location": self.location,
            "salary": self.salary,
            "skills": list(self.skills),
            "description": dict(self.description),
            "aboutCompany": self.about_company,
            "postedDaysAgo": self.posted_days_ago,
            "applicants": self.applicants,
        }


class JobIntake:
    """
    Holds one draft. A successful submit resets it to a new blank draft;
    a failed one keeps it so the user can retry.
    """

    FIELDS = tuple(f.name for f in fields(JobDraft) if f.name not in ("id", "description"))

    def __init__(self, draft=None):
        self.draft = draft or JobDraft.blank()
        self.message = ""

    def set_field(self, name, value):
        if name not in self.FIELDS:
            raise ValueError(f"Unknown job field: {name!r}")
        setattr(self.draft, name, value)

    def set_description(self, name, value):
        if name not in DESCRIPTION_KEYS:
            raise ValueError(f"Unknown description field: {name!r}")
        self.draft.description = {**self.draft.description, name: value}

    def submit(self, client):
        try:
            created = client.create_job(self.draft.to_payload())
        except JobsApiError as exc:
            logger.info("Job submission failed (status=%s): %s", exc.status, exc)
            self.message = exc.message or FAILURE_MESSAGE
            return False

        stored_id = created.get("id") if isinstance(created, dict) else None
        logger.info("Job submitted: draft %s stored as %s", self.draft.id, stored_id)
        self.message = SUCCESS_MESSAGE
        self.draft = JobDraft.blank()
        return True
