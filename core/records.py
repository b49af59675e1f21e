"""Job record shape as the pages see it, and the shared option table."""
from dataclasses import dataclass, field

DESCRIPTION_KEYS = ("responsibilities", "requirements", "niceToHave")

FILTER_OPTIONS = {
    "Company": ["CredePath Tech", "DataFlow Systems", "WebCrafters LLC", "CloudWorks"],
    "Jobs": ["Frontend Engineer", "Backend Developer", "Full Stack Developer", "DevOps Engineer"],
    "Skills": ["React", "Node.js", "TypeScript", "AWS", "Docker"],
    "Location": ["New Delhi", "Bengaluru", "Remote", "Hyderabad"],
    "Salary": ["< 15 LPA", "15-25 LPA", "> 25 LPA"],
}


@dataclass
class JobPosting:
    id: int
    role: str = ""
    company: str = ""
    experience: str = ""
    location: str = ""
    salary: str = ""
    skills: list = field(default_factory=list)
    description: dict = field(default_factory=dict)
    about_company: str = ""
    posted_days_ago: int = 0
    applicants: int = 0
    created_at: str = None
    updated_at: str = None

    @classmethod
    def from_api(cls, data):
        """Build a posting from one camelCase record of GET /api."""
        skills = data.get("skills") or []
        if not isinstance(skills, list):
            raise TypeError(f"skills must be a list, got {type(skills).__name__}")
        description = data.get("description") or {}
        return cls(
            id=data["id"],
            role=data.get("role") or "",
            company=data.get("company") or "",
            experience=data.get("experience") or "",
            location=data.get("location") or "",
            salary=data.get("salary") or "",
            skills=list(skills),
            description={key: description.get(key) or "" for key in DESCRIPTION_KEYS},
            about_company=data.get("aboutCompany") or "",
            posted_days_ago=data.get("postedDaysAgo") or 0,
            applicants=data.get("applicants") or 0,
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )
