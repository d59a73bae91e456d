"""Database table models.

Embedded sequences (applied jobs, mirrors of posted jobs, applicants,
notifications) are JSON columns holding camelCase documents. Always assign a
new list to them; in-place mutation is not tracked by the session.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from talentlink.db.base import Base
from talentlink.errors import ValidationError


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class DocumentMixin:
    """camelCase document view over a table row.

    ``FIELDS`` maps document keys to attribute names; keys outside it are
    ignored on write, ``READ_ONLY`` keys are never written. Null is
    refused for NOT NULL columns.
    """

    FIELDS: dict[str, str] = {}
    READ_ONLY: frozenset[str] = frozenset()
    HIDDEN: frozenset[str] = frozenset()

    def to_document(self) -> dict:
        doc = {"_id": self.id}
        for key, attr in self.FIELDS.items():
            if key in self.HIDDEN:
                continue
            doc[key] = _jsonable(getattr(self, attr))
        return doc

    def apply_document(self, fields: dict) -> None:
        for key, value in fields.items():
            attr = self.FIELDS.get(key)
            if attr is None or key in self.READ_ONLY:
                continue
            if value is None and not self.__table__.c[attr].nullable:
                raise ValidationError(f"{key} must not be null")
            setattr(self, attr, value)

    @classmethod
    def from_document(cls, doc: dict):
        obj = cls()
        obj.apply_document(doc)
        return obj


class User(DocumentMixin, Base):
    """User account: job seeker, employer or admin."""

    __tablename__ = "users"

    FIELDS = {
        "firstName": "first_name",
        "lastName": "last_name",
        "email": "email",
        "password": "password",
        "isEmployer": "is_employer",
        "isAdmin": "is_admin",
        "company": "company",
        "position": "position",
        "companySize": "company_size",
        "school": "school",
        "graduationYear": "graduation_year",
        "major": "major",
        "appliedJobs": "applied_jobs",
        "publishedJobs": "published_jobs",
        "pendingJobs": "pending_jobs",
        "notifications": "notifications",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    }
    READ_ONLY = frozenset({"createdAt", "updatedAt"})
    HIDDEN = frozenset({"password"})

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    first_name: Mapped[str | None] = mapped_column(String(100), default=None)
    last_name: Mapped[str | None] = mapped_column(String(100), default=None)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255))  # salted hash, never plaintext
    is_employer: Mapped[bool] = mapped_column(Boolean, default=False)
    is_admin: Mapped[bool | None] = mapped_column(Boolean, default=None)

    # Employer profile
    company: Mapped[str | None] = mapped_column(String(255), default=None)
    position: Mapped[str | None] = mapped_column(String(255), default=None)
    company_size: Mapped[str | None] = mapped_column(String(50), default=None)

    # Student profile
    school: Mapped[str | None] = mapped_column(String(255), default=None)
    graduation_year: Mapped[int | None] = mapped_column(Integer, default=None)
    major: Mapped[str | None] = mapped_column(String(255), default=None)

    applied_jobs: Mapped[list] = mapped_column(JSON, default=list)
    published_jobs: Mapped[list] = mapped_column(JSON, default=list)
    pending_jobs: Mapped[list] = mapped_column(JSON, default=list)
    notifications: Mapped[list] = mapped_column(JSON, default=list)  # newest first

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    @validates("email")
    def _normalize_email(self, key, value):
        return value.strip().lower() if isinstance(value, str) else value

    @validates("first_name", "last_name", "company", "position", "company_size", "school", "major")
    def _strip(self, key, value):
        return value.strip() if isinstance(value, str) else value


class JobMixin(DocumentMixin):
    """Columns shared by pending and published job postings."""

    FIELDS = {
        "jobName": "job_name",
        "jobType": "job_type",
        "salaryRange": "salary_range",
        "location": "location",
        "experienceLevel": "experience_level",
        "qualifications": "qualifications",
        "skills": "skills",
        "responsibilities": "responsibilities",
        "companyName": "company_name",
        "companyDescription": "company_description",
        "website": "website",
        "companyEmail": "company_email",
        "companyPhoneNumber": "company_phone_number",
        "postedDate": "posted_date",
        "applicationDeadline": "application_deadline",
        "employmentBenefits": "employment_benefits",
        "workSchedule": "work_schedule",
        "tags": "tags",
        "employerId": "employer_id",
        "applicants": "applicants",
    }

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    job_name: Mapped[str | None] = mapped_column(String(255), default=None)
    job_type: Mapped[str | None] = mapped_column(String(100), default=None)
    salary_range: Mapped[dict] = mapped_column(JSON, default=dict)  # {minSalary, maxSalary}
    location: Mapped[str | None] = mapped_column(String(255), default=None)
    experience_level: Mapped[str | None] = mapped_column(String(100), default=None)
    qualifications: Mapped[list] = mapped_column(JSON, default=list)
    skills: Mapped[list] = mapped_column(JSON, default=list)
    responsibilities: Mapped[list] = mapped_column(JSON, default=list)
    company_name: Mapped[str | None] = mapped_column(String(255), default=None)
    company_description: Mapped[str | None] = mapped_column(Text, default=None)
    website: Mapped[str | None] = mapped_column(String(255), default=None)
    company_email: Mapped[str | None] = mapped_column(String(255), default=None)
    company_phone_number: Mapped[str | None] = mapped_column(String(50), default=None)
    posted_date: Mapped[str | None] = mapped_column(String(64), default=None)
    application_deadline: Mapped[str | None] = mapped_column(String(64), default=None)
    employment_benefits: Mapped[list] = mapped_column(JSON, default=list)
    work_schedule: Mapped[str | None] = mapped_column(String(255), default=None)
    tags: Mapped[list] = mapped_column(JSON, default=list)
    employer_id: Mapped[str] = mapped_column(String(36), index=True)
    applicants: Mapped[list] = mapped_column(JSON, default=list)


class PendingJob(JobMixin, Base):
    """Job posting awaiting admin approval."""

    __tablename__ = "pending_jobs"


class PublishedJob(JobMixin, Base):
    """Approved job posting open to applications."""

    __tablename__ = "published_jobs"


# Path segment -> model; anything else is rejected
COLLECTIONS: dict[str, type[DocumentMixin]] = {
    "users": User,
    "pending_jobs": PendingJob,
    "published_jobs": PublishedJob,
}
JOB_COLLECTIONS = ("pending_jobs", "published_jobs")
