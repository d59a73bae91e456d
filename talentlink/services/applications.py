"""
Application workflow.

An application is stored twice: in the applicant's ``appliedJobs`` and in the
``applicants`` list of the matching entry of the employer's ``publishedJobs``.
The canonical published job keeps a third copy. Every write for one action is
committed in a single transaction. The user rows (in id order) and then the
job row are locked while the copies are rebuilt.
"""

import copy
import logging
from datetime import UTC, datetime
from enum import StrEnum

from sqlalchemy.orm import Session

from talentlink.config import settings
from talentlink.db import commit
from talentlink.db.tables import generate_uuid
from talentlink.errors import ConflictError, NotFoundError, ValidationError
from talentlink.services.accounts import AccountStore
from talentlink.services.jobs import JobStore

logger = logging.getLogger(__name__)


class ApplicationStatus(StrEnum):
    UNDER_REVIEW = "Under Review"
    INTERVIEWING = "Interviewing"
    OFFERED = "Offered"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    WITHDRAWN = "Withdrawn"


INITIAL_STATUS = ApplicationStatus.UNDER_REVIEW

# Only checked when ENFORCE_STATUS_TRANSITIONS is set
TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    ApplicationStatus.UNDER_REVIEW: frozenset(
        {
            ApplicationStatus.INTERVIEWING,
            ApplicationStatus.OFFERED,
            ApplicationStatus.REJECTED,
            ApplicationStatus.WITHDRAWN,
        }
    ),
    ApplicationStatus.INTERVIEWING: frozenset(
        {ApplicationStatus.OFFERED, ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN}
    ),
    ApplicationStatus.OFFERED: frozenset(
        {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN}
    ),
    ApplicationStatus.ACCEPTED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
    ApplicationStatus.WITHDRAWN: frozenset(),
}

# Job fields copied into the snapshot at application time
JOB_SNAPSHOT_FIELDS = (
    "jobName",
    "location",
    "companyName",
    "companyDescription",
    "website",
    "companyEmail",
    "companyPhoneNumber",
    "jobType",
    "salaryRange",
    "experienceLevel",
    "qualifications",
    "skills",
    "responsibilities",
    "postedDate",
    "applicationDeadline",
    "employmentBenefits",
    "workSchedule",
)

# Applicant-supplied fields; these win over job fields of the same name
APPLICANT_FIELDS = (
    "firstName",
    "lastName",
    "email",
    "phone",
    "school",
    "graduationDate",
    "languageList",
    "jobRole",
    "workAuthorization",
    "experienceLevel",
    "aboutMe",
    "comments",
)


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _index_by(entries: list[dict] | None, key: str, value: str) -> int:
    for i, entry in enumerate(entries or []):
        if str(entry.get(key)) == value:
            return i
    return -1


def check_transition(current: str | None, new_status: str) -> None:
    """Reject unknown labels and transitions missing from ``TRANSITIONS``."""
    try:
        target = ApplicationStatus(new_status)
    except ValueError:
        raise ValidationError(f"Unknown application status: {new_status}")
    try:
        source = ApplicationStatus(current or INITIAL_STATUS)
    except ValueError:
        # Labels written before enforcement was switched on can move anywhere
        return
    if target not in TRANSITIONS[source]:
        raise ConflictError(f"Cannot change application status from {source} to {target}")


def build_applied_job(job: dict, user_id: str, major: str | None, applicant_fields: dict) -> dict:
    """Denormalized snapshot of ``job`` plus the applicant's answers."""
    applied_job = {"jobId": job["_id"]}
    for key in JOB_SNAPSHOT_FIELDS:
        applied_job[key] = job.get(key)
    applied_job["dateApplied"] = _now()
    applied_job["userId"] = user_id
    for key in APPLICANT_FIELDS:
        if applicant_fields.get(key) is not None:
            applied_job[key] = applicant_fields[key]
    applied_job["major"] = major
    applied_job["applicationStatus"] = str(INITIAL_STATUS)
    return applied_job


def submit_application(db: Session, user_id: str, job_id: str, applicant_fields: dict) -> dict:
    """Record an application in the applicant's and the employer's documents."""
    accounts = AccountStore(db)
    jobs = JobStore(db, "published_jobs")

    # Users before jobs, users in id order
    locked = accounts.lock(user_id, jobs.employer_of(job_id))

    user = locked.get(user_id)
    if not user:
        raise NotFoundError("User not found")

    if _index_by(user.applied_jobs, "jobId", job_id) != -1:
        raise ConflictError("Already applied to job")

    job = jobs.get(job_id, for_update=True)
    if not job:
        raise NotFoundError("Job not found")

    employer = locked.get(job.employer_id) or accounts.get(job.employer_id, for_update=True)
    if not employer:
        raise NotFoundError("Employer not found")

    job_index = _index_by(employer.published_jobs, "_id", job_id)
    if job_index == -1:
        raise NotFoundError("Employer's job not found")

    applied_job = build_applied_job(job.to_document(), user_id, user.major, applicant_fields)

    user.applied_jobs = [*(user.applied_jobs or []), applied_job]

    # Applicant and employer may be the same row
    published = copy.deepcopy(employer.published_jobs)
    published[job_index]["applicants"] = [
        *(published[job_index].get("applicants") or []),
        copy.deepcopy(applied_job),
    ]
    employer.published_jobs = published

    job.applicants = [*(job.applicants or []), copy.deepcopy(applied_job)]

    commit(db, "submit application", userId=user_id, jobId=job_id, employerId=employer.id)
    logger.info("User %s applied to job %s (employer %s)", user_id, job_id, employer.id)
    return applied_job


def update_application_status(
    db: Session,
    user_id: str,
    job_id: str,
    new_status: str,
    collection: str = "published_jobs",
    enforce_transitions: bool | None = None,
) -> dict:
    """Set ``applicationStatus`` on every copy of one application and notify the applicant.

    Returns the employer document.
    """
    if enforce_transitions is None:
        enforce_transitions = settings.enforce_status_transitions

    accounts = AccountStore(db)
    jobs = JobStore(db, collection)

    locked = accounts.lock(user_id, jobs.employer_of(job_id))

    user = locked.get(user_id)
    if not user:
        raise NotFoundError("User not found")

    job = jobs.get(job_id, for_update=True)
    if not job:
        raise NotFoundError("Job not found")

    app_index = _index_by(user.applied_jobs, "jobId", job_id)
    if app_index == -1:
        raise NotFoundError("Application not found")

    employer = locked.get(job.employer_id) or accounts.get(job.employer_id, for_update=True)
    if not employer:
        raise NotFoundError("Employer not found")

    job_index = _index_by(employer.published_jobs, "_id", job_id)
    if job_index == -1:
        raise NotFoundError("Employer's job not found")

    applicant_index = _index_by(employer.published_jobs[job_index].get("applicants"), "userId", user_id)
    if applicant_index == -1:
        raise NotFoundError("Applicant not found")

    if enforce_transitions:
        check_transition(user.applied_jobs[app_index].get("applicationStatus"), new_status)

    applied_jobs = copy.deepcopy(user.applied_jobs)
    applied_jobs[app_index]["applicationStatus"] = new_status
    user.applied_jobs = applied_jobs

    notification = {
        "id": generate_uuid(),
        "type": new_status,
        "jobTitle": job.job_name,
        "company": job.company_name,
        "date": _now(),
    }
    user.notifications = [notification, *(user.notifications or [])]

    published = copy.deepcopy(employer.published_jobs)
    published[job_index]["applicants"][applicant_index]["applicationStatus"] = new_status
    employer.published_jobs = published

    applicants = copy.deepcopy(job.applicants or [])
    canonical_index = _index_by(applicants, "userId", user_id)
    if canonical_index != -1:
        applicants[canonical_index]["applicationStatus"] = new_status
        job.applicants = applicants

    commit(
        db,
        "update application status",
        userId=user_id,
        jobId=job_id,
        employerId=employer.id,
        status=new_status,
    )
    logger.info("Updated application status for user %s in job %s to %s", user_id, job_id, new_status)
    return employer.to_document()
