"""
Job lifecycle workflow: post -> pending -> published (approve) or discarded (reject).

Each job lives in one canonical collection and is mirrored in the employer's
``pendingJobs`` or ``publishedJobs``. Mirror and canonical writes share one
transaction.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from talentlink.db import commit, flush
from talentlink.errors import NotFoundError, ValidationError
from talentlink.services.accounts import AccountStore
from talentlink.services.jobs import JobStore

logger = logging.getLogger(__name__)

# Free-text inputs split on commas
LIST_FIELDS = ("qualifications", "skills", "responsibilities", "employmentBenefits", "tags")

# Copied verbatim from the post-job request
SCALAR_FIELDS = (
    "jobName",
    "jobType",
    "location",
    "experienceLevel",
    "companyName",
    "companyDescription",
    "website",
    "companyEmail",
    "companyPhoneNumber",
    "applicationDeadline",
    "workSchedule",
)


def split_list(value) -> list[str]:
    """Split comma-separated text into trimmed, non-empty items.

    >>> split_list("Go, SQL, ")
    ['Go', 'SQL']
    """
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def post_job(db: Session, employer_id: str, fields: dict) -> dict:
    """Create a pending job and mirror it in the employer's ``pendingJobs``."""
    accounts = AccountStore(db)
    employer = accounts.get(employer_id, for_update=True)
    if not employer:
        raise NotFoundError("Employer not found")

    record = {key: fields.get(key) for key in SCALAR_FIELDS}
    for key in LIST_FIELDS:
        record[key] = split_list(fields.get(key))
    record["salaryRange"] = {
        "minSalary": fields.get("minSalary"),
        "maxSalary": fields.get("maxSalary"),
    }
    record["postedDate"] = datetime.now(UTC).isoformat()
    record["employerId"] = employer_id
    record["applicants"] = []

    job = JobStore(db, "pending_jobs").create(record)
    new_job = job.to_document()
    employer.pending_jobs = [*(employer.pending_jobs or []), new_job]

    commit(db, "post job", jobId=job.id, employerId=employer_id)
    logger.info("Created job %s and added to employer %s pending jobs", job.id, employer_id)
    return new_job


def approve_pending_job(db: Session, job_body: dict) -> str:
    """Promote a pending job to a new published document.

    ``job_body`` is the pending document as the admin reviewed it; its fields
    (not the stored ones) become the published job. Returns the published id.
    """
    pending_id = job_body.get("_id")
    employer_id = job_body.get("employerId")
    if not pending_id or not employer_id:
        raise ValidationError("Request body must contain the pending job's _id and employerId")

    employer = AccountStore(db).get(employer_id, for_update=True)
    if not employer:
        raise NotFoundError("Employer not found")

    pending_store = JobStore(db, "pending_jobs")
    pending = pending_store.get(pending_id, for_update=True)
    if not pending:
        raise NotFoundError(f"Pending job with ID {pending_id} not found")

    published = JobStore(db, "published_jobs").create(
        {key: value for key, value in job_body.items() if key != "_id"}
    )
    pending_store.delete(pending)

    employer.published_jobs = [*(employer.published_jobs or []), published.to_document()]
    employer.pending_jobs = [
        job for job in (employer.pending_jobs or []) if str(job.get("_id")) != pending_id
    ]

    commit(
        db,
        "approve pending job",
        pendingId=pending_id,
        publishedId=published.id,
        employerId=employer_id,
    )
    logger.info("Approved pending job %s as published job %s", pending_id, published.id)
    return published.id


def reject_pending_job(db: Session, pending_id: str, employer_id: str) -> None:
    """Discard a pending job: employer mirror first, then the canonical document.

    A mirror entry whose canonical document is already gone is still removed
    before ``NotFoundError`` is raised.
    """
    employer = AccountStore(db).get(employer_id, for_update=True)
    if not employer:
        raise NotFoundError("Employer not found")

    employer.pending_jobs = [
        job for job in (employer.pending_jobs or []) if str(job.get("_id")) != pending_id
    ]
    flush(db, "reject pending job", pendingId=pending_id, employerId=employer_id)

    pending_store = JobStore(db, "pending_jobs")
    pending = pending_store.get(pending_id)
    if not pending:
        commit(db, "reject pending job", pendingId=pending_id, employerId=employer_id)
        logger.warning("Pending job %s not found; removed employer %s mirror only", pending_id, employer_id)
        raise NotFoundError(f"Document with ID {pending_id} not found.")

    pending_store.delete(pending)
    commit(db, "reject pending job", pendingId=pending_id, employerId=employer_id)
    logger.info("Rejected pending job %s of employer %s", pending_id, employer_id)
