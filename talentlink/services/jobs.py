"""Job Store: pending and published job postings."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from talentlink.db import COLLECTIONS, JOB_COLLECTIONS, flush
from talentlink.db.tables import JobMixin
from talentlink.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class JobStore:
    """Operations on one job sub-collection (``pending_jobs`` or ``published_jobs``).

    Writes are staged on the session; the caller commits the unit of work.
    """

    def __init__(self, db: Session, collection: str = "published_jobs"):
        if collection not in JOB_COLLECTIONS:
            raise ValidationError(f"Not a job collection: {collection}")
        self.db = db
        self.collection = collection
        self.model = COLLECTIONS[collection]

    def get(self, job_id: str | None, for_update: bool = False) -> JobMixin | None:
        if not job_id:
            return None
        return self.db.get(self.model, job_id, with_for_update=for_update)

    def employer_of(self, job_id: str | None) -> str | None:
        """employerId of a job, read without loading or locking the row."""
        if not job_id:
            return None
        return self.db.scalar(select(self.model.employer_id).where(self.model.id == job_id))

    def find_by_id(self, job_id: str) -> JobMixin:
        job = self.get(job_id)
        if not job:
            raise NotFoundError(f"Document with ID {job_id} not found.")
        return job

    def create(self, record: dict) -> JobMixin:
        """Insert a job document. Any ``_id`` in ``record`` is ignored."""
        if not record.get("employerId"):
            raise ValidationError("employerId is required")
        job = self.model.from_document(record)
        if job.applicants is None:
            job.applicants = []
        self.db.add(job)
        flush(self.db, f"create {self.collection} document", employerId=job.employer_id)
        logger.info("Created %s document %s", self.collection, job.id)
        return job

    def insert_many(self, records: list[dict]) -> list[JobMixin]:
        return [self.create(record) for record in records]

    def find_by_id_and_update(self, job_id: str, fields: dict) -> JobMixin:
        job = self.find_by_id(job_id)
        job.apply_document(fields)
        flush(self.db, f"update {self.collection} document", jobId=job_id)
        return job

    def delete(self, job: JobMixin) -> None:
        self.db.delete(job)
        flush(self.db, f"delete {self.collection} document", jobId=job.id)

    def delete_by_id(self, job_id: str) -> None:
        self.delete(self.find_by_id(job_id))
        logger.info("Deleted %s document %s", self.collection, job_id)

    def list_all(self) -> list[JobMixin]:
        return self.db.query(self.model).all()
