"""Job posting endpoints: post, approve, reject."""

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from talentlink.api.deps import require_collection
from talentlink.api.schemas import PostJobRequest
from talentlink.db import get_db
from talentlink.services import approve_pending_job, post_job, reject_pending_job

router = APIRouter()


@router.post("/post-job/{database}/{collection}", status_code=201)
def create_pending_job(
    data: PostJobRequest,
    collection: str = Depends(require_collection("pending_jobs")),
    db: Session = Depends(get_db),
):
    """Submit a job for approval."""
    return {"newJob": post_job(db, data.employer_id, data.dump())}


@router.post("/approve-pending-job/{database}/{collection}", status_code=201)
def approve_job(
    job_body: dict = Body(...),
    collection: str = Depends(require_collection("pending_jobs")),
    db: Session = Depends(get_db),
):
    """Publish a pending job under a new id."""
    published_id = approve_pending_job(db, job_body)
    return {
        "message": "Document inserted and removed from pending jobs successfully",
        "insertedId": published_id,
    }


@router.delete("/reject-pending-job/{database}/{collection}/{job_id}/{employer_id}")
def reject_job(
    job_id: str,
    employer_id: str,
    collection: str = Depends(require_collection("pending_jobs")),
    db: Session = Depends(get_db),
):
    """Discard a pending job."""
    reject_pending_job(db, job_id, employer_id)
    return {"message": f"Document with ID {job_id} deleted successfully."}
