"""Application endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from talentlink.api.deps import require_collection
from talentlink.api.schemas import ApplicationStatusUpdate, ApplyRequest
from talentlink.db import JOB_COLLECTIONS, get_db
from talentlink.services import submit_application, update_application_status

router = APIRouter()


@router.post("/user-apply/{database}/{collection}", status_code=201)
def user_apply(
    data: ApplyRequest,
    collection: str = Depends(require_collection("users")),
    db: Session = Depends(get_db),
):
    """Apply to a published job."""
    fields = data.dump()
    applied_job = submit_application(db, fields.pop("userId"), fields.pop("jobId"), fields)
    return {"message": "Job application submitted successfully", "appliedJob": applied_job}


@router.post("/update-application-status/{database}/{collection}", status_code=201)
def change_application_status(
    data: ApplicationStatusUpdate,
    collection: str = Depends(require_collection(*JOB_COLLECTIONS)),
    db: Session = Depends(get_db),
):
    """Update an applicant's status on both copies and notify the applicant.

    Returns the employer document.
    """
    return update_application_status(db, data.user_id, data.job_id, data.new_status, collection=collection)
