"""Account endpoints: retrieve, log in, sign up."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from talentlink.api.deps import get_collection, require_collection
from talentlink.api.limiter import limiter
from talentlink.api.schemas import SignUpRequest
from talentlink.config import settings
from talentlink.db import commit, get_db
from talentlink.errors import StoreError, TalentLinkError
from talentlink.services import AccountStore, JobStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/retrieve-user/{database}/{collection}/{user_id}")
def retrieve_user(
    user_id: str,
    collection: str = Depends(get_collection),
    db: Session = Depends(get_db),
):
    """Fetch a document by id. Lookup failures are reported as a generic error."""
    try:
        if collection == "users":
            return AccountStore(db).find_by_id(user_id).to_document()
        return JobStore(db, collection).find_by_id(user_id).to_document()
    except TalentLinkError as e:
        logger.info("retrieve-user %s/%s failed: %s", collection, user_id, e.message)
        raise StoreError(e.message) from e


@router.get("/log-in/{database}/{collection}/{email}/{password}")
@limiter.limit(settings.rate_limit_auth)
def log_in(
    request: Request,
    email: str,
    password: str,
    collection: str = Depends(require_collection("users")),
    db: Session = Depends(get_db),
):
    """Check credentials and return the account id."""
    try:
        return AccountStore(db).find_by_credentials(email, password)
    except TalentLinkError as e:
        logger.info("Log-in failed for %s", email)
        raise StoreError(e.message) from e


@router.post("/sign-up/{database}/{collection}", status_code=201)
@limiter.limit(settings.rate_limit_auth)
def sign_up(
    request: Request,
    data: SignUpRequest,
    collection: str = Depends(require_collection("users")),
    db: Session = Depends(get_db),
):
    """Create an account. Emails are unique regardless of case."""
    user = AccountStore(db).create(data.dump())
    commit(db, "sign up", email=user.email)
    logger.info("Successfully created user %s with email %s", user.id, user.email)
    return user.to_document()
