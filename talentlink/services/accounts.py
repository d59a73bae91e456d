"""Account Store: user and employer documents."""

import logging

from sqlalchemy.orm import Session

from talentlink.db import User, flush
from talentlink.errors import ConflictError, NotFoundError, ValidationError
from talentlink.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

EMBEDDED_FIELDS = ("appliedJobs", "publishedJobs", "pendingJobs", "notifications")


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _hashed(password) -> str:
    if not isinstance(password, str) or not password:
        raise ValidationError("Password must be a non-empty string")
    return hash_password(password)


class AccountStore:
    """Operations on the ``users`` collection.

    Writes are staged on the session; the caller commits the unit of work.
    Passwords are hashed here on every write, whatever the input looks like.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str | None, for_update: bool = False) -> User | None:
        """Load a user, optionally locking the row for the rest of the transaction."""
        if not user_id:
            return None
        return self.db.get(User, user_id, with_for_update=for_update)

    def lock(self, *user_ids: str | None) -> dict[str, User]:
        """Lock the given users in id order and return the ones that exist, by id.

        Workflows touching two accounts lock through here so concurrent
        transactions always take row locks in the same order.
        """
        ids = sorted({user_id for user_id in user_ids if user_id})
        if not ids:
            return {}
        rows = (
            self.db.query(User)
            .filter(User.id.in_(ids))
            .order_by(User.id)
            .with_for_update()
            .populate_existing()
            .all()
        )
        return {user.id: user for user in rows}

    def find_by_id(self, user_id: str) -> User:
        user = self.get(user_id)
        if not user:
            raise NotFoundError(f"User with ID {user_id} not found")
        return user

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def create(self, record: dict) -> User:
        """Create an account with empty embedded sequences. Emails are unique."""
        email = normalize_email(record.get("email"))
        if not email or not record.get("password"):
            raise ValidationError("Email and password are required")
        password = _hashed(record["password"])
        if self.find_by_email(email):
            raise ConflictError("User with the same email already exists")

        user = User.from_document(
            {k: v for k, v in record.items() if k not in EMBEDDED_FIELDS and k != "password"}
        )
        user.email = email
        user.password = password
        user.applied_jobs = []
        user.published_jobs = []
        user.pending_jobs = []
        user.notifications = []
        if user.is_employer is None:
            user.is_employer = False
        self.db.add(user)
        flush(self.db, "create user", email=email)
        logger.info("Created user %s", user.id)
        return user

    def find_by_credentials(self, email: str, password: str) -> str:
        """Return the id of the account matching ``email`` and ``password``."""
        user = self.find_by_email(email)
        if not user or not verify_password(password, user.password):
            raise NotFoundError(f"User with email {email} not found or password is incorrect")
        return user.id

    def find_by_id_and_update(self, user_id: str, fields: dict) -> User:
        user = self.find_by_id(user_id)
        if fields.get("email") is not None:
            email = normalize_email(fields["email"])
            other = self.find_by_email(email)
            if other and other.id != user.id:
                raise ConflictError("User with the same email already exists")
        if "password" in fields:
            fields = {**fields, "password": _hashed(fields["password"])}
        user.apply_document(fields)
        flush(self.db, "update user", userId=user_id)
        return user

    def insert_many(self, records: list[dict]) -> list[User]:
        return [self.create(record) for record in records]

    def delete_by_id(self, user_id: str) -> None:
        user = self.find_by_id(user_id)
        self.db.delete(user)
        flush(self.db, "delete user", userId=user_id)
        logger.info("Deleted user %s", user_id)

    def list_all(self) -> list[User]:
        return self.db.query(User).all()
