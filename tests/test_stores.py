"""Account Store and Job Store."""

import pytest

from talentlink.db import User, commit
from talentlink.errors import ConflictError, NotFoundError, ValidationError
from talentlink.passwords import hash_password, verify_password
from talentlink.services import AccountStore, JobStore


class TestPasswords:
    def test_hash_is_salted(self):
        first = hash_password("secret", iterations=1000)
        second = hash_password("secret", iterations=1000)
        assert first != second
        assert verify_password("secret", first)
        assert verify_password("secret", second)

    def test_wrong_password(self):
        assert not verify_password("nope", hash_password("secret", iterations=1000))

    def test_garbage_hash(self):
        assert not verify_password("secret", "secret")
        assert not verify_password("secret", None)

    @pytest.mark.parametrize(
        "encoded",
        [
            "pbkdf2_sha256$x$y$z",
            "pbkdf2_sha256$1000$not base64!$AAAA",
            "pbkdf2_sha256$0$AAAA$AAAA",
            "pbkdf2_sha256$-5$AAAA$AAAA",
        ],
    )
    def test_malformed_hash_does_not_verify(self, encoded):
        assert not verify_password("secret", encoded)


class TestAccountStore:
    def test_create_starts_with_empty_sequences(self, db):
        user = AccountStore(db).create({"email": "a@example.com", "password": "pw", "firstName": " Ada "})
        commit(db, "test")

        assert user.first_name == "Ada"
        assert user.applied_jobs == []
        assert user.published_jobs == []
        assert user.pending_jobs == []
        assert user.notifications == []
        assert user.is_employer is False

    def test_password_is_not_stored_in_plaintext(self, db):
        user = AccountStore(db).create({"email": "a@example.com", "password": "pw"})
        commit(db, "test")

        assert user.password != "pw"
        assert "password" not in user.to_document()

    def test_hash_shaped_password_is_still_hashed(self, db):
        store = AccountStore(db)
        password = "pbkdf2_sha256$1$AAAA$AAAA"
        user = store.create({"email": "ada@example.com", "password": password})
        commit(db, "test")

        assert user.password != password
        assert store.find_by_credentials("ada@example.com", password) == user.id

    def test_email_is_normalized(self, db):
        user = AccountStore(db).create({"email": "  Ada@Example.COM ", "password": "pw"})
        assert user.email == "ada@example.com"

    def test_duplicate_email_any_case(self, db):
        store = AccountStore(db)
        store.create({"email": "ada@example.com", "password": "pw"})
        commit(db, "test")

        with pytest.raises(ConflictError):
            store.create({"email": "ADA@example.com", "password": "other"})

    def test_create_requires_email_and_password(self, db):
        with pytest.raises(ValidationError):
            AccountStore(db).create({"email": "a@example.com"})

    def test_create_ignores_embedded_sequences(self, db):
        user = AccountStore(db).create(
            {"email": "a@example.com", "password": "pw", "appliedJobs": [{"jobId": "x"}]}
        )
        assert user.applied_jobs == []

    def test_find_by_credentials_returns_id(self, db):
        store = AccountStore(db)
        user = store.create({"email": "ada@example.com", "password": "pw"})
        commit(db, "test")

        assert store.find_by_credentials("Ada@Example.com", "pw") == user.id
        with pytest.raises(NotFoundError):
            store.find_by_credentials("ada@example.com", "wrong")
        with pytest.raises(NotFoundError):
            store.find_by_credentials("nobody@example.com", "pw")

    def test_find_by_id_and_update(self, db):
        store = AccountStore(db)
        user = store.create({"email": "ada@example.com", "password": "pw"})
        commit(db, "test")

        updated = store.find_by_id_and_update(user.id, {"major": "Math", "unknown": 1, "createdAt": "x"})
        commit(db, "test")

        assert updated.major == "Math"
        assert store.find_by_id(user.id).major == "Math"

    def test_update_rehashes_password(self, db):
        store = AccountStore(db)
        user = store.create({"email": "ada@example.com", "password": "pw"})
        store.find_by_id_and_update(user.id, {"password": "new"})
        commit(db, "test")

        assert store.find_by_credentials("ada@example.com", "new") == user.id

    @pytest.mark.parametrize("field", ["email", "password", "isEmployer"])
    def test_update_required_field_to_null(self, db, field):
        store = AccountStore(db)
        user = store.create({"email": "ada@example.com", "password": "pw"})
        commit(db, "test")

        with pytest.raises(ValidationError):
            store.find_by_id_and_update(user.id, {field: None})

    def test_lock_returns_existing_users_by_id(self, db):
        store = AccountStore(db)
        ada = store.create({"email": "ada@example.com", "password": "pw"})
        bob = store.create({"email": "bob@example.com", "password": "pw"})
        commit(db, "test")

        locked = store.lock(bob.id, None, "missing", ada.id, bob.id)

        assert locked == {ada.id: ada, bob.id: bob}
        assert store.lock() == {}

    def test_update_to_taken_email(self, db):
        store = AccountStore(db)
        store.create({"email": "ada@example.com", "password": "pw"})
        other = store.create({"email": "bob@example.com", "password": "pw"})
        commit(db, "test")

        with pytest.raises(ConflictError):
            store.find_by_id_and_update(other.id, {"email": "ADA@example.com"})

    def test_delete(self, db):
        store = AccountStore(db)
        user = store.create({"email": "ada@example.com", "password": "pw"})
        commit(db, "test")

        store.delete_by_id(user.id)
        commit(db, "test")

        assert db.get(User, user.id) is None
        with pytest.raises(NotFoundError):
            store.delete_by_id(user.id)


class TestJobStore:
    def test_rejects_non_job_collection(self, db):
        with pytest.raises(ValidationError):
            JobStore(db, "users")

    def test_create_scoped_to_collection(self, db):
        pending = JobStore(db, "pending_jobs")
        job = pending.create({"_id": "ignored", "jobName": "Dev", "employerId": "e1"})
        commit(db, "test")

        assert job.id != "ignored"
        assert job.applicants == []
        assert pending.find_by_id(job.id).job_name == "Dev"
        assert JobStore(db, "published_jobs").get(job.id) is None

    def test_create_requires_employer(self, db):
        with pytest.raises(ValidationError):
            JobStore(db, "pending_jobs").create({"jobName": "Dev"})

    def test_list_and_delete(self, db):
        store = JobStore(db, "published_jobs")
        first = store.create({"jobName": "A", "employerId": "e1"})
        store.create({"jobName": "B", "employerId": "e1"})
        commit(db, "test")

        assert sorted(j.job_name for j in store.list_all()) == ["A", "B"]

        store.delete_by_id(first.id)
        commit(db, "test")

        assert [j.job_name for j in store.list_all()] == ["B"]
        with pytest.raises(NotFoundError):
            store.find_by_id(first.id)

    def test_employer_of(self, db):
        store = JobStore(db, "published_jobs")
        job = store.create({"jobName": "Dev", "employerId": "e1"})
        commit(db, "test")

        assert store.employer_of(job.id) == "e1"
        assert store.employer_of("missing") is None
        assert JobStore(db, "pending_jobs").employer_of(job.id) is None

    def test_update_employer_to_null(self, db):
        store = JobStore(db, "published_jobs")
        job = store.create({"jobName": "Dev", "employerId": "e1"})
        commit(db, "test")

        with pytest.raises(ValidationError):
            store.find_by_id_and_update(job.id, {"employerId": None})

    def test_document_shape(self, db):
        job = JobStore(db, "pending_jobs").create(
            {"jobName": "Dev", "employerId": "e1", "salaryRange": {"minSalary": 1, "maxSalary": 2}}
        )
        doc = job.to_document()

        assert doc["_id"] == job.id
        assert doc["salaryRange"] == {"minSalary": 1, "maxSalary": 2}
        assert doc["employerId"] == "e1"
        assert doc["applicants"] == []
