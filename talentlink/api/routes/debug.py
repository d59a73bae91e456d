"""Generic collection endpoints for testing and debugging.

Mounted only when ENABLE_DEBUG_ROUTES is set.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from talentlink.api.deps import get_collection
from talentlink.api.schemas import InsertRequest, UpdateRequest
from talentlink.db import commit, get_db
from talentlink.errors import ValidationError
from talentlink.services import AccountStore, JobStore

router = APIRouter()


def _store(db: Session, collection: str) -> AccountStore | JobStore:
    if collection == "users":
        return AccountStore(db)
    return JobStore(db, collection)


@router.get("/find/{database}/{collection}")
def find_all(
    collection: str = Depends(get_collection),
    db: Session = Depends(get_db),
):
    """List every document in a collection."""
    return [doc.to_document() for doc in _store(db, collection).list_all()]


@router.get("/find/{database}/{collection}/{doc_id}")
def find_one(
    doc_id: str,
    collection: str = Depends(get_collection),
    db: Session = Depends(get_db),
):
    """Fetch one document by id."""
    return _store(db, collection).find_by_id(doc_id).to_document()


@router.post("/insert/{database}/{collection}", status_code=201)
def insert(
    data: InsertRequest,
    collection: str = Depends(get_collection),
    db: Session = Depends(get_db),
):
    """Insert ``document`` or every entry of ``documents``."""
    store = _store(db, collection)
    if data.document is not None:
        doc = store.create(data.document)
        commit(db, f"insert into {collection}", id=doc.id)
        return {"message": "Document inserted successfully", "insertedId": doc.id}
    if data.documents is not None:
        docs = store.insert_many(data.documents)
        commit(db, f"insert many into {collection}", count=len(docs))
        return {
            "message": f"{len(docs)} documents inserted",
            "insertedIds": [doc.id for doc in docs],
        }
    raise ValidationError("Request body must contain either 'document' or 'documents' as array")


@router.put("/update/{database}/{collection}/{doc_id}")
def update(
    doc_id: str,
    data: UpdateRequest,
    collection: str = Depends(get_collection),
    db: Session = Depends(get_db),
):
    """Set the given fields on one document."""
    if not data.update:
        raise ValidationError("Update data not provided")
    doc = _store(db, collection).find_by_id_and_update(doc_id, data.update)
    commit(db, f"update {collection} document", id=doc_id)
    return {"message": "Document updated successfully", "modifiedDocument": doc.to_document()}


@router.delete("/delete/{database}/{collection}/{doc_id}")
def delete(
    doc_id: str,
    collection: str = Depends(get_collection),
    db: Session = Depends(get_db),
):
    """Delete one document by id."""
    _store(db, collection).delete_by_id(doc_id)
    commit(db, f"delete {collection} document", id=doc_id)
    return {"message": f"Document with ID {doc_id} deleted successfully."}
