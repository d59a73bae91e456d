"""Path segment dependencies."""

from talentlink.db import COLLECTIONS
from talentlink.errors import ValidationError


def get_collection(collection: str) -> str:
    """Resolve the ``{collection}`` path segment against the allow-list."""
    if collection not in COLLECTIONS:
        raise ValidationError(f"No schema defined for collection: {collection}")
    return collection


def require_collection(*allowed: str):
    """Dependency accepting only the named collections."""

    def dependency(collection: str) -> str:
        get_collection(collection)
        if collection not in allowed:
            raise ValidationError(
                f"Collection {collection} not supported here; expected one of: {', '.join(allowed)}"
            )
        return collection

    return dependency
