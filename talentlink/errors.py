"""Error taxonomy shared by stores, workflows and the HTTP surface."""


class TalentLinkError(Exception):
    """Base error. ``status_code`` is the HTTP status the API responds with."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TalentLinkError):
    """A referenced user, job or embedded entry does not exist."""

    status_code = 404


class ConflictError(TalentLinkError):
    """Duplicate email, duplicate application or disallowed status change."""

    status_code = 409


class ValidationError(TalentLinkError):
    """Malformed or missing request data."""

    status_code = 400


class StoreError(TalentLinkError):
    """Storage failure; the unit of work was rolled back."""

    status_code = 500
