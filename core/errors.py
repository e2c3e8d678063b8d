class FollowUpError(Exception):
    """Base class for errors the UI reports back to the user."""


class RecordValidationError(FollowUpError, ValueError):
    """A submitted record is missing required fields or holds invalid values."""

    def __init__(self, message: str, missing_fields: list[str] | None = None):
        super().__init__(message)
        self.missing_fields = list(missing_fields or [])


class ImportFormatError(FollowUpError, ValueError):
    """An import payload is not a well-formed list of patient records."""


class PatientNotFoundError(FollowUpError, LookupError):
    """Raised only where a patient is required to exist."""
