"""Custom exceptions for savedimport."""


class SavedImportError(Exception):
    """Base exception for savedimport errors."""

    pass


class ValidationError(SavedImportError):
    """Error during input validation."""

    pass


class StoreError(SavedImportError):
    """The saved objects store returned a response that cannot be used."""

    pass


class BulkCreateMismatchError(StoreError):
    """Bulk create outcomes do not line up with the submitted objects."""

    def __init__(self, message: str, expected: int, received: int):
        super().__init__(message)
        self.expected = expected
        self.received = received
