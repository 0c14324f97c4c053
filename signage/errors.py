class SignageError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SignageError):
    status_code = 400


class NotFoundError(SignageError):
    status_code = 404


class ConflictError(SignageError):
    status_code = 409


class StorageUnavailableError(SignageError):
    status_code = 503


class CascadeError(StorageUnavailableError):
    """The primary record is gone but dependent records were left untouched."""

    status_code = 500
