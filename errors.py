# errors.py


class AppError(Exception):
    """Base class for errors surfaced to the HTTP boundary."""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    status_code = 400


class NotFound(AppError):
    status_code = 404


class InvalidCredential(AppError):
    status_code = 401


class GenerationExhausted(AppError):
    status_code = 500


class PersistenceError(AppError):
    status_code = 500
