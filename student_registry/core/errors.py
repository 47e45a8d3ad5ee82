"""Domain errors raised by the student services.

Routers translate them: field errors and no-op edits are redisplayed on the
form, ``NotFoundError`` becomes a 404 and ``TransactionFailure`` is left to
propagate as a server error.
"""
from __future__ import annotations

DUPLICATE_ID_MESSAGE = "A student with this Id already exists."
NO_CHANGES_MESSAGE = "No changes detected. Nothing to save."


class StudentError(Exception):
    pass


class FieldValidationError(StudentError):
    def __init__(self, errors: dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


class DuplicateKeyError(FieldValidationError):
    def __init__(self, student_id: int):
        super().__init__({"id": DUPLICATE_ID_MESSAGE})
        self.student_id = student_id


class NoChangeError(StudentError):
    def __init__(self, message: str = NO_CHANGES_MESSAGE):
        super().__init__(message)
        self.message = message


class NotFoundError(StudentError):
    def __init__(self, student_id: int | None):
        super().__init__(f"Student {student_id} not found.")
        self.student_id = student_id


class TransactionFailure(StudentError):
    pass
