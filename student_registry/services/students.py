from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from student_registry.core.errors import (
    DuplicateKeyError,
    FieldValidationError,
    NoChangeError,
    NotFoundError,
)
from student_registry.core.logging import get_logger
from student_registry.db.session import atomic
from student_registry.models.student import MAX_STUDENT_ID, Student
from student_registry.schemas.students import ID_MESSAGE, StudentCreateIn, StudentEditIn

MUTABLE_FIELDS = ("name", "email", "mobile")


def _same_fields(stored: Student, submitted: StudentEditIn) -> bool:
    return all(
        (getattr(stored, f) or "").strip() == (getattr(submitted, f) or "").strip()
        for f in MUTABLE_FIELDS
    )


def _in_range(student_id: int | None) -> bool:
    return student_id is not None and 0 < student_id <= MAX_STUDENT_ID


def get_student(db: Session, student_id: int | None) -> Student:
    if not _in_range(student_id):
        raise NotFoundError(student_id)
    st = db.get(Student, student_id)
    if not st:
        raise NotFoundError(student_id)
    return st


def resolve_original_id(original_id: int | None, submitted_id: int | None) -> int:
    """Pick the id of the stored record an edit targets.

    A missing original id falls back to the submitted one; when the result is
    not a storable id there is nothing to edit.
    """
    if original_id is None or original_id <= 0:
        original_id = submitted_id
    if not _in_range(original_id):
        raise NotFoundError(original_id)
    return original_id


def next_student_id(db: Session) -> int:
    return (db.query(func.max(Student.id)).scalar() or 0) + 1


def create_student(db: Session, payload: StudentCreateIn) -> Student:
    if payload.id is not None and db.get(Student, payload.id) is not None:
        raise DuplicateKeyError(payload.id)

    new_id = payload.id if payload.id is not None else next_student_id(db)
    if new_id > MAX_STUDENT_ID:
        raise FieldValidationError({"id": ID_MESSAGE})
    st = Student(
        id=new_id,
        name=payload.name,
        email=payload.email,
        mobile=payload.mobile,
    )
    db.add(st)
    try:
        db.commit()
    except IntegrityError:
        # another request took the id between the check and the insert
        db.rollback()
        raise DuplicateKeyError(new_id) from None
    db.refresh(st)

    get_logger().info("student.created", student_id=st.id)
    return st


def update_student(db: Session, original_id: int, payload: StudentEditIn) -> Student:
    """Apply an edit to the student stored under ``original_id``.

    When the submitted id differs, the record is relocated: the new row is
    inserted and the old one deleted inside a single transaction.
    """
    log = get_logger().bind(original_id=original_id, student_id=payload.id)

    if payload.id == original_id:
        existing = get_student(db, original_id)
        if _same_fields(existing, payload):
            raise NoChangeError()

        for field in MUTABLE_FIELDS:
            setattr(existing, field, getattr(payload, field))
        db.commit()
        db.refresh(existing)
        log.info("student.updated")
        return existing

    if db.get(Student, payload.id) is not None:
        raise DuplicateKeyError(payload.id)

    with atomic(db):
        existing = db.get(Student, original_id, populate_existing=True)
        if existing is None:
            raise NotFoundError(original_id)
        if existing.id == payload.id and _same_fields(existing, payload):
            raise NoChangeError()

        relocated = Student(
            id=payload.id,
            name=payload.name,
            email=payload.email,
            mobile=payload.mobile,
        )
        db.add(relocated)
        db.delete(existing)

    db.refresh(relocated)
    log.info("student.relocated")
    return relocated


def delete_student(db: Session, student_id: int) -> None:
    st = get_student(db, student_id)
    db.delete(st)
    db.commit()
    get_logger().info("student.deleted", student_id=student_id)


def delete_all_students(db: Session) -> int:
    """Remove every student in one commit. An empty table is a no-op."""
    rows = db.query(Student).all()
    if not rows:
        return 0
    for st in rows:
        db.delete(st)
    db.commit()
    get_logger().info("students.deleted_all", count=len(rows))
    return len(rows)
