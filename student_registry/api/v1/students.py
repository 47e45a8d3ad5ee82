# student_registry/api/v1/students.py
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from student_registry.db import get_db
from student_registry.schemas.students import StudentOut, StudentPageOut
from student_registry.services.pagination import (
    DEFAULT_PAGE_SIZE,
    paginate_students,
    parse_int,
)
from student_registry.services.students import get_student

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=StudentPageOut)
def list_students(
    db: Annotated[Session, Depends(get_db)],
    page: str | None = Query(None),
    page_size: str | None = Query(None, description="One of 2, 3, 5 or 10"),
):
    result = paginate_students(
        db,
        page=parse_int(page, 1),
        page_size=parse_int(page_size, DEFAULT_PAGE_SIZE),
    )
    return StudentPageOut(
        items=[StudentOut.model_validate(st) for st in result.items],
        page=result.view,
    )


@router.get("/{student_id}", response_model=StudentOut)
def read_student(student_id: str, db: Annotated[Session, Depends(get_db)]):
    return StudentOut.model_validate(get_student(db, parse_int(student_id, 0)))
