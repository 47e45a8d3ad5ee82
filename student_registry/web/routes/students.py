# student_registry/web/routes/students.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from student_registry.core.errors import FieldValidationError, NoChangeError, NotFoundError
from student_registry.core.security import verify_csrf
from student_registry.db import get_db
from student_registry.schemas.students import StudentCreateIn, StudentEditIn, form_errors
from student_registry.services.pagination import (
    DEFAULT_PAGE_SIZE,
    paginate_students,
    parse_int,
)
from student_registry.services.students import (
    create_student,
    delete_all_students,
    delete_student,
    get_student,
    resolve_original_id,
    update_student,
)
from student_registry.web.flash import set_flash
from student_registry.web.templating import render

router = APIRouter(prefix="/students", tags=["students-ui"])

DbSession = Annotated[Session, Depends(get_db)]


def _to_index(request: Request) -> RedirectResponse:
    return RedirectResponse(str(request.url_for("students_index")), status_code=303)


def _trail(*extra: tuple[str, str]) -> list[tuple[str, str]]:
    return [("/students", "Students"), *extra]


# ==========================
# Listing
# ==========================
@router.get("", response_class=HTMLResponse, name="students_index")
def students_index(
    request: Request,
    db: DbSession,
    page: str | None = Query(None),
    page_size: str | None = Query(None),
):
    result = paginate_students(
        db,
        page=parse_int(page, 1),
        page_size=parse_int(page_size, DEFAULT_PAGE_SIZE),
    )
    ctx = {
        "students": result.items,
        "view": result.view,
        "trail": _trail(),
    }
    return render(request, "pages/students/index.html", ctx)


# ==========================
# Create
# ==========================
@router.get("/create", response_class=HTMLResponse, name="students_create_get")
def students_create_get(request: Request):
    ctx = {
        "form": {"id": "", "name": "", "email": "", "mobile": ""},
        "errors": {},
        "trail": _trail(("/students/create", "Create")),
    }
    return render(request, "pages/students/create.html", ctx)


@router.post(
    "/create",
    response_class=HTMLResponse,
    name="students_create_post",
    dependencies=[Depends(verify_csrf)],
)
def students_create_post(
    request: Request,
    db: DbSession,
    id: str | None = Form(None),
    name: str = Form(""),
    email: str = Form(""),
    mobile: str = Form(""),
):
    form_data = {"id": id or "", "name": name, "email": email, "mobile": mobile}

    def _redisplay(errors: dict[str, str]) -> HTMLResponse:
        ctx = {
            "form": form_data,
            "errors": errors,
            "trail": _trail(("/students/create", "Create")),
        }
        return render(request, "pages/students/create.html", ctx)

    try:
        payload = StudentCreateIn.model_validate(form_data)
    except ValidationError as exc:
        return _redisplay(form_errors(exc))

    try:
        st = create_student(db, payload)
    except FieldValidationError as exc:
        return _redisplay(exc.errors)

    set_flash(request, f"Student {st.id} created.")
    return _to_index(request)


# ==========================
# Edit
# ==========================
@router.get("/edit/{student_id}", response_class=HTMLResponse, name="students_edit_get")
def students_edit_get(request: Request, student_id: str, db: DbSession):
    st = get_student(db, parse_int(student_id, 0))
    ctx = {
        "original_id": st.id,
        "form": {"id": st.id, "name": st.name, "email": st.email, "mobile": st.mobile},
        "errors": {},
        "trail": _trail((f"/students/edit/{st.id}", "Edit")),
    }
    return render(request, "pages/students/edit.html", ctx)


@router.post(
    "/edit",
    response_class=HTMLResponse,
    name="students_edit_post",
    dependencies=[Depends(verify_csrf)],
)
def students_edit_post(
    request: Request,
    db: DbSession,
    original_id: str | None = Form(None),
    id: str | None = Form(None),
    name: str | None = Form(None),
    email: str | None = Form(None),
    mobile: str | None = Form(None),
):
    if all(v is None for v in (id, name, email, mobile)):
        raise NotFoundError(parse_int(original_id, 0))

    target_id = resolve_original_id(parse_int(original_id, 0), parse_int(id, 0))
    form_data = {
        "id": id or "",
        "name": name or "",
        "email": email or "",
        "mobile": mobile or "",
    }

    def _redisplay(errors: dict[str, str]) -> HTMLResponse:
        ctx = {
            "original_id": target_id,
            "form": form_data,
            "errors": errors,
            "trail": _trail((f"/students/edit/{target_id}", "Edit")),
        }
        return render(request, "pages/students/edit.html", ctx)

    try:
        payload = StudentEditIn.model_validate(form_data)
    except ValidationError as exc:
        return _redisplay(form_errors(exc))

    try:
        st = update_student(db, target_id, payload)
    except FieldValidationError as exc:
        return _redisplay(exc.errors)
    except NoChangeError as exc:
        return _redisplay({"__all__": exc.message})

    set_flash(request, f"Student {st.id} saved.")
    return _to_index(request)


# ==========================
# Details / Delete
# ==========================
@router.get(
    "/details/{student_id}", response_class=HTMLResponse, name="students_details"
)
def students_details(request: Request, student_id: str, db: DbSession):
    st = get_student(db, parse_int(student_id, 0))
    ctx = {
        "student": st,
        "trail": _trail((f"/students/details/{st.id}", "Details")),
    }
    return render(request, "pages/students/details.html", ctx)


@router.get(
    "/delete/{student_id}", response_class=HTMLResponse, name="students_delete_get"
)
def students_delete_get(request: Request, student_id: str, db: DbSession):
    st = get_student(db, parse_int(student_id, 0))
    ctx = {
        "student": st,
        "trail": _trail((f"/students/delete/{st.id}", "Delete")),
    }
    return render(request, "pages/students/delete.html", ctx)


@router.post(
    "/delete/{student_id}",
    name="students_delete_post",
    dependencies=[Depends(verify_csrf)],
)
def students_delete_post(request: Request, student_id: str, db: DbSession):
    st_id = parse_int(student_id, 0)
    delete_student(db, st_id)
    set_flash(request, f"Student {st_id} deleted.", level="info")
    return _to_index(request)


@router.post(
    "/delete-all",
    name="students_delete_all",
    dependencies=[Depends(verify_csrf)],
)
def students_delete_all(request: Request, db: DbSession):
    removed = delete_all_students(db)
    if removed:
        set_flash(request, f"{removed} student(s) deleted.", level="info")
    return _to_index(request)
