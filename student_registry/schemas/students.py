from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from student_registry.models.student import MAX_STUDENT_ID
from student_registry.services.pagination import PageView

NAME_RE = re.compile(r"^[A-Za-z ]+$")
EMAIL_RE = re.compile(r"^[a-z][a-z0-9._%+-]*@gmail\.com$")
MOBILE_RE = re.compile(r"^[0-9]{10}$")

NAME_MAX = 120
EMAIL_MAX = 120

ID_MESSAGE = "Id must be a positive integer greater than zero."


def _fail(kind: str, message: str) -> PydanticCustomError:
    return PydanticCustomError(kind, message)


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def check_email(email: str) -> str | None:
    """Return the first failing email rule message, or None when valid."""
    if not email:
        return "Email is required."
    if " " in email:
        return "Spaces are not allowed in email."
    if email.count("@") != 1:
        return "Email must contain exactly one '@' symbol."
    if any(c.isupper() for c in email):
        return "Capital letters are not allowed."
    if not email.endswith("@gmail.com"):
        return "Email must end with @gmail.com."
    if len(email) > EMAIL_MAX or not EMAIL_RE.match(email):
        return "Invalid email format."
    return None


class StudentFields(BaseModel):
    """Mutable fields shared by the create and edit forms."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str
    mobile: str

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v: Any) -> str:
        name = _clean(v)
        if not name:
            raise _fail("name_required", "Name is required.")
        if not NAME_RE.match(name):
            raise _fail("name_format", "Name must contain only letters and spaces.")
        if len(name) > NAME_MAX:
            raise _fail("name_length", f"Name must be at most {NAME_MAX} characters.")
        return name

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v: Any) -> str:
        email = _clean(v)
        problem = check_email(email)
        if problem:
            raise _fail("email_format", problem)
        return email

    @field_validator("mobile", mode="before")
    @classmethod
    def _mobile(cls, v: Any) -> str:
        mobile = _clean(v)
        if not mobile:
            raise _fail("mobile_required", "Mobile number is required.")
        if not MOBILE_RE.match(mobile):
            raise _fail("mobile_format", "Mobile number must be exactly 10 digits.")
        return mobile


def _parse_id(v: Any) -> int | None:
    if v is None or (isinstance(v, str) and not v.strip()):
        return None
    try:
        value = int(str(v).strip())
    except ValueError:
        raise _fail("id_format", ID_MESSAGE) from None
    if value <= 0 or value > MAX_STUDENT_ID:
        raise _fail("id_range", ID_MESSAGE)
    return value


class StudentCreateIn(StudentFields):
    # Left empty, the database assigns the next id.
    id: int | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, v: Any) -> int | None:
        return _parse_id(v)


class StudentEditIn(StudentFields):
    id: int

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, v: Any) -> int:
        value = _parse_id(v)
        if value is None:
            raise _fail("id_required", ID_MESSAGE)
        return value


class StudentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    mobile: str


class StudentPageOut(BaseModel):
    items: list[StudentOut]
    page: PageView


def form_errors(exc: ValidationError) -> dict[str, str]:
    """Flatten a pydantic error into ``{field: first message}`` for the templates."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "__all__"
        errors.setdefault(field, err["msg"])
    return errors
