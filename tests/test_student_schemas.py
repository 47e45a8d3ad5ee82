import pytest
from pydantic import ValidationError

from student_registry.schemas.students import (
    StudentCreateIn,
    StudentEditIn,
    check_email,
    form_errors,
)


def _errors(model, data):
    with pytest.raises(ValidationError) as exc:
        model.model_validate(data)
    return form_errors(exc.value)


VALID = {"name": "John Smith", "email": "john123@gmail.com", "mobile": "9876543210"}


def test_valid_create_payload():
    payload = StudentCreateIn.model_validate(VALID)
    assert payload.email == "john123@gmail.com"
    assert payload.id is None


def test_uppercase_gmail_is_rejected():
    errors = _errors(StudentCreateIn, {**VALID, "email": "John@GMAIL.com"})
    assert errors == {"email": "Capital letters are not allowed."}


@pytest.mark.parametrize(
    "email,message",
    [
        ("", "Email is required."),
        ("john smith@gmail.com", "Spaces are not allowed in email."),
        ("john.gmail.com", "Email must contain exactly one '@' symbol."),
        ("john@@gmail.com", "Email must contain exactly one '@' symbol."),
        ("John@gmail.com", "Capital letters are not allowed."),
        ("john@yahoo.com", "Email must end with @gmail.com."),
        ("1john@gmail.com", "Invalid email format."),
        ("jo#hn@gmail.com", "Invalid email format."),
        ("@gmail.com", "Invalid email format."),
    ],
)
def test_email_rules_report_first_failure(email, message):
    assert check_email(email) == message


@pytest.mark.parametrize(
    "email", ["john123@gmail.com", "a@gmail.com", "mary.jane_o%k+1-x@gmail.com"]
)
def test_good_emails(email):
    assert check_email(email) is None


def test_surrounding_whitespace_is_trimmed():
    payload = StudentCreateIn.model_validate(
        {"name": "  Ana Lima ", "email": " ana@gmail.com ", "mobile": " 9876543210 "}
    )
    assert payload.name == "Ana Lima"
    assert payload.email == "ana@gmail.com"
    assert payload.mobile == "9876543210"


@pytest.mark.parametrize(
    "name,message",
    [
        ("", "Name is required."),
        ("   ", "Name is required."),
        ("John3", "Name must contain only letters and spaces."),
        ("O'Brien", "Name must contain only letters and spaces."),
        ("A" * 121, "Name must be at most 120 characters."),
    ],
)
def test_name_rules(name, message):
    assert _errors(StudentCreateIn, {**VALID, "name": name}) == {"name": message}


@pytest.mark.parametrize(
    "mobile,message",
    [
        ("", "Mobile number is required."),
        ("123456789", "Mobile number must be exactly 10 digits."),
        ("12345678901", "Mobile number must be exactly 10 digits."),
        ("98765-4321", "Mobile number must be exactly 10 digits."),
        ("+919876543", "Mobile number must be exactly 10 digits."),
        ("٩٨٧٦٥٤٣٢١٠", "Mobile number must be exactly 10 digits."),
    ],
)
def test_mobile_rules(mobile, message):
    assert _errors(StudentCreateIn, {**VALID, "mobile": mobile}) == {"mobile": message}


@pytest.mark.parametrize(
    "raw", ["0", "-4", "abc", "1.5", "2147483648", "3000000000", "99999999999999999999"]
)
def test_create_rejects_non_positive_or_garbage_id(raw):
    errors = _errors(StudentCreateIn, {**VALID, "id": raw})
    assert errors == {"id": "Id must be a positive integer greater than zero."}


def test_create_accepts_blank_id():
    assert StudentCreateIn.model_validate({**VALID, "id": ""}).id is None
    assert StudentCreateIn.model_validate({**VALID, "id": "12"}).id == 12


def test_largest_integer_column_value_is_a_valid_id():
    assert StudentCreateIn.model_validate({**VALID, "id": "2147483647"}).id == 2147483647
    assert StudentEditIn.model_validate({**VALID, "id": 2147483647}).id == 2147483647


@pytest.mark.parametrize("raw", ["", None, "0", "-1", "3000000000", "99999999999999999999"])
def test_edit_requires_positive_id(raw):
    errors = _errors(StudentEditIn, {**VALID, "id": raw})
    assert errors == {"id": "Id must be a positive integer greater than zero."}


def test_form_errors_collects_every_field():
    errors = _errors(
        StudentEditIn, {"id": "0", "name": "J0hn", "email": "x", "mobile": "1"}
    )
    assert set(errors) == {"id", "name", "email", "mobile"}
