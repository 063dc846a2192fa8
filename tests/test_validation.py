# tests/test_validation.py
import json

import pytest

from utils.errors import InvalidEmail, MalformedInput, MissingField, WeakPassword
from utils.validation import validate_signup


def body(**fields):
    return json.dumps(fields).encode()


def test_valid_body_is_normalized():
    signup = validate_signup(
        body(name="  Ana  ", email="  Ana@Example.COM ", password="secret1", phone=" 0812 ", employeeId="E-7")
    )
    assert signup.name == "Ana"
    assert signup.email == "ana@example.com"
    assert signup.password == "secret1"
    assert signup.phone == "0812"
    assert signup.role == "user"
    assert signup.employee_id == "E-7"


def test_password_is_not_trimmed():
    signup = validate_signup(body(name="A", email="a@b.com", password=" secret "))
    assert signup.password == " secret "


def test_empty_employee_id_is_dropped():
    signup = validate_signup(body(name="A", email="a@b.com", password="secret1", employeeId=""))
    assert signup.employee_id is None


@pytest.mark.parametrize("raw", [b"", b"{not json", b"[1, 2]", b'"text"', b"\xff\xfe"])
def test_malformed_body(raw):
    with pytest.raises(MalformedInput):
        validate_signup(raw)


def test_non_string_field_is_malformed():
    with pytest.raises(MalformedInput):
        validate_signup(body(name="A", email="a@b.com", password=123456))


@pytest.mark.parametrize(
    "fields",
    [
        {"email": "a@b.com", "password": "secret1"},
        {"name": "A", "password": "secret1"},
        {"name": "A", "email": "a@b.com"},
        {"name": "   ", "email": "a@b.com", "password": "secret1"},
        {"name": "A", "email": "", "password": "secret1"},
        {"name": None, "email": "a@b.com", "password": "secret1"},
    ],
)
def test_missing_field(fields):
    with pytest.raises(MissingField) as exc_info:
        validate_signup(body(**fields))
    assert exc_info.value.message == "Name, email, and password are required"


@pytest.mark.parametrize("email", ["plain", "a@b", "@b.com", "a@.com", "a b@c.com", "a@b@c.com"])
def test_invalid_email(email):
    with pytest.raises(InvalidEmail) as exc_info:
        validate_signup(body(name="A", email=email, password="secret1"))
    assert "valid email" in exc_info.value.message


@pytest.mark.parametrize("password", ["a", "12345", "abcde"])
def test_weak_password(password):
    with pytest.raises(WeakPassword):
        validate_signup(body(name="A", email="a@b.com", password=password))


def test_rules_checked_in_order():
    # bad email and short password together: email rule wins
    with pytest.raises(InvalidEmail):
        validate_signup(body(name="A", email="nope", password="123"))
    # missing name beats bad email
    with pytest.raises(MissingField):
        validate_signup(body(email="nope", password="123"))


def test_employee_id_is_stored_as_sent():
    signup = validate_signup(body(name="A", email="a@b.com", password="secret1", employeeId="  E-1 "))
    assert signup.employee_id == "  E-1 "


def test_email_with_surrounding_spaces_is_accepted():
    assert validate_signup(body(name="A", email=" a@b.com", password="secret1")).email == "a@b.com"


@pytest.mark.parametrize("fields", [{"role": 1}, {"phone": 812}, {"employeeId": ["E-1"]}, {"name": {"first": "A"}}])
def test_non_string_field_values_are_malformed(fields):
    payload = {"name": "A", "email": "a@b.com", "password": "secret1"}
    payload.update(fields)
    with pytest.raises(MalformedInput):
        validate_signup(json.dumps(payload).encode())


def test_unknown_fields_are_ignored():
    signup = validate_signup(body(name="A", email="a@b.com", password="secret1", nickname=7))
    assert signup.name == "A"
