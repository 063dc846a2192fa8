# utils/validation.py
import re
from typing import Optional

from pydantic import ValidationError

from models.user import Role, SignupPayload, SignupRequest
from utils.errors import InvalidEmail, MalformedInput, MissingField, WeakPassword

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def parse_body(raw_body: bytes) -> SignupPayload:
    """Decode a request body into a JSON object whose known fields are strings."""
    try:
        return SignupPayload.model_validate_json(raw_body)
    except ValidationError:
        raise MalformedInput()


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _clean_phone(phone: Optional[str]) -> Optional[str]:
    if phone is None:
        return None
    return phone.strip() or None


def validate_signup(raw_body: bytes) -> SignupRequest:
    """Turn a raw signup body into a normalized ``SignupRequest``.

    Rules are checked in order and the first one violated is raised:
    malformed body, missing required field, invalid email, weak password.
    """
    body = parse_body(raw_body)

    name = (body.name or "").strip()
    email = normalize_email(body.email or "")
    password = body.password or ""

    if not name or not email or not password:
        raise MissingField()

    if not EMAIL_PATTERN.match(email):
        raise InvalidEmail()

    if len(password) < MIN_PASSWORD_LENGTH:
        raise WeakPassword()

    return SignupRequest(
        name=name,
        email=email,
        password=password,
        phone=_clean_phone(body.phone),
        role=body.role or Role.user.value,
        # stored as sent; only an empty value is dropped
        employee_id=body.employee_id or None,
    )
