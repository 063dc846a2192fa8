# routes/auth.py
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from config import ALLOW_PRIVILEGED_SIGNUP, BCRYPT_ROUNDS
from database import get_users_collection
from models.user import ErrorResponse, Role, SessionUser, SignupResponse, UserLogin, UserOut
from repositories.user import UserRepository, make_pwd_context
from utils.errors import RoleNotAllowed, SignupError, UserExists, error_kind, map_error
from utils.validation import normalize_email, validate_signup

logger = logging.getLogger(__name__)

router = APIRouter()
pwd_context = make_pwd_context(BCRYPT_ROUNDS)

PRIVILEGED_ROLES = (Role.partner.value, Role.admin.value)


def get_user_repository(collection=Depends(get_users_collection)) -> UserRepository:
    return UserRepository(collection, pwd_context)


def get_signup_policy() -> bool:
    return ALLOW_PRIVILEGED_SIGNUP


def error_response(exc: Exception) -> JSONResponse:
    """Log a signup failure and turn it into the ``{message}`` payload."""
    status, message = map_error(exc)
    context = {
        "kind": error_kind(exc),
        "field": getattr(exc, "field", None),
        "message": message,
        "status": status,
    }
    if status >= 500:
        if isinstance(exc, SignupError):
            logger.error("Signup error %s", context)
        else:
            logger.exception("Unexpected error in signup %s", context)
    else:
        logger.warning("Signup error %s", context)
    return JSONResponse(status_code=status, content=ErrorResponse(message=message).model_dump())


@router.post("/signup", status_code=201)
async def signup(
    request: Request,
    repo: UserRepository = Depends(get_user_repository),
    allow_privileged: bool = Depends(get_signup_policy),
):
    try:
        signup_in = validate_signup(await request.body())

        if signup_in.role in PRIVILEGED_ROLES:
            if not allow_privileged:
                raise RoleNotAllowed(signup_in.role)
            logger.warning("Signup requested privileged role %s for %s", signup_in.role, signup_in.email)

        if await run_in_threadpool(repo.exists, signup_in.email):
            raise UserExists()

        logger.info(
            "Creating user with data %s",
            {**signup_in.model_dump(exclude_none=True), "password": "[REDACTED]"},
        )
        record = await run_in_threadpool(repo.create, signup_in)
    except Exception as exc:
        return error_response(exc)

    logger.info("User created id=%s email=%s", record["_id"], record["email"])
    body = SignupResponse(user=UserOut.from_record(record))
    return JSONResponse(
        status_code=201,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


@router.post("/login")
async def login(user_in: UserLogin, repo: UserRepository = Depends(get_user_repository)):
    try:
        user = await run_in_threadpool(repo.verify_credentials, normalize_email(user_in.email), user_in.password)
    except SignupError as exc:
        return error_response(exc)
    if not user:
        logger.warning("Login failed for %s", normalize_email(user_in.email))
        return JSONResponse(status_code=401, content=ErrorResponse(message="Invalid email or password").model_dump())

    session_user = SessionUser(
        id=str(user["_id"]),
        name=user["name"],
        email=user["email"],
        role=user.get("role", Role.user.value),
    )
    return {"message": "Login successful", "user": session_user.model_dump(mode="json")}
