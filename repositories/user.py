# repositories/user.py
import logging
from datetime import datetime, timezone
from typing import Optional

from passlib.context import CryptContext
from pydantic import ValidationError
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError, WriteError

from models.user import SignupRequest, UserDocument
from utils.errors import ConnectionFailure, DuplicateKey, SchemaValidation

logger = logging.getLogger(__name__)

# MongoDB error code for a failed $jsonSchema / validator check
DOCUMENT_VALIDATION_FAILURE = 121


def make_pwd_context(rounds: int = 12) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def duplicate_field(exc: DuplicateKeyError) -> str:
    details = exc.details or {}
    for key in ("keyPattern", "keyValue"):
        fields = details.get(key) or {}
        if fields:
            return next(iter(fields))
    return "email"


def _schema_messages(exc: ValidationError) -> list:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return messages


class UserRepository:
    """Persistence for user accounts on top of a pymongo collection.

    Password hashing happens here, right before a document is written, so
    callers only ever hand over the plain signup data.
    """

    def __init__(self, collection, pwd_context: CryptContext):
        self.collection = collection
        self.pwd_context = pwd_context

    def ensure_indexes(self):
        self.collection.create_index([("email", ASCENDING)], unique=True, name="email_unique")

    def find_by_email(self, email: str) -> Optional[dict]:
        try:
            return self.collection.find_one({"email": email}, {"password": 0})
        except PyMongoError as exc:
            raise ConnectionFailure(str(exc))

    def exists(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def create(self, signup: SignupRequest) -> dict:
        now = datetime.now(timezone.utc)
        try:
            doc = UserDocument(
                name=signup.name,
                email=signup.email,
                password=self.pwd_context.hash(signup.password),
                phone=signup.phone,
                role=signup.role,
                employee_id=signup.employee_id,
                created_at=now,
                updated_at=now,
            ).to_mongo()
        except ValidationError as exc:
            raise SchemaValidation(_schema_messages(exc))

        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError as exc:
            raise DuplicateKey(duplicate_field(exc))
        except WriteError as exc:
            if exc.code == DOCUMENT_VALIDATION_FAILURE:
                raise SchemaValidation([exc.details.get("errmsg", str(exc)) if exc.details else str(exc)])
            raise ConnectionFailure(str(exc))
        except PyMongoError as exc:
            raise ConnectionFailure(str(exc))

        doc["_id"] = result.inserted_id
        logger.debug("Inserted user document %s", result.inserted_id)
        return doc

    def verify_credentials(self, email: str, password: str) -> Optional[dict]:
        try:
            user = self.collection.find_one({"email": email})
        except PyMongoError as exc:
            raise ConnectionFailure(str(exc))
        if not user or not self.pwd_context.verify(password, user["password"]):
            return None
        user.pop("password", None)
        return user
