# models/user.py

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class Role(str, Enum):
    user = "user"
    partner = "partner"
    admin = "admin"


class SignupPayload(BaseModel):
    """Raw signup body as sent by the client, before any rule is applied."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[StrictStr] = None
    email: Optional[StrictStr] = None
    password: Optional[StrictStr] = None
    phone: Optional[StrictStr] = None
    role: Optional[StrictStr] = None
    employee_id: Optional[StrictStr] = Field(default=None, alias="employeeId")


class SignupRequest(BaseModel):
    """Normalized signup input produced by the request validator."""

    name: str
    email: str
    password: str
    phone: Optional[str] = None
    role: str = Role.user.value
    employee_id: Optional[str] = None


class UserDocument(BaseModel):
    """Shape of a document in the users collection, checked before insert."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str
    phone: Optional[str] = None
    role: Role = Role.user
    employee_id: Optional[str] = Field(default=None, alias="employeeId")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    def to_mongo(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="python")


class UserLogin(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: str = Role.user.value
    employee_id: Optional[str] = Field(default=None, alias="employeeId")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @classmethod
    def from_record(cls, record: dict) -> "UserOut":
        data = {k: v for k, v in record.items() if k not in ("_id", "password")}
        data["id"] = str(record["_id"])
        return cls(**data)


class SessionUser(BaseModel):
    id: str
    name: str
    email: str
    role: Role


class SignupResponse(BaseModel):
    user: UserOut
    message: str = "User created successfully"
    success: bool = True


class ErrorResponse(BaseModel):
    message: str
