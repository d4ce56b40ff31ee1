from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from bootcamp_directory.applications.interfaces.dtos.update import PartialUpdate
from bootcamp_directory.domain.models.user import Role


class UserSchema(BaseModel):
    name: str
    email: EmailStr
    password: str = Field(min_length=6)
    role: Literal["user", "publisher"] = "user"


class AdminUserSchema(UserSchema):
    role: Role = Role.USER


class UserUpdate(PartialUpdate):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[Role] = None


class UpdateDetails(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None


class UpdatePassword(BaseModel):
    current_password: str
    new_password: str = Field(min_length=6)


class UserPublic(BaseModel):
    id: int
    name: str
    email: EmailStr
    role: Role
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    success: bool = True
    data: UserPublic
