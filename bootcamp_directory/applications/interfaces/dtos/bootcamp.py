from typing import ClassVar, FrozenSet, List, Optional

from pydantic import BaseModel, EmailStr, Field, HttpUrl

from bootcamp_directory.applications.interfaces.dtos.update import PartialUpdate


class BootcampSchema(BaseModel):
    name: str = Field(max_length=50)
    description: str = Field(max_length=500)
    address: str
    website: Optional[HttpUrl] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = None
    careers: List[str] = Field(default_factory=list)
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False


class BootcampUpdate(PartialUpdate):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"website", "phone", "email"})

    name: Optional[str] = Field(default=None, max_length=50)
    description: Optional[str] = Field(default=None, max_length=500)
    address: Optional[str] = None
    website: Optional[HttpUrl] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = None
    careers: Optional[List[str]] = None
    housing: Optional[bool] = None
    job_assistance: Optional[bool] = None
    job_guarantee: Optional[bool] = None
    accept_gi: Optional[bool] = None
