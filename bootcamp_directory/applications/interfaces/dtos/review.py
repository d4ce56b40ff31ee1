from typing import Optional

from pydantic import BaseModel, Field

from bootcamp_directory.applications.interfaces.dtos.update import PartialUpdate


class ReviewSchema(BaseModel):
    title: str = Field(max_length=100)
    text: str
    rating: int = Field(ge=1, le=10)


class ReviewUpdate(PartialUpdate):
    title: Optional[str] = Field(default=None, max_length=100)
    text: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=10)
