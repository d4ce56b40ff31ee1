from typing import Any, Dict, List

from pydantic import BaseModel, Field


class PageLink(BaseModel):
    page: int
    limit: int


class ResultEnvelope(BaseModel):
    success: bool = True
    count: int
    pagination: Dict[str, PageLink] = Field(default_factory=dict)
    data: List[Dict[str, Any]]


class DocumentResponse(BaseModel):
    success: bool = True
    data: Dict[str, Any]


class Message(BaseModel):
    message: str
