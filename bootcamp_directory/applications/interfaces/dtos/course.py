from typing import Literal, Optional

from pydantic import BaseModel, Field

from bootcamp_directory.applications.interfaces.dtos.update import PartialUpdate

SkillLevel = Literal["beginner", "intermediate", "advanced"]


class CourseSchema(BaseModel):
    title: str
    description: str
    weeks: int = Field(gt=0)
    tuition: float = Field(ge=0)
    minimum_skill: SkillLevel
    scholarship_available: bool = False


class CourseUpdate(PartialUpdate):
    title: Optional[str] = None
    description: Optional[str] = None
    weeks: Optional[int] = Field(default=None, gt=0)
    tuition: Optional[float] = Field(default=None, ge=0)
    minimum_skill: Optional[SkillLevel] = None
    scholarship_available: Optional[bool] = None
