from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, registry, relationship

table_registry = registry()


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


@table_registry.mapped_as_dataclass
class User:
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(init=False, primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True)
    password: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(20), default="user")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), init=False, insert_default=_utcnow)


@table_registry.mapped_as_dataclass
class Bootcamp:
    __tablename__ = "bootcamps"

    id: Mapped[int] = mapped_column(init=False, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), unique=True)
    slug: Mapped[str] = mapped_column(String(60))
    description: Mapped[str] = mapped_column(String(500))
    address: Mapped[str] = mapped_column(String(255))
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    website: Mapped[Optional[str]] = mapped_column(String(255), default=None)
    phone: Mapped[Optional[str]] = mapped_column(String(20), default=None)
    email: Mapped[Optional[str]] = mapped_column(String(255), default=None)
    careers: Mapped[List[str]] = mapped_column(JSON, default_factory=list)
    average_rating: Mapped[Optional[float]] = mapped_column(default=None)
    average_cost: Mapped[Optional[float]] = mapped_column(default=None)
    photo: Mapped[str] = mapped_column(String(255), default="no-photo.jpg")
    housing: Mapped[bool] = mapped_column(default=False)
    job_assistance: Mapped[bool] = mapped_column(default=False)
    job_guarantee: Mapped[bool] = mapped_column(default=False)
    accept_gi: Mapped[bool] = mapped_column(default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), init=False, insert_default=_utcnow)

    courses: Mapped[List["Course"]] = relationship(
        "Course", back_populates="bootcamp", cascade="all, delete-orphan", default_factory=list, init=False
    )
    reviews: Mapped[List["Review"]] = relationship(
        "Review", back_populates="bootcamp", cascade="all, delete-orphan", default_factory=list, init=False
    )


@table_registry.mapped_as_dataclass
class Course:
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(init=False, primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text)
    weeks: Mapped[int]
    tuition: Mapped[float]
    minimum_skill: Mapped[str] = mapped_column(String(20))
    bootcamp_id: Mapped[int] = mapped_column(ForeignKey("bootcamps.id", ondelete="CASCADE"))
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    scholarship_available: Mapped[bool] = mapped_column(default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), init=False, insert_default=_utcnow)

    bootcamp: Mapped["Bootcamp"] = relationship("Bootcamp", back_populates="courses", init=False)


@table_registry.mapped_as_dataclass
class Review:
    __tablename__ = "reviews"
    __table_args__ = (UniqueConstraint("bootcamp_id", "user_id", name="uq_review_bootcamp_user"),)

    id: Mapped[int] = mapped_column(init=False, primary_key=True)
    title: Mapped[str] = mapped_column(String(100))
    text: Mapped[str] = mapped_column(Text)
    rating: Mapped[int]
    bootcamp_id: Mapped[int] = mapped_column(ForeignKey("bootcamps.id", ondelete="CASCADE"))
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), init=False, insert_default=_utcnow)

    bootcamp: Mapped["Bootcamp"] = relationship("Bootcamp", back_populates="reviews", init=False)
