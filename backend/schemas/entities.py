"""
schemas/entities.py
────────────────────
Pydantic models for the four entity collections held by the remote store.

Read models (``Entrepreneur``, ``SuccessStory``, ``TrainingResource``,
``CommunityPost``) are frozen: once fetched they are shared by every view
through the query cache and must never be mutated in place.

Write models (``*Create``) validate user input before it reaches the
gateway and convert into the read model with :meth:`to_entity`.

Timestamps are integer nanoseconds since the Unix epoch.
"""

import time
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ── Closed enumerations ───────────────────────────────────────────────────────


class BusinessCategory(str, Enum):
    agriculture = "agriculture"
    food = "food"
    environment = "environment"
    sustainability = "sustainability"
    other = "other"


class ResourceCategory(str, Enum):
    agriculture = "agriculture"
    food = "food"
    environment = "environment"
    sustainability = "sustainability"
    general = "general"


class ResourceType(str, Enum):
    video = "video"
    tool = "tool"
    guide = "guide"
    course = "course"


class Gender(str, Enum):
    male = "male"
    female = "female"
    other = "other"


def now_ns() -> int:
    """Current wall-clock time in integer nanoseconds."""
    return time.time_ns()


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


# ── Read models ───────────────────────────────────────────────────────────────


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True)


class Entrepreneur(_Entity):
    """A registered entrepreneur.  ``id`` is the opaque principal token."""

    id: str
    full_name: str
    age: int
    gender: Gender
    contact_info: str
    village: str
    panchayat: str
    district: str
    state: str
    business_category: BusinessCategory
    skills: List[str] = Field(default_factory=list)
    bio: str = ""


class SuccessStory(_Entity):
    """A published success story; ``date`` is the creation time in ns."""

    id: Optional[int] = None
    title: str
    content: str
    author_name: str
    village: str
    category: BusinessCategory
    date: int


class TrainingResource(_Entity):
    id: Optional[int] = None
    url: str
    title: str
    description: str
    resource_type: ResourceType
    category: ResourceCategory


class CommunityPost(_Entity):
    """A message on the community board; ``timestamp`` is in ns."""

    id: Optional[int] = None
    author: str
    village: str
    panchayat: str
    message: str
    category: BusinessCategory
    timestamp: int


# ── Write models ──────────────────────────────────────────────────────────────


class EntrepreneurCreate(BaseModel):
    """
    Registration payload.

    Mirrors the registration form rules: every text field is required,
    age must be 14–40 and at least one skill must be given.
    """

    id: str = Field(..., description="Principal of the registering user.")
    full_name: str
    age: int = Field(..., ge=14, le=40)
    gender: Gender
    contact_info: str
    village: str
    panchayat: str
    district: str
    state: str
    business_category: BusinessCategory
    skills: List[str] = Field(..., min_length=1)
    bio: str

    @field_validator(
        "id", "full_name", "contact_info", "village", "panchayat",
        "district", "state", "bio",
    )
    @classmethod
    def _not_blank(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("skills")
    @classmethod
    def _clean_skills(cls, v: List[str]) -> List[str]:
        # Trim and drop blanks / duplicates, keeping first occurrence.
        cleaned: List[str] = []
        for skill in v:
            skill = skill.strip()
            if skill and skill not in cleaned:
                cleaned.append(skill)
        if not cleaned:
            raise ValueError("at least one skill is required")
        return cleaned

    def to_entity(self) -> Entrepreneur:
        return Entrepreneur(**self.model_dump())


class SuccessStoryCreate(BaseModel):
    title: str
    content: str
    author_name: str
    village: str
    category: BusinessCategory
    date: Optional[int] = Field(default=None, ge=0)

    @field_validator("title", "content", "author_name", "village")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        return _strip_required(v)

    def to_entity(self) -> SuccessStory:
        data = self.model_dump()
        if data["date"] is None:
            data["date"] = now_ns()
        return SuccessStory(**data)


class TrainingResourceCreate(BaseModel):
    url: str
    title: str
    description: str
    resource_type: ResourceType
    category: ResourceCategory

    @field_validator("url", "title", "description")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        return _strip_required(v)

    def to_entity(self) -> TrainingResource:
        return TrainingResource(**self.model_dump())


class CommunityPostCreate(BaseModel):
    """New board message.  ``author`` defaults to the anonymous principal."""

    author: str = "2vxsx-fae"
    village: str
    panchayat: str
    message: str
    category: BusinessCategory
    timestamp: Optional[int] = Field(default=None, ge=0)

    @field_validator("author", "village", "panchayat", "message")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        return _strip_required(v)

    def to_entity(self) -> CommunityPost:
        data = self.model_dump()
        if data["timestamp"] is None:
            data["timestamp"] = now_ns()
        return CommunityPost(**data)
