from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


class ProfileUpsertIn(BaseModel):
    status: str = Field(min_length=1, description="Professional status, e.g. 'Developer'")
    skills: str = Field(min_length=1, description="Comma-separated skills, e.g. 'python, sql, docker'")

    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None

    # social links, flattened on input
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class _EntryIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    to: Optional[date] = None
    current: bool = False
    description: Optional[str] = None

    @field_validator("to", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ExperienceIn(_EntryIn):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: Optional[str] = None
    from_: date = Field(alias="from")


class EducationIn(_EntryIn):
    school: str = Field(min_length=1)
    degree: str = Field(min_length=1)
    fieldofstudy: str = Field(min_length=1)
    from_: Optional[date] = Field(default=None, alias="from")

    @field_validator("from_", mode="before")
    @classmethod
    def blank_from_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class SocialOut(BaseModel):
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class UserBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    avatar: str = ""


class ExperienceOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    company: str
    location: Optional[str] = None
    from_: date = Field(alias="from")
    to: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


class EducationOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    school: str
    degree: str
    fieldofstudy: str
    from_: Optional[date] = Field(default=None, alias="from")
    to: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user: Optional[UserBrief] = None
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: str
    skills: list[str] = []
    githubusername: Optional[str] = None
    social: SocialOut = SocialOut()
    experience: list[ExperienceOut] = []
    education: list[EducationOut] = []
    date: datetime


class MessageOut(BaseModel):
    msg: str
