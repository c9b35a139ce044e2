import uuid
from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from .models import Post, Profile, User
from .schemas import SOCIAL_NETWORKS, EducationIn, ExperienceIn, ProfileUpsertIn


class InvalidIdentifier(ValueError):
    """Raised when a user id is not a well-formed UUID."""


class ProfileNotFound(LookupError):
    pass


class UserNotFound(LookupError):
    """No user record behind the token's principal."""


@dataclass
class ProfileFields:
    """Partial profile update: None means "leave as is"."""

    status: Optional[str] = None
    skills: Optional[list[str]] = None
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    social: dict[str, str] = field(default_factory=dict)


SCALAR_FIELDS = ("status", "company", "website", "location", "bio", "githubusername")


def parse_skills(raw: str) -> list[str]:
    return [s.strip() for s in raw.split(",") if s.strip()]


def build_profile_fields(payload: ProfileUpsertIn) -> ProfileFields:
    # blank values count as "not supplied"
    fields = ProfileFields()
    for name in SCALAR_FIELDS:
        val = getattr(payload, name)
        if val:
            setattr(fields, name, val)
    if payload.skills:
        fields.skills = parse_skills(payload.skills)
    fields.social = {n: getattr(payload, n) for n in SOCIAL_NETWORKS if getattr(payload, n)}
    return fields


def apply_profile_fields(p: Profile, fields: ProfileFields) -> Profile:
    for name in SCALAR_FIELDS:
        val = getattr(fields, name)
        if val is not None:
            setattr(p, name, val)
    if fields.skills is not None:
        p.skills = list(fields.skills)
    if fields.social:
        p.social = {**(p.social or {}), **fields.social}
    return p


def normalize_user_id(raw: str) -> str:
    try:
        return str(uuid.UUID(str(raw)))
    except ValueError as e:
        raise InvalidIdentifier(f"Malformed user id: {raw!r}") from e


def get_profile(db: Session, user_id: str) -> Profile | None:
    return db.query(Profile).filter(Profile.user_id == user_id).first()


def get_profile_by_user(db: Session, raw_user_id: str) -> Profile | None:
    return get_profile(db, normalize_user_id(raw_user_id))


def list_profiles(db: Session) -> list[Profile]:
    return db.query(Profile).order_by(Profile.date.asc()).all()


def create_profile(db: Session, user_id: str, fields: ProfileFields) -> Profile:
    if db.get(User, user_id) is None:
        raise UserNotFound(user_id)
    p = Profile(user_id=user_id, skills=[], social={}, experience=[], education=[])
    apply_profile_fields(p, fields)
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


def upsert_profile(db: Session, user_id: str, fields: ProfileFields) -> Profile:
    """
    Update the user's profile with the supplied fields, creating it if absent.
    Fields not supplied keep their stored values.
    """
    p = get_profile(db, user_id)

    if not p:
        return create_profile(db, user_id, fields)

    apply_profile_fields(p, fields)
    db.commit()
    db.refresh(p)
    return p


def delete_account(db: Session, user_id: str) -> None:
    """
    Delete the user's posts, profile and user record, in that order.

    Each step commits on its own. A failure part way leaves earlier
    deletions in place.
    """
    db.query(Post).filter(Post.user_id == user_id).delete(synchronize_session=False)
    db.commit()

    db.query(Profile).filter(Profile.user_id == user_id).delete(synchronize_session=False)
    db.commit()

    db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
    db.commit()


def _require_profile(db: Session, user_id: str) -> Profile:
    p = get_profile(db, user_id)
    if not p:
        raise ProfileNotFound(user_id)
    return p


def _prepend_entry(db: Session, user_id: str, attr: str, payload: BaseModel) -> Profile:
    p = _require_profile(db, user_id)
    entry = {"id": uuid.uuid4().hex, **payload.model_dump(by_alias=True, mode="json")}
    setattr(p, attr, [entry, *(getattr(p, attr) or [])])
    db.commit()
    db.refresh(p)
    return p


def _remove_entry(db: Session, user_id: str, attr: str, entry_id: str) -> Profile:
    p = _require_profile(db, user_id)
    kept = [e for e in (getattr(p, attr) or []) if str(e.get("id")) != entry_id]
    setattr(p, attr, kept)
    db.commit()
    db.refresh(p)
    return p


def add_experience(db: Session, user_id: str, payload: ExperienceIn) -> Profile:
    return _prepend_entry(db, user_id, "experience", payload)


def remove_experience(db: Session, user_id: str, exp_id: str) -> Profile:
    return _remove_entry(db, user_id, "experience", exp_id)


def add_education(db: Session, user_id: str, payload: EducationIn) -> Profile:
    return _prepend_entry(db, user_id, "education", payload)


def remove_education(db: Session, user_id: str, edu_id: str) -> Profile:
    return _remove_entry(db, user_id, "education", edu_id)
