from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from shared.database import db_dependency
from .config import Settings
from .crud import (
    InvalidIdentifier,
    ProfileNotFound,
    UserNotFound,
    add_education,
    add_experience,
    build_profile_fields,
    delete_account,
    get_profile,
    get_profile_by_user,
    list_profiles,
    remove_education,
    remove_experience,
    upsert_profile,
)
from .github import GithubProfileNotFound, fetch_repos
from .middleware import AuthGate, current_user_id
from .schemas import EducationIn, ExperienceIn, MessageOut, ProfileOut, ProfileUpsertIn

NO_PROFILE = "There is no profile for this user"
PROFILE_NOT_FOUND = "Profile not found"
USER_NOT_FOUND = "User not found"
NO_GITHUB_PROFILE = "No github profile"


def build_router(SessionLocal, settings: Settings) -> APIRouter:
    router = APIRouter()
    get_db = db_dependency(SessionLocal)
    auth = Depends(AuthGate(settings))

    def own_profile_or_400(fn, db: Session, uid: str, *args) -> ProfileOut:
        try:
            p = fn(db, uid, *args)
        except ProfileNotFound:
            raise HTTPException(400, NO_PROFILE) from None
        return ProfileOut.model_validate(p)

    @router.get("/me", response_model=ProfileOut, dependencies=[auth])
    def me(request: Request, db: Session = Depends(get_db)):
        p = get_profile(db, current_user_id(request))
        if not p:
            raise HTTPException(400, NO_PROFILE)
        return ProfileOut.model_validate(p)

    @router.post("", response_model=ProfileOut, dependencies=[auth])
    def create_or_update(payload: ProfileUpsertIn, request: Request, db: Session = Depends(get_db)):
        try:
            p = upsert_profile(db, current_user_id(request), build_profile_fields(payload))
        except UserNotFound:
            raise HTTPException(400, USER_NOT_FOUND) from None
        return ProfileOut.model_validate(p)

    @router.get("", response_model=list[ProfileOut])
    def get_all(db: Session = Depends(get_db)):
        return [ProfileOut.model_validate(p) for p in list_profiles(db)]

    @router.get("/user/{user_id}", response_model=ProfileOut)
    def by_user(user_id: str, db: Session = Depends(get_db)):
        # malformed and unknown ids look the same to the client
        try:
            p = get_profile_by_user(db, user_id)
        except InvalidIdentifier:
            p = None
        if not p:
            raise HTTPException(400, PROFILE_NOT_FOUND)
        return ProfileOut.model_validate(p)

    @router.delete("", response_model=MessageOut, dependencies=[auth])
    def delete_me(request: Request, db: Session = Depends(get_db)):
        delete_account(db, current_user_id(request))
        return MessageOut(msg="User deleted")

    @router.put("/experience", response_model=ProfileOut, dependencies=[auth])
    def put_experience(payload: ExperienceIn, request: Request, db: Session = Depends(get_db)):
        return own_profile_or_400(add_experience, db, current_user_id(request), payload)

    @router.delete("/experience/{exp_id}", response_model=ProfileOut, dependencies=[auth])
    def delete_experience(exp_id: str, request: Request, db: Session = Depends(get_db)):
        return own_profile_or_400(remove_experience, db, current_user_id(request), exp_id)

    @router.put("/education", response_model=ProfileOut, dependencies=[auth])
    def put_education(payload: EducationIn, request: Request, db: Session = Depends(get_db)):
        return own_profile_or_400(add_education, db, current_user_id(request), payload)

    @router.delete("/education/{edu_id}", response_model=ProfileOut, dependencies=[auth])
    def delete_education(edu_id: str, request: Request, db: Session = Depends(get_db)):
        return own_profile_or_400(remove_education, db, current_user_id(request), edu_id)

    @router.get("/github/{username}")
    async def github_repos(username: str):
        try:
            return await fetch_repos(username, settings)
        except GithubProfileNotFound:
            raise HTTPException(404, NO_GITHUB_PROFILE) from None

    return router
