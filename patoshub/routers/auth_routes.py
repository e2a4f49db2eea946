# patoshub/routers/auth_routes.py

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlmodel import Session, select

from patoshub import crud
from patoshub.auth import get_current_user, hash_password, verify_password, token_for_user
from patoshub.config import Settings
from patoshub.data import DEFAULT_ROLE
from patoshub.db import get_session
from patoshub.deps import get_settings
from patoshub.models import User
from patoshub.schemas import AuthResponse, LoginRequest, MessageResponse, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/auth",
    tags=["auth"],
)


def ensure_unique_account(session: Session, username: str, email: str) -> None:
    existing = session.exec(
        select(User).where(or_(User.username == username, User.email == email))
    ).first()
    if existing is None:
        return
    if existing.username == username:
        raise HTTPException(status_code=400, detail="Username already exists")
    raise HTTPException(status_code=400, detail="Email already registered")


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: LoginRequest,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    if not credentials.username or not credentials.password:
        raise HTTPException(status_code=400, detail="Username and password required")

    user = session.exec(
        select(User).where(User.username == credentials.username)
    ).first()

    # same answer for unknown user and wrong password
    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.warning("Failed login for username=%s", credentials.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    public = crud.users.mapping.to_external(user)
    return {"token": token_for_user(public, settings.jwt_secret), "user": public}


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    account: RegisterRequest,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    if not account.username or not account.email or not account.password:
        raise HTTPException(status_code=400, detail="Username, email and password required")

    ensure_unique_account(session, account.username, account.email)

    data = account.model_dump(by_alias=True, exclude={"password"})
    data["role"] = data.get("role") or DEFAULT_ROLE
    public = crud.users.create(session, data, password_hash=hash_password(account.password))

    logger.info("Registered user id=%s role=%s", public["id"], public["role"])
    return {"token": token_for_user(public, settings.jwt_secret), "user": public}


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: dict = Depends(get_current_user)):
    # tokens are stateless, nothing to revoke
    return {"message": "Session closed"}


@router.get("/me")
def me(current_user: dict = Depends(get_current_user)):
    return current_user
