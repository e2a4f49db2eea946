# patoshub/routers/users_routes.py

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlmodel import Session

from patoshub import crud
from patoshub.auth import get_current_user, hash_password
from patoshub.data import DEFAULT_ROLE
from patoshub.db import get_session
from patoshub.routers.auth_routes import ensure_unique_account
from patoshub.schemas import UserCreate, UserPublic, UserUpdate

router = APIRouter(
    prefix="/api/users",
    tags=["users"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[UserPublic])
def list_users(session: Session = Depends(get_session)):
    return crud.users.list_all(session)


@router.get("/tenant/{tenant_id}", response_model=List[UserPublic])
def list_users_by_tenant(tenant_id: str, session: Session = Depends(get_session)):
    return crud.users.list_by(session, "tenantId", tenant_id)


@router.get("/{user_id}", response_model=UserPublic)
def get_user(user_id: str, session: Session = Depends(get_session)):
    return crud.users.get(session, user_id)


@router.post("", response_model=UserPublic, status_code=201)
def create_user(user: UserCreate, session: Session = Depends(get_session)):
    ensure_unique_account(session, user.username, user.email)

    data = user.model_dump(by_alias=True, exclude={"password"})
    data["role"] = data.get("role") or DEFAULT_ROLE
    return crud.users.create(session, data, password_hash=hash_password(user.password))


@router.put("/{user_id}", response_model=UserPublic)
def update_user(user_id: str, changes: UserUpdate, session: Session = Depends(get_session)):
    # passwords are not changed through this route
    return crud.users.update(session, user_id, changes.model_dump(exclude_unset=True, by_alias=True))


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: str, session: Session = Depends(get_session)):
    crud.users.delete(session, user_id)
    return Response(status_code=204)
