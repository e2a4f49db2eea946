# patoshub/auth.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext

from .data import ACCESS_TOKEN_EXPIRE_DAYS

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# auto_error=False so a missing header is told apart from a bad token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def create_access_token(
    data: dict,
    secret: str,
    expires_delta: timedelta = timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS),
) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode["exp"] = expire
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def token_for_user(user: dict, secret: str) -> str:
    """Session token for an account in its external (camelCase) shape."""
    return create_access_token(
        {
            "sub": user["id"],
            "id": user["id"],
            "username": user["username"],
            "role": user["role"],
        },
        secret,
    )


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
) -> dict:
    if not token:
        raise HTTPException(
            status_code=401,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    secret = request.app.state.settings.jwt_secret
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=403, detail="Invalid or expired token")

    if payload.get("sub") is None:
        raise HTTPException(status_code=403, detail="Invalid or expired token")

    return {
        "id": payload["sub"],
        "username": payload.get("username"),
        "role": payload.get("role"),
    }
