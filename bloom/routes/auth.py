import logging

from fastapi import APIRouter, Depends, HTTPException

from bloom.auth.deps import get_current_user
from bloom.auth.passwords import hash_password, verify_password
from bloom.auth.tokens import issue_access_token
from bloom.config import settings
from bloom.errors import Conflict
from bloom.models.user import User
from bloom.schemas.auth import AuthOut, LoginIn, RegisterIn, UserOut
from bloom.store.base import Store
from bloom.store.deps import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

def user_out(u: User) -> UserOut:
    return UserOut(
        id=u.id,
        username=u.username,
        email=u.email,
        is_admin=u.is_admin,
        created_at=u.created_at,
        updated_at=u.updated_at,
    )

@router.post("/register", response_model=AuthOut, status_code=201)
def register(payload: RegisterIn, store: Store = Depends(get_store)) -> AuthOut:
    username = payload.username.strip()
    email = payload.email.lower().strip()
    if not username or not payload.password:
        raise HTTPException(status_code=400, detail="username, email, and password are required")

    if len(payload.password) < settings.password_min_length:
        raise HTTPException(
            status_code=400,
            detail=f"password must be at least {settings.password_min_length} characters",
        )

    try:
        user = store.create_user(username, email, hash_password(payload.password))
    except Conflict:
        raise HTTPException(status_code=409, detail="username or email already exists")

    logger.info("registered user id=%s username=%s", user.id, user.username)
    return AuthOut(token=issue_access_token(user.id), user=user_out(user))

@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, store: Store = Depends(get_store)) -> AuthOut:
    if not payload.username or not payload.password:
        raise HTTPException(status_code=400, detail="username and password are required")

    user = store.get_user_by_username(payload.username.strip())
    if user is None or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="invalid credentials")

    return AuthOut(token=issue_access_token(user.id), user=user_out(user))

@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)) -> UserOut:
    return user_out(user)
