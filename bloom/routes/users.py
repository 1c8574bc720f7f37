import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from bloom.auth.deps import get_current_user, require_admin
from bloom.errors import Conflict
from bloom.models.user import User
from bloom.routes.auth import user_out
from bloom.schemas.auth import UserOut
from bloom.schemas.users import StatsOut, UserUpdateIn
from bloom.store.base import Store
from bloom.store.deps import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["users"])

@router.get("/users/search", response_model=list[UserOut])
def search_users(
    q: str = "",
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> list[UserOut]:
    q = q.strip()
    if not q:
        return []
    return [user_out(u) for u in store.search_users(q, exclude_id=user.id)]

# admin

@router.get("/admin/stats", response_model=StatsOut)
def stats(
    _: User = Depends(require_admin),
    store: Store = Depends(get_store),
) -> StatsOut:
    s = store.get_stats()
    return StatsOut(
        total_users=s.total_users,
        total_projects=s.total_projects,
        total_todos=s.total_todos,
        completed_todos=s.completed_todos,
    )

@router.get("/admin/users", response_model=list[UserOut])
def list_users(
    _: User = Depends(require_admin),
    store: Store = Depends(get_store),
) -> list[UserOut]:
    return [user_out(u) for u in store.list_users()]

@router.put("/admin/users/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    payload: UserUpdateIn,
    _: User = Depends(require_admin),
    store: Store = Depends(get_store),
) -> UserOut:
    target = store.get_user(user_id)
    if target is None:
        raise HTTPException(status_code=404, detail="user not found")

    changes: dict = {}
    if payload.username is not None:
        username = payload.username.strip()
        if not username:
            raise HTTPException(status_code=400, detail="username cannot be empty")
        changes["username"] = username
    if payload.email is not None:
        changes["email"] = payload.email.lower().strip()
    if payload.is_admin is not None:
        changes["is_admin"] = payload.is_admin

    try:
        target = store.update_user(target, **changes)
    except Conflict:
        raise HTTPException(status_code=409, detail="username or email already exists")
    return user_out(target)

@router.delete("/admin/users/{user_id}", status_code=204)
def delete_user(
    user_id: int,
    admin: User = Depends(require_admin),
    store: Store = Depends(get_store),
) -> Response:
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="you cannot delete yourself")

    store.delete_user(user_id)
    logger.info("admin id=%s deleted user id=%s", admin.id, user_id)
    return Response(status_code=204)
