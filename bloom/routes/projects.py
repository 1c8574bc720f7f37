from fastapi import APIRouter, Depends, HTTPException, Response

from bloom.auth.deps import get_current_user
from bloom.models.enums import Role
from bloom.models.project import Project
from bloom.models.user import User
from bloom.rbac.deps import ProjectContext, get_access, require_perm
from bloom.rbac.engine import AccessControl, parse_member_role
from bloom.rbac.perms import Action
from bloom.schemas.projects import (
    MemberAddIn,
    MemberOut,
    ProjectCreateIn,
    ProjectOut,
    ProjectUpdateIn,
    RoleOut,
)
from bloom.store.base import Store
from bloom.store.deps import get_store

router = APIRouter(prefix="/api/projects", tags=["projects"])

def project_out(p: Project) -> ProjectOut:
    return ProjectOut(
        id=p.id,
        name=p.name,
        description=p.description,
        owner_id=p.owner_id,
        owner_name=p.owner_name,
        created_at=p.created_at,
        updated_at=p.updated_at,
    )

def _load(store: Store, project_id: int) -> Project:
    p = store.get_project(project_id)
    if p is None:
        raise HTTPException(status_code=404, detail="project not found")
    return p

@router.get("", response_model=list[ProjectOut])
def list_projects(
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> list[ProjectOut]:
    return [project_out(p) for p in store.list_projects_for_user(user.id)]

@router.post("", response_model=ProjectOut, status_code=201)
def create_project(
    payload: ProjectCreateIn,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> ProjectOut:
    name = payload.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="name is required")

    p = store.create_project(owner_id=user.id, name=name, description=payload.description)
    return project_out(p)

@router.get("/{project_id}", response_model=ProjectOut)
def get_project(
    ctx: ProjectContext = Depends(require_perm(Action.read_project)),
    store: Store = Depends(get_store),
) -> ProjectOut:
    return project_out(_load(store, ctx.project_id))

@router.get("/{project_id}/role", response_model=RoleOut)
def get_role(ctx: ProjectContext = Depends(require_perm(Action.view_role))) -> RoleOut:
    return RoleOut(role=ctx.role)

@router.put("/{project_id}", response_model=ProjectOut)
def update_project(
    payload: ProjectUpdateIn,
    ctx: ProjectContext = Depends(require_perm(Action.update_project)),
    store: Store = Depends(get_store),
) -> ProjectOut:
    p = _load(store, ctx.project_id)

    # an empty name keeps the current one
    name = payload.name.strip() or p.name
    p = store.update_project(p, name=name, description=payload.description)
    return project_out(p)

@router.delete("/{project_id}", status_code=204)
def delete_project(
    ctx: ProjectContext = Depends(require_perm(Action.delete_project)),
    store: Store = Depends(get_store),
) -> Response:
    store.delete_project(ctx.project_id)
    return Response(status_code=204)

# members

@router.get("/{project_id}/members", response_model=list[MemberOut])
def list_members(
    project_id: int,
    user: User = Depends(get_current_user),
    access: AccessControl = Depends(get_access),
) -> list[MemberOut]:
    rows = access.list_members(project_id, user.id)
    return [
        MemberOut(project_id=project_id, user_id=r.user_id, username=r.username, role=r.role)
        for r in rows
    ]

@router.post("/{project_id}/members", response_model=MemberOut, status_code=201)
def add_member(
    project_id: int,
    payload: MemberAddIn,
    user: User = Depends(get_current_user),
    access: AccessControl = Depends(get_access),
    store: Store = Depends(get_store),
) -> MemberOut:
    # non-owners and bad roles are turned away before we look anyone up
    access.require(project_id, user.id, Action.add_member)
    role = parse_member_role(payload.role or Role.viewer)

    username = payload.username.strip()
    if not username:
        raise HTTPException(status_code=400, detail="username is required")

    target = store.get_user_by_username(username)
    if target is None:
        raise HTTPException(status_code=404, detail="user not found")

    role = access.add_member(project_id, user.id, target.id, role)
    return MemberOut(project_id=project_id, user_id=target.id, username=target.username, role=role)

@router.delete("/{project_id}/members/{member_id}", status_code=204)
def remove_member(
    project_id: int,
    member_id: int,
    user: User = Depends(get_current_user),
    access: AccessControl = Depends(get_access),
) -> Response:
    access.remove_member(project_id, user.id, member_id)
    return Response(status_code=204)
