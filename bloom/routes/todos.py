from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Response

from bloom.models.todo import Todo
from bloom.rbac.deps import ProjectContext, TodoContext, require_perm, require_todo_perm
from bloom.rbac.perms import Action
from bloom.schemas.todos import TodoCreateIn, TodoOut, TodoUpdateIn
from bloom.store.base import Store
from bloom.store.deps import get_store

router = APIRouter(prefix="/api", tags=["todos"])

def todo_out(t: Todo) -> TodoOut:
    return TodoOut(
        id=t.id,
        project_id=t.project_id,
        title=t.title,
        description=t.description,
        status=t.status,
        priority=t.priority,
        deadline=t.deadline,
        created_at=t.created_at,
        updated_at=t.updated_at,
    )

def parse_deadline(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise HTTPException(status_code=400, detail="deadline must be in RFC3339 format")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt

def _load(store: Store, todo_id: int) -> Todo:
    t = store.get_todo(todo_id)
    if t is None:
        raise HTTPException(status_code=404, detail="todo not found")
    return t

@router.get("/projects/{project_id}/todos", response_model=list[TodoOut])
def list_todos(
    ctx: ProjectContext = Depends(require_perm(Action.list_todos)),
    store: Store = Depends(get_store),
) -> list[TodoOut]:
    return [todo_out(t) for t in store.list_todos(ctx.project_id)]

@router.post("/projects/{project_id}/todos", response_model=TodoOut, status_code=201)
def create_todo(
    payload: TodoCreateIn,
    ctx: ProjectContext = Depends(require_perm(Action.create_todo)),
    store: Store = Depends(get_store),
) -> TodoOut:
    title = payload.title.strip()
    if not title:
        raise HTTPException(status_code=400, detail="title is required")

    t = store.create_todo(
        ctx.project_id,
        title=title,
        description=payload.description,
        status=payload.status,
        priority=payload.priority,
        deadline=parse_deadline(payload.deadline),
    )
    return todo_out(t)

@router.get("/todos/{todo_id}", response_model=TodoOut)
def get_todo(
    ctx: TodoContext = Depends(require_todo_perm(Action.read_todo)),
    store: Store = Depends(get_store),
) -> TodoOut:
    return todo_out(_load(store, ctx.todo_id))

@router.put("/todos/{todo_id}", response_model=TodoOut)
def update_todo(
    payload: TodoUpdateIn,
    ctx: TodoContext = Depends(require_todo_perm(Action.update_todo)),
    store: Store = Depends(get_store),
) -> TodoOut:
    t = _load(store, ctx.todo_id)

    changes: dict = {}
    if payload.title is not None:
        title = payload.title.strip()
        if not title:
            raise HTTPException(status_code=400, detail="title is required")
        changes["title"] = title
    if payload.description is not None:
        changes["description"] = payload.description
    if payload.status is not None:
        changes["status"] = payload.status
    if payload.priority is not None:
        changes["priority"] = payload.priority

    # explicit null or "" clears the deadline
    if "deadline" in payload.model_fields_set:
        changes["deadline"] = parse_deadline(payload.deadline)

    t = store.update_todo(t, **changes)
    return todo_out(t)

@router.delete("/todos/{todo_id}", status_code=204)
def delete_todo(
    ctx: TodoContext = Depends(require_todo_perm(Action.delete_todo)),
    store: Store = Depends(get_store),
) -> Response:
    store.delete_todo(ctx.todo_id)
    return Response(status_code=204)
