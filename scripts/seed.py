import argparse
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from bloom.auth.passwords import hash_password
from bloom.db import Base, SessionLocal, engine
from bloom.models.enums import Role, TodoPriority
from bloom.models.project import Project
from bloom.models.project_member import ProjectMember
from bloom.models.todo import Todo
from bloom.models.user import User

SEED_PASSWORD = "bloom-seed"

@dataclass
class SeedResult:
    owner_username: str
    editor_username: str
    viewer_username: str
    project_id: int
    todo_id: int

def get_or_create_user(db: Session, username: str, is_admin: bool = False) -> User:
    u = db.scalar(select(User).where(User.username == username))
    if u is None:
        u = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=hash_password(SEED_PASSWORD),
            is_admin=is_admin,
        )
        db.add(u)
        db.flush()
    return u

def get_or_create_membership(db: Session, project_id: int, user_id: int, role: Role) -> ProjectMember:
    m = db.get(ProjectMember, {"project_id": project_id, "user_id": user_id})
    if m is None:
        m = ProjectMember(project_id=project_id, user_id=user_id, role=role)
        db.add(m)
        db.flush()
    else:
        if m.role != role:
            m.role = role
            db.add(m)
            db.flush()
    return m

def get_or_create_project(db: Session, owner_id: int, name: str) -> Project:
    p = db.scalar(select(Project).where(Project.owner_id == owner_id, Project.name == name))
    if p is None:
        p = Project(owner_id=owner_id, name=name, description="seeded by scripts/seed.py")
        db.add(p)
        db.flush()
    return p

def get_or_create_todo(db: Session, project_id: int, title: str, priority: TodoPriority) -> Todo:
    t = db.scalar(select(Todo).where(Todo.project_id == project_id, Todo.title == title))
    if t is None:
        t = Todo(project_id=project_id, title=title, priority=priority)
        db.add(t)
        db.flush()
    elif t.priority != priority:
        # keep it stable if you re-run seed
        t.priority = priority
        db.add(t)
        db.flush()
    return t

def seed() -> SeedResult:
    db = SessionLocal()
    try:
        get_or_create_user(db, "admin", is_admin=True)
        owner = get_or_create_user(db, "owner")
        editor = get_or_create_user(db, "editor")
        viewer = get_or_create_user(db, "viewer")

        project = get_or_create_project(db, owner.id, "seeded project")

        get_or_create_membership(db, project.id, editor.id, Role.editor)
        get_or_create_membership(db, project.id, viewer.id, Role.viewer)

        todo = get_or_create_todo(db, project.id, "seeded todo", TodoPriority.high)

        db.commit()

        return SeedResult(
            owner_username=owner.username,
            editor_username=editor.username,
            viewer_username=viewer.username,
            project_id=project.id,
            todo_id=todo.id,
        )
    finally:
        db.close()

if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="seed a local bloom database")
    ap.add_argument("--create-tables", action="store_true", help="create tables without alembic")
    args = ap.parse_args()

    if args.create_tables:
        Base.metadata.create_all(bind=engine)

    r = seed()
    print("seed complete")
    print(f"project_id={r.project_id}")
    print(f"todo_id={r.todo_id}")
    print(f"users (password {SEED_PASSWORD!r}):")
    print(f"  owner:  {r.owner_username}")
    print(f"  editor: {r.editor_username}")
    print(f"  viewer: {r.viewer_username}")
    print("  admin:  admin")
