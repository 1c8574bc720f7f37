from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bloom.models.base import Base, UTCDateTime, utcnow
from bloom.models.enums import TodoPriority, TodoStatus

class Todo(Base):
    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)

    project_id: Mapped[int] = mapped_column(
        sa.Integer, sa.ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False
    )

    title: Mapped[str] = mapped_column(sa.String(300), nullable=False)
    description: Mapped[str] = mapped_column(sa.Text, nullable=False, default="", server_default="")
    status: Mapped[TodoStatus] = mapped_column(
        sa.Enum(TodoStatus, name="todo_status", native_enum=False, length=16),
        nullable=False,
        default=TodoStatus.pending,
    )
    priority: Mapped[TodoPriority] = mapped_column(
        sa.Enum(TodoPriority, name="todo_priority", native_enum=False, length=16),
        nullable=False,
        default=TodoPriority.medium,
    )
    deadline: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, server_default=sa.func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utcnow,
        onupdate=utcnow,
        server_default=sa.func.now(),
        nullable=False,
    )

    project: Mapped["Project"] = relationship(back_populates="todos")  # noqa: F821
