import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bloom.models.base import Base
from bloom.models.enums import Role

class ProjectMember(Base):
    __tablename__ = "project_members"
    __table_args__ = (
        # the owner is never a membership row
        sa.CheckConstraint("role IN ('viewer', 'editor')", name="ck_project_members_role"),
    )

    project_id: Mapped[int] = mapped_column(
        sa.Integer, sa.ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[int] = mapped_column(
        sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    role: Mapped[Role] = mapped_column(
        sa.Enum(Role, name="member_role", native_enum=False, length=16),
        nullable=False,
        default=Role.viewer,
    )

    project: Mapped["Project"] = relationship(back_populates="members")  # noqa: F821
    user: Mapped["User"] = relationship(back_populates="memberships")  # noqa: F821
