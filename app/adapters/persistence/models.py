"""SQLAlchemy ORM models."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.adapters.persistence.database import Base


class WorkerModel(Base):
    __tablename__ = "workers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    mobile: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    assignments: Mapped[list["AssignmentModel"]] = relationship(back_populates="worker")


class AssignmentModel(Base):
    __tablename__ = "assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    # Unbounded precision keeps large integral ordinals distinct
    ordinal: Mapped[Decimal | None] = mapped_column(Numeric, nullable=True)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    contact_number: Mapped[str] = mapped_column(Text, nullable=False)
    email_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    freeform_note: Mapped[str] = mapped_column(Text, nullable=False, default="")
    worker_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("workers.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    worker: Mapped["WorkerModel | None"] = relationship(back_populates="assignments")

    __table_args__ = (
        # NULL ordinals (generic lists) never collide.
        UniqueConstraint("kind", "ordinal", name="uq_assignments_kind_ordinal"),
        Index("idx_assignments_worker", "worker_id"),
        Index("idx_assignments_status", "status"),
    )
