from __future__ import annotations

from datetime import datetime

import sqlalchemy as sa
from persons.models import Base
from sqlalchemy.orm import Mapped, mapped_column

BIGINT_TYPE = sa.BigInteger().with_variant(sa.Integer, "sqlite")
# largest primary key a BIGINT column can hold
MAX_BIGINT_ID = 2**63 - 1


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
        onupdate=sa.func.now(),
    )


class Person(TimestampMixin, Base):
    __tablename__ = "persons"
    __table_args__ = (
        sa.CheckConstraint("length(name) > 0", name="ck_persons_name_length"),
    )

    id: Mapped[int] = mapped_column(
        BIGINT_TYPE,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(
        sa.String(255),
        nullable=True,
        unique=True,
        index=True,
    )


__all__ = ["Person", "TimestampMixin"]
