"""
Key-Value Entry Model

One row per logical key (message log, mood ledger, profile).

PRIVACY: Values hold serialized chat text and contact data.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from zenstudent.infrastructure.database.connection import Base


class KeyValueEntryModel(Base):
    """
    Key-value table ORM model.

    Table: kv_store
    """

    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(
        String(128),
        primary_key=True,
        doc="Logical key",
    )

    value: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Serialized JSON blob",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<KeyValueEntryModel(key={self.key})>"
