"""
LinguaCorp API — Phrase SQLAlchemy Model
=========================================

What:  ORM model for the `phrases` table.
Who:   Used by SqlPhraseService for CRUD and by Alembic for schema management.

Table Design:
    - id: integer primary key, assigned by the database on insert
    - original_text: required, never empty (enforced before insert)
    - language: 2-letter ISO code, VARCHAR(2)
    - translated_text: optional translation, stored as '' when absent
"""

from sqlalchemy import Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from linguacorp.database import Base


class PhraseRecord(Base):
    """
    A stored phrase row.

    Lifecycle:
        1. Inserted on POST /api/phrases (id assigned by the database)
        2. Overwritten wholesale on PUT /api/phrases/{id} (id kept)
        3. Deleted on DELETE /api/phrases/{id}
    """

    __tablename__ = "phrases"
    # SQLite: AUTOINCREMENT so ids of deleted rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Server-assigned phrase identifier",
    )

    original_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Text in the source language",
    )

    # ISO 639-1 code, e.g. 'EN'; case is stored as sent
    language: Mapped[str] = mapped_column(
        String(2),
        nullable=False,
        comment="2-letter ISO language code of original_text",
    )

    translated_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
        comment="Translation of original_text; may be empty",
    )

    def __repr__(self) -> str:
        return f"<PhraseRecord(id={self.id}, language='{self.language}')>"
