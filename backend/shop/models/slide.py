"""Homepage carousel slides."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from shop.core.extensions import db

from .base import ReprMixin, TimestampMixin, uuid_pk


class Slide(ReprMixin, TimestampMixin, db.Model):
    """A carousel slide. Slides have no slug and are addressed by id only."""

    __tablename__ = "slides"

    id: Mapped[str] = uuid_pk("slide_id")
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    link: Mapped[str] = mapped_column(String(512), nullable=False, default="", server_default="")
    image: Mapped[str] = mapped_column(String(512), nullable=False, default="", server_default="")
    sub_title: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default=""
    )
