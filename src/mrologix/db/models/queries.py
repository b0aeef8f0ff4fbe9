"""Technical query board: questions, answers, votes and tags."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .auth import AuthUser
from .base import Base, new_id, utcnow


class TechnicalQuery(Base):
    __tablename__ = "technical_query"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(Text)
    description: Mapped[str] = mapped_column(Text)
    category: Mapped[str | None] = mapped_column(Text, nullable=True)

    # LOW | MEDIUM | HIGH | URGENT
    priority: Mapped[str] = mapped_column(Text, default="MEDIUM")
    # OPEN | IN_PROGRESS | RESOLVED | CLOSED
    status: Mapped[str] = mapped_column(Text, default="OPEN", index=True)
    is_resolved: Mapped[bool] = mapped_column(Boolean, default=False)

    view_count: Mapped[int] = mapped_column(Integer, default=0)
    upvotes: Mapped[int] = mapped_column(Integer, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, default=0)

    created_by_id: Mapped[int] = mapped_column(ForeignKey("auth_user.id"), index=True)
    updated_by_id: Mapped[int | None] = mapped_column(ForeignKey("auth_user.id"), nullable=True)
    resolved_by_id: Mapped[int | None] = mapped_column(ForeignKey("auth_user.id"), nullable=True)
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    created_by: Mapped[AuthUser] = relationship(foreign_keys=[created_by_id])
    updated_by: Mapped[AuthUser | None] = relationship(foreign_keys=[updated_by_id])
    resolved_by: Mapped[AuthUser | None] = relationship(foreign_keys=[resolved_by_id])

    tags: Mapped[list["TechnicalQueryTag"]] = relationship(
        back_populates="technical_query",
        cascade="all, delete-orphan",
        order_by="TechnicalQueryTag.tag",
    )
    responses: Mapped[list["TechnicalQueryResponse"]] = relationship(
        back_populates="technical_query",
        cascade="all, delete-orphan",
        order_by="TechnicalQueryResponse.created_at",
    )
    votes: Mapped[list["TechnicalQueryVote"]] = relationship(
        back_populates="technical_query",
        cascade="all, delete-orphan",
    )
    attachments: Mapped[list["Attachment"]] = relationship(
        back_populates="technical_query",
        cascade="all, delete-orphan",
        order_by="Attachment.created_at",
    )

    @property
    def tag_names(self) -> list[str]:
        return [t.tag for t in self.tags]


class TechnicalQueryTag(Base):
    __tablename__ = "technical_query_tag"
    __table_args__ = (UniqueConstraint("technical_query_id", "tag"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    technical_query_id: Mapped[str] = mapped_column(
        ForeignKey("technical_query.id", ondelete="CASCADE"), index=True
    )
    tag: Mapped[str] = mapped_column(Text, index=True)

    technical_query: Mapped[TechnicalQuery] = relationship(back_populates="tags")


class TechnicalQueryResponse(Base):
    __tablename__ = "technical_query_response"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    technical_query_id: Mapped[str] = mapped_column(
        ForeignKey("technical_query.id", ondelete="CASCADE"), index=True
    )
    content: Mapped[str] = mapped_column(Text)
    is_accepted: Mapped[bool] = mapped_column(Boolean, default=False)

    created_by_id: Mapped[int] = mapped_column(ForeignKey("auth_user.id"), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    technical_query: Mapped[TechnicalQuery] = relationship(back_populates="responses")
    created_by: Mapped[AuthUser] = relationship()
    attachments: Mapped[list["Attachment"]] = relationship(
        back_populates="technical_query_response",
        cascade="all, delete-orphan",
        order_by="Attachment.created_at",
    )


class TechnicalQueryVote(Base):
    __tablename__ = "technical_query_vote"
    __table_args__ = (UniqueConstraint("technical_query_id", "user_id"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    technical_query_id: Mapped[str] = mapped_column(
        ForeignKey("technical_query.id", ondelete="CASCADE"), index=True
    )
    user_id: Mapped[int] = mapped_column(ForeignKey("auth_user.id"), index=True)
    # UP | DOWN
    vote_type: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    technical_query: Mapped[TechnicalQuery] = relationship(back_populates="votes")
