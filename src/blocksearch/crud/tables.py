"""Database table definitions for posts"""

from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime, Index, String, Text
from sqlmodel import Field, SQLModel


class PostStatus(str, Enum):
    """Publication states of a post; only publish counts as published"""
    publish = "publish"
    future = "future"
    draft = "draft"
    pending = "pending"
    private = "private"
    trash = "trash"


class Post(SQLModel, table=True):
    """A post whose content is block-editor markup"""
    __tablename__ = "posts"
    __table_args__ = (Index("ix_posts_type_status_date", "type", "status", "published_at"),)
    id: int = Field(..., primary_key=True, gt=0)
    title: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    content: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    published_at: datetime = Field(..., sa_column=Column(DateTime(timezone=False), nullable=False))
    status: PostStatus = Field(default=PostStatus.publish, nullable=False)
    type: str = Field(default="post", sa_column=Column(String(20), nullable=False, default="post"))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
