from __future__ import annotations

from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blog_crm.extensions import db
from blog_crm.models import generate_hex_id


class Category(db.Model):
    __tablename__ = "blog_categories"

    id: Mapped[int] = mapped_column(primary_key=True)
    hex_id: Mapped[str] = mapped_column(db.String(32), unique=True, nullable=False, index=True, default=generate_hex_id)
    name: Mapped[str] = mapped_column(db.String(100), nullable=False)
    slug: Mapped[str] = mapped_column(db.String(120), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(db.Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(db.DateTime(timezone=True), server_default=func.now(), nullable=False)


class BlogPost(db.Model):
    __tablename__ = "blogs"

    id: Mapped[int] = mapped_column(primary_key=True)
    hex_id: Mapped[str] = mapped_column(db.String(32), unique=True, nullable=False, index=True, default=generate_hex_id)
    title: Mapped[str] = mapped_column(db.String(200), nullable=False)
    slug: Mapped[str] = mapped_column(db.String(220), unique=True, nullable=False, index=True)
    content: Mapped[str] = mapped_column(db.Text, nullable=False)
    excerpt: Mapped[str | None] = mapped_column(db.String(500), nullable=True)
    author: Mapped[str | None] = mapped_column(db.String(120), nullable=True)
    published: Mapped[bool] = mapped_column(db.Boolean, default=False, nullable=False)
    # Holds Category.hex_id. No foreign key: deleting a category leaves the reference as is.
    category_id: Mapped[str | None] = mapped_column(db.String(32), nullable=True, index=True)
    meta_description: Mapped[str | None] = mapped_column(db.String(300), nullable=True)
    meta_keywords: Mapped[str | None] = mapped_column(db.String(300), nullable=True)
    featured_image_url: Mapped[str | None] = mapped_column(db.String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(db.DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(db.DateTime(timezone=True), onupdate=func.now())

    category: Mapped[Category | None] = relationship(
        primaryjoin="foreign(BlogPost.category_id) == Category.hex_id",
        viewonly=True,
    )

    @property
    def category_name(self) -> str | None:
        return self.category.name if self.category is not None else None
