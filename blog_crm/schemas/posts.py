from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_crm.utils.slug import slugify


class PostFields(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    slug: str | None = Field(default=None, max_length=220)
    excerpt: str | None = Field(default=None, max_length=500)
    author: str | None = Field(default=None, max_length=120)
    published: bool = False
    category_id: str | None = None
    meta_description: str | None = Field(default=None, max_length=300)
    meta_keywords: str | None = Field(default=None, max_length=300)
    featured_image_url: str | None = Field(default=None, max_length=500)

    @field_validator("slug")
    @classmethod
    def slug_url_safe(cls, v: str | None) -> str | None:
        # A typed slug gets the same treatment as a generated one
        return slugify(v) if v else v

    @field_validator("category_id")
    @classmethod
    def blank_category_is_null(cls, v: str | None) -> str | None:
        return v or None


class PostCreate(PostFields):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)


class PostUpdate(PostFields):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)
    published: bool | None = None


class PublishedToggle(BaseModel):
    published: bool
