from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_crm.utils.slug import slugify


class CategoryCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(min_length=1, max_length=100)
    slug: str | None = Field(default=None, max_length=120)
    description: str | None = None

    @field_validator("slug")
    @classmethod
    def slug_url_safe(cls, v: str | None) -> str | None:
        # A typed slug gets the same treatment as a generated one
        return slugify(v) if v else v

    @field_validator("description")
    @classmethod
    def blank_description_is_null(cls, v: str | None) -> str | None:
        return v or None


class CategoryUpdate(CategoryCreate):
    name: str | None = Field(default=None, min_length=1, max_length=100)
