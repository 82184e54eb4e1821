"""
Admin panel orchestration.

``AdminPanel`` tracks which tab is active and which post the editor is
working on, runs every panel operation through the repositories and turns
the outcome into a toast. Operations never raise ``AdminError``: a failure
becomes an error toast and leaves the panel state as it was.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, Mapping

import structlog

from blog_crm.errors import AdminError, AuthenticationRequired, OperationInProgress, ValidationError
from blog_crm.models.blog import BlogPost, Category
from blog_crm.repositories import blog as blog_repo
from blog_crm.repositories import category as category_repo
from blog_crm.services.auth import AdminSession, sign_out

NEW_POST = "new"

log = structlog.get_logger(__name__)


class Tab(str, Enum):
    BLOGS = "blogs"
    CATEGORIES = "categories"
    EDITOR = "editor"


@dataclass(frozen=True)
class Toast:
    title: str
    description: str
    variant: str = "default"

    @classmethod
    def success(cls, description: str) -> "Toast":
        return cls("Success", description)

    @classmethod
    def error(cls, description: str) -> "Toast":
        return cls("Error", description, "destructive")

    def as_dict(self) -> dict[str, str]:
        return {"title": self.title, "description": self.description, "variant": self.variant}


@dataclass
class ActionResult:
    ok: bool
    toast: Toast | None = None
    record: Any = None
    records: list[Any] | None = None
    error: AdminError | None = None


@dataclass
class EditorState:
    """What the editor shows: the post (or a blank draft) and the category choices."""

    post: BlogPost | None
    draft: dict[str, Any]
    categories: list[Category] = field(default_factory=list)


class AdminPanel:
    def __init__(
        self,
        admin_session: AdminSession | None,
        *,
        active_tab: Tab | str = Tab.BLOGS,
        editing: str | None = None,
        default_author: str = "",
    ) -> None:
        if admin_session is None:
            raise AuthenticationRequired("Sign in to access the admin panel")
        admin_session.require_active()
        self.session = admin_session
        self.active_tab = Tab(active_tab)
        self.editing = editing
        self.default_author = default_author
        self.loading = False
        self.saving = False
        self.posts: list[BlogPost] | None = None
        self.categories: list[Category] | None = None

    # State persistence between requests

    @classmethod
    def from_state(cls, admin_session: AdminSession | None, state: Mapping[str, Any] | None, **kwargs) -> "AdminPanel":
        state = state or {}
        try:
            tab = Tab(state.get("active_tab", Tab.BLOGS))
        except ValueError:
            tab = Tab.BLOGS
        return cls(admin_session, active_tab=tab, editing=state.get("editing"), **kwargs)

    def to_state(self) -> dict[str, Any]:
        return {"active_tab": self.active_tab.value, "editing": self.editing}

    # Transitions

    def select_tab(self, tab: Tab | str) -> None:
        self.active_tab = Tab(tab)

    def new_blog(self) -> None:
        self.editing = NEW_POST
        self.active_tab = Tab.EDITOR

    def edit_blog(self, post_id: str) -> None:
        self.editing = post_id
        self.active_tab = Tab.EDITOR

    def cancel_edit(self) -> None:
        self._close_editor()

    def _close_editor(self) -> None:
        self.editing = None
        self.active_tab = Tab.BLOGS

    @property
    def editor_title(self) -> str:
        return "Create New Blog" if self.editing == NEW_POST else "Edit Blog"

    # In-flight flags

    @contextmanager
    def _busy(self, flag: str) -> Iterator[None]:
        if getattr(self, flag):
            raise OperationInProgress(f"Another {flag} operation is still running")
        setattr(self, flag, True)
        try:
            yield
        finally:
            setattr(self, flag, False)

    def _run(self, flag: str, operation: Callable[[], ActionResult]) -> ActionResult:
        try:
            with self._busy(flag):
                result = operation()
        except AdminError as e:
            log.warning("admin_toast", variant="destructive", description=e.message, tab=self.active_tab.value)
            return ActionResult(ok=False, toast=Toast.error(e.message), error=e)
        if result.toast is not None:
            log.info("admin_toast", variant=result.toast.variant, description=result.toast.description)
        return result

    # Snapshot merging

    def _merge_post(self, post: BlogPost) -> None:
        if self.posts is None:
            return
        for i, existing in enumerate(self.posts):
            if existing.hex_id == post.hex_id:
                self.posts[i] = post
                return
        self.posts.insert(0, post)

    def _merge_category(self, cat: Category) -> None:
        if self.categories is None:
            return
        rest = [c for c in self.categories if c.hex_id != cat.hex_id]
        self.categories = sorted(rest + [cat], key=lambda c: c.name)

    # Blogs tab

    def load_posts(self) -> ActionResult:
        def op() -> ActionResult:
            self.posts = blog_repo.list_posts()
            return ActionResult(ok=True, records=self.posts)

        return self._run("loading", op)

    def _publish(self, post_id: str, value: bool) -> ActionResult:
        post = blog_repo.set_published(post_id, value)
        self._merge_post(post)
        state = "published" if post.published else "unpublished"
        return ActionResult(ok=True, toast=Toast.success(f"Blog {state} successfully"), record=post)

    def set_published(self, post_id: str, value: bool) -> ActionResult:
        return self._run("saving", lambda: self._publish(post_id, value))

    def toggle_published(self, post_id: str, current: bool | None = None) -> ActionResult:
        """Flip the published flag; ``current`` is the value the caller last saw, read from the store if omitted."""

        def op() -> ActionResult:
            was_published = blog_repo.get_post(post_id).published if current is None else current
            return self._publish(post_id, not was_published)

        return self._run("saving", op)

    def delete_blog(self, post_id: str) -> ActionResult:
        def op() -> ActionResult:
            blog_repo.delete_post(post_id)
            if self.posts is not None:
                self.posts = [p for p in self.posts if p.hex_id != post_id]
            if self.editing == post_id:
                self._close_editor()
            return ActionResult(ok=True, toast=Toast.success("Blog deleted successfully"))

        return self._run("saving", op)

    # Editor tab

    def blank_draft(self) -> dict[str, Any]:
        return {
            "title": "",
            "slug": "",
            "content": "",
            "excerpt": "",
            "author": self.default_author,
            "published": False,
            "category_id": None,
            "meta_description": "",
            "meta_keywords": "",
            "featured_image_url": "",
        }

    def open_editor(self) -> ActionResult:
        def op() -> ActionResult:
            cats = category_repo.list_categories()
            if self.editing and self.editing != NEW_POST:
                post = blog_repo.get_post(self.editing)
                state = EditorState(post=post, draft={}, categories=cats)
            else:
                state = EditorState(post=None, draft=self.blank_draft(), categories=cats)
            return ActionResult(ok=True, record=state)

        return self._run("loading", op)

    def save_blog(self, fields: Mapping[str, Any]) -> ActionResult:
        """Create or update the post under edit, then go back to the blogs tab."""

        def op() -> ActionResult:
            if self.editing is None:
                raise ValidationError("No blog is open in the editor")
            if self.editing == NEW_POST:
                post = blog_repo.create_post(fields)
                message = "Blog created successfully"
            else:
                post = blog_repo.update_post(self.editing, fields)
                message = "Blog updated successfully"
            self._merge_post(post)
            self._close_editor()
            return ActionResult(ok=True, toast=Toast.success(message), record=post)

        return self._run("saving", op)

    # Categories tab

    def load_categories(self) -> ActionResult:
        def op() -> ActionResult:
            self.categories = category_repo.list_categories()
            return ActionResult(ok=True, records=self.categories)

        return self._run("loading", op)

    def save_category(self, fields: Mapping[str, Any], category_id: str | None = None) -> ActionResult:
        def op() -> ActionResult:
            if category_id is None:
                cat = category_repo.create_category(fields)
                message = "Category created successfully"
            else:
                cat = category_repo.update_category(category_id, fields)
                message = "Category updated successfully"
            self._merge_category(cat)
            return ActionResult(ok=True, toast=Toast.success(message), record=cat)

        return self._run("saving", op)

    def delete_category(self, category_id: str) -> ActionResult:
        def op() -> ActionResult:
            category_repo.delete_category(category_id)
            if self.categories is not None:
                self.categories = [c for c in self.categories if c.hex_id != category_id]
            return ActionResult(ok=True, toast=Toast.success("Category deleted successfully"))

        return self._run("saving", op)

    # Session

    def sign_out(self) -> ActionResult:
        sign_out(self.session)
        toast = Toast("Signed out", "You have been signed out successfully.")
        log.info("admin_toast", variant=toast.variant, description=toast.description)
        return ActionResult(ok=True, toast=toast)
