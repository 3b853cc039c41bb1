"""Typed representations of the host data the theme reads while rendering."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

APPROVED = "1"
PENDING = "0"
ROOT_PARENT = "0"


class ColorScheme(str, Enum):
    """Color scheme chosen on the theme options screen."""

    LIGHT = "light"
    DARK = "dark"


class CommentType(str, Enum):
    """Kind of discussion entry supplied by the host's comment walker."""

    COMMENT = "comment"
    PINGBACK = "pingback"
    TRACKBACK = "trackback"


class ThemeOptions(BaseModel):
    """Theme option values stored by the host."""

    model_config = ConfigDict(frozen=True)

    color_scheme: ColorScheme = Field(default=ColorScheme.LIGHT)

    @field_validator("color_scheme", mode="before")
    def _coerce_scheme(cls, value: Any) -> ColorScheme:
        if isinstance(value, ColorScheme):
            return value
        text = str(value or "").strip().lower()
        return ColorScheme.DARK if text == ColorScheme.DARK.value else ColorScheme.LIGHT

    @property
    def default_background_color(self) -> str:
        return "1d1d1d" if self.color_scheme is ColorScheme.DARK else "e2e2e2"


class PaletteColor(BaseModel):
    """Named swatch exposed to the block editor."""

    model_config = ConfigDict(frozen=True)

    name: str
    slug: str
    color: str


class DefaultHeader(BaseModel):
    """Header image shipped with the theme; ``%s`` expands to the template URI."""

    model_config = ConfigDict(frozen=True)

    url: str
    thumbnail_url: str
    description: str


class CustomHeaderSupport(BaseModel):
    """Arguments passed with the ``custom-header`` feature declaration."""

    model_config = ConfigDict(frozen=True)

    default_text_color: str
    width: int = Field(ge=1)
    height: int = Field(ge=1)
    flex_height: bool = True
    random_default: bool = True
    wp_head_callback: Optional[Callable[..., str]] = None
    admin_head_callback: Optional[Callable[..., str]] = None
    admin_preview_callback: Optional[Callable[..., str]] = None


class HeaderConfig(BaseModel):
    """Header dimensions and text color as reported back by the host."""

    model_config = ConfigDict(frozen=True)

    default_text_color: str = "000"
    width: int = Field(default=1000, ge=1)
    height: int = Field(default=288, ge=1)
    flex_height: bool = True
    random_default: bool = True


class SidebarDefinition(BaseModel):
    """Widget area registered with the host."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    before_widget: str = '<aside id="%1$s" class="widget %2$s">'
    after_widget: str = "</aside>"
    before_title: str = '<h3 class="widget-title">'
    after_title: str = "</h3>"


class CommentNode(BaseModel):
    """A single comment, pingback, or trackback as supplied by the host."""

    model_config = ConfigDict(frozen=True)

    id: str
    parent_id: str = Field(default=ROOT_PARENT)
    type: CommentType = Field(default=CommentType.COMMENT)
    approved: str = Field(default=APPROVED, description="Host moderation sentinel ('1', '0', 'spam').")
    author: str = Field(default="")
    author_email: str = Field(default="")
    author_url: str = Field(default="")
    date: Optional[datetime] = Field(default=None)
    content: str = Field(default="", description="Comment body, already filtered by the host.")
    link: str = Field(default="", description="Permalink to the comment anchor.")

    @field_validator("id", "parent_id", mode="before")
    def _stringify_id(cls, value: Any) -> str:
        if value is None:
            return ROOT_PARENT
        return str(value)

    @field_validator("type", mode="before")
    def _default_type(cls, value: Any) -> CommentType:
        if value in (None, ""):
            return CommentType.COMMENT
        return CommentType(value)

    @field_validator("approved", mode="before")
    def _approval_sentinel(cls, value: Any) -> str:
        if isinstance(value, bool):
            return APPROVED if value else PENDING
        return str(value)

    @field_validator("date")
    def _ensure_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def is_pending(self) -> bool:
        return self.approved == PENDING

    @property
    def is_top_level(self) -> bool:
        return self.parent_id == ROOT_PARENT


class Post(BaseModel):
    """The content item being rendered."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(default=0)
    title: str = Field(default="")
    content: str = Field(default="")
    excerpt: str = Field(default="", description="Explicitly authored excerpt, if any.")
    permalink: str = Field(default="")
    post_type: str = Field(default="post")
    author_name: str = Field(default="")
    author_url: str = Field(default="")
    date: Optional[datetime] = Field(default=None)
    thumbnail_id: Optional[int] = Field(default=None)

    @property
    def has_excerpt(self) -> bool:
        return bool(self.excerpt.strip())

    @property
    def is_attachment(self) -> bool:
        return self.post_type == "attachment"


class Viewer(BaseModel):
    """The person requesting the page."""

    model_config = ConfigDict(frozen=True)

    commenter_email: str = Field(default="", description="Email remembered from a previous comment.")
    can_edit_comments: bool = Field(default=False)
    can_edit_posts: bool = Field(default=False)


class SiteInfo(BaseModel):
    """Site-wide values normally read through the host's bloginfo accessors."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="")
    description: str = Field(default="")
    home_url: str = Field(default="/")
    charset: str = Field(default="UTF-8")
    language: str = Field(default="en-US")
    stylesheet_uri: str = Field(default="style.css")
    pingback_url: str = Field(default="")


class RequestState(BaseModel):
    """Conditional tags describing the current request."""

    model_config = ConfigDict(frozen=True)

    is_admin: bool = False
    is_singular: bool = False
    is_home: bool = False
    is_front_page: bool = False
    is_404: bool = False
    paged: int = Field(default=0, ge=0)
    page: int = Field(default=0, ge=0)
    page_template: Optional[str] = None
    is_multi_author: bool = True
    max_num_pages: int = Field(default=1, ge=0)
    thread_comments: bool = False
    page_for_posts: int = 0
    queried_object_id: int = 0
    document_title: str = Field(default="", description="Output of the host's title helper.")

    @property
    def is_paged(self) -> bool:
        return self.paged >= 2


class ReplyArgs(BaseModel):
    """Arguments the host's comment-list walker hands to the render callback."""

    model_config = ConfigDict(frozen=True)

    max_depth: int = Field(default=5, ge=0)
    respond_id: str = Field(default="respond")
    reply_text: Optional[str] = None
    comments_open: bool = True
