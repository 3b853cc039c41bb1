from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from .models import ThemeOptions

CONFIG_FILENAME = "hearth.yml"


class HeaderSettings(BaseModel):
    """Custom header defaults declared to the host at setup."""

    default_text_color: str = Field(
        default="000",
        description="Header text color (hex, no leading '#') treated as 'unmodified'.",
    )
    width: int = Field(default=1000, ge=1, description="Default header image width in pixels.")
    height: int = Field(default=288, ge=1, description="Default header image height in pixels.")
    flex_height: bool = Field(default=True)
    random_default: bool = Field(default=True)

    @field_validator("default_text_color", mode="before")
    def _strip_hash(cls, value: Any) -> str:
        text = str(value or "").strip()
        return text.lstrip("#")


class AssetVersions(BaseModel):
    """Cache-busting versions appended to enqueued stylesheets."""

    block_style: str = Field(default="20240703")
    block_editor_style: str = Field(default="20240716")
    stylesheet: str = Field(default="20250415")


class ThemeConfig(BaseModel):
    theme_name: str = Field(default="default")
    themes_dir: Path | None = Field(
        default=None,
        description="Optional directory holding child themes that override shipped templates.",
    )
    text_domain: str = Field(default="hearth")
    template_directory: Path = Field(default=Path("."))
    template_directory_uri: str = Field(default="")
    content_width: int = Field(default=584, ge=1)
    theme_options: ThemeOptions = Field(default_factory=ThemeOptions)
    header: HeaderSettings = Field(default_factory=HeaderSettings)
    assets: AssetVersions = Field(default_factory=AssetVersions)

    @field_validator("template_directory", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("themes_dir", mode="before")
    def _ensure_optional_path(cls, value: Any) -> Path | None:
        if value is None or value == "":
            return None
        return Path(value)

    @field_validator("template_directory_uri", mode="before")
    def _strip_trailing_slash(cls, value: Any) -> str:
        return str(value or "").rstrip("/")

    @property
    def languages_dir(self) -> Path:
        return self.template_directory / "languages"


def load_config(path: str | Path) -> ThemeConfig:
    """Load configuration and resolve relative paths based on the config location.

    ``path`` may point to a ``hearth.yml`` file or to a directory that may
    contain one. A directory without a config file yields the defaults,
    anchored to that directory.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    if candidate.is_dir():
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            with config_file.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        with candidate.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        base_dir = candidate.parent.resolve()

    cfg = ThemeConfig(**data)

    def _abs_required(value: Path) -> Path:
        return value if value.is_absolute() else (base_dir / value).resolve()

    cfg.template_directory = _abs_required(cfg.template_directory)
    if cfg.themes_dir is not None:
        cfg.themes_dir = _abs_required(cfg.themes_dir)
    return cfg


def dump_default_config() -> str:
    """Serialize the default configuration as YAML for new projects."""
    data = ThemeConfig().model_dump(mode="json", exclude={"themes_dir"})
    return yaml.safe_dump(data, sort_keys=False)
