"""Theme template loading for Hearth, with child themes layered over the bundled one."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "theme.json"
DEFAULT_THEME_NAME = "default"
BUNDLED_THEMES_ROOT = Path(__file__).resolve().parent

REQUIRED_ENTRYPOINTS = ("comment", "pingback", "header_style", "admin_header_style", "admin_header_image")


class ThemeError(RuntimeError):
    """Raised when a theme cannot be loaded or validated."""


class ThemeManifest(BaseModel):
    """Structured representation of the theme.json manifest."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="Unnamed Theme")
    version: str | None = Field(default=None)
    template: str | None = Field(default=None, description="Parent theme this one extends.")
    entrypoints: dict[str, str] = Field(default_factory=dict)

    def merge_with(self, fallback: "ThemeManifest | None") -> "ThemeManifest":
        if fallback is None:
            return self
        data = {
            "name": self.name or fallback.name,
            "version": self.version or fallback.version,
            "template": self.template or fallback.name,
            "entrypoints": {**fallback.entrypoints, **self.entrypoints},
        }
        return ThemeManifest(**data)

    def to_template_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "template": self.template,
        }


class ThemeLoader:
    """Load theme manifests and the Jinja environment that renders theme markup.

    A child theme found under ``themes_root`` overrides individual templates;
    anything it does not provide falls through to the bundled default theme.
    """

    def __init__(
        self,
        *,
        themes_root: Path | None = None,
        active_theme: str = DEFAULT_THEME_NAME,
        fallback_root: Path = BUNDLED_THEMES_ROOT,
        fallback_theme: str = DEFAULT_THEME_NAME,
    ) -> None:
        self._themes_root = themes_root
        self._active_theme = active_theme or DEFAULT_THEME_NAME
        self._fallback_root = fallback_root
        self._fallback_theme = fallback_theme or DEFAULT_THEME_NAME
        self._environment: Environment | None = None
        self._manifest: ThemeManifest | None = None
        self._load()

    @property
    def manifest(self) -> ThemeManifest:
        assert self._manifest is not None  # pragma: no cover - construction guarantees
        return self._manifest

    @property
    def environment(self) -> Environment:
        assert self._environment is not None  # pragma: no cover - construction guarantees
        return self._environment

    @property
    def active_theme(self) -> str:
        return self._active_theme

    def render_page(self, key: str, context: dict[str, Any]) -> str:
        template_path = self.manifest.entrypoints.get(key)
        if not template_path:
            raise ThemeError(f"Theme '{self._active_theme}' does not define an entrypoint named '{key}'.")
        template = self.environment.get_template(template_path)
        return template.render(**context)

    def ensure_templates(self, template_keys: Sequence[str]) -> None:
        for key in template_keys:
            template_path = self.manifest.entrypoints.get(key, key)
            try:
                self.environment.get_template(template_path)
            except TemplateNotFound as exc:
                raise ThemeError(
                    f"Required template '{template_path}' not found while loading theme '{self._active_theme}'."
                ) from exc

    def _load(self) -> None:
        fallback_dir = self._fallback_root / self._fallback_theme
        fallback_manifest = self._load_manifest(fallback_dir)
        if fallback_manifest is None:
            raise ThemeError(f"Bundled theme '{self._fallback_theme}' is missing its {MANIFEST_FILENAME}.")

        search_paths = [fallback_dir]
        merged_manifest = fallback_manifest
        child_dir = self._child_dir()
        if child_dir is not None:
            child_manifest = self._load_manifest(child_dir)
            if child_manifest is None:
                logger.warning(
                    "Child theme '%s' not available. Falling back to '%s'.",
                    self._active_theme,
                    self._fallback_theme,
                )
            else:
                merged_manifest = child_manifest.merge_with(fallback_manifest)
                search_paths.insert(0, child_dir)

        environment = Environment(
            loader=FileSystemLoader([str(path) for path in search_paths]),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
        )
        environment.globals["theme"] = merged_manifest.to_template_dict()

        self._environment = environment
        self._manifest = merged_manifest
        self.ensure_templates(REQUIRED_ENTRYPOINTS)

    def _child_dir(self) -> Path | None:
        if self._themes_root is None:
            return None
        if self._themes_root == self._fallback_root and self._active_theme == self._fallback_theme:
            return None
        return self._themes_root / self._active_theme

    @staticmethod
    def _load_manifest(theme_dir: Path) -> ThemeManifest | None:
        manifest_path = theme_dir / MANIFEST_FILENAME
        if not manifest_path.exists():
            logger.debug("Theme manifest not found at %s", manifest_path)
            return None
        try:
            data = json.loads(manifest_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ThemeError(f"Failed to load theme manifest at {manifest_path}: {exc}") from exc
        try:
            return ThemeManifest.model_validate(data)
        except ValidationError as exc:
            raise ThemeError(f"Theme manifest validation failed for {manifest_path}: {exc}") from exc


def build_theme_loader(
    *,
    themes_root: Path | None = None,
    active_theme: str = DEFAULT_THEME_NAME,
) -> ThemeLoader:
    """Construct a ThemeLoader, reusing the bundled-only loader when no child theme is set."""
    if themes_root is None:
        return _bundled_loader()
    return ThemeLoader(themes_root=themes_root, active_theme=active_theme)


@lru_cache(maxsize=1)
def _bundled_loader() -> ThemeLoader:
    return ThemeLoader()
