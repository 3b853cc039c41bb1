from __future__ import annotations

from typing import Any, Callable

import pytest

from hearth.config import ThemeConfig
from hearth.context import RenderContext, build_context
from hearth.hooks import activate
from hearth.host import InMemoryHost


@pytest.fixture()
def config() -> ThemeConfig:
    return ThemeConfig(template_directory_uri="https://example.com/wp-content/themes/hearth")


@pytest.fixture()
def host(config: ThemeConfig) -> InMemoryHost:
    instance = InMemoryHost()
    activate(instance, config)
    return instance


@pytest.fixture()
def make_ctx(host: InMemoryHost, config: ThemeConfig) -> Callable[..., RenderContext]:
    def _make(target: InMemoryHost | None = None, **kwargs: Any) -> RenderContext:
        return build_context(target or host, config, **kwargs)

    return _make
