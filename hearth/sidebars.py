"""Widget areas and the footer layout class derived from them."""

from __future__ import annotations

from typing import Callable, Iterable

from .host import Host
from .models import SidebarDefinition

FOOTER_SIDEBARS = ("sidebar-3", "sidebar-4", "sidebar-5")
FOOTER_CLASSES = {1: "one", 2: "two", 3: "three"}

FOOTER_DESCRIPTION = "An optional widget area for your site footer"

SIDEBARS: tuple[SidebarDefinition, ...] = (
    SidebarDefinition(id="sidebar-1", name="Main Sidebar"),
    SidebarDefinition(
        id="sidebar-2",
        name="Showcase Sidebar",
        description="The sidebar for the optional Showcase Template",
    ),
    SidebarDefinition(id="sidebar-3", name="Footer Area One", description=FOOTER_DESCRIPTION),
    SidebarDefinition(id="sidebar-4", name="Footer Area Two", description=FOOTER_DESCRIPTION),
    SidebarDefinition(id="sidebar-5", name="Footer Area Three", description=FOOTER_DESCRIPTION),
)

EPHEMERA_WIDGET = "Hearth_Ephemera_Widget"


def register_sidebars(host: Host, translate: Callable[[str], str] | None = None) -> list[SidebarDefinition]:
    """Register the ephemera widget and every widget area with the host."""
    gettext = translate or (lambda text: text)
    host.register_widget(EPHEMERA_WIDGET)
    registered: list[SidebarDefinition] = []
    for sidebar in SIDEBARS:
        localized = sidebar.model_copy(
            update={
                "name": gettext(sidebar.name),
                "description": gettext(sidebar.description) if sidebar.description else "",
            }
        )
        host.register_sidebar(localized)
        registered.append(localized)
    return registered


def footer_class_name(active: Iterable[bool]) -> str:
    """Map how many footer areas are active to 'one', 'two', 'three', or ''."""
    count = sum(1 for flag in active if flag)
    return FOOTER_CLASSES.get(count, "")


def footer_sidebar_class(host: Host) -> str:
    """``class="..."`` attribute for the footer, or '' when no footer area is active."""
    name = footer_class_name(host.is_active_sidebar(sidebar_id) for sidebar_id in FOOTER_SIDEBARS)
    if not name:
        return ""
    return f'class="{name}"'
