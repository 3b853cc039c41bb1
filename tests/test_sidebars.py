from __future__ import annotations

import pytest

from hearth.host import InMemoryHost
from hearth.sidebars import SIDEBARS, footer_class_name, footer_sidebar_class, register_sidebars


@pytest.mark.parametrize(
    ("active", "expected"),
    [
        ((False, False, False), ""),
        ((True, False, False), "one"),
        ((False, True, False), "one"),
        ((True, True, False), "two"),
        ((False, True, True), "two"),
        ((True, True, True), "three"),
    ],
)
def test_footer_class_name_maps_active_count(active, expected) -> None:
    assert footer_class_name(active) == expected


def test_footer_class_name_ignores_impossible_counts() -> None:
    assert footer_class_name([True] * 4) == ""


def test_footer_sidebar_class_queries_footer_areas_only() -> None:
    host = InMemoryHost(active_sidebars={"sidebar-1", "sidebar-2"})
    assert footer_sidebar_class(host) == ""

    host.active_sidebars.update({"sidebar-3", "sidebar-5"})
    assert footer_sidebar_class(host) == 'class="two"'


def test_register_sidebars_localizes_names() -> None:
    host = InMemoryHost(translations={"Main Sidebar": "Barra principal"})
    registered = register_sidebars(host, lambda text: host.translate(text, "hearth"))

    assert [sidebar.id for sidebar in registered] == [sidebar.id for sidebar in SIDEBARS]
    assert host.sidebars["sidebar-1"].name == "Barra principal"
    assert host.sidebars["sidebar-4"].description == "An optional widget area for your site footer"
    assert host.sidebars["sidebar-2"].before_title == '<h3 class="widget-title">'
    assert host.widgets == ["Hearth_Ephemera_Widget"]
