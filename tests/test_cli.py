from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from hearth.cli import app

FIXTURE = """\
site:
  name: Hearth Test
  home_url: https://example.com/
request:
  is_singular: true
  thread_comments: true
host:
  active_sidebars: [sidebar-3, sidebar-4]
post:
  id: 3
  title: Hello & welcome
  content: "<p>Body text.</p>"
  permalink: https://example.com/hello/
comments:
  - id: 1
    author: Ada
    content: "<p>First!</p>"
  - id: 2
    parent_id: 1
    author: Bob
    content: "<p>Second.</p>"
"""


def test_init_writes_default_config(tmp_path: Path) -> None:
    runner = CliRunner()
    target = tmp_path / "site"
    result = runner.invoke(app, ["init", str(target)])
    assert result.exit_code == 0, result.output
    assert (target / "hearth.yml").exists()

    again = runner.invoke(app, ["init", str(target)])
    assert again.exit_code == 1
    assert "Refusing to overwrite" in again.output

    forced = runner.invoke(app, ["init", str(target), "--force"])
    assert forced.exit_code == 0, forced.output


def test_features_lists_registrations(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["features", "-c", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "sidebar-1" in result.output
    assert "small-feature" in result.output
    assert "Menus: primary" in result.output


def test_header_css_prints_style_block(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["header-css", "#fff", "-c", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "color: #fff;" in result.output

    default = runner.invoke(app, ["header-css", "000", "-c", str(tmp_path)])
    assert default.exit_code == 0, default.output
    assert "No style block" in default.output

    admin = runner.invoke(app, ["header-css", "blank", "--admin", "-c", str(tmp_path)])
    assert admin.exit_code == 0, admin.output
    assert "clip-path: inset(50%);" in admin.output


def test_render_writes_preview(tmp_path: Path) -> None:
    fixture = tmp_path / "single.yml"
    fixture.write_text(FIXTURE, encoding="utf-8")
    output = tmp_path / "out" / "single.html"

    runner = CliRunner()
    result = runner.invoke(app, ["render", str(fixture), "-c", str(tmp_path), "-o", str(output)])
    assert result.exit_code == 0, result.output

    html = output.read_text(encoding="utf-8")
    assert html.startswith("<!DOCTYPE html>")
    assert "Hello &amp; welcome" in html
    assert '<div class="entry-content"><p>Body text.</p></div>' in html
    assert '<ol class="commentlist">' in html
    assert '<ol class="children">' in html
    assert '<div id="supplementary" class="two"></div>' in html
    assert html.rstrip().endswith("</html>")


def test_render_missing_fixture_is_a_usage_error(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["render", str(tmp_path / "nope.yml"), "-c", str(tmp_path)])
    assert result.exit_code == 2


def test_missing_config_file_is_a_usage_error(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["features", "-c", str(tmp_path / "absent.yml")])
    assert result.exit_code == 2
