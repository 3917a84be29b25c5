"""Tests for the Typer CLI."""

import importlib
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from marginalia.cli.main import app

# the package attribute "main" is the entry-point function, not this module
cli_main = importlib.import_module("marginalia.cli.main")


@pytest.fixture
def runner(monkeypatch) -> CliRunner:
    # wide console so Rich tables do not wrap titles
    monkeypatch.setattr(cli_main, "console", Console(width=200))
    return CliRunner()


def test_build_command(runner: CliRunner, site_root: Path):
    result = runner.invoke(app, ["build", str(site_root)])

    assert result.exit_code == 0, result.output
    assert "Built 3 pages" in result.output
    assert (site_root / "_site" / "index.html").exists()


def test_build_command_reports_parse_error(runner: CliRunner, site_root: Path):
    (site_root / "_posts" / "2024-06-01-broken.md").write_text("no front matter", encoding="utf-8")

    result = runner.invoke(app, ["build", str(site_root)])

    assert result.exit_code == 1
    assert "Invalid post" in result.output


def test_build_command_lenient(runner: CliRunner, site_root: Path):
    (site_root / "_posts" / "2024-06-01-broken.md").write_text("no front matter", encoding="utf-8")

    result = runner.invoke(app, ["build", str(site_root), "--lenient"])

    assert result.exit_code == 0, result.output
    assert "Skipped" in result.output


def test_build_command_output_option(runner: CliRunner, site_root: Path, tmp_path: Path):
    out = tmp_path / "public"

    result = runner.invoke(app, ["build", str(site_root), "--output", str(out)])

    assert result.exit_code == 0, result.output
    assert (out / "index.html").exists()


def test_list_command(runner: CliRunner, site_root: Path):
    result = runner.invoke(app, ["list", str(site_root)])

    assert result.exit_code == 0, result.output
    assert result.output.index("CSRF tokens & encodings") < result.output.index("Fixing a scope bug")


def test_list_command_filters_category(runner: CliRunner, site_root: Path):
    result = runner.invoke(app, ["list", str(site_root), "--category", "security"])

    assert result.exit_code == 0, result.output
    assert "CSRF tokens" in result.output
    assert "Fixing a scope bug" not in result.output


def test_check_command_ok(runner: CliRunner, site_root: Path):
    result = runner.invoke(app, ["check", str(site_root)])

    assert result.exit_code == 0, result.output
    assert "2 posts OK" in result.output


def test_check_command_reports_all_problems(runner: CliRunner, site_root: Path):
    posts = site_root / "_posts"
    (posts / "2024-06-01-broken.md").write_text("---\ntitle: no end\n", encoding="utf-8")
    (posts / "2024-06-02-odd.md").write_text("---\nlayout: gallery\ntitle: Odd\n---\n", encoding="utf-8")

    result = runner.invoke(app, ["check", str(site_root)])

    assert result.exit_code == 1
    assert "2024-06-01-broken.md" in result.output
    assert "gallery" in result.output
    assert "2 problem(s) found" in result.output


def test_check_command_renders_index_layout(runner: CliRunner, site_root: Path):
    (site_root / "_layouts" / "index.html").write_text(
        '{% extends "archive" %}{% block main %}{% endblock %}', encoding="utf-8"
    )

    result = runner.invoke(app, ["check", str(site_root)])

    assert result.exit_code == 1
    assert "index.html" in result.output
    assert "archive" in result.output


def test_new_command(runner: CliRunner, site_root: Path):
    result = runner.invoke(
        app,
        ["new", "Third post", str(site_root), "--category", "python", "--date", "2024-07-01 08:00 +0000"],
    )

    assert result.exit_code == 0, result.output
    created = site_root / "_posts" / "2024-07-01-third-post.md"
    assert created.exists()
    text = created.read_text(encoding="utf-8")
    assert "title: Third post" in text
    assert "- python" in text


def test_new_command_rejects_bad_date(runner: CliRunner, site_root: Path):
    result = runner.invoke(app, ["new", "Third post", str(site_root), "--date", "someday"])

    assert result.exit_code == 2
    assert not list((site_root / "_posts").glob("*third-post*"))


def test_bad_config_exits_cleanly(runner: CliRunner, site_root: Path):
    (site_root / "_config.yml").write_text("timezone: Mars/Olympus\n", encoding="utf-8")

    result = runner.invoke(app, ["build", str(site_root)])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_build_command_reports_broken_layout_without_traceback(runner: CliRunner, site_root: Path):
    (site_root / "_layouts" / "post.html").write_text("{% if %}", encoding="utf-8")

    result = runner.invoke(app, ["build", str(site_root)])

    assert result.exit_code == 1
    assert "Unexpected error" in result.output
    assert "TemplateSyntaxError" in result.output
