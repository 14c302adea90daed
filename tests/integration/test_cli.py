"""
Integration tests for the render_site.py CLI.

The script lives outside the package, so it's loaded from its file path.
"""

import importlib.util
import json
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from conftest import SAMPLE_CONTENT, SKELETON_HTML

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "render_site.py"

runner = CliRunner()


def _load_script():
    spec = importlib.util.spec_from_file_location("render_site", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


render_site = _load_script()


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()


@pytest.fixture
def site(tmp_path):
    """Host page, content document and per-test config overrides."""
    page_path = tmp_path / "index.html"
    page_path.write_text(SKELETON_HTML, encoding="utf-8")
    data_path = tmp_path / "data.json"
    data_path.write_text(json.dumps(SAMPLE_CONTENT), encoding="utf-8")
    overrides = [
        "--set",
        f"logs_path={tmp_path / 'logs'}",
        "--set",
        f"theme.store_path={tmp_path / 'prefs.json'}",
    ]
    return page_path, data_path, overrides


@pytest.mark.integration
def test_render_writes_populated_page(tmp_path, site):
    page_path, data_path, overrides = site
    output = tmp_path / "out" / "index.html"

    result = runner.invoke(
        render_site.app,
        ["render", str(page_path), "-d", str(data_path), "-o", str(output), *overrides],
    )

    assert result.exit_code == 0, result.output
    assert "Render succeeded" in result.output
    rendered = output.read_text(encoding="utf-8")
    assert rendered.startswith("<!DOCTYPE html>")
    assert 'id="about-section"' in rendered
    assert 'href="#work-section"' in rendered
    assert 'data-theme="light"' in rendered
    assert page_path.read_text(encoding="utf-8") == SKELETON_HTML
    assert list((tmp_path / "logs").glob("render_*/render.log"))


@pytest.mark.integration
def test_render_refresh_in_place_has_no_duplicates(site):
    page_path, data_path, overrides = site
    args = ["render", str(page_path), "-d", str(data_path), *overrides]

    assert runner.invoke(render_site.app, args).exit_code == 0
    assert runner.invoke(render_site.app, [*args, "--refresh"]).exit_code == 0

    rendered = page_path.read_text(encoding="utf-8")
    assert rendered.count('id="about-section"') == 1
    assert rendered.count('href="#about-section"') == 1
    assert rendered.count("devicon-python-plain") == 1


@pytest.mark.integration
def test_render_twice_in_place_without_refresh(site):
    page_path, data_path, overrides = site
    args = ["render", str(page_path), "-d", str(data_path), *overrides]

    assert runner.invoke(render_site.app, args).exit_code == 0
    result = runner.invoke(render_site.app, args)

    assert result.exit_code == 0, result.output
    rendered = page_path.read_text(encoding="utf-8")
    assert rendered.count('id="about-section"') == 1
    assert rendered.count('href="#about-section"') == 1
    assert rendered.count("devicon-github-original") == 1


@pytest.mark.integration
def test_render_invalid_content_leaves_page(tmp_path, site):
    page_path, _, overrides = site
    bad_data = tmp_path / "bad.json"
    bad_data.write_text(json.dumps({"sections": []}), encoding="utf-8")
    output = tmp_path / "out.html"

    result = runner.invoke(
        render_site.app,
        ["render", str(page_path), "-d", str(bad_data), "-o", str(output), *overrides],
    )

    assert result.exit_code == 1
    assert "at least one section" in result.output
    assert not output.exists()


@pytest.mark.integration
def test_render_missing_container(tmp_path, site):
    _, data_path, overrides = site
    page_path = tmp_path / "bare.html"
    page_path.write_text("<html><body><main id='content'></main></body></html>", encoding="utf-8")

    result = runner.invoke(
        render_site.app, ["render", str(page_path), "-d", str(data_path), *overrides]
    )

    assert result.exit_code == 1
    assert "nav_list" in result.output


@pytest.mark.integration
def test_validate(tmp_path, site):
    _, data_path, overrides = site
    result = runner.invoke(render_site.app, ["validate", str(data_path), *overrides])
    assert result.exit_code == 0
    assert "Content is valid" in result.output

    bad_data = tmp_path / "bad.json"
    bad_data.write_text(
        json.dumps({"sections": [{"section": "a", "title": "A", "type": "xx"}]}), encoding="utf-8"
    )
    result = runner.invoke(render_site.app, ["validate", str(bad_data), *overrides])
    assert result.exit_code == 1
    assert "unknown type 'xx'" in result.output


@pytest.mark.integration
def test_scaffold_then_render(tmp_path, site):
    _, data_path, overrides = site
    skeleton = tmp_path / "site" / "index.html"

    result = runner.invoke(
        render_site.app, ["scaffold", str(skeleton), "--title", "Jane Doe", *overrides]
    )
    assert result.exit_code == 0
    assert "<title>Jane Doe</title>" in skeleton.read_text(encoding="utf-8")

    result = runner.invoke(render_site.app, ["scaffold", str(skeleton), *overrides])
    assert result.exit_code == 1
    assert "--force" in result.output

    result = runner.invoke(
        render_site.app, ["render", str(skeleton), "-d", str(data_path), *overrides]
    )
    assert result.exit_code == 0, result.output


@pytest.mark.integration
def test_theme_commands(tmp_path, site):
    _, _, overrides = site

    result = runner.invoke(render_site.app, ["theme", "show", *overrides])
    assert result.output.strip() == "light (default)"
    logger.remove()
    theme_logs = list((tmp_path / "logs").glob("theme_*/theme.log"))
    assert theme_logs
    assert "Preference store" in theme_logs[0].read_text(encoding="utf-8")

    result = runner.invoke(
        render_site.app, ["theme", "show", "--system-theme", "dark", *overrides]
    )
    assert result.output.strip() == "dark (system preference)"

    result = runner.invoke(render_site.app, ["theme", "toggle", *overrides])
    assert result.exit_code == 0
    assert "dark" in result.output

    result = runner.invoke(render_site.app, ["theme", "show", *overrides])
    assert result.output.strip() == "dark (saved preference)"

    result = runner.invoke(render_site.app, ["theme", "reset", *overrides])
    assert result.exit_code == 0
    result = runner.invoke(render_site.app, ["theme", "show", *overrides])
    assert result.output.strip() == "light (default)"


@pytest.mark.integration
def test_bad_config_override_fails(site):
    page_path, data_path, _ = site
    result = runner.invoke(
        render_site.app, ["render", str(page_path), "-d", str(data_path), "--set", "content.nope=1"]
    )
    assert result.exit_code == 1
