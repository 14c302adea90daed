#!/usr/bin/env python3
"""
Site Rendering CLI

Renders a portfolio page from a JSON content document, validates content
documents, scaffolds host pages and manages the persisted theme preference.

Commands:
    render   - Populate a host page from a content document
    validate - Check a content document without rendering
    scaffold - Write a skeleton host page with every expected container
    theme    - Show, toggle or reset the saved theme

Examples:\n

    render_site.py render data/index.html -o outs/site/index.html     # Render with configured content

    render_site.py render data/index.html --data https://example.com/data.json

    render_site.py validate data/data.json                             # Validate content

    render_site.py scaffold outs/site/index.html --title "Jane Doe"    # Write skeleton page

    render_site.py theme toggle                                        # Flip saved theme
"""

import asyncio
import os
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.rendering import (
    ContentFetchError,
    ContentLoader,
    InvalidContentError,
    MissingContainerError,
    Portfolio,
    load_page,
    render_skeleton,
    validate_content,
    write_page,
)
from folio.contexts.rendering.logger import setup_rendering_logger
from folio.contexts.theming import PreferenceStore, ThemeController
from folio.contexts.theming.logger import setup_theming_logger
from folio.utils.config import SiteConfig, load_config
from folio.utils.timestamp import now

load_dotenv()
SYSTEM_THEME = os.getenv("FOLIO_SYSTEM_THEME")


app = typer.Typer(
    help="Render data-driven portfolio pages from a JSON content document",
    add_completion=False,
    invoke_without_command=True,
)
theme_app = typer.Typer(help="Show or change the saved light/dark theme", add_completion=False)
app.add_typer(theme_app, name="theme")


ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Site config YAML (default: FOLIO_CONFIG_PATH or bundled)"),
]
OverrideOption = Annotated[
    Optional[List[str]],
    typer.Option("--set", "-s", help="Config override in dotlist form (e.g. content.timeout_s=5)"),
]


def _load_config_or_exit(config_path: Optional[Path], overrides: Optional[List[str]]) -> SiteConfig:
    try:
        return load_config(config_path, overrides)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _theme_controller(config: SiteConfig, system_theme: Optional[str]) -> ThemeController:
    return ThemeController(
        PreferenceStore(Path(config.theme.store_path)),
        system_preference=system_theme,
        config=config.theme,
    )


def _start_theme_session(config: SiteConfig) -> Path:
    log_dir = config.logs_path / f"theme_{now()}"
    return setup_theming_logger(log_dir, Path(config.theme.store_path).expanduser())


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("render")
def render_command(
    page_path: Annotated[Path, typer.Argument(help="Host page HTML with the expected containers")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Where to write the rendered page (default: in place)"),
    ] = None,
    data: Annotated[
        Optional[str],
        typer.Option("--data", "-d", help="Content document URL or path (default: from config)"),
    ] = None,
    viewport_width: Annotated[
        Optional[int],
        typer.Option("--viewport-width", "-w", help="Target viewport width in px", min=1),
    ] = None,
    system_theme: Annotated[
        Optional[str],
        typer.Option("--system-theme", help="System theme signal (light/dark)"),
    ] = SYSTEM_THEME,
    refresh: Annotated[
        bool,
        typer.Option("--refresh", "-r", help="Clear previously rendered content before building"),
    ] = False,
    config_path: ConfigOption = None,
    overrides: OverrideOption = None,
):
    """
    Populate a host page from a content document.

    Examples:\n

        $ render_site.py render data/index.html -o outs/site/index.html

        $ render_site.py render outs/site/index.html --refresh       # Re-render in place

        $ render_site.py render data/index.html -w 600                # Narrow layout, no preview
    """
    config = _load_config_or_exit(config_path, overrides)
    source = data or config.content.source

    log_dir = config.logs_path / f"render_{now()}"
    log_file = setup_rendering_logger(log_dir, source)

    typer.secho(f"\nRendering: {page_path}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Content: {source}")
    typer.echo("")

    messages: List[str] = []
    try:
        page = load_page(page_path)
        portfolio = Portfolio(
            page,
            config,
            loader=ContentLoader(source, config.content.timeout_s),
            notify=messages.append,
            viewport_width=viewport_width,
            theme=_theme_controller(config, system_theme),
        )
        run = portfolio.refresh if refresh else portfolio.initialize
        report = asyncio.run(run())
    except (FileNotFoundError, MissingContainerError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except (ContentFetchError, InvalidContentError):
        for message in messages:
            typer.secho(f"✗ {message}", fg=typer.colors.RED, err=True)
        typer.echo(f"  Log: {log_file}")
        raise typer.Exit(code=1)

    destination = write_page(page, output or page_path)

    if report.success:
        typer.secho("✓ Render succeeded", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho(
            f"⚠ Rendered with {len(report.failures)} failed steps", fg=typer.colors.YELLOW, bold=True
        )
        for failure in report.failures[:10]:
            typer.secho(f"  - {failure}", fg=typer.colors.YELLOW)

    typer.echo(f"  Sections: {len(report.sections_rendered)}")
    typer.echo(f"  Page: {destination}")
    typer.echo(f"  Log: {log_file}")
    typer.echo("")

    raise typer.Exit(code=0 if report.success else 1)


@app.command("validate")
def validate_command(
    data: Annotated[
        Optional[str],
        typer.Argument(help="Content document URL or path (default: from config)"),
    ] = None,
    config_path: ConfigOption = None,
    overrides: OverrideOption = None,
):
    """
    Check a content document without rendering.

    Examples:\n

        $ render_site.py validate data/data.json
    """
    config = _load_config_or_exit(config_path, overrides)
    source = data or config.content.source

    typer.secho(f"\nValidating: {source}", fg=typer.colors.BLUE, bold=True)

    try:
        payload = asyncio.run(ContentLoader(source, config.content.timeout_s).load())
    except ContentFetchError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    problems = validate_content(payload)
    if not problems:
        typer.secho("✓ Content is valid\n", fg=typer.colors.GREEN, bold=True)
        raise typer.Exit(code=0)

    typer.secho(f"✗ {len(problems)} problems found", fg=typer.colors.RED, bold=True)
    for problem in problems:
        typer.secho(f"  - {problem}", fg=typer.colors.RED)
    typer.echo("")
    raise typer.Exit(code=1)


@app.command("scaffold")
def scaffold_command(
    output: Annotated[Path, typer.Argument(help="Where to write the skeleton page")],
    title: Annotated[
        Optional[str], typer.Option("--title", "-t", help="Site title (default: from config)")
    ] = None,
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing file")] = False,
    config_path: ConfigOption = None,
    overrides: OverrideOption = None,
):
    """
    Write a skeleton host page with every container the renderer expects.

    Examples:\n

        $ render_site.py scaffold outs/site/index.html --title "Jane Doe"
    """
    config = _load_config_or_exit(config_path, overrides)
    site = replace(config.site, title=title) if title else config.site

    if output.exists() and not force:
        typer.secho(
            f"Error: {output} exists (use --force to overwrite)\n", fg=typer.colors.RED, err=True
        )
        raise typer.Exit(code=1)

    try:
        page_html = render_skeleton(site, config.page, theme=config.theme.default)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(page_html, encoding="utf-8")
    typer.secho(f"✓ Skeleton written to {output}", fg=typer.colors.GREEN, bold=True)


@theme_app.command("show")
def theme_show_command(
    system_theme: Annotated[
        Optional[str], typer.Option("--system-theme", help="System theme signal (light/dark)")
    ] = SYSTEM_THEME,
    config_path: ConfigOption = None,
    overrides: OverrideOption = None,
):
    """Show the active theme and where it comes from."""
    config = _load_config_or_exit(config_path, overrides)
    _start_theme_session(config)
    controller = _theme_controller(config, system_theme)

    if controller.has_explicit_choice:
        origin = "saved preference"
    elif controller.system_preference is not None:
        origin = "system preference"
    else:
        origin = "default"
    typer.echo(f"{controller.active.value} ({origin})")


@theme_app.command("toggle")
def theme_toggle_command(
    system_theme: Annotated[
        Optional[str], typer.Option("--system-theme", help="System theme signal (light/dark)")
    ] = SYSTEM_THEME,
    config_path: ConfigOption = None,
    overrides: OverrideOption = None,
):
    """Flip the theme and save it as an explicit choice."""
    config = _load_config_or_exit(config_path, overrides)
    _start_theme_session(config)
    theme = _theme_controller(config, system_theme).toggle()
    typer.secho(f"✓ Theme saved: {theme.value}", fg=typer.colors.GREEN, bold=True)


@theme_app.command("reset")
def theme_reset_command(
    system_theme: Annotated[
        Optional[str], typer.Option("--system-theme", help="System theme signal (light/dark)")
    ] = SYSTEM_THEME,
    config_path: ConfigOption = None,
    overrides: OverrideOption = None,
):
    """Forget the saved theme and follow the system preference again."""
    config = _load_config_or_exit(config_path, overrides)
    _start_theme_session(config)
    theme = _theme_controller(config, system_theme).reset()
    typer.secho(f"✓ Theme preference cleared (now {theme.value})", fg=typer.colors.GREEN, bold=True)


if __name__ == "__main__":
    app()
