"""CLI interface for menu-pager.

Serve the pager API and inspect pager output for menu links.
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from menu_pager.config import Config
from menu_pager.core.blocks import BlockSettings, PagerBlock, derive_block_definitions
from menu_pager.core.loader import load_menus
from menu_pager.core.menus import MenuStore, PathActiveLinkLocator
from menu_pager.core.service import MenuPager


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)
def cli(verbose: bool) -> None:
    """Menu pager - previous and next links for menu navigation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


_config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover menu_pager.toml)",
)

_menus_option = click.option(
    "--menus",
    "-m",
    "menus_file",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Menus definition file (overrides config)",
)


@cli.command()
@_config_option
@_menus_option
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
def serve(
    config_path: Path | None,
    menus_file: Path | None,
    host: str | None,
    port: int | None,
) -> None:
    """Start the pager API server."""
    from menu_pager.server import run_server

    config = _load_config(config_path, menus_file)
    config = config.with_overrides(host=host, port=port)

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Menus file: {config.menus.source_file}")

    run_server(config)


@cli.command()
@_config_option
@_menus_option
def blocks(config_path: Path | None, menus_file: Path | None) -> None:
    """List the pager block derived for each menu."""
    config = _load_config(config_path, menus_file)
    store = _load_store(config)

    definitions = derive_block_definitions(store)
    if not definitions:
        click.echo("No menus defined.")
        return

    for definition in definitions.values():
        settings = config.block_settings(definition.menu_name)
        restrict = "yes" if settings.restrict_to_parent else "no"
        click.echo(
            f"{definition.id}\t{definition.admin_label}\trestrict to parent: {restrict}"
        )


@cli.command()
@click.argument("menu_name")
@click.argument("path")
@_config_option
@_menus_option
@click.option(
    "--restrict-to-parent/--no-restrict-to-parent",
    default=None,
    help="Only use links with the same parent as the active link (overrides config)",
)
@click.option(
    "--html",
    "as_html",
    is_flag=True,
    help="Print the rendered pager fragment",
)
def show(
    menu_name: str,
    path: str,
    config_path: Path | None,
    menus_file: Path | None,
    restrict_to_parent: bool | None,
    as_html: bool,
) -> None:
    """Show previous and next links of PATH in MENU_NAME."""
    config = _load_config(config_path, menus_file)
    store = _load_store(config)

    definition = derive_block_definitions(store).get(menu_name)
    if definition is None:
        _fail(f"Menu not found: {menu_name}")

    settings = config.block_settings(menu_name)
    if restrict_to_parent is not None:
        settings = BlockSettings(restrict_to_parent=restrict_to_parent)

    pager = MenuPager(
        store,
        PathActiveLinkLocator(store, path),
        store,
        ignore_targets=config.menus.ignore_targets,
    )
    block = PagerBlock(definition, settings, pager)

    if as_html:
        fragment = block.build()
        if fragment is not None:
            click.echo(fragment.to_html())
        return

    navigation = block.get_navigation()
    if navigation.is_empty:
        click.echo("No previous or next link.")
        return
    if navigation.previous is not None:
        click.echo(f"Previous: {navigation.previous.title} ({navigation.previous.target})")
    if navigation.next is not None:
        click.echo(f"Next: {navigation.next.title} ({navigation.next.target})")


def _load_config(config_path: Path | None, menus_file: Path | None) -> Config:
    try:
        config = Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))
    return config.with_overrides(source_file=menus_file)


def _load_store(config: Config) -> MenuStore:
    try:
        return load_menus(config.menus.source_file)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)
