"""Shared test fixtures."""

from pathlib import Path

import pytest
from menu_pager.config import Config, MenusConfig, ServerConfig
from menu_pager.core.menus import MenuStore, MenuStoreBuilder

MENUS_TOML = """
[menus.main]
label = "Main navigation"

[[menus.main.links]]
id = "home"
title = "Home"
target = "/"

[[menus.main.links]]
id = "guide"
title = "Guide"
target = "/guide"

[[menus.main.links.children]]
id = "install"
title = "Install"
target = "/guide/install"

[[menus.main.links.children]]
id = "configure"
title = "Configure"
target = "/guide/configure"

[[menus.main.links.children.children]]
id = "advanced"
title = "Advanced"
target = "/guide/configure/advanced"

[[menus.main.links]]
id = "reference"
title = "Reference"
target = "/reference"

[[menus.main.links.children]]
id = "api"
title = "API"
target = "/reference/api"

[menus.footer]
label = "Footer"

[[menus.footer.links]]
id = "about"
title = "About"
target = "/about"

[[menus.footer.links]]
id = "contact"
title = "Contact"
target = "/contact"
"""


@pytest.fixture
def menus_file(tmp_path: Path) -> Path:
    """Write the sample menus file.

    Flattened main menu: home, guide, install, configure, advanced, reference, api.
    """
    path = tmp_path / "menus.toml"
    path.write_text(MENUS_TOML)
    return path


@pytest.fixture
def store() -> MenuStore:
    """Build the sample menus in memory."""
    builder = MenuStoreBuilder()
    builder.add_menu("main", "Main navigation")
    builder.add_link("main", "Home", "/", link_id="home")
    guide = builder.add_link("main", "Guide", "/guide", link_id="guide")
    builder.add_link("main", "Install", "/guide/install", guide, link_id="install")
    configure = builder.add_link(
        "main", "Configure", "/guide/configure", guide, link_id="configure"
    )
    builder.add_link(
        "main", "Advanced", "/guide/configure/advanced", configure, link_id="advanced"
    )
    reference = builder.add_link("main", "Reference", "/reference", link_id="reference")
    builder.add_link("main", "API", "/reference/api", reference, link_id="api")

    builder.add_menu("footer", "Footer")
    builder.add_link("footer", "About", "/about", link_id="about")
    builder.add_link("footer", "Contact", "/contact", link_id="contact")
    return builder.build()


@pytest.fixture
def test_config(tmp_path: Path, menus_file: Path) -> Config:
    """Create a test configuration pointing at the sample menus file."""
    return Config(
        server=ServerConfig(),
        menus=MenusConfig(source_file=menus_file),
    )
