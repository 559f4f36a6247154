"""Configuration management for menu-pager.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from menu_pager.core.blocks import BlockSettings

CONFIG_FILENAME = "menu_pager.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class MenusConfig:
    """Menu source configuration."""

    source_file: Path = field(default_factory=lambda: Path("menus.toml"))
    ignore_targets: list[str] = field(default_factory=list)


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    menus: MenusConfig
    blocks: dict[str, BlockSettings] = field(default_factory=dict)
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for menu_pager.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Config:
        return cls(server=ServerConfig(), menus=MenusConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            menus=cls._parse_menus(data.get("menus"), config_dir),
            blocks=cls._parse_blocks(data.get("blocks")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_menus(cls, data: object, config_dir: Path) -> MenusConfig:
        """Parse menus configuration section.

        Args:
            data: Raw menus section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            MenusConfig instance
        """
        if data is None:
            return MenusConfig(source_file=config_dir / "menus.toml")

        if not isinstance(data, dict):
            raise ValueError("menus section must be a dictionary")

        source_file = data.get("source_file", "menus.toml")
        if not isinstance(source_file, str):
            raise ValueError("menus.source_file must be a string")

        ignore_raw = data.get("ignore_targets", [])
        if not isinstance(ignore_raw, list):
            raise ValueError("menus.ignore_targets must be a list")
        ignore_targets: list[str] = []
        for item in ignore_raw:
            if not isinstance(item, str):
                raise ValueError("menus.ignore_targets items must be strings")
            ignore_targets.append(item)

        return MenusConfig(
            source_file=config_dir / source_file,
            ignore_targets=ignore_targets,
        )

    @classmethod
    def _parse_blocks(cls, data: object) -> dict[str, BlockSettings]:
        """Parse per-menu block settings.

        Args:
            data: Raw blocks section data, keyed by menu name

        Returns:
            BlockSettings keyed by menu name
        """
        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ValueError("blocks section must be a dictionary")

        blocks: dict[str, BlockSettings] = {}
        for menu_name, block_data in data.items():
            if not isinstance(block_data, dict):
                raise ValueError(f"blocks.{menu_name} must be a dictionary")

            restrict_to_parent = block_data.get("restrict_to_parent", False)
            if not isinstance(restrict_to_parent, bool):
                raise ValueError(
                    f"blocks.{menu_name}.restrict_to_parent must be a boolean"
                )

            blocks[menu_name] = BlockSettings(restrict_to_parent=restrict_to_parent)

        return blocks

    def block_settings(self, menu_name: str) -> BlockSettings:
        """Get settings for a menu's pager block, defaults if not configured."""
        return self.blocks.get(menu_name, BlockSettings())

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        source_file: Path | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            source_file: Override menus.source_file

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        menus = self.menus
        if source_file is not None:
            menus = replace(self.menus, source_file=source_file)

        return replace(self, server=server, menus=menus)
