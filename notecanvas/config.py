"""
Configuration for notecanvas.

Supports loading from:
1. Environment variables (highest priority)
2. YAML config file
3. Default values (fallback)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from notecanvas.core.canvas.layout import LayoutMode


class VaultConfig(BaseModel):
    """Document storage configuration."""

    backend: str = "local"  # local, memory
    root: str = "vault"


class SyncConfig(BaseModel):
    """Canvas edge to backlink synchronization."""

    section_name: str = "Connections"
    enable_edge_sync: bool = True
    # Prefix bullets with "->" / "<-" depending on edge direction
    direction_markers: bool = False
    # Mirror connections into front matter (connections-to / connections-from)
    frontmatter_connections: bool = False

    @field_validator("section_name")
    @classmethod
    def _non_empty_section(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("section_name cannot be empty")
        return value


class ExtractionConfig(BaseModel):
    """Section to note extraction."""

    extracted_files_folder: str = ""  # empty: next to the source document
    file_name_prefix: str = ""
    leave_backlink: bool = True
    group_multiple: bool = True
    quick_card_default_title: str = "Untitled"


class CanvasConfig(BaseModel):
    """Geometry and styling for nodes and edges created on a canvas."""

    default_node_width: int = 400
    default_node_height: int = 300
    default_edge_color: str | None = None
    default_edge_label: str | None = None
    layout: LayoutMode = LayoutMode.GRID
    columns: int = Field(default=3, ge=1)
    gap: int = Field(default=40, ge=0)
    group_padding: int = Field(default=20, ge=0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_to_file: bool = True
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


class ServerConfig(BaseModel):
    """HTTP host configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False


class Config(BaseModel):
    """Main configuration."""

    vault: VaultConfig = Field(default_factory=VaultConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in working directory)

        Returns:
            Config instance

        Environment variables:
            NOTECANVAS_VAULT_BACKEND: Store backend (local, memory)
            NOTECANVAS_VAULT_ROOT: Vault directory for the local backend
            NOTECANVAS_SECTION_NAME: Heading of the connections section
            NOTECANVAS_ENABLE_EDGE_SYNC: Keep backlinks in sync with canvas edges
            NOTECANVAS_DIRECTION_MARKERS: Prefix bullets with -> / <-
            NOTECANVAS_FRONTMATTER_CONNECTIONS: Mirror connections into front matter
            NOTECANVAS_EXTRACTED_FILES_FOLDER: Folder for extracted notes
            NOTECANVAS_FILE_NAME_PREFIX: Prefix for extracted note names
            NOTECANVAS_LEAVE_BACKLINK: Replace extracted sections with a link
            NOTECANVAS_NODE_WIDTH / NOTECANVAS_NODE_HEIGHT: New node size
            NOTECANVAS_LAYOUT: grid, horizontal or vertical
            NOTECANVAS_LOG_LEVEL: Log level
            NOTECANVAS_HOST / NOTECANVAS_PORT: HTTP host binding
        """
        if env_file:
            load_dotenv(env_file)
        elif Path(".env").exists():
            load_dotenv()

        def get_env(key: str, default: Any = None) -> Any:
            """Get environment variable with type conversion."""
            value = os.getenv(key)
            if value is None or value == "":
                return default
            if isinstance(default, bool):
                return str(value).lower() in ("true", "1", "yes")
            if isinstance(default, int):
                return int(value)
            if isinstance(default, float):
                return float(value)
            return value

        return cls(
            vault=VaultConfig(
                backend=get_env("NOTECANVAS_VAULT_BACKEND", "local"),
                root=get_env("NOTECANVAS_VAULT_ROOT", "vault"),
            ),
            sync=SyncConfig(
                section_name=get_env("NOTECANVAS_SECTION_NAME", "Connections"),
                enable_edge_sync=get_env("NOTECANVAS_ENABLE_EDGE_SYNC", True),
                direction_markers=get_env("NOTECANVAS_DIRECTION_MARKERS", False),
                frontmatter_connections=get_env("NOTECANVAS_FRONTMATTER_CONNECTIONS", False),
            ),
            extraction=ExtractionConfig(
                extracted_files_folder=get_env("NOTECANVAS_EXTRACTED_FILES_FOLDER", ""),
                file_name_prefix=get_env("NOTECANVAS_FILE_NAME_PREFIX", ""),
                leave_backlink=get_env("NOTECANVAS_LEAVE_BACKLINK", True),
                group_multiple=get_env("NOTECANVAS_GROUP_MULTIPLE", True),
                quick_card_default_title=get_env("NOTECANVAS_QUICK_CARD_TITLE", "Untitled"),
            ),
            canvas=CanvasConfig(
                default_node_width=get_env("NOTECANVAS_NODE_WIDTH", 400),
                default_node_height=get_env("NOTECANVAS_NODE_HEIGHT", 300),
                default_edge_color=get_env("NOTECANVAS_EDGE_COLOR"),
                default_edge_label=get_env("NOTECANVAS_EDGE_LABEL"),
                layout=get_env("NOTECANVAS_LAYOUT", "grid"),
                columns=get_env("NOTECANVAS_LAYOUT_COLUMNS", 3),
                gap=get_env("NOTECANVAS_LAYOUT_GAP", 40),
            ),
            logging=LoggingConfig(
                level=get_env("NOTECANVAS_LOG_LEVEL", "INFO"),
                log_to_file=get_env("NOTECANVAS_LOG_TO_FILE", True),
                log_dir=get_env("NOTECANVAS_LOG_DIR", "logs"),
                file_rotation=get_env("NOTECANVAS_LOG_FILE_ROTATION", "10 MB"),
                file_retention=get_env("NOTECANVAS_LOG_FILE_RETENTION", "7 days"),
                compression=get_env("NOTECANVAS_LOG_COMPRESSION", "zip"),
                serialize=get_env("NOTECANVAS_LOG_SERIALIZE", True),
            ),
            server=ServerConfig(
                host=get_env("NOTECANVAS_HOST", "127.0.0.1"),
                port=get_env("NOTECANVAS_PORT", 8000),
                reload=get_env("NOTECANVAS_RELOAD", False),
            ),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Only sections whose environment values differ from the defaults
        override the YAML file.
        """
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            config_dict = {}

        env_config = cls.from_env(env_file=env_file)
        default = cls()

        final_dict = {**config_dict}
        for section in ("vault", "sync", "extraction", "canvas", "logging", "server"):
            env_section = getattr(env_config, section)
            if env_section != getattr(default, section):
                final_dict[section] = env_section.model_dump()

        return cls(**final_dict) if final_dict else env_config


# Default config instance
default_config = Config()
