"""
Tests for configuration management.

Tests config loading from:
1. Environment variables
2. YAML files
3. Combined (env overrides YAML)
"""

import os

import pytest
import yaml
from pydantic import ValidationError

from notecanvas.config import CanvasConfig, Config, SyncConfig
from notecanvas.core.canvas import LayoutMode


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the developer's environment and .env file."""
    # load_dotenv writes into os.environ; a plain dict keeps that inside the test
    environ = {k: v for k, v in os.environ.items() if not k.startswith("NOTECANVAS_")}
    monkeypatch.setattr(os, "environ", environ)
    monkeypatch.chdir(tmp_path)


class TestConfigDefaults:
    """Test default configuration values."""

    def test_default_config_creation(self):
        """Test creating config with defaults."""
        config = Config()

        # Vault
        assert config.vault.backend == "local"
        assert config.vault.root == "vault"

        # Sync
        assert config.sync.section_name == "Connections"
        assert config.sync.enable_edge_sync is True
        assert config.sync.direction_markers is False
        assert config.sync.frontmatter_connections is False

        # Extraction
        assert config.extraction.extracted_files_folder == ""
        assert config.extraction.leave_backlink is True
        assert config.extraction.group_multiple is True

        # Canvas
        assert config.canvas.default_node_width == 400
        assert config.canvas.default_node_height == 300
        assert config.canvas.layout == LayoutMode.GRID
        assert config.canvas.columns == 3
        assert config.canvas.gap == 40
        assert config.canvas.group_padding == 20

        # Server
        assert config.server.port == 8000

    def test_section_name_is_trimmed(self):
        assert SyncConfig(section_name="  Links ").section_name == "Links"

    def test_empty_section_name_rejected(self):
        with pytest.raises(ValidationError):
            SyncConfig(section_name="   ")

    def test_invalid_layout_rejected(self):
        with pytest.raises(ValidationError):
            CanvasConfig(layout="spiral")


class TestConfigFromEnv:
    """Test loading configuration from environment variables."""

    def test_from_env_basic(self, monkeypatch):
        """Test typed values are read from the environment."""
        monkeypatch.setenv("NOTECANVAS_VAULT_BACKEND", "memory")
        monkeypatch.setenv("NOTECANVAS_SECTION_NAME", "Related")
        monkeypatch.setenv("NOTECANVAS_ENABLE_EDGE_SYNC", "false")
        monkeypatch.setenv("NOTECANVAS_DIRECTION_MARKERS", "yes")
        monkeypatch.setenv("NOTECANVAS_LAYOUT", "vertical")
        monkeypatch.setenv("NOTECANVAS_NODE_WIDTH", "250")
        monkeypatch.setenv("NOTECANVAS_PORT", "9000")

        config = Config.from_env()

        assert config.vault.backend == "memory"
        assert config.sync.section_name == "Related"
        assert config.sync.enable_edge_sync is False
        assert config.sync.direction_markers is True
        assert config.canvas.layout == LayoutMode.VERTICAL
        assert config.canvas.default_node_width == 250
        assert config.server.port == 9000

    def test_from_env_defaults(self):
        assert Config.from_env() == Config()

    def test_from_env_file(self, tmp_path):
        env_file = tmp_path / "test.env"
        env_file.write_text("NOTECANVAS_VAULT_ROOT=/tmp/my-vault\n")

        config = Config.from_env(env_file=env_file)

        assert config.vault.root == "/tmp/my-vault"


class TestConfigFromYaml:
    """Test loading configuration from YAML files."""

    def test_from_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text(
            yaml.dump(
                {
                    "vault": {"root": "notes"},
                    "sync": {"section_name": "Links", "frontmatter_connections": True},
                    "canvas": {"layout": "horizontal", "gap": 10},
                }
            )
        )

        config = Config.from_yaml(yaml_path)

        assert config.vault.root == "notes"
        assert config.sync.section_name == "Links"
        assert config.sync.frontmatter_connections is True
        assert config.canvas.layout == LayoutMode.HORIZONTAL
        assert config.canvas.gap == 10
        assert config.extraction.leave_backlink is True

    def test_from_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_empty(self, tmp_path):
        yaml_path = tmp_path / "empty.yaml"
        yaml_path.write_text("")

        assert Config.from_yaml(yaml_path) == Config()


class TestConfigFromEnvOrYaml:
    """Test env overriding YAML."""

    def test_env_section_overrides_yaml(self, tmp_path, monkeypatch):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text(
            yaml.dump({"sync": {"section_name": "Links"}, "vault": {"root": "notes"}})
        )
        monkeypatch.setenv("NOTECANVAS_SECTION_NAME", "From Env")

        config = Config.from_env_or_yaml(yaml_path)

        assert config.sync.section_name == "From Env"
        assert config.vault.root == "notes"

    def test_yaml_only(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text(yaml.dump({"sync": {"direction_markers": True}}))

        config = Config.from_env_or_yaml(yaml_path)

        assert config.sync.direction_markers is True

    def test_no_yaml(self):
        assert Config.from_env_or_yaml(None) == Config()
