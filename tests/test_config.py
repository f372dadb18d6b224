"""Tests for TopomergeConfig."""

import os
import pytest
from unittest.mock import patch

from topomerge.config import (
    TopomergeConfig,
    IDConfig,
    load_config,
)
from topomerge.exceptions import ConfigurationError


class TestTopomergeConfig:
    """Tests for TopomergeConfig."""

    def test_default_config(self):
        """Test creating default configuration."""
        config = TopomergeConfig()

        assert config.ids.edge_delimiter == "|"
        assert config.ids.scope_delimiter == ";"
        assert config.source_path is None
        assert TopomergeConfig.default() == config

    def test_custom_config(self):
        """Test creating custom configuration."""
        config = TopomergeConfig(ids=IDConfig(edge_delimiter="->", scope_delimiter="/"))

        assert config.ids.edge_delimiter == "->"
        assert config.ids.scope_delimiter == "/"
        config.validate()

    def test_from_env_defaults(self):
        """Test loading from environment with no vars set."""
        with patch.dict(os.environ, {}, clear=True):
            config = TopomergeConfig.from_env()

        assert config.ids.edge_delimiter == "|"
        assert config.ids.scope_delimiter == ";"

    def test_from_env_with_vars(self):
        """Test loading from environment variables."""
        env = {
            "TOPOMERGE_EDGE_DELIMITER": "->",
            "TOPOMERGE_SCOPE_DELIMITER": "/",
        }
        with patch.dict(os.environ, env, clear=True):
            config = TopomergeConfig.from_env()

        assert config.ids.edge_delimiter == "->"
        assert config.ids.scope_delimiter == "/"

    def test_from_env_rejects_clashing_delimiters(self):
        """Test environment config is validated."""
        env = {"TOPOMERGE_EDGE_DELIMITER": ";"}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ConfigurationError):
                TopomergeConfig.from_env()


class TestConfigValidation:
    """Tests for TopomergeConfig.validate."""

    def test_empty_edge_delimiter(self):
        """Test an empty edge delimiter is rejected."""
        config = TopomergeConfig(ids=IDConfig(edge_delimiter=""))
        with pytest.raises(ConfigurationError, match="edge_delimiter"):
            config.validate()

    def test_empty_scope_delimiter(self):
        """Test an empty scope delimiter is rejected."""
        config = TopomergeConfig(ids=IDConfig(scope_delimiter=""))
        with pytest.raises(ConfigurationError, match="scope_delimiter"):
            config.validate()

    def test_equal_delimiters(self):
        """Test both delimiters must differ."""
        config = TopomergeConfig(ids=IDConfig(edge_delimiter="|", scope_delimiter="|"))
        with pytest.raises(ConfigurationError, match="must differ"):
            config.validate()


class TestYamlConfig:
    """Tests for loading configuration files."""

    def test_from_yaml(self, tmp_path):
        """Test loading delimiters from a YAML file."""
        path = tmp_path / "topomerge.yaml"
        path.write_text("ids:\n  edge_delimiter: '->'\n  scope_delimiter: '/'\n")

        config = TopomergeConfig.from_yaml(path)

        assert config.ids.edge_delimiter == "->"
        assert config.ids.scope_delimiter == "/"
        assert config.source_path == path

    def test_from_yaml_partial(self, tmp_path):
        """Test missing keys fall back to defaults."""
        path = tmp_path / "topomerge.yaml"
        path.write_text("ids:\n  edge_delimiter: '->'\n")

        config = TopomergeConfig.from_yaml(path)

        assert config.ids.edge_delimiter == "->"
        assert config.ids.scope_delimiter == ";"

    def test_from_yaml_empty_file(self, tmp_path):
        """Test an empty file yields defaults."""
        path = tmp_path / "topomerge.yaml"
        path.write_text("")

        config = TopomergeConfig.from_yaml(path)

        assert config.ids == IDConfig()

    def test_from_yaml_missing_file(self, tmp_path):
        """Test a missing file raises ConfigurationError with a cause."""
        with pytest.raises(ConfigurationError) as exc_info:
            TopomergeConfig.from_yaml(tmp_path / "nope.yaml")

        assert exc_info.value.cause is not None

    def test_from_yaml_malformed(self, tmp_path):
        """Test malformed YAML raises ConfigurationError."""
        path = tmp_path / "topomerge.yaml"
        path.write_text("ids: [unclosed\n")

        with pytest.raises(ConfigurationError):
            TopomergeConfig.from_yaml(path)

    def test_from_yaml_wrong_shape(self, tmp_path):
        """Test a non-mapping document is rejected."""
        path = tmp_path / "topomerge.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            TopomergeConfig.from_yaml(path)

    def test_load_config_explicit_path(self, tmp_path):
        """Test load_config with an explicit path."""
        path = tmp_path / "custom.yml"
        path.write_text("ids:\n  scope_delimiter: '#'\n")

        config = load_config(path)

        assert config.ids.scope_delimiter == "#"

    def test_load_config_searches_parents(self, tmp_path, monkeypatch):
        """Test load_config finds a file in a parent directory."""
        (tmp_path / "topomerge.yml").write_text("ids:\n  edge_delimiter: '=>'\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        config = load_config()

        assert config.ids.edge_delimiter == "=>"
        assert config.source_path.resolve() == (tmp_path / "topomerge.yml").resolve()

    def test_load_config_defaults_without_file(self, tmp_path, monkeypatch):
        """Test load_config falls back to defaults when nothing is found."""
        monkeypatch.chdir(tmp_path)
        with patch("topomerge.config._find_config_file", return_value=None):
            config = load_config()

        assert config == TopomergeConfig()
