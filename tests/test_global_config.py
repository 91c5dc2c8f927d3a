"""Tests for smartmsg.global_config module."""

import stat
from pathlib import Path

import pytest
import yaml

from smartmsg.exceptions import ConfigurationError
from smartmsg.global_config import (
    GlobalConfigError,
    ensure_global_config_dir,
    get_config_file_path,
    get_credential,
    get_credentials_file_path,
    get_global_config_dir,
    load_credentials,
    load_global_config,
    save_credential,
    save_global_config,
    set_model,
)


class TestGlobalConfigDir:
    """Tests for global config directory functions."""

    def test_get_global_config_dir_returns_path(self):
        """Test that get_global_config_dir returns a Path."""
        result = get_global_config_dir()
        assert isinstance(result, Path)
        assert ".smartmsg" in str(result)

    def test_ensure_global_config_dir_creates_directory(self, config_dir):
        """Test that ensure_global_config_dir creates the directory."""
        result = ensure_global_config_dir()

        assert config_dir.exists()
        assert result == config_dir

    def test_file_paths(self, config_dir):
        """Test config and credentials file names."""
        assert get_config_file_path() == config_dir / "config.yaml"
        assert get_credentials_file_path() == config_dir / "credentials"


class TestGlobalConfigFile:
    """Tests for loading and saving config.yaml."""

    def test_missing_file_returns_empty(self, config_dir):
        """Test a missing config file yields an empty dict."""
        assert load_global_config() == {}

    def test_save_and_load(self, config_dir):
        """Test saving then loading config."""
        save_global_config({"model": "gpt-4o-mini", "timeout": 10})

        assert load_global_config() == {"model": "gpt-4o-mini", "timeout": 10}

    def test_invalid_yaml(self, config_dir):
        """Test unparsable YAML raises GlobalConfigError."""
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("model: [unclosed")

        with pytest.raises(GlobalConfigError):
            load_global_config()

    def test_non_mapping(self, config_dir):
        """Test a YAML list is rejected."""
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("- a\n- b\n")

        with pytest.raises(GlobalConfigError) as exc_info:
            load_global_config()
        assert "mapping" in str(exc_info.value)

    def test_error_is_configuration_error(self):
        """Test GlobalConfigError is a ConfigurationError."""
        assert issubclass(GlobalConfigError, ConfigurationError)

    def test_set_model_keeps_other_keys(self, config_dir):
        """Test set_model updates only the model."""
        save_global_config({"model": "old", "timeout": 5})

        set_model("gpt-4o")

        config = yaml.safe_load(get_config_file_path().read_text())
        assert config == {"model": "gpt-4o", "timeout": 5}


class TestCredentials:
    """Tests for the credentials file."""

    def test_missing_file(self, config_dir):
        """Test no credentials file yields nothing."""
        assert load_credentials() == {}
        assert get_credential("OPENAI_API_KEY") is None

    def test_save_and_get(self, config_dir):
        """Test saving then reading a credential."""
        save_credential("OPENAI_API_KEY", "sk-test-123")

        assert get_credential("OPENAI_API_KEY") == "sk-test-123"

    def test_update_existing(self, config_dir):
        """Test saving again replaces the key."""
        save_credential("OPENAI_API_KEY", "old")
        save_credential("OPENAI_API_KEY", "new")

        assert load_credentials() == {"OPENAI_API_KEY": "new"}

    def test_file_permissions(self, config_dir):
        """Test the credentials file is owner read/write only."""
        save_credential("OPENAI_API_KEY", "sk-test")

        mode = stat.S_IMODE(get_credentials_file_path().stat().st_mode)
        assert mode == stat.S_IRUSR | stat.S_IWUSR

    def test_comments_and_blank_lines_ignored(self, config_dir):
        """Test comments and blank lines are skipped."""
        config_dir.mkdir()
        (config_dir / "credentials").write_text("# comment\n\nOPENAI_API_KEY = sk-abc\n")

        assert load_credentials() == {"OPENAI_API_KEY": "sk-abc"}
