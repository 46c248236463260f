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

from postlens.config import Config, CorpusConfig, LoggingConfig, ServerConfig
from postlens.utils.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove PostLens variables so each test starts from defaults."""
    for key in list(os.environ):
        if key.startswith("POSTLENS_"):
            monkeypatch.delenv(key, raising=False)


class TestConfigDefaults:
    """Test default configuration values."""

    def test_default_config_creation(self):
        """Test creating config with defaults."""
        config = Config()

        assert config.corpus.path == "posts.jsonl"
        assert config.corpus.load_on_startup is True
        assert config.corpus.preview_chars == 200

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 8000
        assert config.server.reload is False

        assert config.logging.level == "INFO"
        assert config.logging.log_to_file is False

    def test_corpus_config_creation(self):
        """Test creating corpus config."""
        corpus = CorpusConfig(path="data/posts.json", load_on_startup=False, preview_chars=80)

        assert corpus.path == "data/posts.json"
        assert corpus.load_on_startup is False
        assert corpus.preview_chars == 80

    def test_preview_chars_must_be_positive(self):
        """Test preview length validation."""
        with pytest.raises(ValueError):
            CorpusConfig(preview_chars=0)


class TestConfigFromEnv:
    """Test loading configuration from environment variables."""

    def test_from_env_basic(self, monkeypatch):
        """Test basic environment variable loading."""
        monkeypatch.setenv("POSTLENS_CORPUS_PATH", "/data/posts.jsonl")
        monkeypatch.setenv("POSTLENS_HOST", "127.0.0.1")
        monkeypatch.setenv("POSTLENS_LOG_LEVEL", "DEBUG")

        config = Config.from_env()

        assert config.corpus.path == "/data/posts.jsonl"
        assert config.server.host == "127.0.0.1"
        assert config.logging.level == "DEBUG"

    def test_from_env_with_numbers(self, monkeypatch):
        """Test numeric conversion."""
        monkeypatch.setenv("POSTLENS_PORT", "9000")
        monkeypatch.setenv("POSTLENS_CORPUS_PREVIEW_CHARS", "120")

        config = Config.from_env()

        assert config.server.port == 9000
        assert config.corpus.preview_chars == 120

    def test_from_env_with_booleans(self, monkeypatch):
        """Test boolean conversion."""
        monkeypatch.setenv("POSTLENS_CORPUS_LOAD_ON_STARTUP", "false")
        monkeypatch.setenv("POSTLENS_RELOAD", "1")
        monkeypatch.setenv("POSTLENS_LOG_TO_FILE", "yes")

        config = Config.from_env()

        assert config.corpus.load_on_startup is False
        assert config.server.reload is True
        assert config.logging.log_to_file is True

    def test_from_env_invalid_number(self, monkeypatch):
        """Test non-numeric values for numeric settings raise ConfigurationError."""
        monkeypatch.setenv("POSTLENS_PORT", "eighty")

        with pytest.raises(ConfigurationError) as exc_info:
            Config.from_env()

        assert exc_info.value.context == {"key": "POSTLENS_PORT"}

    def test_from_env_empty_string_uses_default(self, monkeypatch):
        """Test empty variables fall back to defaults."""
        monkeypatch.setenv("POSTLENS_CORPUS_PATH", "")

        assert Config.from_env().corpus.path == "posts.jsonl"

    def test_from_env_with_dotenv_file(self, tmp_path):
        """Test loading from a .env file."""
        env_file = tmp_path / ".env.test"
        env_file.write_text("POSTLENS_LOG_DIR=/tmp/postlens-logs\n")

        try:
            config = Config.from_env(env_file=env_file)
            assert config.logging.log_dir == "/tmp/postlens-logs"
        finally:
            os.environ.pop("POSTLENS_LOG_DIR", None)


class TestConfigFromYAML:
    """Test loading configuration from YAML files."""

    def test_from_yaml_basic(self, tmp_path):
        """Test loading from YAML file."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(
            yaml.dump(
                {
                    "corpus": {"path": "exports/posts.json", "preview_chars": 150},
                    "server": {"port": 8080},
                }
            )
        )

        config = Config.from_yaml(yaml_file)

        assert config.corpus.path == "exports/posts.json"
        assert config.corpus.preview_chars == 150
        assert config.server.port == 8080
        # Unspecified sections keep defaults
        assert config.logging == LoggingConfig()

    def test_from_yaml_empty_file(self, tmp_path):
        """Test an empty YAML file yields defaults."""
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert Config.from_yaml(yaml_file) == Config()

    def test_from_yaml_not_a_mapping(self, tmp_path):
        """Test YAML lists are rejected."""
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            Config.from_yaml(yaml_file)

    def test_from_yaml_file_not_found(self):
        """Test error when YAML file doesn't exist."""
        with pytest.raises(FileNotFoundError):
            Config.from_yaml("/nonexistent/config.yaml")

    def test_from_yaml_invalid_yaml(self, tmp_path):
        """Test error with invalid YAML."""
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("corpus: [unclosed")

        with pytest.raises(yaml.YAMLError):
            Config.from_yaml(yaml_file)


class TestConfigFromEnvOrYAML:
    """Test combined loading with priority."""

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        """Test environment variables override YAML sections."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(
            yaml.dump({"corpus": {"path": "yaml.jsonl"}, "server": {"port": 7000}})
        )
        monkeypatch.setenv("POSTLENS_CORPUS_PATH", "env.jsonl")

        config = Config.from_env_or_yaml(yaml_path=yaml_file)

        assert config.corpus.path == "env.jsonl"
        assert config.server.port == 7000

    def test_yaml_only_when_no_env(self, tmp_path):
        """Test YAML values apply when no env vars are set."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(yaml.dump({"server": {"host": "localhost", "reload": True}}))

        config = Config.from_env_or_yaml(yaml_path=yaml_file)

        assert config.server == ServerConfig(host="localhost", reload=True)

    def test_defaults_when_no_yaml_or_env(self):
        """Test defaults when neither source provides values."""
        assert Config.from_env_or_yaml() == Config()
