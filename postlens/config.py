"""
Configuration for PostLens.

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
from pydantic import BaseModel, Field

from postlens.utils.exceptions import ConfigurationError


class CorpusConfig(BaseModel):
    """Corpus acquisition configuration."""

    path: str = "posts.jsonl"
    load_on_startup: bool = True
    preview_chars: int = Field(default=200, ge=1)


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


class Config(BaseModel):
    """Main configuration."""

    corpus: CorpusConfig = Field(default_factory=CorpusConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in project root)

        Returns:
            Config instance

        Environment variables:
            POSTLENS_CORPUS_PATH: Corpus file loaded at startup
            POSTLENS_CORPUS_LOAD_ON_STARTUP: Load the corpus file at startup
            POSTLENS_CORPUS_PREVIEW_CHARS: Card preview length
            POSTLENS_HOST: Server bind host
            POSTLENS_PORT: Server port
            POSTLENS_RELOAD: Enable auto-reload
            POSTLENS_LOG_LEVEL: Log level
            POSTLENS_LOG_TO_FILE: Enable rotated file logging
            POSTLENS_LOG_DIR: Log directory
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
            # bool before int: bool is a subclass of int
            if isinstance(default, bool):
                return str(value).lower() in ("true", "1", "yes")
            try:
                if isinstance(default, int):
                    return int(value)
                if isinstance(default, float):
                    return float(value)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid value for {key}: {value!r}", context={"key": key}
                ) from e
            return value

        return cls(
            corpus=CorpusConfig(
                path=get_env("POSTLENS_CORPUS_PATH", "posts.jsonl"),
                load_on_startup=get_env("POSTLENS_CORPUS_LOAD_ON_STARTUP", True),
                preview_chars=get_env("POSTLENS_CORPUS_PREVIEW_CHARS", 200),
            ),
            server=ServerConfig(
                host=get_env("POSTLENS_HOST", "0.0.0.0"),
                port=get_env("POSTLENS_PORT", 8000),
                reload=get_env("POSTLENS_RELOAD", False),
            ),
            logging=LoggingConfig(
                level=get_env("POSTLENS_LOG_LEVEL", "INFO"),
                log_to_file=get_env("POSTLENS_LOG_TO_FILE", False),
                log_dir=get_env("POSTLENS_LOG_DIR", "logs"),
                file_rotation=get_env("POSTLENS_LOG_FILE_ROTATION", "10 MB"),
                file_retention=get_env("POSTLENS_LOG_FILE_RETENTION", "7 days"),
                compression=get_env("POSTLENS_LOG_COMPRESSION", "zip"),
                serialize=get_env("POSTLENS_LOG_SERIALIZE", True),
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
            ConfigurationError: If the YAML document is not a mapping
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file must contain a mapping: {yaml_path}",
                context={"path": str(yaml_path)},
            )

        return cls(**data)

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Args:
            yaml_path: Optional path to YAML config
            env_file: Optional path to .env file

        Returns:
            Config instance
        """
        if yaml_path and Path(yaml_path).exists():
            config_dict = cls.from_yaml(yaml_path).model_dump()
        else:
            config_dict = {}

        env_config = cls.from_env(env_file=env_file)

        # Merge: env vars override YAML
        final_dict = {**config_dict}

        # Apply env overrides (non-default values)
        default = cls()
        if env_config.corpus != default.corpus:
            final_dict["corpus"] = env_config.corpus.model_dump()
        if env_config.server != default.server:
            final_dict["server"] = env_config.server.model_dump()
        if env_config.logging != default.logging:
            final_dict["logging"] = env_config.logging.model_dump()

        return cls(**final_dict) if final_dict else env_config


# Default config instance
default_config = Config()
