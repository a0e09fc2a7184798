"""
Configuration module for lombok-agent.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _read_defaults(path: Path) -> dict[str, Any]:
    """Parse a defaults file. Missing, unreadable or non-mapping files yield {}."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning(f"lombok-agent defaults not found: {path}")
        return {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load lombok-agent defaults from {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _load_defaults() -> dict[str, Any]:
    """Return the packaged defaults, reading defaults.yaml on first use."""
    global _defaults_cache

    if _defaults_cache is None:
        _defaults_cache = _read_defaults(_DEFAULTS_CONFIG_PATH)
    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Look up section.key in the packaged defaults, else fallback."""
    section_defaults = _load_defaults().get(section)
    if not isinstance(section_defaults, dict):
        return fallback
    return section_defaults.get(key, fallback)


@dataclass
class ProvisionerConfig:
    """Configuration for downloading lombok.jar."""

    download_url: str = field(
        default_factory=lambda: _get_default(
            "provisioner", "download_url", "https://projectlombok.org/downloads/lombok.jar"
        )
    )
    timeout: float = field(default_factory=lambda: _get_default("provisioner", "timeout", 60.0))


@dataclass
class ScannerConfig:
    """Configuration for the build file scan."""

    build_files: list[str] = field(
        default_factory=lambda: list(
            _get_default("scanner", "build_files", ["pom.xml", "build.gradle", "build.gradle.kts"])
        )
    )
    skip_dirs: list[str] = field(
        default_factory=lambda: list(
            _get_default(
                "scanner",
                "skip_dirs",
                [".git", "node_modules", "dist", "build", "target", "out", ".next", ".turbo"],
            )
        )
    )
    follow_symlinks: bool = field(
        default_factory=lambda: _get_default("scanner", "follow_symlinks", False)
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "INFO"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


@dataclass
class LombokAgentConfig:
    """Main configuration class for lombok-agent."""

    provisioner: ProvisionerConfig = field(default_factory=ProvisionerConfig)
    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "LombokAgentConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            LombokAgentConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "LombokAgentConfig":
        """
        Create LombokAgentConfig from a dictionary.

        Raises:
            ValueError: If the document or one of its sections is not a mapping
            TypeError: If a section contains an unknown key
        """
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a mapping of sections")

        config = cls()
        sections = (
            ("provisioner", ProvisionerConfig),
            ("scanner", ScannerConfig),
            ("logging", LoggingConfig),
        )
        for name, section_cls in sections:
            if name not in data:
                continue
            values = data[name]
            if not isinstance(values, dict):
                raise ValueError(f"Configuration section '{name}' must be a mapping")
            setattr(config, name, section_cls(**values))

        return config

    def apply_env_overrides(self) -> "LombokAgentConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: LOMBOK_AGENT_<SECTION>_<KEY>
        Examples:
            - LOMBOK_AGENT_PROVISIONER_DOWNLOAD_URL
            - LOMBOK_AGENT_SCANNER_SKIP_DIRS (comma separated)
            - LOMBOK_AGENT_LOGGING_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Provisioner config
            "LOMBOK_AGENT_PROVISIONER_DOWNLOAD_URL": ("provisioner", "download_url", str),
            "LOMBOK_AGENT_PROVISIONER_TIMEOUT": ("provisioner", "timeout", float),
            # Scanner config
            "LOMBOK_AGENT_SCANNER_BUILD_FILES": ("scanner", "build_files", _parse_list),
            "LOMBOK_AGENT_SCANNER_SKIP_DIRS": ("scanner", "skip_dirs", _parse_list),
            "LOMBOK_AGENT_SCANNER_FOLLOW_SYMLINKS": ("scanner", "follow_symlinks", _parse_bool),
            # Logging config
            "LOMBOK_AGENT_LOGGING_LEVEL": ("logging", "level", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                setattr(section_obj, key, converter(value))

        return self

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: Path | str) -> None:
        """
        Save configuration to a file.

        Args:
            path: Path to save the configuration (.yaml, .yml, or .json)

        Raises:
            ValueError: If the file format is unsupported
        """
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            content = self.to_yaml()
        elif path.suffix == ".json":
            content = self.to_json()
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def _parse_bool(value: str) -> bool:
    """Parse a string to boolean."""
    return value.lower() in ("true", "1", "yes", "on")


def _parse_list(value: str) -> list[str]:
    """Parse a comma separated string into a list of non-empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(
    config_path: Optional[Path | str] = None, apply_env: bool = True
) -> LombokAgentConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        LombokAgentConfig instance
    """
    if config_path:
        config = LombokAgentConfig.from_file(config_path)
    else:
        config = LombokAgentConfig()

    if apply_env:
        config.apply_env_overrides()

    return config
