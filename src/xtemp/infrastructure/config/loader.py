"""Configuration loading and validation."""

import os
import shlex
import yaml
from pathlib import Path
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, field

from xtemp.domain.exceptions import ConfigurationError
from xtemp.domain.models import CommandTemplate
from xtemp.shared.logging import get_logger

logger = get_logger(__name__)

TRUE_VALUES = ("true", "1", "yes", "on")


def _command_token(token: Any) -> Any:
    # YAML reads `head -n 5` as [head, -n, 5]
    if isinstance(token, (int, float)) and not isinstance(token, bool):
        return str(token)
    return token


@dataclass
class BatchConfig:
    """Resolved configuration for one run."""

    # Command template
    command: List[str] = field(default_factory=list)
    placeholder: Optional[str] = None

    # Batching; None means derive from the open-file limit
    batch_size: Optional[int] = None

    # Modes
    list_mode: bool = False
    keep_newlines: bool = False
    shell: bool = False  # run the resolved tokens through 'sh -eu -c'
    line_output: bool = False  # capture child stdout and re-emit it line by line

    # Misc
    temp_dir: Optional[Path] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """Validate configuration values."""
        if not self.command:
            raise ConfigurationError("missing required argument: command")

        if not all(isinstance(token, str) for token in self.command):
            raise ConfigurationError(f"Command tokens must be strings, got: {self.command!r}")

        if self.batch_size is not None:
            if isinstance(self.batch_size, bool) or not isinstance(self.batch_size, int):
                raise ConfigurationError(f"Batch size must be an integer, got: {self.batch_size!r}")
            if self.batch_size < 1:
                raise ConfigurationError(f"Batch size must be positive, got: {self.batch_size}")

        if self.placeholder is not None and not isinstance(self.placeholder, str):
            raise ConfigurationError(f"Placeholder must be a string, got: {self.placeholder!r}")

        if self.placeholder == "":
            raise ConfigurationError("Placeholder cannot be empty")

        if self.placeholder is not None and self.placeholder not in self.command:
            logger.warning(
                f"Placeholder {self.placeholder!r} does not appear as a whole argument; "
                f"the command will run without file arguments"
            )

    @property
    def template(self) -> CommandTemplate:
        return CommandTemplate(tokens=tuple(self.command), placeholder=self.placeholder)


class ConfigLoader:
    """Loads and validates configuration from YAML files and environment variables."""

    VALID_FIELDS = {
        'command', 'placeholder', 'batch_size', 'list_mode',
        'keep_newlines', 'shell', 'line_output', 'temp_dir',
    }

    def __init__(self, config_path: Optional[Path] = None, environ: Optional[Dict[str, str]] = None):
        """
        Initialize config loader.

        Args:
            config_path: Optional path to YAML config file
            environ: Environment mapping (defaults to os.environ)
        """
        self.config_path = config_path
        self._environ = os.environ if environ is None else environ
        self._logger = get_logger(__name__)

    def load(self, overrides: Optional[Dict[str, Any]] = None) -> BatchConfig:
        """
        Load configuration from file and environment.

        Precedence, lowest first: YAML file, environment, overrides.
        Overrides set to None are ignored.

        Returns:
            BatchConfig instance

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config_dict: Dict[str, Any] = {}

        if self.config_path is not None:
            config_dict.update(self._load_from_file(self.config_path))

        config_dict.update(self._load_from_env())

        if overrides:
            for k, v in overrides.items():
                if v is None:
                    continue
                config_dict[k] = v

        unknown = set(config_dict) - self.VALID_FIELDS
        if unknown:
            self._logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")

        filtered_config = {k: v for k, v in config_dict.items() if k in self.VALID_FIELDS}

        command = filtered_config.get('command')
        if isinstance(command, str):
            filtered_config['command'] = shlex.split(command)
        elif isinstance(command, list):
            filtered_config['command'] = [_command_token(token) for token in command]
        if filtered_config.get('temp_dir') is not None:
            filtered_config['temp_dir'] = Path(filtered_config['temp_dir'])

        try:
            return BatchConfig(**filtered_config)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def _load_from_file(self, path: Path) -> Dict[str, Any]:
        """Read a YAML mapping from ``path``."""
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")

        self._logger.info(f"Loading config from {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return yaml_config

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env = self._environ
        env_config: Dict[str, Any] = {}

        if batch_size := env.get("XTEMP_BATCH_SIZE"):
            try:
                env_config["batch_size"] = int(batch_size)
            except ValueError:
                self._logger.warning(f"Invalid XTEMP_BATCH_SIZE value: {batch_size}")

        if placeholder := env.get("XTEMP_PLACEHOLDER"):
            env_config["placeholder"] = placeholder

        for key in ("list_mode", "keep_newlines", "shell", "line_output"):
            if value := env.get(f"XTEMP_{key.upper()}"):
                env_config[key] = value.lower() in TRUE_VALUES

        if temp_dir := env.get("XTEMP_TEMP_DIR"):
            env_config["temp_dir"] = Path(temp_dir)

        return env_config
