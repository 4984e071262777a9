"""Run configuration for the cloudvm command line.

Holds the settings that are not part of the computation itself: where the
program listing lives and how much the pipeline logs. Grid extent and the
instruction set are fixed and deliberately not configurable.
"""

import json
import logging
from typing import Any, Dict, Optional
from pathlib import Path

logger = logging.getLogger('cloudvm.config')

DEFAULT_PROGRAM_PATH = "input_program.txt"
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class RunConfig:
    """Settings for one cloudvm run.

    Supports:
    - Default initialization
    - Loading from a JSON config file
    - Validation of values
    - Export to dict
    """

    FIELDS = ('program_path', 'log_level', 'log_file', 'log_json', 'trace')

    def __init__(self,
                 program_path: str = DEFAULT_PROGRAM_PATH,
                 log_level: str = 'WARNING',
                 log_file: Optional[str] = None,
                 log_json: bool = True,
                 trace: bool = False):
        self.program_path = program_path
        self.log_level = log_level
        self.log_file = log_file
        self.log_json = log_json
        self.trace = trace

    @classmethod
    def from_file(cls, config_path: str) -> 'RunConfig':
        """Load RunConfig from JSON config file.

        Args:
            config_path: Path to JSON config file

        Returns:
            RunConfig instance with loaded values

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config format is invalid
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_path, 'r') as f:
                config_dict = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file: {e}")

        config = cls.from_dict(config_dict)
        logger.info(f"Loaded run config from {config_path}")
        return config

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'RunConfig':
        if not isinstance(config_dict, dict):
            raise ValueError(f"Config must be a JSON object, got {type(config_dict).__name__}")
        unknown = sorted(set(config_dict) - set(cls.FIELDS))
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

        config = cls()
        for name, value in config_dict.items():
            setattr(config, name, value)
        config.validate()
        return config

    def override(self, **values) -> 'RunConfig':
        """Apply non-None overrides (e.g. from CLI flags) and revalidate."""
        for name, value in values.items():
            if name not in self.FIELDS:
                raise ValueError(f"Unknown config key: {name}")
            if value is not None:
                setattr(self, name, value)
        self.validate()
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Export config to dict."""
        return {name: getattr(self, name) for name in self.FIELDS}

    def validate(self) -> None:
        """Validate field types and values.

        Raises:
            ValueError: If any value is invalid
        """
        if not isinstance(self.program_path, str) or not self.program_path:
            raise ValueError(f"program_path must be a non-empty string, got {self.program_path!r}")
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ValueError(f"log_file must be a string or null, got {type(self.log_file).__name__}")
        for name in ('log_json', 'trace'):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be a boolean, got {getattr(self, name)!r}")
