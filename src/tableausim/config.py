# src/tableausim/config.py
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import cerberus
import yaml

from .constants import DEFAULT_PIVOT_TOLERANCE
from .errors import DiagnosableError, format_diagnostic_report

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass()
class ConfigParsingError(DiagnosableError):
    """Raised when a solver configuration file is unreadable or fails the schema."""
    details: str
    file_path: Union[Path, None] = None

    def __str__(self):
        return f"Failed to parse solver configuration: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Solver Configuration Error",
            details=self.details,
            suggestion=(
                "The configuration is a YAML mapping with optional keys 'pivot_tolerance' (number >= 0),\n"
                f"'log_level' (one of {LOG_LEVELS}) and 'validate_topology' (boolean)."
            ),
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class SolverConfig:
    """Tunable settings of the DC operating-point pipeline."""
    pivot_tolerance: float = DEFAULT_PIVOT_TOLERANCE
    log_level: str = "INFO"
    validate_topology: bool = True

    _schema = {
        "pivot_tolerance": {"type": "number", "min": 0, "default": DEFAULT_PIVOT_TOLERANCE},
        "log_level": {"type": "string", "allowed": LOG_LEVELS, "default": "INFO",
                      "coerce": lambda v: v.upper() if isinstance(v, str) else v},
        "validate_topology": {"type": "boolean", "default": True},
    }

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], file_path: Union[Path, None] = None) -> "SolverConfig":
        """Validates a raw mapping against the schema and builds the config."""
        validator = cerberus.Validator(cls._schema)
        validator.allow_unknown = False
        if not validator.validate(dict(raw)):
            error_lines = [f"'{field}': {msgs[0]}" for field, msgs in sorted(validator.errors.items())]
            raise ConfigParsingError(details="\n".join(error_lines), file_path=file_path)

        document: Dict[str, Any] = validator.document
        return cls(
            pivot_tolerance=float(document["pivot_tolerance"]),
            log_level=document["log_level"],
            validate_topology=document["validate_topology"],
        )


def load_solver_config(config_path: Union[str, Path]) -> SolverConfig:
    """Loads a `SolverConfig` from a YAML file. An empty file yields the defaults."""
    path = Path(config_path)
    if not path.is_file():
        raise ConfigParsingError(details=f"Configuration file not found at path: {path}", file_path=path)
    try:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParsingError(details=f"Invalid YAML syntax: {e}", file_path=path) from e

    if content is None:
        content = {}
    if not isinstance(content, dict):
        raise ConfigParsingError(details="The root of the configuration must be a mapping.", file_path=path)

    config = SolverConfig.from_mapping(content, file_path=path)
    logger.info(f"Loaded solver configuration from {path}: {config}")
    return config
