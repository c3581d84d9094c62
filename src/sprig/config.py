"""
Interpreter configuration.

Settings can be built directly or loaded from a YAML mapping such as::

    max_depth: 512
    max_nesting: 64
    strict_operands: true
"""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterpreterConfig:
    """Limits and policies applied while parsing and evaluating."""

    max_depth: int = 150
    """Maximum evaluation nesting before a StackOverflow error."""

    max_nesting: int = 64
    """Maximum parser nesting of expressions and function bodies."""

    strict_operands: bool = False
    """Raise on non-numeric arithmetic operands instead of yielding null."""

    def __post_init__(self) -> None:
        for name in ("max_depth", "max_nesting"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if not isinstance(self.strict_operands, bool):
            raise ValueError(
                f"strict_operands must be a boolean, got {self.strict_operands!r}"
            )

    def override(self, **changes: Any) -> "InterpreterConfig":
        """Return a copy with every non-None entry of ``changes`` applied."""
        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied)


def config_from_mapping(data: Dict[str, Any]) -> InterpreterConfig:
    """Build a config from a plain mapping, rejecting unknown keys."""
    if not isinstance(data, dict):
        raise ValueError(f"configuration must be a mapping, got {type(data)!r}")

    known = {f.name for f in fields(InterpreterConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown configuration keys: {', '.join(unknown)}")

    return InterpreterConfig(**data)


def load_config(path: Path | str) -> InterpreterConfig:
    """Load a YAML configuration file and return the ``InterpreterConfig``."""

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"configuration not found: {config_path}")
    import yaml

    with config_path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}

    config = config_from_mapping(data)
    logger.debug("loaded configuration from %s: %s", config_path, config)
    return config
