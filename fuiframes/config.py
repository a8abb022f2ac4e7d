"""
Frame context and typed parameter records.

Compositions receive their parameters as plain dicts (from JSON or CLI
`--param KEY=VALUE` flags); `ParamsMixin.from_params` turns such a dict into
a frozen dataclass, accepting snake_case or camelCase keys, coercing
strings, and rejecting anything it does not recognise.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigurationError


@dataclass(frozen=True)
class FrameContext:
    frame_index: int
    total_frames: int
    fps: float = 30.0
    width: int = 1920
    height: int = 1080

    def __post_init__(self) -> None:
        if self.frame_index < 0:
            raise ConfigurationError(f"frame_index must be >= 0, got {self.frame_index}")
        if self.total_frames <= 0:
            raise ConfigurationError(f"total_frames must be > 0, got {self.total_frames}")
        if self.fps <= 0:
            raise ConfigurationError(f"fps must be > 0, got {self.fps}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"canvas must be non-empty, got {self.width}x{self.height}")

    def at(self, frame_index: int) -> "FrameContext":
        return replace(self, frame_index=frame_index)

    @property
    def seconds(self) -> float:
        return self.frame_index / self.fps


_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def camel_to_snake(name: str) -> str:
    return _CAMEL.sub("_", name).replace("-", "_").lower()


def _coerce(key: str, type_name: str, value: Any) -> Any:
    if type_name == "bool":
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("1", "true", "t", "yes", "y", "on"):
            return True
        if isinstance(value, str) and value.strip().lower() in ("0", "false", "f", "no", "n", "off"):
            return False
        raise ConfigurationError(f"{key}: expected a boolean, got {value!r}")

    if type_name == "int":
        if isinstance(value, bool):
            raise ConfigurationError(f"{key}: expected an integer, got {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise ConfigurationError(f"{key}: expected an integer, got {value!r}")

    if type_name == "float":
        if isinstance(value, bool):
            raise ConfigurationError(f"{key}: expected a number, got {value!r}")
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                pass
        raise ConfigurationError(f"{key}: expected a number, got {value!r}")

    if type_name == "str":
        if not isinstance(value, str):
            raise ConfigurationError(f"{key}: expected a string, got {value!r}")
        return value

    return value


class ParamsMixin:
    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Any]] = None):
        known = {f.name: f for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in (params or {}).items():
            name = camel_to_snake(key)
            f = known.get(name)
            if f is None:
                raise ConfigurationError(
                    f"unknown parameter {key!r} for {cls.__name__}; valid: {', '.join(known)}"
                )
            kwargs[name] = _coerce(name, str(f.type), value)
        return cls(**kwargs)


def parse_param_value(text: str) -> Any:
    """CLI value text -> int, float, bool or str (in that order of preference)."""
    low = text.strip().lower()
    if low in ("true", "false"):
        return low == "true"
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text
