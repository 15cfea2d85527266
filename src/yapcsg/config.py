"""Tolerance configuration for the CSG core.

The coincidence epsilon is carried explicitly: every tree stores the
value it was built with and every classification reads it from there.
There is no module-level setter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from yapcsg.errors import ConfigError

DEFAULT_EPSILON = 1e-5


def check_epsilon(value: Any) -> float:
    """Return ``value`` as a float or raise :class:`ConfigError`."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f'epsilon must be a number, got {value!r}')
    value = float(value)
    if not math.isfinite(value) or value <= 0.0:
        raise ConfigError(f'epsilon must be finite and positive, got {value!r}')
    return value


@dataclass(frozen=True)
class CsgConfig:
    """Immutable settings for one boolean operation."""

    epsilon: float = DEFAULT_EPSILON

    def __post_init__(self):
        object.__setattr__(self, 'epsilon', check_epsilon(self.epsilon))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> 'CsgConfig':
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError('configuration must be a mapping')
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f'unknown configuration keys: {", ".join(unknown)}',
                              details={'unknown': unknown})
        values = dict(data)
        # YAML 1.1 reads exponents without a decimal point, like 1e-6, as strings
        if isinstance(values.get('epsilon'), str):
            try:
                values['epsilon'] = float(values['epsilon'])
            except ValueError as exc:
                raise ConfigError(f'epsilon must be a number, got {data["epsilon"]!r}',
                                  details={'key': 'epsilon'}) from exc
        return cls(**values)


def load_config(path: str | Path) -> CsgConfig:
    """Read a YAML file such as ``epsilon: 1.0e-6`` into a :class:`CsgConfig`."""

    import yaml  # local import to avoid the cost when no config file is used

    path = Path(path)
    try:
        with path.open('r', encoding='utf-8') as fp:
            data = yaml.safe_load(fp)
    except OSError as exc:
        raise ConfigError(f'cannot read configuration {path}: {exc}') from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f'invalid YAML in {path}: {exc}') from exc
    return CsgConfig.from_mapping(data)


__all__ = ['DEFAULT_EPSILON', 'CsgConfig', 'check_epsilon', 'load_config']
