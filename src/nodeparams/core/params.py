"""
Layered key/value parameter store for node configuration.

[ParamTable][nodeparams.core.params.ParamTable] resolves dotted keys such as
``query-node.port`` from four layers, highest priority first:

1. Explicit overrides passed at construction or via ``set()``.
2. Environment variables: the key upper-cased with ``.`` and ``-`` replaced
   by ``_``, behind an optional prefix (``query-node.port`` ->
   ``QUERY_NODE_PORT`` or ``NODEPARAMS_QUERY_NODE_PORT``).
3. A parameter document (usually YAML), whose nested mappings are flattened
   into dotted keys.
4. ``DEFAULT_PARAMS``: built-in default ports for every role.

Values are always returned as strings; typed access goes through
[parse_int()][nodeparams.core.params.ParamTable.parse_int].

Examples:
    ```yaml
    # config/nodeparams.yaml
    query-node:
      port: 19530
      grpc:
        serverMaxRecvSize: 268435456
    ```

    ```python
    table = ParamTable.from_yaml("config/nodeparams.yaml")
    table.parse_int("query-node.port")               # 19530
    table.load("query-node.grpc.serverMaxRecvSize")  # '268435456'
    table.load("query-node.grpc.serverMaxSendSize")  # None
    ```
"""

from __future__ import annotations

import os
import re
import threading
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from pydantic import BaseModel, Field

from nodeparams.models.constants import Role

from .exceptions import ConfigurationError
from .yaml import load_yaml


if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping


DEFAULT_PARAMS: Final[Mapping[str, str]] = MappingProxyType(
    {
        f"{Role.PROXY}.port": "19530",
        f"{Role.ROOT_COORD}.port": "53100",
        f"{Role.DATA_COORD}.port": "13333",
        f"{Role.QUERY_COORD}.port": "19531",
        f"{Role.INDEX_COORD}.port": "31000",
        f"{Role.DATA_NODE}.port": "21124",
        f"{Role.INDEX_NODE}.port": "21121",
        f"{Role.QUERY_NODE}.port": "21123",
    }
)

# Decimal integer with optional sign, no whitespace or digit separators
_INT_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")
_ENV_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"[.\-]")

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1


def parse_int_value(raw: str) -> int:
    """Parse *raw* as a base-10 signed 64-bit integer.

    Stricter than ``int()``: surrounding whitespace, underscores, non-ASCII
    digits and values outside ``[INT64_MIN, INT64_MAX]`` are rejected.

    Raises:
        ValueError: If *raw* is not an optionally signed run of ASCII digits,
            or its value does not fit in 64 bits.
    """
    if not _INT_PATTERN.fullmatch(raw):
        raise ValueError(f"invalid integer literal: {raw!r}")
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"integer out of 64-bit range: {raw!r}")
    return value


def env_var_name(key: str, prefix: str = "") -> str:
    """Map a dotted parameter key to its environment variable name."""
    return prefix + _ENV_SEPARATORS.sub("_", key).upper()


def flatten_params(data: Mapping[str, Any], parent: str = "") -> dict[str, str]:
    """Flatten nested mappings into ``{"a.b.c": "value"}``.

    ``None`` leaves are dropped so an empty YAML entry reads as missing.
    """
    flat: dict[str, str] = {}
    for name, value in data.items():
        key = f"{parent}.{name}" if parent else str(name)
        if isinstance(value, dict):
            flat.update(flatten_params(value, key))
        elif value is not None:
            flat[key] = str(value)
    return flat


class ParamTableConfig(BaseModel):
    """Sources used to build a [ParamTable][nodeparams.core.params.ParamTable].

    See Also:
        [ParamTable.from_config()][nodeparams.core.params.ParamTable.from_config]:
            Factory consuming this model.
    """

    config_path: Path | None = Field(
        default=None,
        description="YAML parameter file (None = environment and defaults only)",
    )
    env_prefix: str = Field(
        default="",
        pattern=r"^[A-Z0-9_]*$",
        description="Prefix for environment variable overrides",
    )
    use_defaults: bool = Field(
        default=True,
        description="Fall back to built-in per-role default ports",
    )


class ParamTable:
    """Layered key/value store with string lookup and strict integer parsing.

    Attributes:
        env_prefix: Prefix applied to environment variable names.
        use_defaults: Whether ``DEFAULT_PARAMS`` is consulted last.

    Note:
        The environment mapping is read on every lookup, so values exported
        after construction are visible. Pass ``environ`` explicitly to
        isolate a table from the process environment.
    """

    def __init__(
        self,
        params: Mapping[str, Any] | None = None,
        *,
        overrides: Mapping[str, Any] | None = None,
        env_prefix: str = "",
        environ: Mapping[str, str] | None = None,
        use_defaults: bool = True,
    ) -> None:
        self._params = flatten_params(params or {})
        self._overrides = {key: str(value) for key, value in (overrides or {}).items()}
        self._environ: Mapping[str, str] = os.environ if environ is None else environ
        self._lock = threading.Lock()
        self.env_prefix = env_prefix
        self.use_defaults = use_defaults

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any], **kwargs: Any) -> ParamTable:
        """Create a table backed by a (possibly nested) parameter mapping."""
        return cls(config_dict, **kwargs)

    @classmethod
    def from_yaml(cls, config_path: str | Path, **kwargs: Any) -> ParamTable:
        """Create a table backed by a YAML parameter file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigurationError: If the document is not a mapping.
        """
        return cls.from_dict(load_yaml(config_path), **kwargs)

    @classmethod
    def from_config(cls, config: ParamTableConfig) -> ParamTable:
        """Create a table from a validated [ParamTableConfig][nodeparams.core.params.ParamTableConfig]."""
        params = load_yaml(config.config_path) if config.config_path is not None else {}
        return cls(params, env_prefix=config.env_prefix, use_defaults=config.use_defaults)

    def load(self, key: str) -> str | None:
        """Return the raw value for *key*, or None if no layer defines it."""
        with self._lock:
            if key in self._overrides:
                return self._overrides[key]

        env_value = self._environ.get(env_var_name(key, self.env_prefix))
        if env_value is not None:
            return env_value

        if key in self._params:
            return self._params[key]

        if self.use_defaults:
            return DEFAULT_PARAMS.get(key)
        return None

    def parse_int(self, key: str) -> int:
        """Return *key* parsed as an integer.

        Raises:
            ConfigurationError: If the key is missing or not an integer.
        """
        raw = self.load(key)
        if raw is None:
            raise ConfigurationError(f"missing required parameter {key!r}")
        try:
            return parse_int_value(raw)
        except ValueError as e:
            raise ConfigurationError(f"parameter {key!r} is not an integer: {raw!r}") from e

    def set(self, key: str, value: Any) -> None:
        """Override *key* with *value*, taking priority over every other layer."""
        with self._lock:
            self._overrides[key] = str(value)

    def keys(self) -> list[str]:
        """Sorted keys defined by overrides, the parameter document and defaults.

        Environment variables are not enumerated because their names cannot be
        mapped back to dotted keys unambiguously.
        """
        with self._lock:
            found = set(self._overrides) | set(self._params)
        if self.use_defaults:
            found |= set(DEFAULT_PARAMS)
        return sorted(found)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.load(key) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
