"""YAML parameter file loading.

Provides safe YAML loading using ``yaml.safe_load`` to prevent arbitrary
code execution from untrusted content. Used by
[ParamTable.from_yaml()][nodeparams.core.params.ParamTable.from_yaml] to read
the parameter file that backs the config store.

Examples:
    ```python
    from nodeparams.core.yaml import load_yaml

    params = load_yaml("config/nodeparams.yaml")
    params["query-node"]["port"]  # 21123
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError


def load_yaml(config_path: str | Path) -> dict[str, Any]:
    """Load and parse a YAML parameter file.

    Args:
        config_path: Path to the YAML file (absolute or relative).

    Returns:
        Parsed document as a nested dictionary. Returns an empty dict if the
        file exists but contains no data.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file contains invalid YAML syntax.
        ConfigurationError: If the top-level document is not a mapping.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping, got {type(data).__name__}"
        )
    return data
