from __future__ import annotations

"""
Configuration Validation Service.

Ensures that the merged configuration (defaults, persisted settings and CLI
overrides) conforms to the expected schema. Handles type coercion, path
normalization and default injection before a run starts.
"""

import logging
import os
from typing import Any, Dict, List, Tuple

from repostruct.domain.config import get_default_config
from repostruct.infra.fs import normalize_path, resolve_in_root

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Relative schema, list and report paths are resolved against the
    repositories root, next to the repository folders themselves.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        config = {}

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    string_fields = ["repos_root", "schema_file", "list_file", "report_dir"]
    bool_fields = ["save_reports"]
    int_fields = {"list_column": 0, "list_start": 0, "max_workers": 1}

    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field, minimum in int_fields.items():
        merged[field] = _as_int(merged.get(field), defaults[field], minimum, field, warnings, strict)

    # Path normalization
    root = normalize_path(merged["repos_root"], os.getcwd())
    merged["repos_root"] = root
    merged["schema_file"] = os.path.abspath(resolve_in_root(root, merged["schema_file"]))
    if merged["list_file"]:
        merged["list_file"] = os.path.abspath(resolve_in_root(root, merged["list_file"]))
    if merged["report_dir"]:
        merged["report_dir"] = os.path.abspath(resolve_in_root(root, merged["report_dir"]))
    elif merged["save_reports"]:
        merged["report_dir"] = root

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(
        value: Any,
        fallback: int,
        minimum: int,
        field: str,
        warnings: List[str],
        strict: bool,
) -> int:
    """Coerce to an int no smaller than 'minimum'."""
    if value is None:
        return fallback

    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    elif isinstance(value, str) and not strict and value.strip().lstrip("-").isdigit():
        number = int(value.strip())
        warnings.append(f"Field '{field}' converted from '{value}' to {number}.")
    else:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if number < minimum:
        msg = f"Field '{field}' must be >= {minimum}, received {number}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback
    return number
