from __future__ import annotations

"""
Configuration Validation Service.

Normalizes the configuration dictionary coming from disk or the command
line: type coercion, default injection and sanity checks on the glob and
placeholder tokens.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from vsdeploy.domain.config import get_default_config

logger = logging.getLogger(__name__)

_TOKEN_RX = re.compile(r"^\$\([A-Za-z_][A-Za-z0-9_]*\)$")
_LEVELS = ("DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL")


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

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in ("default_pattern", "solution_dir_token", "target_dir_token", "log_level"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["log_file"] = _as_str(merged.get("log_file"), "", "log_file", warnings, strict)
    merged["case_sensitive"] = _as_optional_bool(
        merged.get("case_sensitive"), "case_sensitive", warnings, strict
    )

    for field in ("solution_dir_token", "target_dir_token"):
        if not _TOKEN_RX.match(merged[field]):
            msg = f"Invalid field '{field}': '{merged[field]}' is not an MSBuild macro like $(Name)."
            if strict:
                raise ValueError(msg)
            warnings.append(f"{msg} Using fallback.")
            merged[field] = defaults[field]

    level = merged["log_level"].upper()
    if level not in _LEVELS:
        msg = f"Invalid field 'log_level': '{merged['log_level']}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        level = defaults["log_level"]
    merged["log_level"] = level

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


def _as_optional_bool(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[bool]:
    """Coerce input into True/False, or None for 'follow the platform'."""
    if value is None or isinstance(value, bool):
        return value

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("", "auto", "platform", "none", "null"):
                return None
            if s in ("true", "1", "yes", "y"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool or null, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using platform default.")
    return None
