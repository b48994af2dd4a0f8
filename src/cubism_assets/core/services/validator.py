from __future__ import annotations

"""
Configuration Validation Service.

Ensures that a configuration dictionary coming from the persisted file, the
CLI or a host integration conforms to the expected schema. Handles type
coercion and default value injection.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

from cubism_assets.domain import constants as const
from cubism_assets.domain.config import get_default_config
from cubism_assets.infra.logging.config import _LEVEL_MAP

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

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and warnings.
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

    string_fields = ["search_root", "marker_name", "working_dir"]
    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["log_file"] = _as_str(merged.get("log_file"), "", "log_file", warnings, strict)

    merged["material_gating"] = _as_choice(
        merged.get("material_gating"), const.GATING_MODES, defaults["material_gating"],
        "material_gating", warnings, strict
    )

    level = merged.get("log_level")
    if isinstance(level, str):
        level = level.strip().upper()
    merged["log_level"] = _as_choice(
        level, tuple(_LEVEL_MAP.keys()), defaults["log_level"], "log_level", warnings, strict
    )

    unknown = sorted(k for k in merged if k not in defaults)
    for key in unknown:
        warnings.append(f"Unknown field '{key}' discarded.")
        del merged[key]

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


def _as_choice(
        value: Any,
        choices: Sequence[str],
        fallback: str,
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    """Accept only one of the allowed string values."""
    if value is None:
        return fallback
    if isinstance(value, str) and value in choices:
        return value

    msg = f"Invalid field '{field}': {value!r} is not one of {', '.join(choices)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
