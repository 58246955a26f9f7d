"""
settle_config -- single public entrypoint for settlement settings.

Responsibility:
    Provides the settings callers need around the engines (display
    currency, strong-auth threshold) through ``get_settings()``.

Architecture position:
    Configuration -- YAML-backed, sits above ``settle_kernel`` and
    ``settle_engines``. Neither of those may import from ``settle_config``;
    callers read settings here and pass values into the engines.

Failure modes:
    - ``FileNotFoundError`` -- explicit settings path does not exist.
    - ``InvalidSettingsError`` -- a value fails validation.

Audit relevance:
    Every successful ``get_settings()`` call emits a
    ``SETTLE_CONFIG_TRACE`` log entry with the source path and values.
"""

from __future__ import annotations

from pathlib import Path

from settle_config.loader import load_yaml_file, parse_settings
from settle_config.schema import SettlementSettings
from settle_kernel.logging_config import get_logger

_logger = get_logger("config")

_DEFAULT_SETTINGS_FILE = Path(__file__).parent / "defaults.yaml"


def get_settings(path: Path | str | None = None) -> SettlementSettings:
    """
    Load settlement settings.

    Args:
        path: YAML file to read. Defaults to the bundled ``defaults.yaml``.
    """
    source = Path(path) if path is not None else _DEFAULT_SETTINGS_FILE
    settings = parse_settings(load_yaml_file(source))

    _logger.info(
        "SETTLE_CONFIG_TRACE",
        extra={
            "trace_type": "SETTLE_CONFIG_TRACE",
            "source": str(source),
            "currency": settings.currency,
            "strong_auth_threshold": settings.strong_auth_threshold,
        },
    )
    return settings


__all__ = [
    "SettlementSettings",
    "get_settings",
    "load_yaml_file",
    "parse_settings",
]
