"""
Configuration Loader (``settle_config.loader``).

Responsibility
--------------
Loads a YAML settings file and parses it into a typed
``SettlementSettings`` instance.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* Bad values raise ``InvalidSettingsError`` naming the field; unknown keys
  are rejected rather than silently ignored.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Invalid value  -> ``InvalidSettingsError``.
"""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from settle_config.schema import SettlementSettings
from settle_kernel.domain.currency import CurrencyRegistry
from settle_kernel.exceptions import InvalidSettingsError

_KNOWN_KEYS = frozenset(f.name for f in fields(SettlementSettings))


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Preconditions:
        - ``path`` must point to an existing, readable YAML file.
    Postconditions:
        - Returns a ``dict`` (empty if the YAML is empty).
    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def parse_settings(data: dict[str, Any]) -> SettlementSettings:
    """
    Parse ``SettlementSettings`` from a dict; missing keys keep defaults.

    Raises:
        InvalidSettingsError: on unknown keys, unregistered currency, or a
            threshold that is not a non-negative integer.
    """
    if not isinstance(data, dict):
        raise InvalidSettingsError("<root>", data, "settings must be a mapping")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise InvalidSettingsError(unknown[0], data[unknown[0]], "unknown setting")

    defaults = SettlementSettings()

    currency = data.get("currency", defaults.currency)
    if not isinstance(currency, str) or not CurrencyRegistry.is_valid(currency):
        raise InvalidSettingsError("currency", currency, "not a registered currency code")

    threshold = data.get("strong_auth_threshold", defaults.strong_auth_threshold)
    if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 0:
        raise InvalidSettingsError(
            "strong_auth_threshold", threshold, "must be a non-negative integer"
        )

    return SettlementSettings(
        currency=currency.upper().strip(),
        strong_auth_threshold=threshold,
    )
