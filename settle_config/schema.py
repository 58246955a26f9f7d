"""
SettlementSettings schema.

Caller-facing settings for the settlement workflow. The engines never read
these; callers pass the values in explicitly (for example the strong-auth
threshold to ``requires_strong_auth``).
"""

from __future__ import annotations

from dataclasses import dataclass

from settle_engines.policy import DEFAULT_STRONG_AUTH_THRESHOLD
from settle_kernel.domain.currency import DEFAULT_CURRENCY


@dataclass(frozen=True)
class SettlementSettings:
    """Settings for one deployment of the settlement workflow."""

    currency: str = DEFAULT_CURRENCY
    strong_auth_threshold: int = DEFAULT_STRONG_AUTH_THRESHOLD
