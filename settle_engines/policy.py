"""
Module: settle_engines.policy
Responsibility:
    Single rule deciding whether confirming a settlement needs strong
    (biometric) authentication.

Architecture position:
    Engines -- pure predicate, zero I/O. Consulted by the settlement
    confirmation workflow, not by the simplifier.
"""

from __future__ import annotations

from settle_kernel.logging_config import get_logger

logger = get_logger("engines.policy")

# 5,000.00 in a two-decimal currency (500000 paisa = ₹5,000).
DEFAULT_STRONG_AUTH_THRESHOLD = 500000


def requires_strong_auth(amount: int, threshold: int = DEFAULT_STRONG_AUTH_THRESHOLD) -> bool:
    """True when ``amount`` is at or above ``threshold`` (minor units)."""
    required = amount >= threshold
    if required:
        logger.info("strong_auth_required", extra={
            "amount": amount,
            "threshold": threshold,
        })
    return required
