"""
Settle Kernel - shared expense value objects and infrastructure.

Pure building blocks for the settlement engines:
- Integer minor-unit money with a single rounding rule
- Immutable expense, settlement and debt value objects
- Typed exceptions with machine-readable codes
- Structured JSON logging
"""

__version__ = "0.1.0"
