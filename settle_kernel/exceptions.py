"""
Typed Exception Hierarchy for the Settle Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the split and settlement engines re-prompt users when input is
wrong. They need to know *what* was wrong without parsing message text:

Example - WRONG way to handle errors:
    try:
        splits = calculator.compute_split(total, strategy, participants, weights)
    except Exception as e:
        if "sum to 100" in str(e):  # FRAGILE - message might change
            ask_for_percentages_again()

Example - RIGHT way (what this module enables):
    try:
        splits = calculator.compute_split(total, strategy, participants, weights)
    except InvalidSplitInput as e:
        show_form_error(code=e.code, strategy=e.strategy, reason=e.reason)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    SettleKernelError (base)
    |
    +-- SplitError
    |   +-- InvalidSplitInput
    |
    +-- CurrencyError
    |   +-- InvalidCurrencyError
    |
    +-- ConfigError
        +-- InvalidSettingsError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category  | Code                 | When Raised
----------|----------------------|---------------------------------------------
Split     | INVALID_SPLIT_INPUT  | Percentages not ~100, exact amounts != total,
          |                      | zero total share units, missing weights
----------|----------------------|---------------------------------------------
Currency  | INVALID_CURRENCY     | Code not in the currency registry
----------|----------------------|---------------------------------------------
Config    | INVALID_SETTINGS     | Settings file has a bad value

All of these are raised synchronously and are caller-recoverable. None is
worth retrying automatically: the same input reproduces the same error.

The balance aggregator and debt simplifier raise nothing for balance maps
that do not sum to zero. They are defined only over zero-sum input and the
property is verified by tests instead of at runtime.
"""


class SettleKernelError(Exception):
    """
    Base exception for all settle kernel errors.

    All subclasses carry a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "SETTLE_KERNEL_ERROR"


# Split-related exceptions


class SplitError(SettleKernelError):
    """Base exception for split calculation errors."""

    code: str = "SPLIT_ERROR"


class InvalidSplitInput(SplitError):
    """
    Strategy-specific preconditions for a split were violated.

    ``expected`` and ``actual`` are filled in when the failure is a
    reconciliation mismatch (exact amounts vs total, percentage sum vs 100).
    """

    code: str = "INVALID_SPLIT_INPUT"

    def __init__(
        self,
        strategy: str,
        reason: str,
        expected: object | None = None,
        actual: object | None = None,
    ):
        self.strategy = strategy
        self.reason = reason
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid {strategy} split: {reason}")


# Currency-related exceptions


class CurrencyError(SettleKernelError):
    """Base exception for currency errors."""

    code: str = "CURRENCY_ERROR"


class InvalidCurrencyError(CurrencyError):
    """Currency code is not in the registry."""

    code: str = "INVALID_CURRENCY"

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"Invalid currency code: {currency}")


# Configuration exceptions


class ConfigError(SettleKernelError):
    """Base exception for settings errors."""

    code: str = "CONFIG_ERROR"


class InvalidSettingsError(ConfigError):
    """A settings value failed validation."""

    code: str = "INVALID_SETTINGS"

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid setting {field}={value!r}: {reason}")
