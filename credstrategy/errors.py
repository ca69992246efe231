"""credstrategy.errors -- exceptions & warnings used by credstrategy"""

__all__ = [
    "ConfigurationError",
    "CredentialError",
    "CredentialSecurityWarning",
    "DegradedEntropyWarning",
    "InsufficientEntropyError",
    "NoStrategyAvailable",
]


class CredentialError(Exception):
    """base class for all errors raised by credstrategy"""


class ConfigurationError(CredentialError, ValueError):
    """
    Raised when strategies or the registry are misconfigured,
    e.g. an empty registry, an unknown default strategy or an invalid work factor.
    """


class NoStrategyAvailable(ConfigurationError, LookupError):
    """Raised when a strategy id cannot be resolved and no default strategy is configured."""

    def __init__(self, strategy_id: "str | None") -> None:
        self.strategy_id = strategy_id
        super().__init__(f"no password strategy available for {strategy_id!r}")


class InsufficientEntropyError(CredentialError, RuntimeError):
    """
    Raised when no cryptographically strong entropy source is available
    and degraded entropy has been disallowed.
    """


class CredentialSecurityWarning(UserWarning):
    """
    Special warning issued when credstrategy encounters something
    that might affect the security of stored credentials.
    """


class DegradedEntropyWarning(CredentialSecurityWarning):
    """
    Issued when salts had to be generated from the timing based fallback
    instead of an OS entropy source. Salts produced this way are still unique,
    but far more predictable.
    """
