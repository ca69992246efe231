"""credstrategy -- pluggable password encoding strategies with transparent upgrades"""

from credstrategy.errors import (
    ConfigurationError,
    CredentialError,
    CredentialSecurityWarning,
    DegradedEntropyWarning,
    InsufficientEntropyError,
    NoStrategyAvailable,
)
from credstrategy.manager import AuthOutcome, AuthResult, ChangeResult, CredentialManager
from credstrategy.policy import ComplexityPolicy, ValidationResult, ValidationRule
from credstrategy.record import CredentialAttributes, CredentialRecord
from credstrategy.registry import StrategyRegistry, register_implementation

__version__ = "1.0.0"

__all__ = [
    "AuthOutcome",
    "AuthResult",
    "ChangeResult",
    "ComplexityPolicy",
    "ConfigurationError",
    "CredentialAttributes",
    "CredentialError",
    "CredentialManager",
    "CredentialRecord",
    "CredentialSecurityWarning",
    "DegradedEntropyWarning",
    "InsufficientEntropyError",
    "NoStrategyAvailable",
    "StrategyRegistry",
    "ValidationResult",
    "ValidationRule",
    "register_implementation",
]
