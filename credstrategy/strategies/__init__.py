from credstrategy.strategies.abc import PasswordStrategy
from credstrategy.strategies.argon2 import Argon2Strategy
from credstrategy.strategies.bcrypt import BcryptStrategy
from credstrategy.strategies.hash import IteratedHashStrategy
from credstrategy.strategies.legacy import LegacyMD5Strategy

__all__ = [
    "Argon2Strategy",
    "BcryptStrategy",
    "IteratedHashStrategy",
    "LegacyMD5Strategy",
    "PasswordStrategy",
]
