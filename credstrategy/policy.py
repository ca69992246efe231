"""
credstrategy.policy -- password complexity rules

Every strategy carries a :class:`ComplexityPolicy`. Validation never raises:
it returns a :class:`ValidationResult` naming the first violated
:class:`ValidationRule`, checked in this order:

* too short, too long
* digits
* upper case letters
* lower case letters
* special characters

Message rendering is left to the caller, :data:`DEFAULT_MESSAGES`
only provides english fallbacks.
"""

from __future__ import annotations

import dataclasses
import enum
import string
from typing import TYPE_CHECKING, Optional

from credstrategy.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

__all__ = [
    "DEFAULT_MESSAGES",
    "DEFAULT_SPECIAL_CHARACTERS",
    "ComplexityPolicy",
    "ValidationResult",
    "ValidationRule",
]

DEFAULT_SPECIAL_CHARACTERS = " '~!@#£$%^&*()_-+=[]\\|{};:\".,/<>?`"


class ValidationRule(str, enum.Enum):
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    DIGITS = "digits"
    UPPER_CASE_LETTERS = "upper_case_letters"
    LOWER_CASE_LETTERS = "lower_case_letters"
    SPECIAL_CHARACTERS = "special_characters"


DEFAULT_MESSAGES: Mapping[ValidationRule, str] = {
    ValidationRule.TOO_SHORT: "{attribute} is too short, minimum is {n} character{s}.",
    ValidationRule.TOO_LONG: "{attribute} is too long, maximum is {n} character{s}.",
    ValidationRule.DIGITS: "{attribute} should contain at least {n} digit{s}.",
    ValidationRule.UPPER_CASE_LETTERS: (
        "{attribute} should contain at least {n} upper case character{s}."
    ),
    ValidationRule.LOWER_CASE_LETTERS: (
        "{attribute} should contain at least {n} lower case character{s}."
    ),
    ValidationRule.SPECIAL_CHARACTERS: (
        "{attribute} should contain at least {n} non alpha numeric character{s}."
    ),
}


@dataclasses.dataclass(frozen=True)
class ValidationResult:
    """Outcome of a complexity check, ``rule`` is ``None`` when the password passed."""

    rule: Optional[ValidationRule] = None
    limit: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.rule is None

    def __bool__(self) -> bool:
        return self.ok

    def message(
        self,
        attribute: str = "Password",
        messages: Mapping[ValidationRule, str] = DEFAULT_MESSAGES,
    ) -> Optional[str]:
        if self.rule is None:
            return None
        return messages[self.rule].format(
            attribute=attribute,
            n=self.limit,
            s="" if self.limit == 1 else "s",
        )


_VALID = ValidationResult()

#: policy fields compared by :meth:`ComplexityPolicy.covers`
_MINIMUM_FIELDS = (
    "min_length",
    "min_digits",
    "min_upper_case_letters",
    "min_lower_case_letters",
    "min_special_characters",
)


def _count(password: str, alphabet: str) -> int:
    return sum(1 for char in password if char in alphabet)


@dataclasses.dataclass(frozen=True)
class ComplexityPolicy:
    min_length: int = 6
    #: ``None`` or 0 means no maximum
    max_length: Optional[int] = None
    min_digits: int = 0
    min_upper_case_letters: int = 0
    min_lower_case_letters: int = 0
    min_special_characters: int = 0
    special_characters: str = DEFAULT_SPECIAL_CHARACTERS

    def __post_init__(self) -> None:
        for name in _MINIMUM_FIELDS:
            if getattr(self, name) < 0:
                msg = f"{name} must be >= 0"
                raise ConfigurationError(msg)
        if self.max_length and self.max_length < self.min_length:
            msg = "max_length must not be smaller than min_length"
            raise ConfigurationError(msg)

    def validate(self, password: str) -> ValidationResult:
        length = len(password)
        if self.min_length and length < self.min_length:
            return ValidationResult(ValidationRule.TOO_SHORT, self.min_length)
        if self.max_length and length > self.max_length:
            return ValidationResult(ValidationRule.TOO_LONG, self.max_length)

        for rule, minimum, alphabet in self._character_classes():
            if minimum and _count(password, alphabet) < minimum:
                return ValidationResult(rule, minimum)
        return _VALID

    def covers(self, other: ComplexityPolicy) -> bool:
        """
        Checks whether every password accepted by this policy is guaranteed
        to be accepted by ``other``, i.e. none of ``other``'s minimums
        exceed ours.
        """
        return all(
            getattr(other, name) <= getattr(self, name) for name in _MINIMUM_FIELDS
        )

    def _character_classes(self) -> Iterator[tuple[ValidationRule, int, str]]:
        yield ValidationRule.DIGITS, self.min_digits, string.digits
        yield (
            ValidationRule.UPPER_CASE_LETTERS,
            self.min_upper_case_letters,
            string.ascii_uppercase,
        )
        yield (
            ValidationRule.LOWER_CASE_LETTERS,
            self.min_lower_case_letters,
            string.ascii_lowercase,
        )
        yield (
            ValidationRule.SPECIAL_CHARACTERS,
            self.min_special_characters,
            self.special_characters,
        )
