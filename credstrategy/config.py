"""
credstrategy.config -- INI configuration for registries & managers

Configuration lives in a single section (``[credstrategy]`` by default)::

    [credstrategy]
    strategies = legacy, bcrypt
    default = bcrypt
    auto_upgrade = true

    legacy__implementation = legacy-md5

    bcrypt__work_factor = 12
    bcrypt__min_length = 10
    bcrypt__min_digits = 1
    bcrypt__special_characters = " !#$"

Per strategy options use ``<strategy id>__<option>`` keys,
``implementation`` defaults to the strategy id itself.
INI values lose leading & trailing whitespace, so text options may be
wrapped in single or double quotes, which are removed.
"""

from __future__ import annotations

import configparser
import dataclasses
import io
import re
from typing import TYPE_CHECKING, Dict, Optional

from credstrategy.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "Config",
    "as_bool",
    "load_path",
    "load_string",
    "parse_options",
]

DEFAULT_SECTION = "credstrategy"

_true_set = {"true", "t", "yes", "y", "on", "1", "enable", "enabled"}
_false_set = {"false", "f", "no", "n", "off", "0", "disable", "disabled"}
_none_set = {"", "none"}

_int_regex = re.compile(r"^-?\d+$")

#: options always passed through as text
_STRING_OPTIONS = {"implementation", "special_characters", "hash_method", "prefix", "type"}
_BOOL_OPTIONS = {"allow_degraded_entropy"}


def as_bool(
    value: str | bool | None, none: bool | None = None, param: str = "boolean"
) -> bool | None:
    """
    helper to convert value to boolean.
    recognizes strings such as "true", "false"
    """
    if isinstance(value, str):
        clean = value.lower().strip()
        if clean in _true_set:
            return True
        if clean in _false_set:
            return False
        if clean in _none_set:
            return none
        msg = f"unrecognized {param} value: {value!r}"
        raise ConfigurationError(msg)
    if value is None:
        return none
    return bool(value)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _coerce_option(key: str, value: str) -> object:
    if key in _STRING_OPTIONS:
        return _unquote(value)
    if key in _BOOL_OPTIONS:
        return as_bool(value, param=key)
    clean = value.strip()
    if _int_regex.match(clean):
        return int(clean)
    if clean.lower() in _none_set:
        return None
    return value


@dataclasses.dataclass
class Config:
    #: strategy id -> options, in registration order
    strategies: Dict[str, Dict[str, object]] = dataclasses.field(default_factory=dict)
    default: Optional[str] = None
    auto_upgrade: bool = True


def _split_key(key: str) -> tuple[str | None, str]:
    """helper used to parse ``strategy__option`` keys into a tuple"""
    parts = key.split("__")
    if len(parts) == 1:
        return None, key
    if len(parts) == 2 and all(parts):
        return parts[0], parts[1]
    msg = f"malformed configuration key: {key!r}"
    raise ConfigurationError(msg)


def parse_options(options: Mapping[str, str]) -> Config:
    config = Config()
    listed = options.get("strategies")
    if listed is not None:
        for name in listed.split(","):
            name = name.strip()
            if name:
                config.strategies[name] = {}

    for key, value in options.items():
        strategy_id, option = _split_key(key)
        if strategy_id is None:
            if option == "default":
                config.default = value.strip() or None
            elif option == "auto_upgrade":
                config.auto_upgrade = bool(as_bool(value, none=True, param=option))
            elif option != "strategies":
                msg = f"unknown configuration option: {key!r}"
                raise ConfigurationError(msg)
            continue

        if listed is not None and strategy_id not in config.strategies:
            msg = f"options given for unlisted strategy: {strategy_id!r}"
            raise ConfigurationError(msg)
        config.strategies.setdefault(strategy_id, {})[option] = _coerce_option(
            option, value
        )
    return config


def _read_section(stream: io.TextIOBase, section: str, filename: str) -> dict[str, str]:
    """helper read INI from stream, extract section as dict"""
    parser = configparser.ConfigParser(interpolation=None)
    # strategy ids are case sensitive
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    try:
        parser.read_file(stream, filename)
        return dict(parser.items(section))
    except configparser.Error as exc:
        msg = f"{filename}: {exc}"
        raise ConfigurationError(msg) from exc


def load_string(source: str, section: str = DEFAULT_SECTION) -> Config:
    return parse_options(_read_section(io.StringIO(source), section, "<string>"))


def load_path(path: str, section: str = DEFAULT_SECTION, encoding: str = "utf-8") -> Config:
    with open(path, encoding=encoding) as stream:
        return parse_options(_read_section(stream, section, str(path)))
