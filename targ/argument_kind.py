# Targ Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the closed discriminants carried by every argument descriptor.

`ArgumentKind` tells a convention whether a descriptor is an option or a
positional. `OptionPolicy` selects how an option consumes tokens once its flag
has matched, and is fixed when the option is declared.

Example:
    OptionPolicy("flag") → OptionPolicy.SWITCH
    OptionPolicy("*")    → OptionPolicy.MULTI
"""
from __future__ import annotations

from enum import Enum


class ArgumentKind(Enum):
    OPTION = "option"
    POSITIONAL = "positional"

    def __str__(self) -> str:
        return self.value


class OptionPolicy(Enum):
    """
    Consumption policy of an option.

    Members:
        SWITCH: Flag only; sets the value to True.
        SCALAR: Flag plus exactly one value token.
        MULTI: Flag plus every following token up to the next option.
        OPTIONAL: Flag plus at most one value token.

    Aliases:
        - "flag", "bool" → "switch"
        - "store" → "scalar"
        - "list", "*" → "multi"
        - "?" → "optional"
    """

    SWITCH = "switch"
    SCALAR = "scalar"
    MULTI = "multi"
    OPTIONAL = "optional"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "flag": "switch",
            "bool": "switch",
            "store": "scalar",
            "list": "multi",
            "*": "multi",
            "?": "optional",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> OptionPolicy:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value
