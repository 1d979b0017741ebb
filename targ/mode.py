# Targ Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the enums that steer the dispatch loop.

- `ParsingMode`: state of a convention that can stop recognizing options.
- `UnrecognizedPolicy`: what to do with a token nothing consumed.
"""
from __future__ import annotations

from enum import Enum


class ParsingMode(Enum):
    PARSING_OPTIONS = "parsing_options"
    OPTIONS_STOPPED = "options_stopped"


class UnrecognizedPolicy(Enum):
    """
    Behavior for a token that neither the meta-hook nor any eligible argument
    consumed.

    Members:
        ERROR: Raise `UnrecognizedArgumentError` (default).
        IGNORE: Log a warning and skip the token.
        COLLECT: Append the token to `Parser.extras` and skip it.
    """

    ERROR = "error"
    IGNORE = "ignore"
    COLLECT = "collect"

    @classmethod
    def _missing_(cls, value: object) -> UnrecognizedPolicy:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value
