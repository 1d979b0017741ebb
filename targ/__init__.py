"""
Targ Argument Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument import (
    Argument,
    MultiOption,
    Option,
    OptionalOption,
    Positional,
    Switch,
)
from .argument_kind import ArgumentKind, OptionPolicy
from .convention import Convention, UnixConvention
from .exceptions import (
    ArgumentDeclarationError,
    ParsingError,
    TargError,
    UnrecognizedArgumentError,
)
from .logger import logger
from .mode import ParsingMode, UnrecognizedPolicy
from .parser import Parser, UnixParser, parse
from .protocols import ParsingConvention
from .version import __version__

__all__ = [
    "Argument",
    "ArgumentDeclarationError",
    "ArgumentKind",
    "Convention",
    "MultiOption",
    "Option",
    "OptionPolicy",
    "OptionalOption",
    "Parser",
    "ParsingConvention",
    "ParsingError",
    "ParsingMode",
    "Positional",
    "Switch",
    "TargError",
    "UnixConvention",
    "UnixParser",
    "UnrecognizedArgumentError",
    "UnrecognizedPolicy",
    "logger",
    "parse",
    "__version__",
]
