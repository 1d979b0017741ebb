# Targ Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the structural protocol a parsing convention implements.

A convention supplies the option prefixes and the two hooks the dispatch loop
consults: `metaparser`, which may consume mode-changing tokens, and
`should_test`, which may hide arguments from the loop under the current mode.
The parser holds a convention by composition, so any object satisfying this
protocol can be plugged in without subclassing.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from targ.argument import Argument


@runtime_checkable
class ParsingConvention(Protocol):
    short_prefix: str
    long_prefix: str

    def metaparser(self, token: str) -> bool: ...

    def should_test(self, argument: Argument) -> bool: ...

    def is_option_shaped(self, token: str) -> bool: ...

    def reset(self) -> None: ...
