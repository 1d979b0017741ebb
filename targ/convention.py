# Targ Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Parsing conventions: option prefixes plus the meta-argument and filter hooks.

- `Convention`: configurable prefixes, no meta-arguments, every argument eligible.
- `UnixConvention`: `-`/`--` prefixes; a bare `--` stops option recognition for
  the rest of the command line.

Example:
    convention = UnixConvention()
    convention.metaparser("--")   # True, mode is now OPTIONS_STOPPED
    convention.metaparser("--")   # False, a second "--" is an ordinary token
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from targ.argument_kind import ArgumentKind
from targ.exceptions import ArgumentDeclarationError
from targ.logger import logger
from targ.mode import ParsingMode

if TYPE_CHECKING:
    from targ.argument import Argument


class Convention:
    """
    Default parsing convention.

    The meta-hook declines every token and every argument is eligible. Prefixes
    can be changed for non-Unix styles (e.g. `short_prefix="/"`).
    """

    def __init__(self, short_prefix: str = "-", long_prefix: str = "--") -> None:
        if not short_prefix or not long_prefix:
            raise ArgumentDeclarationError("Option prefixes must not be empty")
        self.short_prefix: str = short_prefix
        self.long_prefix: str = long_prefix

    def metaparser(self, token: str) -> bool:
        """Consume a meta-argument. Returns True if `token` was consumed."""
        return False

    def should_test(self, argument: Argument) -> bool:
        """Return True if the dispatch loop should offer tokens to `argument`."""
        return True

    def is_option_shaped(self, token: str) -> bool:
        """Return True if `token` looks like a flag under either prefix."""
        return (
            token.startswith(self.long_prefix) and len(token) > len(self.long_prefix)
        ) or (
            token.startswith(self.short_prefix) and len(token) > len(self.short_prefix)
        )

    def reset(self) -> None:
        """Restore the initial mode before a new parse."""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(short_prefix={self.short_prefix!r}, "
            f"long_prefix={self.long_prefix!r})"
        )


class UnixConvention(Convention):
    """
    Unix-style convention.

    Starts in `ParsingMode.PARSING_OPTIONS`. The first bare `--` is consumed and
    switches to `ParsingMode.OPTIONS_STOPPED`, after which option descriptors are
    no longer eligible, so every remaining token reaches positionals verbatim.
    The transition is one-way.
    """

    stop_marker: str = "--"

    def __init__(self) -> None:
        super().__init__(short_prefix="-", long_prefix="--")
        self.mode: ParsingMode = ParsingMode.PARSING_OPTIONS

    @property
    def parsing_options(self) -> bool:
        return self.mode == ParsingMode.PARSING_OPTIONS

    def metaparser(self, token: str) -> bool:
        if token == self.stop_marker and self.parsing_options:
            self.mode = ParsingMode.OPTIONS_STOPPED
            logger.debug("Stop marker '%s' seen; options no longer parsed.", token)
            return True
        return False

    def should_test(self, argument: Argument) -> bool:
        if not self.parsing_options and argument.kind == ArgumentKind.OPTION:
            return False
        return True

    def reset(self) -> None:
        self.mode = ParsingMode.PARSING_OPTIONS

    def __repr__(self) -> str:
        return f"UnixConvention(mode={self.mode.value})"
