# Targ Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `Parser`, the registry of declared arguments and the
dispatch loop that feeds them the command line.

A concrete parser subclasses `Parser` (or `UnixParser`) and declares its
arguments in `__init__`. Each `add_*` call registers a descriptor and returns
it, so the handle can be kept as an attribute. Declaration order matters: the
loop offers each token to the arguments in that order and stops at the first
one that consumes it.

Example Usage:
    class CompilerParser(UnixParser):
        def __init__(self) -> None:
            super().__init__()
            self.verbose = self.add_switch("v", "verbose", help="Show verbose output")
            self.output = self.add_option("o", "output", help="Output file")
            self.output.value = "a.out"

    parser = parse(CompilerParser, ["cc", "-v", "--output", "prog"])
    parser.verbose.value  # True
    parser.output.value   # "prog"

Dispatch loop, per token at the cursor:
1. The convention's `metaparser` may consume it (e.g. `--`).
2. Otherwise each eligible argument (`should_test`) is offered the window
   starting at the cursor; the first nonzero count advances the cursor.
3. Otherwise the parser's `UnrecognizedPolicy` decides: raise, skip, or
   collect into `extras`.
"""
from __future__ import annotations

import sys
from difflib import get_close_matches
from typing import Any, Sequence, TypeVar

from rich.console import Console
from rich.table import Table

from targ.argument import (
    OPTION_CLASSES,
    Argument,
    MultiOption,
    Option,
    OptionalOption,
    Positional,
    Switch,
)
from targ.argument_kind import ArgumentKind, OptionPolicy
from targ.console import console
from targ.convention import Convention, UnixConvention
from targ.exceptions import ArgumentDeclarationError, UnrecognizedArgumentError
from targ.logger import logger
from targ.mode import UnrecognizedPolicy
from targ.parser_types import TokenWindow, resolve_option_type
from targ.protocols import ParsingConvention

P = TypeVar("P", bound="Parser")


class Parser:
    """
    Registry of declared arguments plus the dispatch loop.

    Attributes:
        prog (str | None): Program name, taken from `argv[0]` when parsing.
        description (str): Text shown above the argument table in help.
        convention (ParsingConvention): Prefixes and meta/filter hooks.
        on_unrecognized (UnrecognizedPolicy): Handling of unconsumed tokens.
        extras (list[str]): Tokens collected under `UnrecognizedPolicy.COLLECT`.
    """

    def __init__(
        self,
        convention: ParsingConvention | None = None,
        program: str | None = None,
        description: str = "",
        on_unrecognized: UnrecognizedPolicy | str = UnrecognizedPolicy.ERROR,
    ) -> None:
        self.console: Console = console
        self.convention: ParsingConvention = convention or self._default_convention()
        self.prog: str | None = program
        self.description: str = description
        self.on_unrecognized: UnrecognizedPolicy = UnrecognizedPolicy(on_unrecognized)
        self.extras: list[str] = []
        self._arguments: list[Argument] = []
        self._dest_map: dict[str, Argument] = {}
        self._flag_map: dict[str, Option] = {}
        self._defaults_captured: bool = False

    def _default_convention(self) -> ParsingConvention:
        return Convention()

    @property
    def arguments(self) -> tuple[Argument, ...]:
        """Declared arguments in declaration order."""
        return tuple(self._arguments)

    def _validate_flags(self, option: Option) -> None:
        short_prefix = self.convention.short_prefix
        if option.short and short_prefix.startswith(option.short):
            raise ArgumentDeclarationError(
                f"Short name '{option.short}' clashes with the prefix '{short_prefix}'"
            )
        for flag in option.flags(self.convention):
            if flag in self._flag_map:
                raise ArgumentDeclarationError(
                    f"Flag '{flag}' is already used by "
                    f"'{self._flag_map[flag].dest}'"
                )

    def add_argument(self, argument: Argument) -> Argument:
        """
        Register a descriptor and return it.

        Raises:
            ArgumentDeclarationError: If its dest or one of its flags is taken.
        """
        if argument.dest in self._dest_map:
            raise ArgumentDeclarationError(
                f"Destination '{argument.dest}' is already declared"
            )
        if isinstance(argument, Option):
            self._validate_flags(argument)
            for flag in argument.flags(self.convention):
                self._flag_map[flag] = argument
        self._arguments.append(argument)
        self._dest_map[argument.dest] = argument
        logger.debug(
            "Registered %s '%s' on %s",
            argument.kind,
            argument.dest,
            type(self).__name__,
        )
        return argument

    def _get_dest(self, short: str | None, long: str | None, dest: str | None) -> str:
        if dest:
            return dest
        name = long or short or ""
        return name.replace("-", "_")

    def add_option(
        self,
        short: str | None = None,
        long: str | None = None,
        help: str = "",
        type: Any = str,
        default: Any = None,
        dest: str | None = None,
        policy: OptionPolicy | str | None = None,
    ) -> Option:
        """
        Declare an option whose policy follows from `type`.

        `bool` declares a switch, `list[E]` a multi-valued option, `E | None`
        an option with an optional value, anything else a scalar option.
        An explicit `policy` (an `OptionPolicy` or one of its aliases such as
        "flag", "*" or "?") overrides that choice; `type` then only gives the
        element type.
        """
        resolved_policy, element_type = resolve_option_type(type)
        if policy is not None:
            resolved_policy = OptionPolicy(policy)
            if resolved_policy == OptionPolicy.SWITCH:
                element_type = bool
        option_cls = OPTION_CLASSES[resolved_policy]
        kwargs: dict[str, Any] = {
            "dest": self._get_dest(short, long, dest),
            "help": help,
            "short": short,
            "long": long,
            "type": element_type,
        }
        if default is not None:
            kwargs["default"] = default
        option = option_cls(**kwargs)
        self.add_argument(option)
        return option

    def add_switch(
        self,
        short: str | None = None,
        long: str | None = None,
        help: str = "",
        dest: str | None = None,
    ) -> Switch:
        switch = Switch(
            dest=self._get_dest(short, long, dest), help=help, short=short, long=long
        )
        self.add_argument(switch)
        return switch

    def add_multi(
        self,
        short: str | None = None,
        long: str | None = None,
        help: str = "",
        type: Any = str,
        default: list[Any] | None = None,
        dest: str | None = None,
    ) -> MultiOption:
        multi = MultiOption(
            dest=self._get_dest(short, long, dest),
            help=help,
            short=short,
            long=long,
            type=type,
            default=default if default is not None else [],
        )
        self.add_argument(multi)
        return multi

    def add_optional(
        self,
        short: str | None = None,
        long: str | None = None,
        help: str = "",
        type: Any = str,
        default: Any = None,
        dest: str | None = None,
    ) -> OptionalOption:
        optional = OptionalOption(
            dest=self._get_dest(short, long, dest),
            help=help,
            short=short,
            long=long,
            type=type,
            default=default,
        )
        self.add_argument(optional)
        return optional

    def add_positional(
        self,
        name: str,
        help: str = "",
        type: Any = str,
        default: Any = None,
    ) -> Positional:
        positional = Positional(dest=name, help=help, type=type, default=default)
        self.add_argument(positional)
        return positional

    def get_argument(self, dest: str) -> Argument | None:
        return self._dest_map.get(dest)

    def values(self) -> dict[str, Any]:
        """Return the current value of every argument keyed by dest."""
        return {argument.dest: argument.value for argument in self._arguments}

    def metaparser(self, token: str) -> bool:
        """Parse a meta-argument. Returns True if `token` was consumed."""
        return self.convention.metaparser(token)

    def should_test(self, argument: Argument) -> bool:
        """Return True if `argument` is eligible under the current mode."""
        return self.convention.should_test(argument)

    def _capture_defaults(self) -> None:
        for argument in self._arguments:
            argument.capture_default()
        self._defaults_captured = True

    def _reset(self) -> None:
        if not self._defaults_captured:
            self._capture_defaults()
        self.extras = []
        self.convention.reset()
        for argument in self._arguments:
            argument.reset()

    def _handle_unrecognized(self, token: str) -> None:
        if self.on_unrecognized == UnrecognizedPolicy.COLLECT:
            logger.debug("Collecting unrecognized token %r", token)
            self.extras.append(token)
        elif self.on_unrecognized == UnrecognizedPolicy.IGNORE:
            logger.warning("Ignoring unrecognized argument '%s'", token)
        else:
            suggestions = get_close_matches(token, list(self._flag_map), n=3, cutoff=0.6)
            raise UnrecognizedArgumentError(token, suggestions)

    def _dispatch(self, tokens: Sequence[str]) -> int:
        for argument in self._arguments:
            if not self.should_test(argument):
                continue
            consumed = argument.consume(tokens, self.convention)
            if consumed:
                logger.debug(
                    "%s consumed %d token(s): %s",
                    argument.describe(),
                    consumed,
                    list(tokens[:consumed]),
                )
                return consumed
        return 0

    def parse_args(self: P, argv: Sequence[str]) -> P:
        """
        Populate the declared arguments from `argv`.

        `argv[0]` is the program name; it is stored in `prog` and not matched.
        Values assigned to handles before the first call become their defaults,
        and every call starts from those defaults.

        Returns:
            The parser itself, populated.

        Raises:
            ParsingError: On the first malformed token, in left-to-right order.
        """
        self._reset()
        if argv:
            self.prog = argv[0]
        tokens = list(argv[1:])
        window = TokenWindow(tokens)

        i = 0
        while i < len(tokens):
            token = tokens[i]
            if self.metaparser(token):
                i += 1
                continue
            consumed = self._dispatch(window.at(i))
            if consumed:
                i += consumed
                continue
            self._handle_unrecognized(token)
            i += 1

        return self

    def render_help(self) -> None:
        """Print the declared arguments and their help text."""
        if self.description:
            self.console.print(self.description + "\n")

        positionals = [
            argument
            for argument in self._arguments
            if argument.kind == ArgumentKind.POSITIONAL
        ]
        options = [
            argument for argument in self._arguments if isinstance(argument, Option)
        ]
        for title, group in (("positional", positionals), ("options", options)):
            if not group:
                continue
            table = Table(title=f"[bold]{title}:[/bold]", title_justify="left", box=None)
            table.add_column("name", no_wrap=True)
            table.add_column("help")
            for argument in group:
                if isinstance(argument, Option):
                    name = ", ".join(argument.flags(self.convention))
                else:
                    name = argument.display_name(self.convention)
                table.add_row(name, argument.help)
            self.console.print(table)

    def __str__(self) -> str:
        positional = sum(
            argument.kind == ArgumentKind.POSITIONAL for argument in self._arguments
        )
        return (
            f"{type(self).__name__}(args={len(self._arguments)}, "
            f"flags={len(self._flag_map)}, positional={positional})"
        )

    def __repr__(self) -> str:
        return str(self)


class UnixParser(Parser):
    """A `Parser` that follows `UnixConvention` unless told otherwise."""

    def _default_convention(self) -> ParsingConvention:
        return UnixConvention()


def parse(
    parser_cls: type[P], argv: Sequence[str] | None = None, *args: Any, **kwargs: Any
) -> P:
    """
    Build a fresh `parser_cls` instance and populate it from `argv`.

    Args:
        parser_cls: A `Parser` subclass declaring its arguments in `__init__`.
        argv: Full command line including the program name. Defaults to `sys.argv`.
        *args, **kwargs: Forwarded to `parser_cls`.
    """
    parser = parser_cls(*args, **kwargs)
    return parser.parse_args(sys.argv if argv is None else argv)
