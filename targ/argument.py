# Targ Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the argument descriptors the dispatch loop offers tokens to.

Each descriptor owns a typed value slot and implements
`consume(tokens, convention) -> int`:

- `tokens` is the non-empty window of the command line starting at the cursor.
- Returning 0 means "not mine, try the next argument".
- Returning n > 0 means "matched, advance the cursor by n".
- Raising `ParsingError` means the argument matched but its value tokens are
  missing or cannot be converted.

Variants:
- `Option`: flag plus exactly one value (scalar).
- `Switch`: flag only, value becomes True.
- `MultiOption`: flag plus every value up to the next option-shaped token.
- `OptionalOption`: flag plus at most one value.
- `Positional`: claims one token without any prefix check.

Descriptors never reference their parser. The active convention is passed to
`consume`, so a descriptor can be built and tested on its own.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, ClassVar, Sequence

from targ.argument_kind import ArgumentKind, OptionPolicy
from targ.exceptions import ArgumentDeclarationError, ParsingError
from targ.protocols import ParsingConvention
from targ.utils import coerce_value


def _type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", str(target_type))


@dataclass(eq=False)
class Argument(ABC):
    """
    Base class of every declared command-line argument.

    Attributes:
        dest (str): Name under which the value is reported by `Parser.values()`.
        help (str): Help text.
        default (Any): Initial content of the value slot.
        value (Any): The parsed value.
    """

    kind: ClassVar[ArgumentKind]

    dest: str
    help: str = ""
    default: Any = None
    value: Any = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.dest:
            raise ArgumentDeclarationError("Arguments must have a non-empty dest")
        self.reset()

    def reset(self) -> None:
        """Restore the value slot to its declared default."""
        self.value = deepcopy(self.default)

    def capture_default(self) -> None:
        """Make the current value the default restored by `reset()`."""
        self.default = deepcopy(self.value)

    @abstractmethod
    def consume(self, tokens: Sequence[str], convention: ParsingConvention) -> int:
        """Consume tokens from the start of `tokens`; return how many were used."""

    @abstractmethod
    def display_name(self, convention: ParsingConvention | None = None) -> str:
        """Return the name used in error messages and help output."""

    def _convert(self, text: str, target_type: Any) -> Any:
        try:
            return coerce_value(text, target_type)
        except (ValueError, TypeError) as error:
            raise ParsingError(
                f"{self.describe()}: invalid {_type_name(target_type)} value "
                f"'{text}' ({error})"
            ) from error

    def describe(self) -> str:
        return f"{self.kind.value.capitalize()} {self.display_name()}"


@dataclass(eq=False)
class Option(Argument):
    """
    An option taking exactly one value token.

    The value token is taken verbatim even when it looks like an option, so
    `--offset -3` stores -3.

    Attributes:
        short (str | None): Single-character short name, e.g. "o" for `-o`.
        long (str | None): Long name, e.g. "output" for `--output`.
        type (Any): Type each value token is converted to.
    """

    kind: ClassVar[ArgumentKind] = ArgumentKind.OPTION
    policy: ClassVar[OptionPolicy] = OptionPolicy.SCALAR

    short: str | None = None
    long: str | None = None
    type: Any = str

    def __post_init__(self) -> None:
        if not self.short and not self.long:
            raise ArgumentDeclarationError(
                f"Option '{self.dest}' needs a short name, a long name, or both"
            )
        if self.short is not None:
            if len(self.short) != 1:
                raise ArgumentDeclarationError(
                    f"Short name of option '{self.dest}' must be one character, "
                    f"got '{self.short}'"
                )
            if self.short.isdigit():
                raise ArgumentDeclarationError(
                    f"Short name of option '{self.dest}' must not be a digit"
                )
        super().__post_init__()

    def flags(self, convention: ParsingConvention | None = None) -> tuple[str, ...]:
        """Return the flag spellings of this option, short first."""
        short_prefix = convention.short_prefix if convention else "-"
        long_prefix = convention.long_prefix if convention else "--"
        flags = []
        if self.short:
            flags.append(f"{short_prefix}{self.short}")
        if self.long:
            flags.append(f"{long_prefix}{self.long}")
        return tuple(flags)

    def display_name(self, convention: ParsingConvention | None = None) -> str:
        return "/".join(self.flags(convention))

    def matches(self, token: str, convention: ParsingConvention) -> bool:
        """Return True if `token` is exactly one of this option's flags."""
        if self.short and token == f"{convention.short_prefix}{self.short}":
            return True
        if self.long and token == f"{convention.long_prefix}{self.long}":
            return True
        return False

    def consume(self, tokens: Sequence[str], convention: ParsingConvention) -> int:
        if not self.matches(tokens[0], convention):
            return 0
        return self._consume_matched(tokens, convention)

    def _consume_matched(
        self, tokens: Sequence[str], convention: ParsingConvention
    ) -> int:
        if len(tokens) < 2:
            raise ParsingError(f"Option {self.display_name()} expects one argument")
        self.value = self._convert(tokens[1], self.type)
        return 2


@dataclass(eq=False)
class Switch(Option):
    """An option without a value. Its presence sets the value to True."""

    policy: ClassVar[OptionPolicy] = OptionPolicy.SWITCH

    default: Any = False
    type: Any = bool

    def _consume_matched(
        self, tokens: Sequence[str], convention: ParsingConvention
    ) -> int:
        self.value = True
        return 1


@dataclass(eq=False)
class MultiOption(Option):
    """
    An option followed by zero or more values.

    Values run until the next option-shaped token or the end of the command
    line. Each occurrence of the flag appends to the same list.
    """

    policy: ClassVar[OptionPolicy] = OptionPolicy.MULTI

    default: Any = field(default_factory=list)

    def reset(self) -> None:
        self.value = list(deepcopy(self.default)) if self.default is not None else []

    def _consume_matched(
        self, tokens: Sequence[str], convention: ParsingConvention
    ) -> int:
        consumed = 1
        while consumed < len(tokens) and not convention.is_option_shaped(
            tokens[consumed]
        ):
            self.value.append(self._convert(tokens[consumed], self.type))
            consumed += 1
        return consumed


@dataclass(eq=False)
class OptionalOption(Option):
    """
    An option followed by at most one value.

    `present` records whether the flag was seen. When the flag is followed by
    an option-shaped token or nothing, `value` keeps its default.
    """

    policy: ClassVar[OptionPolicy] = OptionPolicy.OPTIONAL

    present: bool = field(init=False, default=False, repr=False)

    def reset(self) -> None:
        super().reset()
        self.present = False

    def _consume_matched(
        self, tokens: Sequence[str], convention: ParsingConvention
    ) -> int:
        self.present = True
        if len(tokens) > 1 and not convention.is_option_shaped(tokens[1]):
            self.value = self._convert(tokens[1], self.type)
            return 2
        return 1


@dataclass(eq=False)
class Positional(Argument):
    """
    An argument matched by order rather than by flag.

    An unfilled positional claims the first token offered to it, whatever its
    shape. Once filled it declines, letting the next positional take its turn.
    """

    kind: ClassVar[ArgumentKind] = ArgumentKind.POSITIONAL

    type: Any = str
    filled: bool = field(init=False, default=False, repr=False)

    @property
    def name(self) -> str:
        return self.dest

    def reset(self) -> None:
        super().reset()
        self.filled = False

    def display_name(self, convention: ParsingConvention | None = None) -> str:
        return self.name

    def consume(self, tokens: Sequence[str], convention: ParsingConvention) -> int:
        if self.filled:
            return 0
        self.value = self._convert(tokens[0], self.type)
        self.filled = True
        return 1


OPTION_CLASSES: dict[OptionPolicy, type[Option]] = {
    OptionPolicy.SWITCH: Switch,
    OptionPolicy.SCALAR: Option,
    OptionPolicy.MULTI: MultiOption,
    OptionPolicy.OPTIONAL: OptionalOption,
}
