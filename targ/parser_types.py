# Targ Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Maps declared Python types to option consumption policies.

`bool` declares a switch, a sequence type declares a multi-valued option,
`E | None` declares an option whose value is optional, and any other type
declares a scalar option converted with that type.

`TokenWindow` is the read-only view of the command line handed to
`Argument.consume`.
"""
import collections.abc
import types
from typing import Any, Iterator, Union, get_args, get_origin, overload

from targ.argument_kind import OptionPolicy
from targ.exceptions import ArgumentDeclarationError

_SEQUENCE_ORIGINS = (
    list,
    tuple,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)


def resolve_option_type(target_type: Any) -> tuple[OptionPolicy, Any]:
    """
    Resolve the policy and element type for a declared option type.

    Args:
        target_type (Any): The type given when the option was declared.

    Returns:
        tuple[OptionPolicy, Any]: The consumption policy and the type each
        value token is converted to.
    """
    if target_type is bool:
        return OptionPolicy.SWITCH, bool

    if target_type in (list, tuple):
        return OptionPolicy.MULTI, str

    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin in _SEQUENCE_ORIGINS:
        if not args:
            return OptionPolicy.MULTI, str
        if origin is tuple and (len(args) != 2 or args[1] is not Ellipsis):
            raise ArgumentDeclarationError(
                f"Only homogeneous tuples (tuple[E, ...]) are supported: {target_type}"
            )
        return OptionPolicy.MULTI, args[0]

    if isinstance(target_type, types.UnionType) or origin is Union:
        if type(None) in args:
            remaining = tuple(arg for arg in args if arg is not type(None))
            if len(remaining) == 1:
                return OptionPolicy.OPTIONAL, remaining[0]
            return OptionPolicy.OPTIONAL, Union[remaining]

    return OptionPolicy.SCALAR, target_type


class TokenWindow(collections.abc.Sequence):
    """
    The tokens from a cursor position to the end of the command line.

    Indexing is relative to the cursor and no tokens are copied, so offering
    the window to every argument costs the same at any cursor position.
    """

    __slots__ = ("_tokens", "_start")

    def __init__(self, tokens: list[str], start: int = 0) -> None:
        self._tokens = tokens
        self._start = start

    def at(self, start: int) -> "TokenWindow":
        """Return a window over the same tokens beginning at `start`."""
        return TokenWindow(self._tokens, start)

    def __len__(self) -> int:
        return len(self._tokens) - self._start

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> list[str]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("token window index out of range")
        return self._tokens[self._start + index]

    def __iter__(self) -> Iterator[str]:
        return (self._tokens[i] for i in range(self._start, len(self._tokens)))

    def __repr__(self) -> str:
        return f"TokenWindow({list(self)!r})"
