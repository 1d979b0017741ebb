# Targ Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value coercion and logging setup for targ.

Functions:
- coerce_bool: Convert a string to a boolean.
- coerce_enum: Convert a string to an Enum member.
- coerce_value: Convert token text to a target type (unions, literals, enums, ...).
- setup_logging: Attach a Rich or JSON handler to the `targ` logger.
"""
from __future__ import annotations

import logging
import os
import types
from datetime import datetime
from enum import EnumMeta
from typing import Any, Literal, Union, get_args, get_origin

import pythonjsonlogger.json
from dateutil import parser as date_parser
from rich.logging import RichHandler

from targ.logger import logger

_TRUTHY = {"true", "t", "1", "yes", "y", "on"}
_FALSY = {"false", "f", "0", "no", "n", "off"}


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Accepts truthy and falsy spellings such as 'true', 'yes', '0' or 'off'.

    Raises:
        ValueError: If the string is not a recognized boolean spelling.
    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ValueError(f"'{value}' is not a valid boolean")


def coerce_enum(value: str, enum_type: EnumMeta) -> Any:
    """
    Convert token text to a member of `enum_type`.

    Member names match exactly first, then case-insensitively; after that the
    text is compared against each member's value rendered as a string, so
    `"2"` selects a member whose value is the integer 2.

    Raises:
        ValueError: If no member matches.
    """
    members = list(enum_type)
    by_name = {member.name: member for member in members}
    if value in by_name:
        return by_name[value]
    folded = value.casefold()
    for member in members:
        if member.name.casefold() == folded:
            return member
    for member in members:
        if str(member.value) == value:
            return member
    choices = ", ".join(str(member.value) for member in members)
    raise ValueError(f"'{value}' should be one of {{{choices}}}")


def coerce_value(value: str, target_type: Any) -> Any:
    """
    Attempt to convert a string to the given target type.

    Handles Union, Literal, Enum, bool and datetime specially. Any other
    target type is called with the string, so every type constructible from
    a string works.

    Args:
        value (str): The token text to convert.
        target_type (Any): The desired type.

    Returns:
        Any: The coerced value.

    Raises:
        ValueError: If conversion fails or the value is invalid.
    """
    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Literal:
        if value not in args:
            raise ValueError(
                f"Value '{value}' is not a valid literal for type {target_type}"
            )
        return value

    if isinstance(target_type, types.UnionType) or origin is Union:
        for arg in args:
            if arg is type(None):
                continue
            try:
                return coerce_value(value, arg)
            except Exception:
                continue
        raise ValueError(f"Value '{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if target_type is bool:
        return coerce_bool(value)

    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as error:
            raise ValueError(
                f"Value '{value}' could not be parsed as a datetime"
            ) from error

    try:
        return target_type(value)
    except Exception as error:
        type_name = getattr(target_type, "__name__", target_type)
        raise ValueError(f"Value '{value}' could not be converted to {type_name}") from error


def setup_logging(
    level: int = logging.DEBUG,
    mode: str | None = None,
    log_filename: str | None = None,
) -> list[logging.Handler]:
    """
    Route the `targ` logger's records to a console or file handler.

    Only the `targ` logger is touched: handlers installed by a previous call
    are replaced, other handlers and the root logger are left alone, and
    propagation is turned off so records are not printed twice.

    Args:
        level (int): Level for the `targ` logger and its handlers.
        mode (str | None):
            "cli" for Rich console output, "json" for one JSON object per
            record on stderr. Defaults to `TARG_LOG_MODE`, then "cli".
        log_filename (str | None): Also append plain-text records to this file.

    Returns:
        list[logging.Handler]: The handlers now attached to the `targ` logger.

    Raises:
        ValueError: If an invalid logging `mode` is passed.
    """
    mode = (mode or os.getenv("TARG_LOG_MODE") or "cli").strip().lower()
    if mode == "cli":
        handler: logging.Handler = RichHandler(
            show_path=False, markup=False, log_time_format="[%H:%M:%S]"
        )
    elif mode == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(
            pythonjsonlogger.json.JsonFormatter("%(name)s %(levelname)s %(message)s")
        )
    else:
        raise ValueError(f"Invalid log mode: {mode}")

    handlers = [handler]
    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] [%(levelname)s] %(message)s")
        )
        handlers.append(file_handler)

    for old in [h for h in logger.handlers if getattr(h, "_targ_managed", False)]:
        logger.removeHandler(old)
        old.close()
    for new in handlers:
        new.setLevel(level)
        new._targ_managed = True  # type: ignore[attr-defined]
        logger.addHandler(new)
    logger.setLevel(level)
    logger.propagate = False
    logger.debug("targ logging routed to %s output", mode)
    return handlers
