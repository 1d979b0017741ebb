# Targ Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by targ.

`ParsingError` and its subclass signal invalid user input on the command line.
`ArgumentDeclarationError` signals a mistake in how a parser declares its
arguments, which is a programming error rather than a user error.

Exception Hierarchy:
- TargError
    ├── ParsingError
    │   └── UnrecognizedArgumentError
    └── ArgumentDeclarationError
"""


class TargError(Exception):
    """Base exception for every error raised by targ."""


class ParsingError(TargError):
    """Exception raised when the command line is malformed."""


class UnrecognizedArgumentError(ParsingError):
    """Exception raised when no declared argument consumes a token."""

    def __init__(self, token: str, suggestions: list[str] | None = None):
        self.token = token
        self.suggestions = suggestions or []
        if self.suggestions:
            message = (
                f"Unrecognized argument '{token}'. "
                f"Did you mean one of: {', '.join(self.suggestions)}?"
            )
        else:
            message = f"Unrecognized argument '{token}'."
        super().__init__(message)


class ArgumentDeclarationError(TargError):
    """Exception raised when a parser declares an invalid argument."""
