import pytest

from targ import (
    ArgumentKind,
    Convention,
    ParsingConvention,
    ParsingMode,
    Positional,
    Switch,
    UnixConvention,
    UnixParser,
    UnrecognizedArgumentError,
)


def test_conventions_satisfy_protocol():
    assert isinstance(Convention(), ParsingConvention)
    assert isinstance(UnixConvention(), ParsingConvention)


def test_unix_parser_uses_unix_convention():
    parser = UnixParser()
    assert isinstance(parser.convention, UnixConvention)
    assert parser.convention.mode == ParsingMode.PARSING_OPTIONS


def test_default_convention_has_no_meta_arguments():
    convention = Convention()
    assert convention.metaparser("--") is False
    assert convention.should_test(Switch(dest="v", short="v")) is True


def test_unix_convention_state_machine():
    convention = UnixConvention()
    switch = Switch(dest="v", short="v")
    positional = Positional(dest="rest")

    assert convention.metaparser("-v") is False
    assert convention.should_test(switch) is True
    assert convention.should_test(positional) is True

    assert convention.metaparser("--") is True
    assert convention.mode == ParsingMode.OPTIONS_STOPPED
    assert convention.should_test(switch) is False
    assert convention.should_test(positional) is True

    # terminal state: a second marker is an ordinary token
    assert convention.metaparser("--") is False
    assert convention.mode == ParsingMode.OPTIONS_STOPPED

    convention.reset()
    assert convention.mode == ParsingMode.PARSING_OPTIONS


@pytest.mark.parametrize(
    "token, shaped",
    [
        ("-v", True),
        ("--verbose", True),
        ("--", True),
        ("-", False),
        ("file.txt", False),
    ],
)
def test_is_option_shaped(token, shaped):
    assert UnixConvention().is_option_shaped(token) is shaped


class VerboseParser(UnixParser):
    def __init__(self) -> None:
        super().__init__()
        self.verbose = self.add_switch("v", "verbose", help="Show verbose output")


class VerboseFileParser(VerboseParser):
    def __init__(self) -> None:
        super().__init__()
        self.file = self.add_positional("file", help="Input file")


def test_stop_marker_with_positional():
    parser = VerboseFileParser().parse_args(["prog", "-v", "--", "-v"])
    assert parser.verbose.value is True
    assert parser.file.value == "-v"


def test_stop_marker_without_positional():
    parser = VerboseParser()
    with pytest.raises(UnrecognizedArgumentError) as excinfo:
        parser.parse_args(["prog", "-v", "--", "-v"])
    assert excinfo.value.token == "-v"
    assert parser.verbose.value is True


def test_stop_marker_never_reaches_values():
    parser = VerboseFileParser().parse_args(["prog", "--", "--"])
    assert parser.file.value == "--"
    assert parser.verbose.value is False


def test_stop_marker_ends_multi_option():
    class MultiParser(UnixParser):
        def __init__(self) -> None:
            super().__init__()
            self.multiple = self.add_multi("m", "multiple")
            self.rest = self.add_positional("rest")

    parser = MultiParser().parse_args(["prog", "-m", "a", "b", "--", "-m"])
    assert parser.multiple.value == ["a", "b"]
    assert parser.rest.value == "-m"


def test_filter_checks_kind_discriminant():
    convention = UnixConvention()
    convention.metaparser("--")
    assert Switch(dest="v", short="v").kind == ArgumentKind.OPTION
    assert convention.should_test(Positional(dest="rest")) is True
