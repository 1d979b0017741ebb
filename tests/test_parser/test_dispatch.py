from decimal import Decimal

import pytest

from targ import (
    ArgumentDeclarationError,
    MultiOption,
    Option,
    OptionalOption,
    OptionPolicy,
    Parser,
    ParsingError,
    Positional,
    Switch,
    UnrecognizedArgumentError,
    UnrecognizedPolicy,
)


def test_str():
    parser = Parser()
    assert str(parser) == "Parser(args=0, flags=0, positional=0)"
    parser.add_switch("v", "verbose")
    parser.add_positional("source")
    assert str(parser) == "Parser(args=2, flags=2, positional=1)"
    assert repr(parser) == str(parser)


def test_program_name_is_not_matched():
    parser = Parser()
    source = parser.add_positional("source")
    parser.parse_args(["prog", "main.c"])
    assert parser.prog == "prog"
    assert source.value == "main.c"


def test_empty_argv():
    parser = Parser(program="tool")
    verbose = parser.add_switch("v")
    parser.parse_args([])
    assert parser.prog == "tool"
    assert verbose.value is False


def test_add_option_selects_policy_from_type():
    parser = Parser()
    assert isinstance(parser.add_option("S", type=bool), Switch)
    assert isinstance(parser.add_option("x"), Option)
    assert isinstance(parser.add_option("m", "multiple", type=list[str]), MultiOption)
    optional = parser.add_option(long="level", type=int | None)
    assert isinstance(optional, OptionalOption)
    assert optional.type is int


def test_dest_derived_from_names():
    parser = Parser()
    parser.add_option("o", "output-file")
    parser.add_switch("S")
    parser.add_option(long="arch", dest="target_arch")
    assert list(parser.values()) == ["output_file", "S", "target_arch"]
    assert parser.get_argument("target_arch").long == "arch"
    assert parser.get_argument("missing") is None


def test_duplicate_flag_rejected():
    parser = Parser()
    parser.add_switch("v", "verbose")
    with pytest.raises(ArgumentDeclarationError):
        parser.add_option("v", "version", dest="version")


def test_duplicate_dest_rejected():
    parser = Parser()
    parser.add_positional("source")
    with pytest.raises(ArgumentDeclarationError):
        parser.add_positional("source")


def test_short_name_clashing_with_prefix_rejected():
    parser = Parser()
    with pytest.raises(ArgumentDeclarationError):
        parser.add_switch("-")


def test_registry_preserves_declaration_order():
    parser = Parser()
    first = parser.add_positional("first")
    verbose = parser.add_switch("v")
    second = parser.add_positional("second")
    assert parser.arguments == (first, verbose, second)


def test_positionals_fill_in_order():
    parser = Parser()
    source = parser.add_positional("source")
    dest = parser.add_positional("dest")
    verbose = parser.add_switch("v")
    parser.parse_args(["cp", "a.txt", "b.txt"])
    assert (source.value, dest.value, verbose.value) == ("a.txt", "b.txt", False)


def test_option_declared_first_wins():
    parser = Parser()
    verbose = parser.add_switch("v")
    target = parser.add_positional("target")
    parser.parse_args(["prog", "-v", "main.c"])
    assert verbose.value is True
    assert target.value == "main.c"


def test_positional_declared_first_shadows_option():
    parser = Parser()
    target = parser.add_positional("target")
    verbose = parser.add_switch("v")
    parser.parse_args(["prog", "-v", "-v"])
    assert target.value == "-v"
    assert verbose.value is True


def test_scalar_missing_value_at_end():
    parser = Parser()
    parser.add_option("o", "output")
    with pytest.raises(ParsingError) as excinfo:
        parser.parse_args(["prog", "-o"])
    assert "-o/--output" in str(excinfo.value)
    assert "expects one argument" in str(excinfo.value)


def test_first_error_in_token_order_propagates():
    parser = Parser()
    parser.add_option("j", type=int)
    parser.add_option("o")
    with pytest.raises(ParsingError) as excinfo:
        parser.parse_args(["prog", "-j", "x", "-o"])
    assert "invalid int value 'x'" in str(excinfo.value)


def test_unrecognized_token_raises():
    parser = Parser()
    parser.add_switch("v", "verbose")
    with pytest.raises(UnrecognizedArgumentError) as excinfo:
        parser.parse_args(["prog", "--verbos"])
    assert excinfo.value.token == "--verbos"
    assert excinfo.value.suggestions == ["--verbose"]
    assert "Did you mean" in str(excinfo.value)


def test_unrecognized_is_a_parsing_error():
    parser = Parser()
    with pytest.raises(ParsingError):
        parser.parse_args(["prog", "stray"])


def test_unrecognized_ignore_policy(caplog):
    parser = Parser(on_unrecognized="ignore")
    verbose = parser.add_switch("v")
    with caplog.at_level("WARNING", logger="targ"):
        parser.parse_args(["prog", "stray", "-v"])
    assert verbose.value is True
    assert parser.extras == []
    assert "Ignoring unrecognized argument 'stray'" in caplog.text


def test_unrecognized_collect_policy():
    parser = Parser(on_unrecognized=UnrecognizedPolicy.COLLECT)
    verbose = parser.add_switch("v")
    parser.parse_args(["prog", "stray", "-v", "--other"])
    assert verbose.value is True
    assert parser.extras == ["stray", "--other"]


def test_invalid_unrecognized_policy():
    with pytest.raises(ValueError):
        Parser(on_unrecognized="explode")


def test_values_snapshot():
    parser = Parser()
    parser.add_switch("S")
    parser.add_multi("m", "multiple")
    parser.add_positional("source")
    parser.parse_args(["prog", "-S", "main.c", "-m", "a", "b"])
    assert parser.values() == {"S": True, "multiple": ["a", "b"], "source": "main.c"}


def test_add_argument_accepts_prebuilt_descriptor():
    parser = Parser()
    jobs = parser.add_argument(Option(dest="jobs", short="j", type=int))
    rest = parser.add_argument(Positional(dest="rest"))
    parser.parse_args(["make", "-j", "4", "all"])
    assert jobs.value == 4
    assert rest.value == "all"


def test_debug_logging_of_consumption(caplog):
    parser = Parser()
    parser.add_option("x")
    with caplog.at_level("DEBUG", logger="targ"):
        parser.parse_args(["prog", "-x", "cpp"])
    assert "Option -x consumed 2 token(s)" in caplog.text


def test_custom_hooks_by_subclassing():
    class AtFileParser(Parser):
        def __init__(self) -> None:
            super().__init__()
            self.seen: list[str] = []
            self.source = self.add_positional("source")

        def metaparser(self, token: str) -> bool:
            if token.startswith("@"):
                self.seen.append(token)
                return True
            return super().metaparser(token)

    parser = AtFileParser().parse_args(["prog", "@opts", "main.c"])
    assert parser.seen == ["@opts"]
    assert parser.source.value == "main.c"


def test_should_test_override_hides_arguments():
    class NoPositionalParser(Parser):
        def should_test(self, argument) -> bool:
            return not isinstance(argument, Positional)

    parser = NoPositionalParser(on_unrecognized="collect")
    parser.add_positional("source")
    parser.parse_args(["prog", "main.c"])
    assert parser.get_argument("source").value is None
    assert parser.extras == ["main.c"]


def test_decimal_conversion_failure_is_parsing_error():
    parser = Parser()
    rate = parser.add_option("r", "rate", type=Decimal)
    with pytest.raises(ParsingError) as excinfo:
        parser.parse_args(["prog", "-r", "abc"])
    assert "-r/--rate" in str(excinfo.value)
    assert "invalid Decimal value 'abc'" in str(excinfo.value)
    parser.parse_args(["prog", "--rate", "0.25"])
    assert rate.value == Decimal("0.25")


def test_add_option_policy_overrides_type():
    parser = Parser()
    verbose = parser.add_option("v", policy="flag")
    ports = parser.add_option("p", "ports", type=int, policy="*")
    level = parser.add_option("O", type=int, policy=OptionPolicy.OPTIONAL)
    name = parser.add_option("n", type=list[str], policy="store")
    assert isinstance(verbose, Switch)
    assert isinstance(ports, MultiOption) and ports.type is int
    assert isinstance(level, OptionalOption) and level.type is int
    assert type(name) is Option and name.type is str
    parser.parse_args(["prog", "-v", "-p", "80", "443", "-O", "-n", "web"])
    assert verbose.value is True
    assert ports.value == [80, 443]
    assert level.present is True and level.value is None
    assert name.value == "web"


def test_add_option_rejects_unknown_policy():
    parser = Parser()
    with pytest.raises(ValueError):
        parser.add_option("c", policy="count")


def test_long_command_line_consumes_every_token():
    parser = Parser()
    files = parser.add_multi("f", "files")
    tokens = [f"file{i}.c" for i in range(5000)]
    parser.parse_args(["prog", "-f", *tokens])
    assert files.value == tokens
