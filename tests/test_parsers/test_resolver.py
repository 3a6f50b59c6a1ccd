import pytest

from argmatch.exceptions import AmbiguousOptionError
from argmatch.parser import Argument, Arity
from argmatch.parser.resolver import OptionResolver


@pytest.fixture
def arguments():
    return {
        "verbose": Argument(flags=("-v", "--verbose"), dest="verbose", arity=Arity.exactly(0)),
        "version": Argument(flags=("--version",), dest="version", arity=Arity.exactly(0)),
        "name": Argument(flags=("-n", "--name"), dest="name"),
    }


def build(arguments, **kwargs):
    option_map = {}
    for argument in arguments.values():
        for flag in argument.flags:
            option_map[flag] = argument
    return OptionResolver(option_map, **kwargs)


def test_positional_tokens(arguments):
    resolver = build(arguments)
    assert resolver.resolve("value") is None
    assert resolver.resolve("") is None
    assert resolver.resolve("-") is None


def test_exact_match(arguments):
    resolver = build(arguments)
    option_tuple = resolver.resolve("--name")
    assert option_tuple.argument is arguments["name"]
    assert option_tuple.option_string == "--name"
    assert option_tuple.explicit_arg is None


def test_equals_explicit_argument(arguments):
    resolver = build(arguments)
    option_tuple = resolver.resolve("--name=alice")
    assert option_tuple.argument is arguments["name"]
    assert option_tuple.explicit_arg == "alice"

    option_tuple = resolver.resolve("--name=")
    assert option_tuple.explicit_arg == ""


def test_unique_abbreviation(arguments):
    resolver = build(arguments)
    option_tuple = resolver.resolve("--verb")
    assert option_tuple.argument is arguments["verbose"]
    assert option_tuple.option_string == "--verbose"

    option_tuple = resolver.resolve("--na=bob")
    assert option_tuple.argument is arguments["name"]
    assert option_tuple.explicit_arg == "bob"


def test_ambiguous_abbreviation(arguments):
    resolver = build(arguments)
    with pytest.raises(AmbiguousOptionError) as excinfo:
        resolver.resolve("--ver")
    assert set(excinfo.value.candidates) == {"--verbose", "--version"}
    assert "--verbose" in str(excinfo.value)


def test_abbreviation_disabled(arguments):
    resolver = build(arguments, allow_abbrev=False)
    option_tuple = resolver.resolve("--verb")
    assert option_tuple.argument is None
    assert option_tuple.option_string == "--verb"


def test_short_option_with_attached_value(arguments):
    resolver = build(arguments)
    option_tuple = resolver.resolve("-nalice")
    assert option_tuple.argument is arguments["name"]
    assert option_tuple.option_string == "-n"
    assert option_tuple.explicit_arg == "alice"


def test_negative_numbers_are_positional(arguments):
    resolver = build(arguments)
    assert not resolver.has_negative_number_optionals
    assert resolver.resolve("-1") is None
    assert resolver.resolve("-2.5") is None
    assert resolver.resolve("-.5") is None


def test_negative_number_like_option_changes_classification(arguments):
    arguments["one"] = Argument(flags=("-1",), dest="one", arity=Arity.exactly(0))
    resolver = build(arguments)
    assert resolver.has_negative_number_optionals
    assert resolver.resolve("-1").argument is arguments["one"]
    option_tuple = resolver.resolve("-2")
    assert option_tuple.argument is None
    assert option_tuple.option_string == "-2"


def test_token_with_space_is_positional(arguments):
    resolver = build(arguments)
    assert resolver.resolve("--not an option") is None


def test_unknown_option(arguments):
    resolver = build(arguments)
    option_tuple = resolver.resolve("--unknown")
    assert option_tuple.argument is None
    assert option_tuple.option_string == "--unknown"
    assert option_tuple.explicit_arg is None

    assert resolver.resolve("-z").argument is None


def test_custom_prefix_chars():
    argument = Argument(flags=("+x", "++extra"), dest="extra")
    resolver = OptionResolver({"+x": argument, "++extra": argument}, prefix_chars="+")
    assert resolver.resolve("++ext").argument is argument
    assert resolver.resolve("--extra") is None
    assert resolver.resolve("+xvalue").explicit_arg == "value"


def test_suggest(arguments):
    resolver = build(arguments)
    assert resolver.suggest("--verbos") == ["--verbose"]
    assert resolver.suggest("--vrb") == ["--verbose", "--version"]
    assert resolver.suggest("--nmae=x") == ["--name"]
    assert resolver.suggest("--zzz") == []
