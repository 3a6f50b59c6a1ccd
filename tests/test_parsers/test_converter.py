import pytest

from argmatch.exceptions import ArgumentTypeError, InvalidChoiceError, TypeConversionError
from argmatch.parser import Argument, Arity, ArityKind
from argmatch.parser.converter import ValueConverter


@pytest.fixture
def converter():
    return ValueConverter()


def test_optional_option_without_token_uses_const(converter):
    argument = Argument(
        flags=("--level",),
        dest="level",
        arity=Arity(ArityKind.OPTIONAL),
        type=int,
        type_name="int",
        const="3",
        default=1,
    )
    assert converter.get_values(argument, []) == 3
    assert converter.get_values(argument, ["7"]) == 7


def test_optional_positional_without_token_uses_default(converter):
    argument = Argument(flags=(), dest="target", arity=Arity(ArityKind.OPTIONAL), default="here")
    assert converter.get_values(argument, []) == "here"


def test_optional_default_object_is_returned_unchanged(converter):
    default = ["a"]
    argument = Argument(flags=(), dest="target", arity=Arity(ArityKind.OPTIONAL), default=default)
    assert converter.get_values(argument, []) is default


def test_zero_or_more_option_without_tokens(converter):
    argument = Argument(flags=("--tags",), dest="tags", arity=Arity(ArityKind.ZERO_OR_MORE))
    assert converter.get_values(argument, []) == []

    argument.default = ["x", "y"]
    assert converter.get_values(argument, []) == ["x", "y"]


def test_zero_or_more_option_default_is_choice_checked(converter):
    argument = Argument(
        flags=("--tags",),
        dest="tags",
        arity=Arity(ArityKind.ZERO_OR_MORE),
        default=["a", "z"],
        choices=["a", "b"],
    )
    with pytest.raises(InvalidChoiceError):
        converter.get_values(argument, [])


def test_single_token(converter):
    argument = Argument(flags=("--count",), dest="count", type=int, type_name="int")
    assert converter.get_values(argument, ["42"]) == 42


def test_list_values(converter):
    argument = Argument(flags=("--pair",), dest="pair", arity=Arity.exactly(2), type=int)
    assert converter.get_values(argument, ["1", "2"]) == [1, 2]

    argument = Argument(flags=("--one",), dest="one", arity=Arity.exactly(1))
    assert converter.get_values(argument, ["x"]) == ["x"]


def test_literal_double_dash_value_is_kept(converter):
    argument = Argument(flags=(), dest="files", arity=Arity(ArityKind.ONE_OR_MORE))
    assert converter.get_values(argument, ["a", "--", "b"]) == ["a", "--", "b"]


def test_remainder_keeps_separator_and_checks_first_choice(converter):
    argument = Argument(
        flags=(),
        dest="rest",
        arity=Arity(ArityKind.REMAINDER),
        choices=["run", "--"],
    )
    assert converter.get_values(argument, ["run", "--", "-x"]) == ["run", "--", "-x"]
    with pytest.raises(InvalidChoiceError):
        converter.get_values(argument, ["stop", "run"])
    assert converter.get_values(argument, []) == []


def test_each_list_item_is_choice_checked(converter):
    argument = Argument(
        flags=("--mode",),
        dest="mode",
        arity=Arity(ArityKind.ONE_OR_MORE),
        choices=["a", "b"],
    )
    assert converter.get_values(argument, ["a", "b", "a"]) == ["a", "b", "a"]
    with pytest.raises(InvalidChoiceError) as excinfo:
        converter.get_values(argument, ["a", "c"])
    assert excinfo.value.value == "c"


def test_conversion_failure_message(converter):
    argument = Argument(flags=("--count",), dest="count", type=int, type_name="int")
    with pytest.raises(TypeConversionError) as excinfo:
        converter.get_values(argument, ["abc"])
    assert str(excinfo.value) == "argument --count: invalid int value: 'abc'"
    assert excinfo.value.token == "abc"
    assert excinfo.value.type_name == "int"


def test_argument_type_error_message_is_kept(converter):
    def even(value):
        number = int(value)
        if number % 2:
            raise ArgumentTypeError(f"{number} is not even")
        return number

    argument = Argument(flags=("--even",), dest="even", type=even, type_name="even")
    assert converter.get_values(argument, ["4"]) == 4
    with pytest.raises(TypeConversionError) as excinfo:
        converter.get_values(argument, ["3"])
    assert str(excinfo.value) == "argument --even: 3 is not even"


def test_invalid_choice_message(converter):
    argument = Argument(flags=("--level",), dest="level", choices=["low", "high"])
    with pytest.raises(InvalidChoiceError) as excinfo:
        converter.get_values(argument, ["medium"])
    assert str(excinfo.value) == (
        "argument --level: invalid choice: 'medium' (choose from low, high)"
    )
    assert excinfo.value.choices == ["low", "high"]
