import pytest

from argmatch import UnrecognizedOptionError
from argmatch.parser import ArgumentParser


def test_parse_negative_integer():
    parser = ArgumentParser(prog="tool")
    parser.add_argument("--number", type=int, required=True, help="A negative integer")
    args = parser.parse_args(["--number", "-42"])
    assert args["number"] == -42


def test_parse_negative_float():
    parser = ArgumentParser(prog="tool")
    parser.add_argument("--value", type=float, required=True, help="A negative float")
    args = parser.parse_args(["--value", "-3.14"])
    assert args["value"] == -3.14


def test_negative_positionals():
    parser = ArgumentParser(prog="tool")
    parser.add_argument("x", type=int)
    parser.add_argument("y", type=float)
    assert parser.parse_args(["-5", "-.5"]) == {"x": -5, "y": -0.5}


def test_negative_number_like_flag():
    parser = ArgumentParser(prog="tool")
    parser.add_argument("-1", dest="one", action="store_true")

    assert parser.parse_args(["-1"]) == {"one": True}

    result, extras = parser.parse_known_args(["-2"])
    assert result == {"one": False}
    assert extras == ["-2"]

    with pytest.raises(UnrecognizedOptionError):
        parser.parse_args(["-2"])
