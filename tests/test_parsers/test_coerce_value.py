from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Literal, Union

import pytest

from argmatch import TypeConversionError
from argmatch.parser import ArgumentParser
from argmatch.parser.utils import coerce_bool, coerce_value


class Mode(Enum):
    DEV = "dev"
    PROD = "prod"


class Status(Enum):
    SUCCESS = 0
    FAILURE = 1


@pytest.mark.parametrize(
    "value, target_type, expected",
    [
        ("42", int, 42),
        ("3.14", float, 3.14),
        ("hello", str, "hello"),
        ("42", int | float, 42),
        ("3.14", int | float, 3.14),
        ("1", bool | str, True),
        ("abc", Union[int, str], "abc"),
        ("", int | str, ""),
    ],
)
def test_coerce_value_basic(value, target_type, expected):
    assert coerce_value(value, target_type) == expected


def test_coerce_value_union_failure():
    with pytest.raises(ValueError) as excinfo:
        coerce_value("abc", int | float)
    assert "could not be coerced" in str(excinfo.value)


def test_enum_coercion():
    assert coerce_value("dev", Mode) is Mode.DEV
    assert coerce_value("PROD", Mode) is Mode.PROD
    assert coerce_value("1", Status) is Status.FAILURE
    assert coerce_value(Status.SUCCESS, Status) is Status.SUCCESS
    with pytest.raises(ValueError):
        coerce_value("staging", Mode)
    with pytest.raises(ValueError):
        coerce_value("3", Status)


def test_literal_coercion():
    assert coerce_value("dev", Literal["dev", "prod"]) == "dev"
    with pytest.raises(ValueError):
        coerce_value("staging", Literal["dev", "prod"])


def test_path_and_datetime_coercion():
    assert coerce_value("/tmp/test.txt", Path) == Path("/tmp/test.txt")

    result = coerce_value("2023-10-01T13:00:00", datetime)
    assert (result.year, result.month, result.hour) == (2023, 10, 13)
    with pytest.raises(ValueError):
        coerce_value("not-a-date", datetime)


@pytest.mark.parametrize(
    "value, expected",
    [("true", True), ("False", False), ("0", False), ("", False), ("on", True), ("off", False)],
)
def test_bool_coercion(value, expected):
    assert coerce_bool(value) is expected
    assert coerce_value(value, bool) is expected


def test_annotated_types_through_parser():
    parser = ArgumentParser(prog="tool")
    parser.add_argument("--mode", type=Mode, default=Mode.DEV)
    parser.add_argument("--level", type=Literal["low", "high"])
    parser.add_argument("--when", type=datetime)

    args = parser.parse_args(["--mode", "prod", "--level", "high", "--when", "2024-05-01"])
    assert args == {"mode": Mode.PROD, "level": "high", "when": datetime(2024, 5, 1)}
    assert parser.parse_args([])["mode"] is Mode.DEV

    with pytest.raises(TypeConversionError) as excinfo:
        parser.parse_args(["--mode", "qa"])
    assert excinfo.value.type_name == "Mode"
    assert str(excinfo.value) == "argument --mode: invalid Mode value: 'qa'"
