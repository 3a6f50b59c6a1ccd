import pytest

from argmatch import SchemaError
from argmatch.parser import ArgumentParser


@pytest.fixture
def parser():
    return ArgumentParser(prog="tool")


@pytest.mark.parametrize(
    "flags,kwargs",
    [
        ((), {}),
        (("a", "b"), {}),
        (("name", "--name"), {}),
        (("-",), {}),
        (("--",), {}),
        (("--bad flag",), {}),
        (("--x",), {"choices": {"a": 1}}),
        (("--x",), {"choices": "abc"}),
        (("--x",), {"choices": 5}),
        (("--x",), {"action": "frobnicate"}),
        (("--x",), {"action": "store_true", "nargs": 1}),
        (("--x",), {"action": "store_true", "default": 1}),
        (("--x",), {"action": "store_true", "required": True}),
        (("--x",), {"action": "store_true", "choices": [1]}),
        (("--x",), {"nargs": 0}),
        (("--x",), {"nargs": "A..."}),
        (("--x",), {"nargs": -2}),
        (("--x",), {"const": 1}),
        (("--x",), {"type": "uuid"}),
        (("--x",), {"action": "version"}),
        (("--x",), {"conflicts_with": ["missing"]}),
        (("--x",), {"action": "parsers"}),
        (("x",), {"action": "store_true"}),
        (("x",), {"required": True}),
        (("x",), {"dest": "other"}),
        (("x",), {"nargs": "?", "const": 1}),
    ],
)
def test_invalid_definitions(parser, flags, kwargs):
    with pytest.raises(SchemaError):
        parser.add_argument(*flags, **kwargs)


def test_duplicate_flags_and_dests(parser):
    parser.add_argument("-n", "--name")
    with pytest.raises(SchemaError):
        parser.add_argument("-n", dest="other")
    with pytest.raises(SchemaError):
        parser.add_argument("--name", dest="other")
    with pytest.raises(SchemaError):
        parser.add_argument("--other", dest="name")
    with pytest.raises(SchemaError):
        parser.add_argument("-h")


def test_dest_derivation(parser):
    assert parser.add_argument("-x", "--dry-run").dest == "dry_run"
    assert parser.add_argument("-q").dest == "q"
    assert parser.add_argument("--out", dest="target").dest == "target"
    assert parser.add_argument("path").dest == "path"


def test_positional_required_by_arity(parser):
    assert parser.add_argument("one").required
    assert parser.add_argument("many", nargs="+").required
    assert parser.add_argument("pair", nargs=2).required
    assert not parser.add_argument("maybe", nargs="?").required
    assert not parser.add_argument("any", nargs="*").required
    assert not parser.add_argument("rest", nargs="...").required


def test_argument_indices_follow_registration(parser):
    first = parser.add_argument("--first")
    second = parser.add_argument("second")
    assert (first.index, second.index) == (1, 2)
    assert parser.arguments[1] is first
    assert parser.get_positional_arguments() == [second]
    assert parser.get_optional_arguments()[1] is first


def test_empty_prefix_chars():
    with pytest.raises(SchemaError):
        ArgumentParser(prog="tool", prefix_chars="")
