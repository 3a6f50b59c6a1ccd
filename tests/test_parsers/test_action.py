import pytest

from argmatch import HelpSignal, VersionSignal
from argmatch.parser import ArgumentAction, ArgumentParser


def test_store_const():
    parser = ArgumentParser(prog="tool")
    parser.add_argument("--fast", action="store_const", const=10)
    assert parser.parse_args([]) == {"fast": None}
    assert parser.parse_args(["--fast"]) == {"fast": 10}


def test_store_true_and_false_defaults():
    parser = ArgumentParser(prog="tool")
    parser.add_argument("--debug", action=ArgumentAction.STORE_TRUE)
    parser.add_argument("--no-color", action="false", dest="color")
    assert parser.parse_args([]) == {"debug": False, "color": True}
    assert parser.parse_args(["--debug", "--no-color"]) == {"debug": True, "color": False}


def test_append():
    parser = ArgumentParser(prog="tool")
    parser.add_argument("--tag", action="append")
    parser.add_argument("--point", action="append", nargs=2, type=int)

    args = parser.parse_args(["--tag", "a", "--point", "1", "2", "--tag", "b", "--point", "3", "4"])
    assert args["tag"] == ["a", "b"]
    assert args["point"] == [[1, 2], [3, 4]]


def test_append_const():
    parser = ArgumentParser(prog="tool")
    parser.add_argument("--read", action="append_const", const="r", dest="perms")
    assert parser.parse_args([]) == {"perms": []}
    assert parser.parse_args(["--read", "--read"]) == {"perms": ["r", "r"]}


def test_extend():
    parser = ArgumentParser(prog="tool")
    parser.add_argument("--item", action="extend", nargs="+")
    parser.add_argument("--one", action="extend")

    args = parser.parse_args(["--item", "a", "b", "--item", "c", "--one", "xy"])
    assert args["item"] == ["a", "b", "c"]
    assert args["one"] == ["xy"]


def test_count():
    parser = ArgumentParser(prog="tool")
    parser.add_argument("-v", "--verbose", action="count")
    assert parser.parse_args([]) == {"verbose": 0}
    assert parser.parse_args(["-vvv"]) == {"verbose": 3}
    assert parser.parse_args(["-v", "--verbose", "--verb"]) == {"verbose": 3}


def test_help_signal(capsys):
    parser = ArgumentParser(prog="tool", description="Does things.")
    parser.add_argument("--name", help="Who to greet.")

    with pytest.raises(HelpSignal):
        parser.parse_args(["--name", "x", "-h"])
    out = capsys.readouterr().out
    assert "usage: tool" in out
    assert "Does things." in out
    assert "Who to greet." in out


def test_help_signal_is_not_an_exception():
    parser = ArgumentParser(prog="tool")
    with pytest.raises(HelpSignal):
        try:
            parser.parse_args(["--help"])
        except Exception:  # noqa: BLE001
            pytest.fail("HelpSignal was caught as an Exception")


def test_version_signal(capsys):
    parser = ArgumentParser(prog="tool", version="tool 1.2.3")
    with pytest.raises(VersionSignal):
        parser.parse_args(["--version"])
    assert "tool 1.2.3" in capsys.readouterr().out
    assert parser.parse_args([]) == {}


def test_version_action_with_own_string(capsys):
    parser = ArgumentParser(prog="tool")
    parser.add_argument("-V", action="version", version="2.0")
    with pytest.raises(VersionSignal):
        parser.parse_args(["-V"])
    assert "2.0" in capsys.readouterr().out


def test_no_help_argument():
    parser = ArgumentParser(prog="tool", add_help=False)
    result, extras = parser.parse_known_args(["-h"])
    assert result == {}
    assert extras == ["-h"]


def test_help_uses_first_prefix_char():
    parser = ArgumentParser(prog="tool", prefix_chars="+")
    parser.add_argument("+x", action="store_true")
    assert parser.get_argument("help").flags == ("+h", "++help")
    assert parser.parse_args(["+x"]) == {"x": True}
