# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals raised by the parser.

These signals interrupt parsing after the help or version output has been
rendered, without being treated as traditional exceptions.

All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass standard `except Exception` blocks.

Signals:
- HelpSignal: Help text was rendered; the caller should stop.
- VersionSignal: Version text was rendered; the caller should stop.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in argmatch.

    These are not errors. They tell the caller that parsing stopped on
    purpose after output was produced.
    """


class HelpSignal(FlowSignal):
    """Raised after help information was displayed."""

    def __init__(self, message: str = "Help signal received."):
        super().__init__(message)


class VersionSignal(FlowSignal):
    """Raised after version information was displayed."""

    def __init__(self, message: str = "Version signal received."):
        super().__init__(message)
