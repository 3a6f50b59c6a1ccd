# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instances used for help and error rendering."""
from rich.console import Console

console = Console()
error_console = Console(stderr=True)
