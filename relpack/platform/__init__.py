"""Platform layer: subprocesses and filesystem."""

from .files import remove_path, reset_dir, swap_dir
from .process import ProcessError, run, run_silent

__all__ = [
    # files
    "remove_path",
    "reset_dir",
    "swap_dir",
    # process
    "ProcessError",
    "run",
    "run_silent",
]
