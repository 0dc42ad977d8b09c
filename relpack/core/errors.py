"""Process exit codes.

Each packaging failure maps to one of these codes so that callers (CI jobs,
release scripts) can tell a bad manifest from a broken toolchain.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the relpack CLI.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (manifest has no usable version or program name)
    - 2: Environment error (no project found, invalid relpack.toml)
    - 3: Build error (toolchain exited non-zero)
    - 5: I/O error (artifact missing, output directory not writable)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
