"""Exit codes for the setup-cmake CLI.

Each fatal error kind maps to one of these codes so that CI scripts can
tell a bad version request apart from a flaky network.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values are part of the CLI contract.

    - 0: Success
    - 1: User error (no release matches the requested version, bad input)
    - 2: Environment error (no archive for this platform, invalid config)
    - 4: Network error (release listing or download failed)
    - 5: I/O error (extraction or tool cache failure)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
