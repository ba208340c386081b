"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for confluence-page commands.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): Anything not covered below (bad arguments, decode errors)
    - INVALID_MARKUP (2): The page body was refused by the markup validator
    - AUTH_ERROR (3): Missing configuration or credentials refused by the store
    - NETWORK_ERROR (4): The content store could not be reached
    - NOT_FOUND (5): The page (or its parent) does not exist
    - REMOTE_REJECTED (6): The store refused the operation

    Example:
        >>> raise typer.Exit(ExitCode.NOT_FOUND)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_MARKUP = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    NOT_FOUND = 5
    REMOTE_REJECTED = 6
