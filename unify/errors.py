"""Error taxonomy and exit code mapping for CLI."""

from __future__ import annotations


class UnifyError(Exception):
    """Base error for deterministic CLI exit codes."""

    exit_code: int = 1


class ValidationError(UnifyError):
    """Invalid user input, settings or command usage."""

    exit_code = 2


class RuntimeFailure(UnifyError):
    """Unexpected runtime failure."""

    exit_code = 1


class IOFailure(UnifyError):
    """Filesystem or I/O failure."""

    exit_code = 3


class UnresolvedKeys(UnifyError):
    """One or more lookup keys matched no indexed identifier."""

    exit_code = 4


def exit_code_for_exception(exc: BaseException) -> int:
    """Resolve a deterministic exit code for an exception."""
    if isinstance(exc, UnifyError):
        return exc.exit_code
    if isinstance(exc, OSError):
        return IOFailure.exit_code
    return RuntimeFailure.exit_code
