"""
Runtime support for generated error enums.

Generated modules import ``join_errors`` from here, and use ``new_error`` as
the construction function unless another one is configured.

Usage:
    from myapp.errors_errors import TestError

    raise TestError.TEST_ERROR_INVALID_FIELD_TEST1.join(exc)

    err = find_error_code(caught, TestError)
    if err is not None:
        respond(err.get_status(), err.error())
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class ErrorCode(Protocol):
    """The accessors every generated error enum member provides."""

    def error(self) -> str: ...

    def get_code(self) -> int: ...

    def get_status(self) -> int: ...

    def get_message(self) -> str: ...


class StatusError(Exception):
    """
    Error carrying an HTTP-style status and a numeric code.

    Attributes:
        status: HTTP-style status
        code: Numeric error code
        message: Display message
        cause: Underlying error, also exposed as ``__cause__``
    """

    def __init__(
        self,
        status: int,
        code: int,
        message: str,
        cause: BaseException | None = None,
    ):
        self.status = status
        self.code = code
        self.message = message
        self.cause = cause
        super().__init__(message)
        self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"StatusError(status={self.status}, code={self.code}, message={self.message!r})"


class JoinedError(Exception):
    """Several errors combined into one, in the order they were given."""

    def __init__(self, errors: tuple[object, ...]):
        self.errors = errors
        super().__init__(*errors)

    def __str__(self) -> str:
        return "\n".join(str(err) for err in self.errors)

    def __iter__(self) -> Iterator[object]:
        return iter(self.errors)


def join_errors(*errors: object) -> JoinedError | None:
    """
    Combine errors into a JoinedError.

    ``None`` entries are dropped. Returns None when nothing is left.
    """
    kept = tuple(err for err in errors if err is not None)
    if not kept:
        return None
    return JoinedError(kept)


def new_error(status: int, code: int, message: str, cause: BaseException | None) -> StatusError:
    """Default construction function for generated join() and join_with_message()."""
    return StatusError(status, code, message, cause)


def find_error_code(err: object, kind: type[T]) -> T | None:
    """
    Find the first instance of ``kind`` in an error tree.

    Walks StatusError causes, ``__cause__`` chains and JoinedError members
    depth-first.

    Args:
        err: Error returned by a generated join() or raised from it
        kind: Class to look for, usually a generated error enum

    Returns:
        The first matching object, or None
    """
    stack: list[object] = [err]
    seen: set[int] = set()
    while stack:
        current = stack.pop()
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, kind):
            return current
        if isinstance(current, JoinedError):
            stack.extend(reversed(current.errors))
        elif isinstance(current, BaseException):
            stack.append(current.__cause__)
    return None
