"""
nucleus.errors

Error taxonomy for authentication against nucleus nodes.

Responsibilities:
- Give every failure a stable code, a human message and an optional cause.
- Render causes and aggregated failures as an insertion-ordered tree.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

BRANCH = "├─ "
LAST_BRANCH = "└─ "
CONTINUATION = "│  "
LAST_CONTINUATION = "   "


def render_tree(header: str, children: Sequence[object]) -> str:
    """
    Render `header` followed by one branch per child.

    Children are rendered with `str()`; multi-line children keep their own tree
    shape by prefixing continuation lines under the branch they belong to.
    """

    lines = [header]
    for index, child in enumerate(children):
        last = index == len(children) - 1
        branch, continuation = (LAST_BRANCH, LAST_CONTINUATION) if last else (BRANCH, CONTINUATION)
        first, *rest = str(child).split("\n")
        lines.append(branch + first)
        lines.extend(continuation + line for line in rest)
    return "\n".join(lines)


class NucleusError(Exception):
    """Base class for all library errors."""

    code = "NUCLEUS_ERROR"

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.cause = cause
        self.details = details or {}
        super().__init__(message)
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return render_tree(self.message, [self.cause])


class ResolutionError(NucleusError):
    code = "RESOLUTION_ERROR"


class InvalidTokenError(NucleusError):
    """The token has been revoked or does not look like a nucleus token at all."""

    code = "INVALID_TOKEN"

    def __init__(self, message: str = "token is invalid", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class TransportError(NucleusError):
    code = "TRANSPORT_ERROR"


class ProtocolError(NucleusError):
    code = "PROTOCOL_ERROR"

    def __init__(
        self,
        message: str,
        *,
        host: str,
        status_code: int | None = None,
        status_text: str | None = None,
        body: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.host = host
        self.status_code = status_code
        self.status_text = status_text
        self.body = body

    def __str__(self) -> str:
        children: list[object] = [] if self.cause is None else [self.cause]
        if self.body is not None:
            children.append(f"response body: {self.body}")
        return render_tree(self.message, children) if children else self.message


class ConfigurationError(NucleusError):
    code = "CONFIGURATION_ERROR"


class CertificateError(NucleusError):
    code = "CERTIFICATE_ERROR"


class MultipleErrors(NucleusError):
    """
    A set of errors that occurred during operations with nucleus nodes.

    With a single nested error the rendering is that error's own message.
    """

    code = "MULTIPLE_ERRORS"
    header = "nucleus: multiple errors"

    def __init__(self, errors: Iterable[BaseException]) -> None:
        self.errors: tuple[BaseException, ...] = tuple(errors)
        if not self.errors:
            raise ValueError("MultipleErrors requires at least one error")
        super().__init__(self.header)

    def __str__(self) -> str:
        if len(self.errors) == 1:
            return str(self.errors[0])
        return render_tree(self.header, self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def has(self, error_type: type[BaseException]) -> bool:
        return any(isinstance(e, error_type) for e in self.errors)


# --- Module Notes -----------------------------------------------------------
# The multiple-errors rendering is user-visible output; callers and tests compare it
# byte-for-byte, so the branch glyphs above must not change.
