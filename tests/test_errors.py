"""
tests.test_errors

Rendering of single, nested and aggregated errors.
"""

from __future__ import annotations

import pytest

from nucleus.errors import (
    InvalidTokenError,
    MultipleErrors,
    NucleusError,
    ProtocolError,
    TransportError,
    render_tree,
)


def test_multiple_errors_renders_single_error_as_is() -> None:
    err = MultipleErrors([NucleusError("foo")])
    assert str(err) == "foo"


def test_multiple_errors_renders_tree_in_insertion_order() -> None:
    err = MultipleErrors([NucleusError("foo"), NucleusError("bar"), NucleusError("baz")])
    assert str(err) == "nucleus: multiple errors\n├─ foo\n├─ bar\n└─ baz"


def test_multiple_errors_requires_errors() -> None:
    with pytest.raises(ValueError):
        MultipleErrors([])


def test_multiple_errors_reports_contained_types() -> None:
    err = MultipleErrors([TransportError("a"), InvalidTokenError()])
    assert len(err) == 2
    assert err.has(InvalidTokenError)
    assert not err.has(ProtocolError)


def test_cause_is_rendered_as_nested_branch() -> None:
    cause = ConnectionRefusedError("connection refused")
    err = TransportError("host1: can't exec http request", cause=cause)

    assert str(err) == "host1: can't exec http request\n└─ connection refused"
    assert err.__cause__ is cause


def test_nested_multiline_errors_keep_tree_shape() -> None:
    first = TransportError("host1: can't exec http request", cause="refused")
    second = TransportError("host2: can't exec http request", cause="reset")

    assert str(MultipleErrors([first, second])) == (
        "nucleus: multiple errors\n"
        "├─ host1: can't exec http request\n"
        "│  └─ refused\n"
        "└─ host2: can't exec http request\n"
        "   └─ reset"
    )


def test_protocol_error_renders_body() -> None:
    err = ProtocolError(
        "h: can't unmarshal server response", host="h", body="<html>", cause="bad json"
    )
    assert str(err) == "h: can't unmarshal server response\n├─ bad json\n└─ response body: <html>"


def test_invalid_token_default_message() -> None:
    err = InvalidTokenError()
    assert str(err) == "token is invalid"
    assert err.code == "INVALID_TOKEN"


def test_render_tree_without_children_is_header() -> None:
    assert render_tree("only", []) == "only"


# --- Module Notes -----------------------------------------------------------
# The aggregate rendering is compared verbatim by downstream tooling; keep these exact.
