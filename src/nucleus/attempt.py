"""
nucleus.attempt

A single authentication attempt against one nucleus node.

Responsibilities:
- Normalize an endpoint into a host and build the identity-lookup request.
- Execute exactly one request and classify the result into an `AttemptOutcome`.

Retry decisions do not live here; see `nucleus.client`.
"""

from __future__ import annotations

import base64
import time
from collections.abc import Callable
from typing import Protocol

import httpx
from pydantic import ValidationError

from nucleus.errors import (
    ConfigurationError,
    InvalidTokenError,
    ProtocolError,
    TransportError,
)
from nucleus.models import AttemptOutcome, FatalFailure, Identity, RetryableFailure, Success
from nucleus.settings import DEFAULT_USER_AGENT

USER_PATH = "/api/v1/user"


class Attempt(Protocol):
    def __call__(self, http: httpx.Client, endpoint: str, token: str) -> AttemptOutcome: ...


def endpoint_host(endpoint: str) -> str:
    if "://" not in endpoint:
        return endpoint

    try:
        return httpx.URL(endpoint).netloc.decode("ascii")
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"can't parse URL '{endpoint}'", cause=e) from e


def basic_auth(username: str, password: str) -> str:
    credentials = f"{username}:{password}".encode()
    return "Basic " + base64.b64encode(credentials).decode("ascii")


def build_request(host: str, token: str, *, user_agent: str = DEFAULT_USER_AGENT) -> httpx.Request:
    try:
        return httpx.Request(
            "GET",
            f"https://{host}{USER_PATH}",
            headers={
                # Empty username, token as password.
                "Authorization": basic_auth("", token),
                "User-Agent": user_agent,
            },
        )
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"can't create new request to '{host}'", cause=e) from e


class HttpAttempt:
    """
    Production `Attempt`: one HTTPS GET to `/api/v1/user`.

    Outcome mapping:
    - 200 + decodable body -> Success
    - 401 -> FatalFailure(InvalidTokenError)
    - everything else -> RetryableFailure

    `timeout` (seconds, None for unbounded) is a single deadline for the whole
    attempt, body included; it is checked between body chunks while each blocking
    socket operation is bounded by the client's own per-phase timeout.
    """

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._user_agent = user_agent
        self._timeout = timeout
        self._clock = clock

    def __call__(self, http: httpx.Client, endpoint: str, token: str) -> AttemptOutcome:
        deadline = None if self._timeout is None else self._clock() + self._timeout
        try:
            host = endpoint_host(endpoint)
            request = build_request(host, token, user_agent=self._user_agent)
        except ConfigurationError as e:
            return RetryableFailure(e)

        try:
            response = http.send(request, stream=True)
        except httpx.RequestError as e:
            # Covers transport failures and redirect loops alike.
            return RetryableFailure(TransportError(f"{host}: can't exec http request", cause=e))

        try:
            return self._classify(host, response, deadline)
        finally:
            response.close()

    def _classify(
        self, host: str, response: httpx.Response, deadline: float | None
    ) -> AttemptOutcome:
        if response.status_code == httpx.codes.UNAUTHORIZED:
            return FatalFailure(InvalidTokenError())

        if response.status_code != httpx.codes.OK:
            return RetryableFailure(
                ProtocolError(
                    f"{host}: unexpected server status "
                    f"{response.status_code} {response.reason_phrase}",
                    host=host,
                    status_code=response.status_code,
                    status_text=response.reason_phrase,
                )
            )

        chunks: list[bytes] = []
        try:
            for chunk in response.iter_bytes():
                chunks.append(chunk)
                if deadline is not None and self._clock() > deadline:
                    return RetryableFailure(
                        TransportError(
                            f"{host}: can't exec http request",
                            cause=f"timeout of {self._timeout}s exceeded while reading response",
                        )
                    )
        except (httpx.HTTPError, httpx.StreamError) as e:
            return RetryableFailure(
                ProtocolError(f"{host}: can't read server response", host=host, cause=e)
            )

        body = b"".join(chunks).decode(response.charset_encoding or "utf-8", errors="replace")
        try:
            identity = Identity.model_validate_json(body)
        except ValidationError as e:
            return RetryableFailure(
                ProtocolError(
                    f"{host}: can't unmarshal server response",
                    host=host,
                    status_code=response.status_code,
                    body=body,
                    cause=e,
                )
            )

        return Success(identity)


# --- Module Notes -----------------------------------------------------------
# The response is opened in streaming mode so body-read failures can be told apart
# from failures to execute the request at all, and so the attempt deadline can be
# enforced while the body trickles in.
