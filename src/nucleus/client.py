"""
nucleus.client

Retry/failover orchestration.

Responsibilities:
- Resolve the configured address afresh on every round.
- Attempt every endpoint in order, up to `settings.retries` rounds.
- Short-circuit on success or on an invalid token; aggregate everything else.
"""

from __future__ import annotations

import httpx

from nucleus.attempt import Attempt, HttpAttempt
from nucleus.errors import InvalidTokenError, MultipleErrors, NucleusError, ResolutionError
from nucleus.models import FatalFailure, Identity, Success
from nucleus.resolver import EndpointResolver
from nucleus.settings import Settings, get_settings


class NucleusClient:
    """
    Authenticates tokens against nucleus nodes.

    `resolver`, `attempt` and `transport` are injection points; production code
    normally passes only `settings`.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        resolver: EndpointResolver | None = None,
        attempt: Attempt | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._resolver = resolver or EndpointResolver()
        self._attempt = attempt
        self._transport = transport

    def http_client(self) -> httpx.Client:
        # A fresh client per call picks up trust-store and timeout changes.
        settings = self._settings
        transport = self._transport or httpx.HTTPTransport(
            verify=settings.trust_store.ssl_context(system_roots=settings.trust_system_roots)
        )
        return httpx.Client(
            transport=transport,
            timeout=settings.http_timeout,
            follow_redirects=True,
        )

    def authenticate(self, token: str) -> Identity:
        settings = self._settings
        log = settings.logger
        attempt = self._attempt or HttpAttempt(
            user_agent=settings.user_agent, timeout=settings.http_timeout
        )

        errors: list[NucleusError] = []
        with self.http_client() as http:
            for _ in range(settings.retries):
                endpoints = self._resolver.resolve(settings.address, log=log)
                for endpoint in endpoints:
                    outcome = attempt(http, endpoint, token)
                    if isinstance(outcome, Success):
                        return outcome.identity

                    errors.append(outcome.error)
                    log.error(
                        "authentication attempt failed",
                        endpoint=endpoint,
                        error=outcome.error,
                    )
                    if isinstance(outcome, FatalFailure) and isinstance(
                        outcome.error, InvalidTokenError
                    ):
                        raise _aggregate(errors)

        if not errors:
            raise ResolutionError(f"{settings.address} resolved to no endpoints")
        raise _aggregate(errors)


def _aggregate(errors: list[NucleusError]) -> NucleusError:
    if len(errors) == 1:
        return errors[0]
    return MultipleErrors(errors)


def authenticate(token: str, *, settings: Settings | None = None) -> Identity:
    """
    Authenticate `token` using the process-wide settings (see `get_settings()`).
    """

    if settings is None:
        settings = get_settings()
    return NucleusClient(settings=settings).authenticate(token)


# --- Module Notes -----------------------------------------------------------
# Resolution errors propagate straight out of the loop: an unresolvable address
# aborts the call and discards failures collected in earlier rounds.
