"""
nucleus.resolver

Endpoint resolution.

Responsibilities:
- Turn a symbolic address into an ordered list of endpoints.
- Resolve "_"-prefixed addresses through DNS SRV records (dnspython).
- Keep whatever order the lookup returns; never re-sort.
"""

from __future__ import annotations

from typing import Any, Protocol

import dns.exception
import dns.resolver

from nucleus.errors import ResolutionError
from nucleus.observability.logging import discard_logger

SRV_PREFIX = "_"


class SrvLookup(Protocol):
    def __call__(self, name: str) -> list[str]:
        """Return `host:port` endpoints for the SRV record `name`, best first."""
        ...


class DnsSrvLookup:
    """
    SRV lookup backed by the system resolver configuration.

    Records are ordered by ascending priority, then by descending weight.
    """

    def __init__(self, *, resolver: dns.resolver.Resolver | None = None) -> None:
        self._resolver = resolver

    def __call__(self, name: str) -> list[str]:
        try:
            resolver = self._resolver or dns.resolver.get_default_resolver()
            # search=True lets relative names such as "_nucleus" use the search domains.
            answer = resolver.resolve(name, "SRV", search=True)
        except dns.exception.DNSException as e:
            raise ResolutionError(f"can't resolve SRV record {name}", cause=e) from e

        records = sorted(answer, key=lambda r: (r.priority, -r.weight))
        return [f"{r.target.to_text(omit_final_dot=True)}:{r.port}" for r in records]


class EndpointResolver:
    def __init__(self, lookup: SrvLookup | None = None) -> None:
        self._lookup: SrvLookup = lookup or DnsSrvLookup()

    def resolve(self, address: str, *, log: Any = None) -> list[str]:
        if not address.startswith(SRV_PREFIX):
            return [address]

        log = log or discard_logger()
        log.debug("resolving SRV record", record=address)

        endpoints = list(self._lookup(address))
        if not endpoints:
            raise ResolutionError(f"SRV record {address} has no endpoints")

        log.debug("SRV record resolved", record=address, endpoints=endpoints)
        return endpoints


# --- Module Notes -----------------------------------------------------------
# Resolution runs once per retry round, so DNS changes are picked up between rounds.
