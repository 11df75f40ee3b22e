"""
tests.conftest

Shared fixtures and test doubles.

Responsibilities:
- Isolate every test from NUCLEUS_* environment variables and cached settings.
- Provide a static self-signed certificate, an in-memory SRV lookup and a
  recording logger.
"""

from __future__ import annotations

import os
from typing import Any

import pytest
import structlog

from nucleus.errors import ResolutionError
from nucleus.settings import Settings, reset_settings

CERTIFICATE = """-----BEGIN CERTIFICATE-----
MIIDXTCCAkWgAwIBAgIJAIpyMnhsVvD3MA0GCSqGSIb3DQEBCwUAMEUxCzAJBgNV
BAYTAkFVMRMwEQYDVQQIDApTb21lLVN0YXRlMSEwHwYDVQQKDBhJbnRlcm5ldCBX
aWRnaXRzIFB0eSBMdGQwHhcNMTYwNzI1MjAwNDU0WhcNNDMxMjEwMjAwNDU0WjBF
MQswCQYDVQQGEwJBVTETMBEGA1UECAwKU29tZS1TdGF0ZTEhMB8GA1UECgwYSW50
ZXJuZXQgV2lkZ2l0cyBQdHkgTHRkMIIBIjANBgkqhkiG9w0BAQEFAAOCAQ8AMIIB
CgKCAQEA3cQZAHsaixI9R06DseM4Qc/H4ldIpiYyu8+mNzU3h136fxdhw6nDFIcy
4Gcc8gf/tSxcILWIXRJOiqvlXKOEkevNe7x2xgQoPyXFWkeCOaVf1dj9u7XDoFZP
Nw0q6rN5FliUcc37yvubWFvr+z7hD3OFhwpiRUDwXF9TG8Z6PxZxmoyuj1DXE6V1
QxoICtTAq3FIh3Nd8laQKP+IELQaF5NDFe3dV8aDGLoSU5gJkZvRs6tAKW1doqZJ
yTxYj8tvcf99xONUzDtGB9W3KKspUq16cyU6n3LuqkUITkRYngC4CxlIzXzXMMgS
US9F4vhBmrtI92XHFZQjhndCOLRBEQIDAQABo1AwTjAdBgNVHQ4EFgQU+Z0D+e4Z
hoJSBbbS12BUBn6VD0owHwYDVR0jBBgwFoAU+Z0D+e4ZhoJSBbbS12BUBn6VD0ow
DAYDVR0TBAUwAwEB/zANBgkqhkiG9w0BAQsFAAOCAQEAyR75vWrJUWgz5zKGsAwv
iQA1NySPghhNu4WLSqwQ3R3QBuyT8YPOM+QGvlUGZAqDrl11Q8qhuVgXUtum3Ezh
aWI4zge4KqzY4xAGUdeMw84rRVAgc6R1i9hbYnI7akI4HhHa2tBJMXELwsRwnhJK
tWPlNORmekjzSv/HbsuZT3l86ARBwuzfnWYKKPhD/SoyQgzuFILzT11XQzC0CzSO
zHEeMmAYpPicwaMnEvAJrRpQTuk6CfCVBGeW1O7nRulab3zWWSSzmyst77HKllUG
aUHULe24P+v8VusC+oclINauaKm2b2k4ZyOuDcipw50MU59kyujn0KWNTgEBnhe2
ng==
-----END CERTIFICATE-----
"""


class FakeSrvLookup:
    def __init__(self, records: dict[str, list[str]]) -> None:
        self.records = records
        self.calls: list[str] = []

    def __call__(self, name: str) -> list[str]:
        self.calls.append(name)
        if name not in self.records:
            raise ResolutionError(f"can't resolve SRV record {name}")
        return list(self.records[name])


class RecordingLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def debug(self, event: str, **kw: Any) -> None:
        self.events.append(("debug", event, kw))

    def error(self, event: str, **kw: Any) -> None:
        self.events.append(("error", event, kw))

    def levels(self, level: str) -> list[tuple[str, dict[str, Any]]]:
        return [(event, kw) for lvl, event, kw in self.events if lvl == level]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch):
    for key in list(os.environ):
        if key.upper().startswith("NUCLEUS_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()
    structlog.reset_defaults()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def recorder() -> RecordingLogger:
    return RecordingLogger()


# --- Module Notes -----------------------------------------------------------
# CERTIFICATE is a throwaway self-signed CA used only as parseable PEM input.
