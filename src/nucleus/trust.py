"""
nucleus.trust

In-memory pool of trusted certificate authorities.

Responsibilities:
- Parse PEM certificate data (bytes, text or a file) with `cryptography`.
- Build the SSL context used to verify nucleus nodes.
"""

from __future__ import annotations

import ssl
from os import PathLike
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization

from nucleus.errors import CertificateError

_PEM_MARKER = b"-----BEGIN CERTIFICATE-----"


class TrustStore:
    def __init__(self) -> None:
        # SHA-256 fingerprint -> certificate; insertion ordered, duplicates collapse.
        self._certificates: dict[bytes, x509.Certificate] = {}

    def __len__(self) -> int:
        return len(self._certificates)

    def __repr__(self) -> str:
        return f"TrustStore(certificates={len(self)})"

    def subjects(self) -> list[str]:
        return [c.subject.rfc4514_string() for c in self._certificates.values()]

    def add_certificate(self, pem: bytes | str) -> None:
        """
        Decode every certificate in `pem` and add them to the pool.

        Either all certificates are added or, on any parse failure, none are.
        """

        data = pem.encode("ascii", errors="replace") if isinstance(pem, str) else bytes(pem)
        if _PEM_MARKER not in data:
            raise CertificateError("invalid certificate: PEM data is not found")

        try:
            certificates = x509.load_pem_x509_certificates(data)
        except ValueError as e:
            raise CertificateError("invalid certificate", cause=e) from e

        for certificate in certificates:
            self._certificates[certificate.fingerprint(hashes.SHA256())] = certificate

    def add_certificate_file(self, path: str | PathLike[str]) -> None:
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise CertificateError(f"can't read certificate file '{path}'", cause=e) from e
        self.add_certificate(data)

    def ssl_context(self, *, system_roots: bool = False) -> ssl.SSLContext:
        """
        Build a verifying client context trusting the pool (and, on request, the
        platform roots). An empty pool without system roots trusts nothing.
        """

        # Hostname checks and peer verification stay enabled in every case.
        ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        if system_roots:
            ctx.load_default_certs()
        if self._certificates:
            ctx.load_verify_locations(cadata=self.pem())
        return ctx

    def pem(self) -> str:
        return "".join(
            c.public_bytes(serialization.Encoding.PEM).decode("ascii")
            for c in self._certificates.values()
        )


# --- Module Notes -----------------------------------------------------------
# Nodes are expected to present certificates issued by a private CA, so the platform
# roots are opt-in (`Settings.trust_system_roots`).
