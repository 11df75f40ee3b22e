"""
nucleus

Client library for authenticating tokens against nucleus identity nodes.

Responsibilities:
- Expose package version metadata.
- Re-export the public surface: settings, client, identity and errors.
"""

from nucleus.client import NucleusClient, authenticate
from nucleus.errors import (
    CertificateError,
    ConfigurationError,
    InvalidTokenError,
    MultipleErrors,
    NucleusError,
    ProtocolError,
    ResolutionError,
    TransportError,
)
from nucleus.models import Identity
from nucleus.settings import Settings, get_settings, reset_settings
from nucleus.trust import TrustStore

__all__ = [
    "__version__",
    "CertificateError",
    "ConfigurationError",
    "Identity",
    "InvalidTokenError",
    "MultipleErrors",
    "NucleusClient",
    "NucleusError",
    "ProtocolError",
    "ResolutionError",
    "Settings",
    "TransportError",
    "TrustStore",
    "authenticate",
    "get_settings",
    "reset_settings",
]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Importing the package configures nothing: logging stays silent until the caller
# installs a logger on its Settings.
