"""
bbscred Client Subpackage.

This package provides the actors of the anonymous-credential flow: the
issuer that signs identity attributes, the holder that derives
selective-disclosure presentations, and the verifier that checks them.
"""

from .base_client import BaseClient
from .store import CredentialStore
from .issuer import CredentialIssuer, ATTRIBUTE_LABELS
from .holder import CredentialHolder
from .verifier import PresentationVerifier
from ..errors import (
    BBSCredError,
    CredentialError,
    IssuerNotInitializedError,
    NotFoundError,
    CredentialNotFound,
)

__all__ = [
    "BaseClient",
    "CredentialStore",
    "CredentialIssuer",
    "ATTRIBUTE_LABELS",
    "CredentialHolder",
    "PresentationVerifier",
    "BBSCredError",
    "CredentialError",
    "IssuerNotInitializedError",
    "NotFoundError",
    "CredentialNotFound",
]
