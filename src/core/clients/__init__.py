"""
Data API Clients

Outbound client for the tenant data API, plus the credential and signing
pieces it is built from.
"""

from core.clients.credentials import (
    BotoCredentialProvider,
    CredentialProvider,
    Credentials,
    StaticCredentialProvider,
)
from core.clients.graphql_client import SignedGraphQLClient

__all__ = [
    "BotoCredentialProvider",
    "CredentialProvider",
    "Credentials",
    "SignedGraphQLClient",
    "StaticCredentialProvider",
]
