"""
Credential Providers

Supply the short-lived AWS credentials used to sign data API requests.
The signer only depends on the CredentialProvider interface, so tests can
pass fixed credentials while the Lambda runtime uses its execution role.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError

from core.errors.exceptions import CredentialsError


@dataclass(frozen=True)
class Credentials:
    access_key: str
    secret_key: str
    session_token: Optional[str] = None

    def __repr__(self) -> str:
        return f"Credentials(access_key={self.access_key!r}, secret_key=***)"


class CredentialProvider(ABC):
    """Returns credentials on demand."""

    @abstractmethod
    def get_credentials(self) -> Credentials:
        pass


class StaticCredentialProvider(CredentialProvider):
    """Always returns the same credentials."""

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        session_token: Optional[str] = None,
    ):
        self._credentials = Credentials(access_key, secret_key, session_token)

    def get_credentials(self) -> Credentials:
        return self._credentials


class BotoCredentialProvider(CredentialProvider):
    """
    Resolve credentials from the default botocore provider chain.

    In Lambda this picks up the execution role's credentials from the
    environment. botocore refreshes expiring credentials, so each call
    freezes whatever is current at that moment.
    """

    def __init__(self, session: Optional[boto3.session.Session] = None):
        self._session = session or boto3.session.Session()

    def get_credentials(self) -> Credentials:
        try:
            creds = self._session.get_credentials()
            frozen = creds.get_frozen_credentials() if creds is not None else None
        except BotoCoreError as e:
            raise CredentialsError(
                f"Failed to load AWS credentials: {type(e).__name__}"
            ) from e

        if frozen is None or not frozen.access_key or not frozen.secret_key:
            raise CredentialsError(
                "No AWS credentials available from the default provider chain"
            )

        return Credentials(
            access_key=frozen.access_key,
            secret_key=frozen.secret_key,
            session_token=frozen.token or None,
        )
