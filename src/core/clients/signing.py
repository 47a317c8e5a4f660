"""
Request Signing

AWS Signature Version 4 for calls to the AppSync data API, computed by hand
from the request bytes. The payload hash is taken over the exact bytes
that get sent, so callers must transmit the same ``body`` they signed.
"""

import hashlib
import hmac
from datetime import datetime, timezone
from typing import Dict, Mapping, Optional
from urllib.parse import urlsplit

from core.clients.credentials import Credentials

ALGORITHM = "AWS4-HMAC-SHA256"
SCOPE_TERMINATOR = "aws4_request"
DEFAULT_SERVICE = "appsync"


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _hmac(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()


def derive_signing_key(secret_key: str, date_stamp: str, region: str, service: str) -> bytes:
    """Derive the scoped signing key: secret -> date -> region -> service -> terminator."""
    k_date = _hmac(f"AWS4{secret_key}".encode("utf-8"), date_stamp)
    k_region = _hmac(k_date, region)
    k_service = _hmac(k_region, service)
    return _hmac(k_service, SCOPE_TERMINATOR)


def signed_header_names(headers: Mapping[str, str]) -> str:
    return ";".join(sorted(name.lower() for name in headers))


def canonical_request(
    method: str,
    path: str,
    headers: Mapping[str, str],
    payload_hash: str,
) -> str:
    """
    Build the canonical request string.

    The query string line is always empty: the data API is only ever
    called with a POST body.
    """
    lowered = {name.lower(): str(value).strip() for name, value in headers.items()}
    canonical_headers = "".join(f"{name}:{lowered[name]}\n" for name in sorted(lowered))
    return "\n".join([
        method.upper(),
        path or "/",
        "",
        canonical_headers,
        signed_header_names(lowered),
        payload_hash,
    ])


def credential_scope(date_stamp: str, region: str, service: str) -> str:
    return f"{date_stamp}/{region}/{service}/{SCOPE_TERMINATOR}"


def string_to_sign(amz_date: str, scope: str, canonical: str) -> str:
    return "\n".join([
        ALGORITHM,
        amz_date,
        scope,
        sha256_hex(canonical.encode("utf-8")),
    ])


def compute_signature(
    secret_key: str,
    amz_date: str,
    region: str,
    service: str,
    canonical: str,
) -> str:
    date_stamp = amz_date[:8]
    scope = credential_scope(date_stamp, region, service)
    key = derive_signing_key(secret_key, date_stamp, region, service)
    return hmac.new(
        key,
        string_to_sign(amz_date, scope, canonical).encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def format_amz_date(now: datetime) -> str:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def sign_request(
    credentials: Credentials,
    method: str,
    url: str,
    body: bytes,
    region: str,
    service: str = DEFAULT_SERVICE,
    now: Optional[datetime] = None,
) -> Dict[str, str]:
    """
    Sign a JSON request and return every header to send with it.

    Args:
        credentials: Credentials to sign with
        method: HTTP method
        url: Full request URL
        body: Exact request body bytes that will be transmitted
        region: Region of the target API
        service: Signing service name
        now: Signing time (defaults to current UTC time)

    Returns:
        Headers including ``authorization``
    """
    parts = urlsplit(url)
    amz_date = format_amz_date(now or datetime.now(timezone.utc))
    payload_hash = sha256_hex(body)

    headers = {
        "content-type": "application/json",
        "host": parts.netloc,
        "x-amz-content-sha256": payload_hash,
        "x-amz-date": amz_date,
    }
    if credentials.session_token:
        headers["x-amz-security-token"] = credentials.session_token

    canonical = canonical_request(method, parts.path, headers, payload_hash)
    signature = compute_signature(
        credentials.secret_key, amz_date, region, service, canonical
    )
    scope = credential_scope(amz_date[:8], region, service)
    signed_headers = signed_header_names(headers)

    headers["authorization"] = (
        f"{ALGORITHM} Credential={credentials.access_key}/{scope}, "
        f"SignedHeaders={signed_headers}, Signature={signature}"
    )
    return headers
