from datetime import datetime, timezone

import httpx

from conftest import ACCESS_KEY, ENDPOINT, REGION, SECRET_KEY, verify_signature
from core.clients.credentials import Credentials
from core.clients.signing import (
    canonical_request,
    compute_signature,
    derive_signing_key,
    format_amz_date,
    sha256_hex,
    sign_request,
)

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
NOW = datetime(2026, 10, 17, 8, 5, 9, tzinfo=timezone.utc)


def _signed_request(body: bytes, headers: dict) -> httpx.Request:
    return httpx.Request("POST", ENDPOINT, content=body, headers=headers)


def test_sha256_of_empty_body():
    assert sha256_hex(b"") == EMPTY_SHA256


def test_derive_signing_key_matches_published_example():
    key = derive_signing_key(SECRET_KEY, "20120215", "us-east-1", "iam")
    assert key.hex() == "f4780e2d9f65fa895f9c67b32ce1baf0b0d8a43505a000a1a9e090d414db404d"


def test_get_vanilla_signature():
    """Canonical 'get-vanilla' case from the SigV4 test suite."""
    canonical = canonical_request(
        "GET",
        "/",
        {"Host": "example.amazonaws.com", "X-Amz-Date": "20150830T123600Z"},
        EMPTY_SHA256,
    )
    assert canonical == (
        "GET\n/\n\n"
        "host:example.amazonaws.com\n"
        "x-amz-date:20150830T123600Z\n\n"
        "host;x-amz-date\n"
        + EMPTY_SHA256
    )
    signature = compute_signature(SECRET_KEY, "20150830T123600Z", "us-east-1", "service", canonical)
    assert signature == "5fa00fa31553b73ebf1942676e86291e8372ff2a2260956d9b8aae1d763fbf31"


def test_canonical_headers_are_sorted_lowercased_and_trimmed():
    canonical = canonical_request("post", "", {"X-B": "  two ", "a": "one"}, "hash")
    assert canonical.split("\n") == ["POST", "/", "", "a:one", "x-b:two", "", "a;x-b", "hash"]


def test_format_amz_date_treats_naive_as_utc():
    assert format_amz_date(datetime(2026, 1, 2, 3, 4, 5)) == "20260102T030405Z"


def test_sign_request_headers_and_authorization_layout():
    body = b'{"query":"q","variables":{}}'
    creds = Credentials(ACCESS_KEY, SECRET_KEY)
    headers = sign_request(creds, "POST", ENDPOINT, body, REGION, now=NOW)

    assert headers["host"] == "abc123.appsync-api.us-east-1.amazonaws.com"
    assert headers["content-type"] == "application/json"
    assert headers["x-amz-date"] == "20261017T080509Z"
    assert headers["x-amz-content-sha256"] == sha256_hex(body)
    assert "x-amz-security-token" not in headers
    assert headers["authorization"].startswith(
        f"AWS4-HMAC-SHA256 Credential={ACCESS_KEY}/20261017/us-east-1/appsync/aws4_request, "
        "SignedHeaders=content-type;host;x-amz-content-sha256;x-amz-date, Signature="
    )


def test_session_token_is_sent_and_signed():
    creds = Credentials(ACCESS_KEY, SECRET_KEY, "token-abc")
    headers = sign_request(creds, "POST", ENDPOINT, b"{}", REGION, now=NOW)

    assert headers["x-amz-security-token"] == "token-abc"
    assert "x-amz-security-token" in headers["authorization"].split("SignedHeaders=")[1].split(",")[0]


def test_signing_is_deterministic_for_fixed_time():
    creds = Credentials(ACCESS_KEY, SECRET_KEY)
    first = sign_request(creds, "POST", ENDPOINT, b"{}", REGION, now=NOW)
    second = sign_request(creds, "POST", ENDPOINT, b"{}", REGION, now=NOW)
    assert first == second


def test_untouched_body_verifies():
    body = b'{"query":"query { listCompanies { items { id } } }","variables":{}}'
    headers = sign_request(Credentials(ACCESS_KEY, SECRET_KEY), "POST", ENDPOINT, body, REGION, now=NOW)
    assert verify_signature(_signed_request(body, headers), SECRET_KEY)


def test_tampered_body_is_rejected():
    body = b'{"query":"mutation","variables":{"input":{"numberOfPassengers":1}}}'
    headers = sign_request(Credentials(ACCESS_KEY, SECRET_KEY), "POST", ENDPOINT, body, REGION, now=NOW)
    tampered = body.replace(b'"numberOfPassengers":1', b'"numberOfPassengers":9')
    assert not verify_signature(_signed_request(tampered, headers), SECRET_KEY)


def test_reserialized_body_is_rejected():
    # Same JSON document, different bytes: the hash covers bytes, not meaning
    body = b'{"query": "q", "variables": {}}'
    headers = sign_request(Credentials(ACCESS_KEY, SECRET_KEY), "POST", ENDPOINT, body, REGION, now=NOW)
    assert not verify_signature(_signed_request(b'{"query":"q","variables":{}}', headers), SECRET_KEY)


def test_wrong_secret_is_rejected():
    body = b"{}"
    headers = sign_request(Credentials(ACCESS_KEY, "other-secret"), "POST", ENDPOINT, body, REGION, now=NOW)
    assert not verify_signature(_signed_request(body, headers), SECRET_KEY)
