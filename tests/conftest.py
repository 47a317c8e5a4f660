import itertools
import json
import re
import threading
from datetime import datetime, timezone

import httpx
import pytest

from core.clients.credentials import StaticCredentialProvider
from core.clients.graphql_client import SignedGraphQLClient
from core.clients.signing import canonical_request, compute_signature, sha256_hex
from core.config import DataApiSettings
from features.booking.service import BookingService

ENDPOINT = "https://abc123.appsync-api.us-east-1.amazonaws.com/graphql"
REGION = "us-east-1"
ACCESS_KEY = "AKIDEXAMPLE"
SECRET_KEY = "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY"
SESSION_TOKEN = "session-token-123"
FIXED_NOW = datetime(2026, 10, 17, 12, 30, 0, tzinfo=timezone.utc)

AUTH_RE = re.compile(
    r"^AWS4-HMAC-SHA256 Credential=(?P<key>[^/]+)/(?P<scope>[^,]+), "
    r"SignedHeaders=(?P<signed>[^,]+), Signature=(?P<sig>[0-9a-f]{64})$"
)
OPERATION_RE = re.compile(r"\b(listCompanies|listCustomers|createCustomer|updateCustomer|createTrip)\(")


def verify_signature(request: httpx.Request, secret_key: str) -> bool:
    """Recompute the signature from what was actually received."""
    match = AUTH_RE.match(request.headers.get("authorization", ""))
    if not match:
        return False
    _date, region, service, _term = match.group("scope").split("/")
    received_hash = sha256_hex(request.content)
    if request.headers.get("x-amz-content-sha256") != received_hash:
        return False
    names = match.group("signed").split(";")
    headers = {name: request.headers[name] for name in names}
    canonical = canonical_request(request.method, request.url.path, headers, received_hash)
    expected = compute_signature(
        secret_key, request.headers["x-amz-date"], region, service, canonical
    )
    return expected == match.group("sig")


class FakeDataApi:
    """In-memory stand-in for the AppSync data API."""

    def __init__(self, secret_key: str = SECRET_KEY):
        self.secret_key = secret_key
        self.companies = []
        self.customers = []
        self.trips = []
        self.operations = []
        self.failures = {}
        self.list_customers_barrier = None
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _new_id(self, prefix: str) -> str:
        with self._lock:
            return f"{prefix}-{next(self._ids)}"

    def add_company(self, **fields):
        company = {"id": self._new_id("company"), **fields}
        self.companies.append(company)
        return company

    def add_customer(self, **fields):
        customer = {"id": self._new_id("customer"), **fields}
        self.customers.append(customer)
        return customer

    @staticmethod
    def _matches(item, filter_):
        return all(item.get(field) == cond.get("eq") for field, cond in (filter_ or {}).items())

    def _page(self, rows, variables):
        start = int(variables.get("nextToken") or 0)
        limit = variables.get("limit") or 100
        page = rows[start:start + limit]
        end = start + limit
        return {
            "items": [dict(r) for r in page if self._matches(r, variables.get("filter"))],
            "nextToken": str(end) if end < len(rows) else None,
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        if not verify_signature(request, self.secret_key):
            return httpx.Response(403, json={"message": "signature mismatch"})

        payload = json.loads(request.content)
        operation = OPERATION_RE.search(payload["query"]).group(1)
        variables = payload.get("variables") or {}
        self.operations.append((operation, variables))

        if operation in self.failures:
            return httpx.Response(200, json={"data": {operation: None}, "errors": self.failures[operation]})

        if operation == "listCompanies":
            return httpx.Response(200, json={"data": {operation: self._page(self.companies, variables)}})

        if operation == "listCustomers":
            if self.list_customers_barrier is not None:
                self.list_customers_barrier.wait()
            return httpx.Response(200, json={"data": {operation: self._page(list(self.customers), variables)}})

        item = variables["input"]
        if operation == "createCustomer":
            created = self.add_customer(**item)
        elif operation == "updateCustomer":
            created = next(c for c in self.customers if c["id"] == item["id"])
            created.update(item)
        else:
            created = {"id": self._new_id("trip"), **item}
            self.trips.append(created)
        return httpx.Response(200, json={"data": {operation: {"id": created["id"]}}})

    def writes(self):
        return [op for op, _ in self.operations if not op.startswith("list")]


@pytest.fixture
def credentials_provider():
    return StaticCredentialProvider(ACCESS_KEY, SECRET_KEY, SESSION_TOKEN)


@pytest.fixture
def data_api():
    return FakeDataApi()


@pytest.fixture
def settings():
    return DataApiSettings(endpoint=ENDPOINT, region=REGION)


@pytest.fixture
def make_client(data_api, settings, credentials_provider):
    def _make():
        return SignedGraphQLClient(
            settings,
            credentials_provider,
            transport=httpx.MockTransport(data_api.handler),
            clock=lambda: FIXED_NOW,
        )
    return _make


@pytest.fixture
def booking_service(make_client):
    return BookingService(make_client())
