"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use an injected httpx.AsyncClient so they do not block
the event loop and can be replaced by a mock transport in tests.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import httpx

from admin_console.infrastructure.firebase._rest_encoding import (
    decode_fields,
    encode_fields,
    parse_timestamp,
)
from admin_console.shared.utils.generators import generate_auto_id

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
DEFAULT_BASE_URL = "https://firestore.googleapis.com/v1"


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class FirestoreRequestError(Exception):
    """Firestore answered with an error status.

    ``status`` is the canonical gRPC status name (e.g. PERMISSION_DENIED)
    when the body carries one.
    """

    def __init__(self, status_code: int, status: str | None, message: str) -> None:
        super().__init__(f"Firestore request failed ({status_code} {status or ''}): {message}")
        self.status_code = status_code
        self.status = status
        self.message = message


class DocumentExistsError(FirestoreRequestError):
    """Raised when a create precondition fails because the document ID is taken."""


def _error_from_response(resp: httpx.Response) -> FirestoreRequestError:
    status = None
    message = resp.reason_phrase
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, list) and body:
        body = body[0]
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        status = body["error"].get("status")
        message = body["error"].get("message") or message
    if resp.status_code == 409 or status == "ALREADY_EXISTS":
        return DocumentExistsError(resp.status_code, status, message)
    return FirestoreRequestError(resp.status_code, status, message)


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
) -> dict | None:
    """Perform async HTTP request to Firestore REST API. 404 returns None."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method == "GET":
        resp = await client.get(url, headers=headers)
    elif method == "POST":
        resp = await client.post(url, headers=headers, json=body)
    else:
        raise ValueError(f"Unsupported method: {method!r}")
    if resp.status_code == 404:
        return None
    if resp.status_code not in (200, 204):
        raise _error_from_response(resp)
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class _ServerTimestamp:
    """Sentinel: field value is set by the server at commit time (REQUEST_TIME)."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True)
class WriteResult:
    """Result of a single committed write."""

    document_id: str
    update_time: datetime | None
    server_timestamps: dict[str, datetime]


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return self._path.rsplit("/", 1)[-1]

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        url = f"{self._client.base_url}/{self._client.document_root}/{self._path}"
        out = await _request_async(
            self._client._http, url, access_token=await self._client.get_token()
        )
        if out is None:
            return None
        return DocumentSnapshot(self.id, decode_fields(out.get("fields")))

    async def create(self, data: dict[str, Any]) -> WriteResult:
        """Create the document; DocumentExistsError if the ID is taken.

        Values equal to SERVER_TIMESTAMP are written by the server
        (field transform) and returned in ``server_timestamps``.
        """
        plain = {k: v for k, v in data.items() if v is not SERVER_TIMESTAMP}
        server_fields = [k for k, v in data.items() if v is SERVER_TIMESTAMP]
        write: dict[str, Any] = {
            "update": {
                "name": f"{self._client.document_root}/{self._path}",
                "fields": encode_fields(plain),
            },
            "currentDocument": {"exists": False},
        }
        if server_fields:
            write["updateTransforms"] = [
                {"fieldPath": name, "setToServerValue": "REQUEST_TIME"}
                for name in server_fields
            ]
        out = await self._client.commit([write])
        result = (out.get("writeResults") or [{}])[0]
        transforms = result.get("transformResults") or []
        timestamps = {
            name: parse_timestamp(value["timestampValue"])
            for name, value in zip(server_fields, transforms)
            if "timestampValue" in value
        }
        update_time = result.get("updateTime") or out.get("commitTime")
        return WriteResult(
            document_id=self.id,
            update_time=parse_timestamp(update_time) if update_time else None,
            server_timestamps=timestamps,
        )


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str | None = None) -> DocumentReference:
        """Reference a document; without an ID, a new auto ID is generated (like add())."""
        return DocumentReference(
            self._client, f"{self._path}/{document_id or generate_auto_id()}"
        )

    async def add(self, data: dict[str, Any]) -> WriteResult:
        """Create a document under a freshly generated auto ID."""
        return await self.document().create(data)


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin).

    ``credentials`` may be None when talking to the emulator. The HTTP
    client is owned by the caller (the app lifespan closes it).
    """

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.document_root = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client

    @property
    def project_id(self) -> str:
        return self._project_id

    async def get_token(self) -> str | None:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        if self._credentials is None:
            return None
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, collection_id)

    async def commit(self, writes: list[dict]) -> dict:
        """Apply writes atomically via documents:commit."""
        url = f"{self.base_url}/{self.document_root}:commit"
        out = await _request_async(
            self._http,
            url,
            method="POST",
            body={"writes": writes},
            access_token=await self.get_token(),
        )
        return out or {}
