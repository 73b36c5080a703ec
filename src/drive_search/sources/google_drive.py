"""Google Drive v3 REST adapter.

Talks to the Drive ``files`` endpoints with the caller's OAuth access
token.  Only the two calls the pipeline needs are implemented::

    GET {base}/files?q=...&pageSize=...&fields=...   → candidate list
    GET {base}/files/{id}?alt=media                  → raw file body
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from drive_search.config import settings
from drive_search.errors import AuthError, ConfigurationError, DocumentSourceError
from drive_search.models import Credential, DocumentRef
from drive_search.sources.base import DocumentSourceBase

logger = logging.getLogger(__name__)

DRIVE_FILE_LINK = "https://drive.google.com/file/d/{id}/view"
_LIST_FIELDS = "nextPageToken, files(id, name, mimeType)"
# 403 reasons that mean the token itself cannot list files.
_CREDENTIAL_REASONS = frozenset({"authError", "insufficientPermissions"})


def build_mime_query(mime_types: list[str]) -> str:
    """Build a Drive ``q`` expression matching any of *mime_types*."""
    return " or ".join(f"mimeType='{mt}'" for mt in mime_types)


def _error_reasons(response: requests.Response) -> set[str]:
    """Collect ``error.errors[].reason`` values from a Drive error body."""
    try:
        body = response.json()
    except ValueError:
        return set()
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return set()
    return {e["reason"] for e in error.get("errors") or [] if isinstance(e, dict) and e.get("reason")}


class GoogleDriveSource(DocumentSourceBase):
    """Document source backed by the Google Drive API.

    Parameters
    ----------
    base_url:
        Drive API root, e.g. ``https://www.googleapis.com/drive/v3``.
    mime_types:
        Content types eligible for ingestion.
    page_size:
        Files requested per list call.
    max_documents:
        Upper bound on the number of listed files across all pages.
    timeout:
        Per-request timeout in seconds.
    session:
        Optional pre-built ``requests.Session`` (tests inject a mock).
    """

    def __init__(
        self,
        base_url: str = settings.drive_api_base_url,
        *,
        mime_types: list[str] | None = None,
        page_size: int = settings.drive_page_size,
        max_documents: int = settings.drive_max_documents,
        timeout: float = settings.request_timeout,
        session: requests.Session | None = None,
    ) -> None:
        if page_size < 1 or max_documents < 1:
            raise ConfigurationError("Drive page size and document cap must be at least 1")
        self._base_url = base_url.rstrip("/")
        self._mime_types = list(mime_types or settings.drive_mime_types)
        self._page_size = page_size
        self._max_documents = max_documents
        self._timeout = timeout
        self._session = session or requests.Session()

    # -- DocumentSourceBase overrides -----------------------------------------

    def list_documents(self, credential: Credential) -> list[DocumentRef]:
        refs: list[DocumentRef] = []
        page_token: str | None = None

        while True:
            params: dict[str, Any] = {
                "q": build_mime_query(self._mime_types),
                "pageSize": self._page_size,
                "fields": _LIST_FIELDS,
            }
            if page_token:
                params["pageToken"] = page_token

            payload = self._get(f"{self._base_url}/files", credential, params=params, listing=True).json()
            for entry in payload.get("files") or []:
                if len(refs) >= self._max_documents:
                    logger.info("Listing capped at %d documents", self._max_documents)
                    return refs
                ref = self._to_ref(entry)
                if ref is not None:
                    refs.append(ref)

            page_token = payload.get("nextPageToken")
            if not page_token or len(refs) >= self._max_documents:
                break

        logger.info("Listed %d candidate documents", len(refs))
        return refs

    def fetch_content(self, credential: Credential, document_id: str) -> str:
        response = self._get(
            f"{self._base_url}/files/{document_id}",
            credential,
            params={"alt": "media"},
        )
        # Without a charset requests falls back to ISO-8859-1; Drive text is UTF-8.
        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = "utf-8"
        return response.text

    # -- internals ------------------------------------------------------------

    def _get(
        self,
        url: str,
        credential: Credential,
        *,
        params: dict[str, Any] | None = None,
        listing: bool = False,
    ) -> requests.Response:
        """Issue one authorised GET.

        A 401 always means the credential was rejected.  A 403 is only
        treated that way while listing and when Drive reports an auth
        reason; otherwise it concerns a single file (download refused,
        quota, rate limit) and is a :class:`DocumentSourceError`.
        """
        try:
            response = self._session.get(
                url,
                params=params,
                headers=credential.authorization_header,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise DocumentSourceError(f"Drive request to {url} failed: {exc}") from exc

        if response.status_code == 401:
            raise AuthError("Drive rejected the credential")
        if response.status_code == 403:
            reasons = _error_reasons(response)
            if listing and reasons & _CREDENTIAL_REASONS:
                raise AuthError("Drive rejected the credential")
            raise DocumentSourceError(
                f"Drive refused {url} (403: {', '.join(sorted(reasons)) or 'forbidden'})"
            )
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise DocumentSourceError(
                f"Drive request to {url} failed with status {response.status_code}"
            ) from exc
        return response

    def _to_ref(self, entry: dict[str, Any]) -> DocumentRef | None:
        file_id = entry.get("id")
        if not file_id:
            logger.warning("Skipping Drive entry without id: %r", entry)
            return None
        mime_type = entry.get("mimeType", "")
        if mime_type and mime_type not in self._mime_types:
            logger.debug("Skipping %s with content type %s", file_id, mime_type)
            return None
        return DocumentRef(
            id=file_id,
            title=entry.get("name") or file_id,
            link=DRIVE_FILE_LINK.format(id=file_id),
            mime_type=mime_type,
        )
