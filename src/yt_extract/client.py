"""
HTTP transport for one extraction.

Each extraction owns its own requests.Session and cancellation event; nothing
here is shared between concurrent extractions.
"""
from __future__ import annotations

import json
import logging
import threading
from typing import Any, Callable

import requests

TRANSCRIPT_ENDPOINT = "https://www.youtube.com/youtubei/v1/get_transcript?prettyPrint=false"
NEXT_ENDPOINT = "https://www.youtube.com/youtubei/v1/next?prettyPrint=false"

CHUNK_SIZE = 64 * 1024

log = logging.getLogger("yt-extract")


def _declared_charset(resp: requests.Response) -> str | None:
    # requests reports ISO-8859-1 for any text/* response without a charset
    content_type = resp.headers.get("Content-Type") or ""
    if not isinstance(content_type, str) or "charset" not in content_type.lower():
        return None
    return resp.encoding


class ExtractionCancelled(Exception):
    """Raised when the caller's cancellation event fires mid-request."""


class InnertubeClient:
    def __init__(
        self,
        user_agent: str,
        cancel_event: threading.Event | None = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self.user_agent = user_agent
        self.cancel_event = cancel_event or threading.Event()
        self.session = session_factory()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def check_cancelled(self) -> None:
        if self.cancel_event.is_set():
            raise ExtractionCancelled("extraction cancelled")

    def get_text(self, url: str, timeout: float) -> str:
        """GET ``url`` with the desktop browser identity and return the body text."""
        self.check_cancelled()
        resp = self.session.get(
            url,
            headers={"User-Agent": self.user_agent},
            allow_redirects=True,
            timeout=timeout,
            stream=True,
        )
        body = self._read_body(resp)
        encoding = _declared_charset(resp) or "utf-8"
        try:
            return body.decode(encoding, errors="replace")
        except LookupError:
            log.warning("Unknown charset %r from %s, decoding as utf-8", encoding, url)
            return body.decode("utf-8", errors="replace")

    def post_json(self, url: str, payload: dict[str, Any], timeout: float) -> Any:
        """POST ``payload`` as JSON and decode the JSON response."""
        self.check_cancelled()
        resp = self.session.post(
            url,
            data=json.dumps(payload),
            headers={"Content-Type": "application/json", "User-Agent": self.user_agent},
            allow_redirects=True,
            timeout=timeout,
            stream=True,
        )
        return json.loads(self._read_body(resp))

    def close(self) -> None:
        self.session.close()

    def _read_body(self, resp: requests.Response) -> bytes:
        try:
            resp.raise_for_status()
            chunks = []
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                self.check_cancelled()
                if chunk:
                    chunks.append(chunk)
            log.debug("Read %d bytes from %s", sum(len(c) for c in chunks), resp.url)
            return b"".join(chunks)
        finally:
            resp.close()

    def __enter__(self) -> "InnertubeClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
