"""
Watch-page scraping.

Pulls the three JSON blobs the page embeds for its own bootstrapping:
ytInitialData, ytInitialPlayerResponse and the first ytcfg.set({...}) call.
Each blob is located independently; a blob that is missing or fails to
parse is None and never prevents the others from being read.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from .client import InnertubeClient

log = logging.getLogger("yt-extract")

# Only the assignment/call prefix is matched; the object body is isolated by
# brace counting since nested objects defeat a non-greedy regex.
INITIAL_DATA_RE = re.compile(r'(?:var\s+|window\["|)ytInitialData(?:"\])?\s*=\s*(?=\{)')
PLAYER_RESPONSE_RE = re.compile(
    r'(?:var\s+|window\["|)ytInitialPlayerResponse(?:"\])?\s*=\s*(?=\{)'
)
YTCFG_RE = re.compile(r"ytcfg\.set\(\s*(?=\{)")
VIDEO_ID_RE = re.compile(r'"videoId":"(.*?)"')

MAX_BLOB_CHARS = 5_000_000


@dataclass(frozen=True)
class ScrapedDocument:
    html: str
    initial_data: Any = None
    player_response: Any = None
    ytcfg: Any = None

    @property
    def external_video_id(self) -> str | None:
        """First ``"videoId"`` literal in the markup."""
        match = VIDEO_ID_RE.search(self.html)
        return match.group(1) if match else None


def balanced_object(source: str, start: int) -> str | None:
    """
    Return the ``{...}`` substring opening at ``start``, honoring JSON string
    escapes, or None when ``start`` is not ``{`` or the braces never close.
    """
    if start >= len(source) or source[start] != "{":
        return None

    depth = 0
    in_string = False
    escape = False
    limit = min(len(source), start + MAX_BLOB_CHARS)

    for i in range(start, limit):
        ch = source[i]
        if escape:
            escape = False
            continue
        if ch == "\\":
            if in_string:
                escape = True
            continue
        if ch == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return source[start : i + 1]
    return None


def extract_blob(html: str, pattern: re.Pattern[str], name: str) -> Any:
    """Locate ``pattern`` in ``html`` and parse the object that follows it."""
    match = pattern.search(html)
    if not match:
        log.debug("%s not found in page", name)
        return None
    text = balanced_object(html, match.end())
    if text is None:
        log.warning("%s has no balanced object body", name)
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        log.warning("Could not parse %s: %s", name, e)
        return None


def parse_document(html: str) -> ScrapedDocument:
    return ScrapedDocument(
        html=html,
        initial_data=extract_blob(html, INITIAL_DATA_RE, "ytInitialData"),
        player_response=extract_blob(html, PLAYER_RESPONSE_RE, "ytInitialPlayerResponse"),
        ytcfg=extract_blob(html, YTCFG_RE, "ytcfg"),
    )


def fetch_document(client: InnertubeClient, url: str, timeout: float) -> ScrapedDocument:
    """
    Fetch the watch page and scrape it. Network errors propagate; everything
    after the body is read degrades to None fields.
    """
    html = client.get_text(url, timeout=timeout)
    log.info("Fetched watch page (%d chars)", len(html))
    return parse_document(html)
