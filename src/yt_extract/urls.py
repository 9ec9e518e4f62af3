"""URL helpers: normalization, video ID parsing, thumbnails and timestamp links."""
from __future__ import annotations

import math
import re
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from .models import VideoReference

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"

# watch?v=, embed/, v/, e/, shorts/, live/, /<anything>/<anything>/ and youtu.be/
_VIDEO_URL_PREFIX = (
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?|shorts|live)/|.*[?&]v=)|youtu\.be/)"
)
_VIDEO_ID_RE = re.compile(_VIDEO_URL_PREFIX + r"([^\"&?/\s]{11})")
_VIDEO_URL_RE = re.compile(_VIDEO_URL_PREFIX)


def normalize_url(url: str) -> str:
    """Rewrite youtu.be short links to the canonical watch URL."""
    if "youtu.be/" in url:
        video_id = url.split("youtu.be/", 1)[1].split("?")[0].split("&")[0]
        return WATCH_URL.format(video_id=video_id)
    return url


def extract_video_id(url: str) -> str | None:
    match = _VIDEO_ID_RE.search(url or "")
    return match.group(1) if match else None


def is_video_url(url: str) -> bool:
    return bool(_VIDEO_URL_RE.search(url or ""))


def resolve_video(url: str) -> VideoReference:
    normalized = normalize_url(url)
    return VideoReference(video_id=extract_video_id(normalized), normalized_url=normalized)


def thumbnail_url(video_id: str | None) -> str | None:
    """
    Highest-resolution thumbnail for a video. The image host serves a
    lower-resolution variant when maxres does not exist; nothing is fetched here.
    """
    if not video_id:
        return None
    return THUMBNAIL_URL.format(video_id=video_id)


def timestamp_url(video_url: str, seconds: float) -> str:
    """Watch URL with ``t=<seconds>s`` set, replacing any existing ``t``."""
    parsed = urlparse(normalize_url(video_url))
    query = [(k, v) for k, v in parse_qsl(parsed.query, keep_blank_values=True) if k != "t"]
    query.append(("t", f"{math.floor(seconds)}s"))
    return urlunparse(parsed._replace(query=urlencode(query)))
