"""Transcript fetching via the get_transcript endpoint and segment processing."""
from __future__ import annotations

import logging
import math
from typing import Any

import requests

from .client import TRANSCRIPT_ENDPOINT, InnertubeClient
from .jsontree import find_key_with_path, safe_get
from .models import SessionContext, TranscriptSegment

log = logging.getLogger("yt-extract")

SEGMENT_LIST_PATH = (
    "actions", 0,
    "updateEngagementPanelAction", "content",
    "transcriptRenderer", "content",
    "transcriptSearchPanelRenderer", "body",
    "transcriptSegmentListRenderer", "initialSegments",
)


def format_time(seconds: float) -> str:
    """``h:mm:ss`` when there are hours, else ``m:ss``."""
    total = max(int(seconds), 0)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def find_transcript_params(initial_data: Any) -> str | None:
    """``params`` of the first getTranscriptEndpoint anywhere in ytInitialData."""
    found = find_key_with_path(initial_data, "getTranscriptEndpoint")
    if found is None:
        return None
    path, endpoint = found
    log.debug("getTranscriptEndpoint at %s", path)
    if isinstance(endpoint, dict) and isinstance(endpoint.get("params"), str):
        return endpoint["params"]
    return None


class TranscriptFetcher:
    def __init__(self, client: InnertubeClient, timeout: float) -> None:
        self.client = client
        self.timeout = timeout

    def fetch(
        self, context: SessionContext, params: str | None, video_id: str | None
    ) -> list[Any] | None:
        """
        Return the raw ``initialSegments`` list, or None when the video has no
        reachable transcript. Network and decode failures also yield None.
        """
        if not params:
            log.info("No transcript token on page; skipping transcript request")
            return None

        payload = {
            "context": context.to_payload(),
            "params": params,
            "externalVideoId": video_id,
        }
        try:
            data = self.client.post_json(TRANSCRIPT_ENDPOINT, payload, timeout=self.timeout)
        except (requests.RequestException, ValueError) as e:
            log.warning("Transcript request failed: %s", e)
            return None

        segments = safe_get(data, *SEGMENT_LIST_PATH)
        if not isinstance(segments, list):
            log.warning("Could not find transcript segments in the response")
            return None
        log.info("Transcript response has %d raw segments", len(segments))
        return segments


def _ms_to_seconds(value: Any) -> float:
    """Millisecond string to seconds; anything unparsable or non-finite is 0."""
    try:
        seconds = float(value) / 1000
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return seconds if math.isfinite(seconds) else 0.0


def process_segments(raw_segments: list[Any]) -> tuple[str, list[TranscriptSegment]]:
    """
    Turn raw ``transcriptSegmentRenderer`` entries into timed segments.

    Blank segments are dropped. Durations never go negative and start times
    never move backwards, so output is chronologically non-decreasing.
    """
    segments: list[TranscriptSegment] = []
    texts: list[str] = []
    last_start = 0.0

    for seg in raw_segments or []:
        renderer = safe_get(seg, "transcriptSegmentRenderer", default={})
        if not isinstance(renderer, dict):
            continue
        runs = safe_get(renderer, "snippet", "runs", default=[])
        if not isinstance(runs, list):
            runs = []
        text = "".join(
            str(run.get("text") or "") for run in runs if isinstance(run, dict)
        ).strip()
        if not text:
            continue

        start = max(_ms_to_seconds(renderer.get("startMs", "0")), last_start)
        end = _ms_to_seconds(renderer.get("endMs", "0"))
        duration = max(end - start, 0.0)
        last_start = start

        texts.append(text)
        segments.append(
            TranscriptSegment(
                text=text,
                start_time=start,
                duration=duration,
                formatted_time=format_time(start),
            )
        )

    return " ".join(texts), segments
