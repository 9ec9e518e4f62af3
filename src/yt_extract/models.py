"""Value types produced by an extraction."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class VideoReference:
    video_id: str | None
    normalized_url: str


@dataclass(frozen=True)
class SessionContext:
    """Request context echoed to every internal endpoint call."""

    client: dict[str, Any] = field(default_factory=dict)
    response_context: dict[str, Any] | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"client": dict(self.client)}
        if self.response_context is not None:
            payload["responseContext"] = self.response_context
        return payload


@dataclass(frozen=True)
class TranscriptSegment:
    text: str
    start_time: float
    duration: float
    formatted_time: str

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def link(self, video_url: str) -> str:
        """Watch URL that starts playback at this segment."""
        from .urls import timestamp_url

        return timestamp_url(video_url, self.start_time)

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "start_time": self.start_time,
            "duration": self.duration,
            "formatted_time": self.formatted_time,
        }


@dataclass(frozen=True)
class ExtractionResult:
    transcript_text: str = ""
    segments: tuple[TranscriptSegment, ...] = ()
    comments: tuple[str, ...] = ()
    video_id: str | None = None
    video_url: str = ""
    thumbnail_url: str | None = None
    tags: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "transcript_text": self.transcript_text,
            "segments": [s.to_dict() for s in self.segments],
            "comments": list(self.comments),
            "video_id": self.video_id,
            "video_url": self.video_url,
            "thumbnail_url": self.thumbnail_url,
            "tags": list(self.tags),
        }
