"""
YouTube Page Extractor
Extracts a video's timestamped transcript and a bounded set of comments by
replaying the watch page's own InnerTube calls:

  watch page HTML -> ytInitialData / ytInitialPlayerResponse / ytcfg
  -> get_transcript (params token from ytInitialData)
  -> next (comment continuation tokens, a few pages deep)

Every step is best effort. Only an unreachable watch page ends the
extraction early, and even then a valid (mostly empty) result is returned.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable

import requests

from .client import ExtractionCancelled, InnertubeClient
from .comments import CommentPaginator, find_comments_continuation
from .context import USER_AGENT, build_session_context
from .jsontree import safe_get
from .models import ExtractionResult, SessionContext, TranscriptSegment
from .scraper import ScrapedDocument, fetch_document
from .tags import normalize_and_filter_tags
from .transcript import TranscriptFetcher, find_transcript_params, process_segments
from .urls import resolve_video, thumbnail_url

log = logging.getLogger("yt-extract")


class YouTubePageExtractor:
    # Timeouts (seconds)
    DOCUMENT_TIMEOUT = 15
    TRANSCRIPT_TIMEOUT = 15
    COMMENT_PAGE_TIMEOUT = 8

    MAX_COMMENT_PAGES = 5

    def __init__(
        self,
        document_timeout: float | None = None,
        transcript_timeout: float | None = None,
        comment_page_timeout: float | None = None,
        max_comment_pages: int | None = None,
        user_agent: str = USER_AGENT,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        def pick(value, default):
            return default if value is None else value

        self.document_timeout = pick(document_timeout, self.DOCUMENT_TIMEOUT)
        self.transcript_timeout = pick(transcript_timeout, self.TRANSCRIPT_TIMEOUT)
        self.comment_page_timeout = pick(comment_page_timeout, self.COMMENT_PAGE_TIMEOUT)
        self.max_comment_pages = pick(max_comment_pages, self.MAX_COMMENT_PAGES)
        self.user_agent = user_agent
        self.session_factory = session_factory

        for name in ("document_timeout", "transcript_timeout", "comment_page_timeout"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.max_comment_pages < 0:
            raise ValueError("max_comment_pages must be >= 0")

    def extract(
        self, url: str, cancel_event: threading.Event | None = None
    ) -> ExtractionResult:
        """
        Extract transcript and comments for ``url``.

        Never raises for network, parse or cancellation conditions. Setting
        ``cancel_event`` stops the in-flight request at its next chunk and
        returns whatever was gathered up to that point.

        Cancellation is only checked before each request and between body
        chunks. A stalled connect or read is interrupted by its own timeout,
        so a cancel can take up to ``document_timeout`` or
        ``transcript_timeout`` (15 s by default) to take effect.
        """
        ref = resolve_video(url)
        thumb = thumbnail_url(ref.video_id)
        result = ExtractionResult(
            video_id=ref.video_id, video_url=ref.normalized_url, thumbnail_url=thumb
        )
        if not ref.video_id:
            log.info("Not a video URL, skipping extraction: %s", url)
            return result

        with InnertubeClient(
            self.user_agent, cancel_event=cancel_event, session_factory=self.session_factory
        ) as client:
            try:
                doc = fetch_document(client, ref.normalized_url, self.document_timeout)
            except ExtractionCancelled:
                log.info("Extraction cancelled before the watch page was read")
                return result
            except requests.RequestException as e:
                log.error("Could not fetch watch page %s: %s", ref.normalized_url, e)
                return result

            context = build_session_context(
                doc.ytcfg, doc.player_response, ref.normalized_url, self.user_agent
            )
            result = replace(result, tags=tuple(self._tags(doc, context)))

            transcript_text, segments = self._transcript(client, doc, context, ref.video_id)
            result = replace(result, transcript_text=transcript_text, segments=segments)
            if client.cancelled:
                return result

            seed = find_comments_continuation(doc.initial_data)
            if seed:
                log.debug("Found comment continuation token: %s", seed)
            comments = CommentPaginator(
                client, self.comment_page_timeout, self.max_comment_pages
            ).collect(context, seed)
            return replace(result, comments=tuple(comments))

    @staticmethod
    def _tags(doc: ScrapedDocument, context: SessionContext) -> list[str]:
        keywords = safe_get(doc.player_response, "videoDetails", "keywords", default=[])
        if not isinstance(keywords, list):
            return []
        language = str(context.client.get("hl") or "en").split("-")[0]
        return normalize_and_filter_tags([k for k in keywords if isinstance(k, str)], language)

    def _transcript(
        self,
        client: InnertubeClient,
        doc: ScrapedDocument,
        context: SessionContext,
        video_id: str,
    ) -> tuple[str, tuple[TranscriptSegment, ...]]:
        params = find_transcript_params(doc.initial_data)
        fetcher = TranscriptFetcher(client, self.transcript_timeout)
        try:
            raw = fetcher.fetch(context, params, doc.external_video_id or video_id)
        except ExtractionCancelled:
            log.info("Transcript request cancelled")
            return "", ()
        if raw is None:
            return "", ()
        text, segments = process_segments(raw)
        log.info("Processed %d transcript segments", len(segments))
        return text, tuple(segments)


def extract(url: str, cancel_event: threading.Event | None = None, **options) -> ExtractionResult:
    """Convenience wrapper around ``YouTubePageExtractor(**options).extract``."""
    return YouTubePageExtractor(**options).extract(url, cancel_event=cancel_event)
