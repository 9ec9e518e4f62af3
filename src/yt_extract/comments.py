"""Comment collection by walking /next continuation tokens."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import requests

from .client import NEXT_ENDPOINT, ExtractionCancelled, InnertubeClient
from .jsontree import find_first, safe_get
from .models import SessionContext

log = logging.getLogger("yt-extract")

WATCH_NEXT_REQUEST = "CONTINUATION_REQUEST_TYPE_WATCH_NEXT"


def find_comments_continuation(initial_data: Any) -> str | None:
    """Token of the first WATCH_NEXT continuationCommand in ytInitialData."""

    def watch_next_token(node: dict) -> str | None:
        command = node.get("continuationCommand")
        if isinstance(command, dict) and command.get("request") == WATCH_NEXT_REQUEST:
            token = command.get("token")
            return token if isinstance(token, str) else None
        return None

    return find_first(initial_data, watch_next_token)


def extract_continuation_token(data: Any) -> str | None:
    """
    First continuation token in onResponseReceivedEndpoints. The first comment
    page carries it in reloadContinuationItemsCommand, later pages in
    appendContinuationItemsAction.

    Reading the append action goes beyond the reload command the first page
    is defined by. It is deliberate: without it a page that only carries an
    append token would end the walk after one page.
    """
    endpoints = safe_get(data, "onResponseReceivedEndpoints", default=[])
    if not isinstance(endpoints, list):
        return None
    for endpoint in endpoints:
        for command in ("reloadContinuationItemsCommand", "appendContinuationItemsAction"):
            items = safe_get(endpoint, command, "continuationItems")
            if not isinstance(items, list):
                continue
            for item in items:
                token = safe_get(
                    item,
                    "continuationItemRenderer", "continuationEndpoint",
                    "continuationCommand", "token",
                )
                if isinstance(token, str) and token:
                    return token
    return None


def extract_comment_texts(data: Any) -> list[str]:
    """Comment bodies from frameworkUpdates.entityBatchUpdate.mutations."""
    texts = []
    mutations = safe_get(data, "frameworkUpdates", "entityBatchUpdate", "mutations", default=[])
    if not isinstance(mutations, list):
        return texts
    for mutation in mutations:
        content = safe_get(
            mutation, "payload", "commentEntityPayload", "properties", "content", "content"
        )
        if isinstance(content, str) and content:
            texts.append(content)
    return texts


@dataclass
class ContinuationState:
    token: str | None
    seen: dict[str, None] = field(default_factory=dict)
    iteration: int = 0

    def add(self, comment: str) -> None:
        # dict keeps first-seen order
        self.seen.setdefault(comment, None)

    @property
    def comments(self) -> list[str]:
        return list(self.seen)


class CommentPaginator:
    """
    Follows continuation tokens until none is left, ``max_pages`` requests
    have been made, or a page fails. Whatever was collected before a failure
    is kept.
    """

    def __init__(self, client: InnertubeClient, timeout: float, max_pages: int = 5) -> None:
        self.client = client
        self.timeout = timeout
        self.max_pages = max_pages

    def collect(self, context: SessionContext, seed_token: str | None) -> list[str]:
        state = ContinuationState(token=seed_token)
        if not seed_token:
            log.info("No comment continuation token found")
            return []

        payload_context = context.to_payload()
        while state.token and state.iteration < self.max_pages:
            log.debug("Fetching comment page %d", state.iteration + 1)
            try:
                data = self.client.post_json(
                    NEXT_ENDPOINT,
                    {"context": payload_context, "continuation": state.token},
                    timeout=self.timeout,
                )
                for text in extract_comment_texts(data):
                    state.add(text)
                state.token = extract_continuation_token(data)
            except ExtractionCancelled:
                log.info("Comment pagination cancelled")
                break
            except (requests.RequestException, ValueError) as e:
                log.warning("Comment page request failed: %s", e)
                break
            except (AttributeError, TypeError) as e:
                log.warning("Could not extract more comments from continuation response: %s", e)
                break
            state.iteration += 1

        log.info(
            "Collected %d comments over %d pages", len(state.seen), state.iteration
        )
        return state.comments
