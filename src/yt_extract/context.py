"""Builds the InnerTube request context from scraped page configuration."""
from __future__ import annotations

from typing import Any

from .models import SessionContext

# Emulated desktop web client
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"
OS_NAME = "Windows"
OS_VERSION = "10.0"
PLATFORM = "DESKTOP"
UTC_OFFSET_MINUTES = 330
USER_INTERFACE_THEME = "USER_INTERFACE_THEME_LIGHT"

# context.client field -> ytcfg key
YTCFG_FIELDS = (
    ("hl", "HL"),
    ("gl", "GL"),
    ("visitorData", "VISITOR_DATA"),
    ("clientName", "INNERTUBE_CONTEXT_CLIENT_NAME"),
    ("clientVersion", "INNERTUBE_CONTEXT_CLIENT_VERSION"),
)


def build_session_context(
    ytcfg: Any,
    player_response: Any,
    original_url: str,
    user_agent: str = USER_AGENT,
) -> SessionContext:
    """
    Map ytcfg values into ``context.client``. Keys absent from ytcfg are left
    out rather than guessed. The player response's ``responseContext`` is
    copied through untouched.
    """
    client: dict[str, Any] = {}
    cfg = ytcfg if isinstance(ytcfg, dict) else {}
    for field, key in YTCFG_FIELDS:
        value = cfg.get(key)
        if value is not None:
            client[field] = value

    client.update(
        userAgent=user_agent,
        osName=OS_NAME,
        osVersion=OS_VERSION,
        originalUrl=original_url,
        platform=PLATFORM,
        utcOffsetMinutes=UTC_OFFSET_MINUTES,
        userInterfaceTheme=USER_INTERFACE_THEME,
    )

    response_context = None
    if isinstance(player_response, dict) and player_response.get("responseContext"):
        response_context = player_response["responseContext"]

    return SessionContext(client=client, response_context=response_context)
