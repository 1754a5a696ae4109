"""page_parser.py - status extraction from scraped server/profile pages"""

import json
import re

NOT_LOGGED_IN = "Not Logged In"

# slot "2" is the main game-mode slot of a server page
PLAYER_SLOTS_PATTERN = re.compile(
    r'"slots".*?"2":\{"current":(.*?),"max":(.*?)\}'
)
GLOBAL_CONTEXT_MARKER = re.compile(r"Surface\.globalContext\s*=\s*")

_decoder = json.JSONDecoder()


def _to_int(text: str) -> int:
    try:
        return int(text)
    except (TypeError, ValueError):
        return 0


def _dig(obj, *keys):
    for key in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


# -- player counts --

def parse_player_counts(page_text: str) -> tuple[int, int] | None:
    """Return (current, max) for slot 2, or None when the page has no slot data.

    Unparsable numbers come back as 0.
    """
    match = PLAYER_SLOTS_PATTERN.search(page_text or "")
    if not match:
        return None
    return _to_int(match.group(1)), _to_int(match.group(2))


# -- embedded global context --

def parse_global_context(text: str) -> dict | None:
    match = GLOBAL_CONTEXT_MARKER.search(text or "")
    if not match:
        return None
    try:
        payload, _ = _decoder.raw_decode(text, match.end())
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    return payload


def parse_logged_in_user(page_text: str) -> str:
    context = parse_global_context(page_text)
    username = _dig(context, "session", "user", "username")
    if not isinstance(username, str) or not username:
        return NOT_LOGGED_IN
    return username


def parse_profile_status(profile_text: str) -> tuple[str | None, str | None]:
    """Return (username, server_guid) from a profile page; either may be None."""
    context = parse_global_context(profile_text)
    if context is None:
        return None, None
    username = _dig(context, "profileCommon", "user", "username")
    server_id = _dig(context, "profileCommon", "user", "presence", "serverGuid")
    if not isinstance(username, str) or not username:
        username = None
    if server_id is not None:
        server_id = str(server_id) or None
    return username, server_id


# -- page updaters (run by SessionState.update_status) --

def update_player_counts(context, page_text: str) -> None:
    counts = parse_player_counts(page_text)
    if counts is None:
        context.set_player_counts(None, None)
        return
    context.set_player_counts(*counts)


def update_logged_in_user(context, page_text: str) -> None:
    context.current_logged_in_user = parse_logged_in_user(page_text)


DEFAULT_UPDATERS = (update_player_counts, update_logged_in_user)
