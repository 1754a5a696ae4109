"""status_mgr.py - remote page / player profile queries"""

from urllib.parse import quote

import requests

from seeder.context import PlayerStatus
from seeder.page_parser import NOT_LOGGED_IN, parse_profile_status

PROFILE_URL = "https://battlelog.battlefield.com/bf4/user/{username}/"
HEADERS = {
    "user-agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
                  "Gecko/20100101 Firefox/128.0",
}


def _get_text(url: str, timeout: float = 15) -> str | None:
    try:
        resp = requests.get(url, headers=HEADERS, timeout=timeout)
        resp.raise_for_status()
        return resp.text
    except requests.RequestException as e:
        print(f"[error] GET failed ({url}): {e}")
        return None


def fetch_page(url: str, timeout: float = 15) -> str | None:
    if not url:
        return None
    return _get_text(url, timeout)


def get_player_status(logged_in_user: str, timeout: float = 15) -> PlayerStatus:
    """Identity and current server of the logged-in user.

    Every failure (not logged in, network, unparsable reply) is an empty status.
    """
    if not logged_in_user or logged_in_user == NOT_LOGGED_IN:
        return PlayerStatus()
    text = _get_text(PROFILE_URL.format(username=quote(logged_in_user)), timeout)
    if text is None:
        return PlayerStatus()
    username, server_id = parse_profile_status(text)
    return PlayerStatus(username=username, current_server_id=server_id)
