"""config_mgr.py - seeder settings (seeder_settings.json)"""

import copy
import json
import os
import sys

SETTINGS_FILE = "seeder_settings.json"

DEFAULT_SETTINGS = {
    "username": "",
    "hang_protection": None,
    "seeding_enabled": True,
    "auto_minimize": False,
    "process_name": "bf4",
    "refresh_interval": 60,
    "current_server_index": 0,
    "servers": [],
}


def _find_base() -> str:
    if getattr(sys, 'frozen', False):
        return os.path.dirname(sys.executable)
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _check_servers(servers) -> None:
    if not isinstance(servers, list):
        raise ValueError("servers must be a list")
    for entry in servers:
        if not isinstance(entry, dict) or not entry.get("address"):
            raise ValueError(f"server entry without address: {entry!r}")


INT_FIELDS = ["refresh_interval", "current_server_index"]


def _check_ints(settings: dict) -> None:
    for name in INT_FIELDS:
        value = settings[name]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{name} must be an integer, got {value!r}")
    if settings["refresh_interval"] < 1:
        raise ValueError("refresh_interval must be at least 1 second")


def load_settings(base: str = None) -> dict:
    if base is None:
        base = _find_base()
    path = os.path.join(base, SETTINGS_FILE)
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    if not os.path.exists(path):
        return settings
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"{SETTINGS_FILE} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{SETTINGS_FILE} must contain an object")
    settings.update(data)
    _check_servers(settings["servers"])
    _check_ints(settings)
    return settings


def save_settings(settings: dict, base: str = None) -> str:
    if base is None:
        base = _find_base()
    _check_servers(settings.get("servers", []))
    path = os.path.join(base, SETTINGS_FILE)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2, ensure_ascii=False)
    return path


def snapshot_settings(session) -> dict:
    return {
        "username": session.username,
        "hang_protection": session.hang_protection_enabled,
        "seeding_enabled": session.seeding_enabled,
        "auto_minimize": session.auto_minimize_enabled,
        "process_name": session.process_name,
        "refresh_interval": session.refresh_interval,
        "current_server_index": session.current_server_index,
        "servers": session.servers.to_list(),
    }
