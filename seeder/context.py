"""context.py - live seeding session state and the page update pipeline"""

from dataclasses import dataclass
from enum import Enum

from seeder.events import Observable
from seeder.page_parser import NOT_LOGGED_IN
from seeder.servers import Server, ServerList

REQUIRED_SETTINGS = ["username", "servers"]


def _setting_int(settings: dict, name: str, default: int) -> int:
    value = settings.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"setting {name} must be an integer, got {value!r}")
    return value


class UserStatus(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    NONE = "none"


@dataclass(frozen=True)
class PlayerStatus:
    username: str | None = None
    current_server_id: str | None = None


class SessionState(Observable):
    """Single session, mutated from the control thread only.

    Events:
        property_changed(sender, name, value)
        context_updated()              once per update_status call
        status_updated(PlayerStatus)   after a remote status is applied
    """

    def __init__(self, settings: dict, updaters):
        if settings is None:
            raise ValueError("settings is required")
        if updaters is None:
            raise ValueError("updaters is required")
        missing = [k for k in REQUIRED_SETTINGS if k not in settings]
        if missing:
            raise ValueError(f"settings missing fields: {', '.join(missing)}")
        super().__init__()
        self._updaters = tuple(updaters)

        self._current_players: int | None = None
        self._server_max_players: int | None = None
        self._current_logged_in_user = NOT_LOGGED_IN
        self._current_server_id: str | None = None
        self._profile_username: str | None = None

        self._username = settings["username"] or ""
        self._hang_protection_enabled = settings.get("hang_protection")
        self._seeding_enabled = bool(settings.get("seeding_enabled", False))
        self._auto_minimize_enabled = bool(settings.get("auto_minimize", False))
        self._process_name = settings.get("process_name", "")
        self._refresh_interval = max(1, _setting_int(settings, "refresh_interval", 60))
        self._current_server_index = _setting_int(settings, "current_server_index", 0)
        self.servers = ServerList(
            Server.from_dict(s) for s in settings["servers"]
        )

    # -- observed facts --

    @property
    def current_players(self) -> int | None:
        return self._current_players

    @property
    def server_max_players(self) -> int | None:
        return self._server_max_players

    def set_player_counts(self, current: int | None, maximum: int | None) -> None:
        """Both counts come from one parse; they are never set apart."""
        if (current is None) != (maximum is None):
            raise ValueError("player counts must both be set or both be None")
        self._set_field("current_players", current)
        self._set_field("server_max_players", maximum)

    @property
    def current_logged_in_user(self) -> str:
        return self._current_logged_in_user

    @current_logged_in_user.setter
    def current_logged_in_user(self, value: str) -> None:
        self._set_field("current_logged_in_user", value or NOT_LOGGED_IN)

    @property
    def current_server_id(self) -> str | None:
        return self._current_server_id

    @property
    def profile_username(self) -> str | None:
        """Name the profile query resolved, as the profile page spells it."""
        return self._profile_username

    # -- user preferences --

    @property
    def username(self) -> str:
        return self._username

    @username.setter
    def username(self, value: str) -> None:
        self._set_field("username", value or "")

    @property
    def hang_protection_enabled(self) -> bool | None:
        return self._hang_protection_enabled

    @hang_protection_enabled.setter
    def hang_protection_enabled(self, value: bool | None) -> None:
        self._set_field("hang_protection_enabled", value)

    @property
    def seeding_enabled(self) -> bool:
        return self._seeding_enabled

    @seeding_enabled.setter
    def seeding_enabled(self, value: bool) -> None:
        self._set_field("seeding_enabled", bool(value))

    @property
    def auto_minimize_enabled(self) -> bool:
        return self._auto_minimize_enabled

    @auto_minimize_enabled.setter
    def auto_minimize_enabled(self, value: bool) -> None:
        self._set_field("auto_minimize_enabled", bool(value))

    @property
    def process_name(self) -> str:
        return self._process_name

    @process_name.setter
    def process_name(self, value: str) -> None:
        self._set_field("process_name", value)

    @property
    def refresh_interval(self) -> int:
        return self._refresh_interval

    @refresh_interval.setter
    def refresh_interval(self, value: int) -> None:
        self._set_field("refresh_interval", max(1, int(value)))

    # -- server selection --

    @property
    def current_server_index(self) -> int:
        index = self._current_server_index
        if index < 0 or not self.servers:
            index = 0
        elif index >= len(self.servers):
            index = len(self.servers) - 1
        self._current_server_index = index
        return index

    @current_server_index.setter
    def current_server_index(self, value: int) -> None:
        self._set_field("current_server_index", int(value))

    @property
    def current_server(self) -> Server | None:
        if not self.servers:
            return None
        return self.servers[self.current_server_index]

    # -- derived --

    @property
    def user_status(self) -> UserStatus:
        user = self._current_logged_in_user
        if user == NOT_LOGGED_IN:
            return UserStatus.NONE
        if user.casefold() == self._username.casefold():
            return UserStatus.CORRECT
        return UserStatus.INCORRECT

    # -- pipeline --

    def update_status(self, page_text: str) -> None:
        for updater in self._updaters:
            updater(self, page_text)
        self._publish("context_updated")

    def apply_player_status(self, status: PlayerStatus) -> None:
        self._set_field("profile_username", status.username)
        self._set_field("current_server_id", status.current_server_id)
        self._publish("status_updated", status)
