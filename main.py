"""Auto Seeder - server seeding watcher (GUI)"""

import os
import sys
import time
import threading
import subprocess
import platform

try:
    import pyperclip
except ImportError:
    pyperclip = None

import FreeSimpleGUI as sg

from seeder.config_mgr import (
    _find_base, load_settings, save_settings, snapshot_settings,
)
from seeder.context import SessionState
from seeder.decisions import should_kick, should_seed
from seeder.join_coordinator import JoinCoordinator
from seeder.page_parser import DEFAULT_UPDATERS, NOT_LOGGED_IN
from seeder.process_monitor import is_game_running, stop_game
from seeder.servers import Server
from seeder.status_mgr import fetch_page, get_player_status

# no automatic re-join while the game is still starting
JOIN_GRACE_SECONDS = 120

# --- theme ---
sg.theme("DarkBlue3")


# --- utilities ---

def _clipboard_copy(text: str) -> None:
    if pyperclip:
        try:
            pyperclip.copy(text)
        except Exception:
            pass


def _open_url(url: str) -> None:
    if platform.system() == "Windows":
        os.startfile(url)
    elif platform.system() == "Darwin":
        subprocess.Popen(["open", url])
    else:
        subprocess.Popen(["xdg-open", url])


def _to_int(text: str, default: int = 0) -> int:
    try:
        return int(str(text).strip())
    except ValueError:
        return default


# --- stdout -> GUI ---

class _GUIWriter:
    def __init__(self, window: sg.Window):
        self._window = window
        self._original = sys.stdout

    def write(self, text: str) -> None:
        if text.strip():
            try:
                self._window.write_event_value("-PRINT-", text)
            except Exception:
                pass
        if self._original:
            self._original.write(text)

    def flush(self) -> None:
        if self._original:
            self._original.flush()


# --- main layout ---

def _server_names(session: SessionState) -> list[str]:
    return [s.name for s in session.servers]


def _count_text(value: int | None) -> str:
    return "---" if value is None else str(value)


def _make_layout(session: SessionState) -> list:
    server = session.current_server
    names = _server_names(session)

    status_col = [
        [sg.Text("Server", size=(16, 1)),
         sg.Combo(names, default_value=server.name if server else "",
                  key="-SERVER-", size=(34, 1), readonly=True,
                  enable_events=True)],
        [sg.Text("Current Players:", size=(16, 1)),
         sg.Text("---", key="-CUR-PLAYERS-", size=(5, 1)),
         sg.Text("/"),
         sg.Text("---", key="-MAX-PLAYERS-", size=(5, 1))],
        [sg.Text("Current User:", size=(16, 1)),
         sg.Text(NOT_LOGGED_IN, key="-LOGGED-IN-", size=(30, 1))],
        [sg.Text("Seed status:", size=(16, 1)),
         sg.Text("---", key="-SEED-STATUS-", size=(30, 1))],
        [sg.Button("+ Add Server", key="-ADD-SERVER-", size=(14, 1)),
         sg.Button("Remove Server", key="-REMOVE-SERVER-", size=(14, 1),
                   button_color=("white", "firebrick"))],
    ]

    settings_col = [
        [sg.Text("Seeder Username", size=(18, 1)),
         sg.Input(session.username, key="-USERNAME-", size=(20, 1),
                  enable_events=True)],
        [sg.Text("Seeding Min Players:", size=(18, 1)),
         sg.Input(server.min_players if server else "", key="-MIN-PLAYERS-",
                  size=(6, 1), enable_events=True)],
        [sg.Text("Seeding Max Players:", size=(18, 1)),
         sg.Input(server.max_players if server else "", key="-MAX-SEED-",
                  size=(6, 1), enable_events=True)],
        [sg.Text("Refresh Interval:", size=(18, 1)),
         sg.Input(session.refresh_interval, key="-INTERVAL-", size=(6, 1),
                  enable_events=True)],
        [sg.Checkbox("Seeding Enabled", default=session.seeding_enabled,
                     key="-SEEDING-", enable_events=True)],
        [sg.Checkbox("Game Hang Protection",
                     default=bool(session.hang_protection_enabled),
                     key="-HANG-", enable_events=True)],
        [sg.Checkbox("Minimize Game On Join",
                     default=session.auto_minimize_enabled,
                     key="-MINIMIZE-", enable_events=True)],
    ]

    layout = [
        [sg.Text("Auto Seeder", font=("Helvetica", 18, "bold"))],
        [sg.HorizontalSeparator()],
        [sg.Column(status_col, vertical_alignment="top"),
         sg.VSeperator(),
         sg.Column(settings_col, vertical_alignment="top")],
        [sg.HorizontalSeparator()],
        [sg.Text("Log:", font=("Helvetica", 10, "bold"))],
        [sg.Multiline(size=(90, 10), key="-LOG-", autoscroll=True,
                      disabled=True, font=("Consolas", 9))],
        [sg.Button("Seed Now", key="-SEED-NOW-", size=(10, 1)),
         sg.Button("Refresh", key="-REFRESH-", size=(8, 1)),
         sg.Button("Stop Game", key="-STOP-GAME-", size=(10, 1)),
         sg.Button("Copy Address", key="-COPY-ADDRESS-", size=(12, 1)),
         sg.Button("Save Settings", key="-SAVE-", size=(12, 1)),
         sg.Push(),
         sg.Button("Exit", key="-EXIT-", size=(8, 1))],
    ]
    return layout


# --- log helper ---

def _log(window: sg.Window, msg: str) -> None:
    window["-LOG-"].update(msg + "\n", append=True)
    window.refresh()


# --- session -> widgets ---

_FIELD_WIDGETS = {
    "current_players": "-CUR-PLAYERS-",
    "server_max_players": "-MAX-PLAYERS-",
}


def _bind_session(window: sg.Window, session: SessionState) -> None:
    def on_property_changed(_sender, name, value):
        if name in _FIELD_WIDGETS:
            window[_FIELD_WIDGETS[name]].update(_count_text(value))
        elif name == "current_logged_in_user":
            window["-LOGGED-IN-"].update(value)

    def on_servers_changed(*_args):
        _update_server_panel(window, session)

    session.subscribe("property_changed", on_property_changed)
    session.servers.subscribe("collection_changed", on_servers_changed)


def _update_server_panel(window: sg.Window, session: SessionState) -> None:
    server = session.current_server
    window["-SERVER-"].update(
        value=server.name if server else "",
        values=_server_names(session),
    )
    window["-MIN-PLAYERS-"].update(server.min_players if server else "")
    window["-MAX-SEED-"].update(server.max_players if server else "")


# --- polling (background) ---

def _poll_thread(window: sg.Window, url: str) -> None:
    page = fetch_page(url)
    window.write_event_value("-PAGE-", page)


def _status_thread(window: sg.Window, logged_in_user: str) -> None:
    status = get_player_status(logged_in_user)
    window.write_event_value("-PLAYER-STATUS-", status)


# --- seed / kick ---

def _join(window: sg.Window, session: SessionState,
          coordinator: JoinCoordinator) -> None:
    server = session.current_server
    if server is None:
        sg.popup("No server configured.", title="Info")
        return
    _log(window, f"[join] Joining {server.name}...")
    _open_url(server.address)
    if coordinator.join_server():
        _log(window, "[join] Minimizing game window once it starts.")


def _evaluate(window: sg.Window, session: SessionState,
              coordinator: JoinCoordinator, last_join: float) -> float:
    game_running = is_game_running(session.process_name)
    seed = should_seed(session, game_running)
    kick = should_kick(session, game_running)

    if seed:
        window["-SEED-STATUS-"].update("Seeding")
        if time.time() - last_join >= JOIN_GRACE_SECONDS:
            _join(window, session, coordinator)
            last_join = time.time()
    else:
        window["-SEED-STATUS-"].update(seed.reason.value)

    if kick:
        _log(window, "[kick] Leaving server.")
        stop_game(session.process_name)
    return last_join


# --- main loop ---

def main():
    base = _find_base()

    try:
        settings = load_settings(base)
    except ValueError as e:
        sg.popup_error(f"Settings error:\n{e}", title="Startup Error")
        return

    session = SessionState(settings, DEFAULT_UPDATERS)
    coordinator = JoinCoordinator(session)

    window = sg.Window("Auto Seeder", _make_layout(session), finalize=True)
    _bind_session(window, session)

    sys.stdout = _GUIWriter(window)
    polling = False
    last_poll = 0.0
    last_join = 0.0

    while True:
        event, values = window.read(timeout=100)

        if event in (sg.WIN_CLOSED, "-EXIT-"):
            break

        # --- stdout log ---
        if event == "-PRINT-":
            _log(window, values["-PRINT-"])

        # --- periodic refresh ---
        due = time.time() - last_poll >= session.refresh_interval
        if (event == "-REFRESH-" or due) and not polling:
            server = session.current_server
            last_poll = time.time()
            if server is not None:
                polling = True
                threading.Thread(
                    target=_poll_thread, args=(window, server.address),
                    daemon=True,
                ).start()

        if event == "-PAGE-":
            polling = False
            page = values["-PAGE-"]
            if page is None:
                _log(window, "[refresh] Page fetch failed.")
                continue
            session.update_status(page)
            threading.Thread(
                target=_status_thread,
                args=(window, session.current_logged_in_user),
                daemon=True,
            ).start()
            last_join = _evaluate(window, session, coordinator, last_join)

        if event == "-PLAYER-STATUS-":
            status = values["-PLAYER-STATUS-"]
            session.apply_player_status(status)
            if status.current_server_id:
                who = status.username or session.current_logged_in_user
                _log(window, f"[status] {who} playing on "
                             f"{status.current_server_id}")

        # --- server selection ---
        if event == "-SERVER-":
            names = _server_names(session)
            if values["-SERVER-"] in names:
                session.current_server_index = names.index(values["-SERVER-"])
                _update_server_panel(window, session)
                last_poll = 0.0

        if event == "-ADD-SERVER-":
            address = sg.popup_get_text("Server page address:",
                                        title="Add Server")
            if address and address.strip():
                name = sg.popup_get_text("Server name:", title="Add Server")
                session.servers.append(
                    Server(address.strip(), (name or "").strip()))
                _log(window, f"[add] Server added: {address.strip()}")

        if event == "-REMOVE-SERVER-":
            server = session.current_server
            if server is None:
                sg.popup("No server selected.", title="Info")
                continue
            ans = sg.popup_yes_no(f"Remove server \"{server.name}\"?",
                                  title="Confirm Remove")
            if ans == "Yes":
                session.servers.remove(server)

        # --- settings edits ---
        if event == "-USERNAME-":
            session.username = values["-USERNAME-"].strip()

        if event in ("-MIN-PLAYERS-", "-MAX-SEED-"):
            server = session.current_server
            if server is not None:
                server.min_players = _to_int(values["-MIN-PLAYERS-"])
                server.max_players = _to_int(values["-MAX-SEED-"])

        if event == "-INTERVAL-":
            interval = _to_int(values["-INTERVAL-"])
            if interval > 0:
                session.refresh_interval = interval

        if event == "-SEEDING-":
            session.seeding_enabled = values["-SEEDING-"]

        if event == "-HANG-":
            session.hang_protection_enabled = values["-HANG-"]

        if event == "-MINIMIZE-":
            session.auto_minimize_enabled = values["-MINIMIZE-"]

        # --- actions ---
        if event == "-SEED-NOW-":
            _join(window, session, coordinator)
            last_join = time.time()

        if event == "-STOP-GAME-":
            if not stop_game(session.process_name):
                _log(window, "[process] Game is not running.")

        if event == "-COPY-ADDRESS-":
            server = session.current_server
            if server is not None:
                _clipboard_copy(server.address)
                _log(window, f"[copy] {server.address}")
            else:
                sg.popup("No server selected.", title="Info")

        if event == "-SAVE-":
            path = save_settings(snapshot_settings(session), base)
            _log(window, f"[settings] Saved to {path}")

    coordinator.cancel()
    sys.stdout = sys.__stdout__
    window.close()


if __name__ == "__main__":
    main()
