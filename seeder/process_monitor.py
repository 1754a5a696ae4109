"""process_monitor.py - game process detection and shutdown"""

import psutil


def _normalize(name: str) -> str:
    name = (name or "").lower()
    if name.endswith(".exe"):
        name = name[:-4]
    return name


def find_game_processes(process_name: str) -> list[psutil.Process]:
    wanted = _normalize(process_name)
    if not wanted:
        return []
    found = []
    try:
        for proc in psutil.process_iter(["pid", "name"]):
            try:
                name = proc.info["name"]
                if name and _normalize(name) == wanted:
                    found.append(proc)
            except (psutil.NoSuchProcess, psutil.AccessDenied,
                    psutil.ZombieProcess):
                continue
    except Exception as e:
        print(f"[warning] process search error: {e}")
    return found


def find_game_process(process_name: str) -> psutil.Process | None:
    procs = find_game_processes(process_name)
    return procs[0] if procs else None


def is_game_running(process_name: str) -> bool:
    return bool(find_game_processes(process_name))


def stop_game(process_name: str) -> bool:
    """Terminate the first matching process; further instances are left alone."""
    proc = find_game_process(process_name)
    if proc is None:
        return False
    try:
        proc.terminate()
    except psutil.NoSuchProcess:
        return False
    except psutil.AccessDenied as e:
        print(f"[warning] cannot stop {process_name}: {e}")
        return False
    print(f"[process] {process_name} stopped (PID: {proc.pid})")
    return True
