"""window_mgr.py - minimize the game window once it shows up"""

import ctypes
import sys
import threading

SW_MINIMIZE = 6


def _minimize_windows_of(pid: int) -> int:
    from ctypes import wintypes

    user32 = ctypes.windll.user32
    enum_proc = ctypes.WINFUNCTYPE(ctypes.c_bool, wintypes.HWND, ctypes.c_void_p)
    user32.EnumWindows.argtypes = [enum_proc, ctypes.c_void_p]
    user32.EnumWindows.restype = wintypes.BOOL
    user32.GetWindowThreadProcessId.argtypes = [wintypes.HWND, ctypes.POINTER(wintypes.DWORD)]
    user32.GetWindowThreadProcessId.restype = wintypes.DWORD
    user32.IsWindowVisible.argtypes = [wintypes.HWND]
    user32.IsWindowVisible.restype = wintypes.BOOL
    user32.ShowWindow.argtypes = [wintypes.HWND, ctypes.c_int]
    user32.ShowWindow.restype = wintypes.BOOL
    handles = []

    def _collect(hwnd, _lparam):
        owner = wintypes.DWORD()
        user32.GetWindowThreadProcessId(hwnd, ctypes.byref(owner))
        if owner.value == pid and user32.IsWindowVisible(hwnd):
            handles.append(hwnd)
        return True

    user32.EnumWindows(enum_proc(_collect), 0)
    for hwnd in handles:
        user32.ShowWindow(hwnd, SW_MINIMIZE)
    return len(handles)


def minimize_game_window(get_game, cancel_event: threading.Event,
                         poll_interval: float = 3.0) -> bool:
    """Wait for the game (re-read through `get_game`) and minimize it.

    Gives up as soon as `cancel_event` is set.
    """
    if sys.platform != "win32":
        print("[minimize] window minimize is only supported on Windows.")
        return False
    while not cancel_event.is_set():
        proc = get_game()
        if proc is not None and _minimize_windows_of(proc.pid):
            print(f"[minimize] game window minimized (PID: {proc.pid})")
            return True
        cancel_event.wait(poll_interval)
    print("[minimize] timed out waiting for the game window.")
    return False
