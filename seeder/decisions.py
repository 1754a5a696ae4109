"""decisions.py - seed / kick rules over the current session"""

from enum import Enum

from seeder.context import SessionState, UserStatus
from seeder.result_reason import ResultReason, ok, refuse


class SeedReason(Enum):
    NO_SERVER_DEFINED = "no server defined"
    SEEDING_DISABLED = "seeding disabled"
    NOT_LOGGED_IN = "not logged in"
    INCORRECT_USER = "incorrect user"
    GAME_ALREADY_RUNNING = "game already running"


class KickReason(Enum):
    GAME_NOT_RUNNING = "game not running"
    NO_SERVER_DEFINED = "no server defined"


def should_seed(context: SessionState,
                game_running: bool) -> ResultReason[SeedReason]:
    if not context.servers:
        return refuse(SeedReason.NO_SERVER_DEFINED)
    if not context.seeding_enabled:
        return refuse(SeedReason.SEEDING_DISABLED)
    status = context.user_status
    if status == UserStatus.NONE:
        return refuse(SeedReason.NOT_LOGGED_IN)
    if status == UserStatus.INCORRECT:
        return refuse(SeedReason.INCORRECT_USER)
    if game_running:
        return refuse(SeedReason.GAME_ALREADY_RUNNING)
    return ok()


def should_kick(context: SessionState,
                game_running: bool) -> ResultReason[KickReason]:
    if not game_running:
        return refuse(KickReason.GAME_NOT_RUNNING)
    if not context.servers:
        return refuse(KickReason.NO_SERVER_DEFINED)
    # player-threshold kick rule is retired: never answers True
    return ResultReason(False)
