from __future__ import annotations

import itertools
import unittest

from seeder.context import SessionState
from seeder.decisions import KickReason, SeedReason, should_kick, should_seed
from seeder.page_parser import DEFAULT_UPDATERS, NOT_LOGGED_IN

SERVER = {"address": "https://example.test/servers/1", "name": "One"}


def make_session(*, servers: bool = True, seeding: bool = True,
                 logged_in: str = "SeedBot") -> SessionState:
    session = SessionState(
        {
            "username": "SeedBot",
            "seeding_enabled": seeding,
            "servers": [dict(SERVER)] if servers else [],
        },
        DEFAULT_UPDATERS,
    )
    session.current_logged_in_user = logged_in
    return session


class ShouldSeedTests(unittest.TestCase):
    def test_no_server_wins_over_everything(self) -> None:
        for seeding, user, running in itertools.product(
            (True, False), ("SeedBot", "other", NOT_LOGGED_IN), (True, False)
        ):
            session = make_session(servers=False, seeding=seeding, logged_in=user)
            result = should_seed(session, running)
            self.assertFalse(result.result)
            self.assertEqual(result.reason, SeedReason.NO_SERVER_DEFINED)

    def test_seeding_disabled_before_user_checks(self) -> None:
        for user in ("SeedBot", "other", NOT_LOGGED_IN):
            session = make_session(seeding=False, logged_in=user)
            ok, reason = should_seed(session, False)
            self.assertFalse(ok)
            self.assertEqual(reason, SeedReason.SEEDING_DISABLED)

    def test_not_logged_in(self) -> None:
        ok, reason = should_seed(make_session(logged_in=NOT_LOGGED_IN), False)
        self.assertFalse(ok)
        self.assertEqual(reason, SeedReason.NOT_LOGGED_IN)

    def test_incorrect_user(self) -> None:
        ok, reason = should_seed(make_session(logged_in="intruder"), False)
        self.assertFalse(ok)
        self.assertEqual(reason, SeedReason.INCORRECT_USER)

    def test_game_already_running(self) -> None:
        ok, reason = should_seed(make_session(), True)
        self.assertFalse(ok)
        self.assertEqual(reason, SeedReason.GAME_ALREADY_RUNNING)

    def test_seed_when_everything_lines_up(self) -> None:
        result = should_seed(make_session(logged_in="seedbot"), False)
        self.assertTrue(result)
        self.assertIsNone(result.reason)

    def test_decision_does_not_mutate_state(self) -> None:
        session = make_session()
        changes: list[str] = []
        session.subscribe("property_changed", lambda *args: changes.append(args[1]))
        should_seed(session, False)
        should_kick(session, True)
        self.assertEqual(changes, [])


class ShouldKickTests(unittest.TestCase):
    def test_game_not_running(self) -> None:
        ok, reason = should_kick(make_session(servers=False), False)
        self.assertFalse(ok)
        self.assertEqual(reason, KickReason.GAME_NOT_RUNNING)

    def test_no_server_defined(self) -> None:
        ok, reason = should_kick(make_session(servers=False), True)
        self.assertFalse(ok)
        self.assertEqual(reason, KickReason.NO_SERVER_DEFINED)

    def test_never_kicks(self) -> None:
        for servers, seeding, user, running in itertools.product(
            (True, False), (True, False),
            ("SeedBot", "other", NOT_LOGGED_IN), (True, False),
        ):
            session = make_session(servers=servers, seeding=seeding, logged_in=user)
            session.set_player_counts(64, 64)
            self.assertFalse(should_kick(session, running).result)
        ok, reason = should_kick(make_session(), True)
        self.assertFalse(ok)
        self.assertIsNone(reason)


if __name__ == "__main__":
    unittest.main()
