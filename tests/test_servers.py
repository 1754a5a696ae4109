from __future__ import annotations

import unittest

from seeder.servers import Server, ServerList


class ServerListTests(unittest.TestCase):
    def setUp(self) -> None:
        self.events: list[tuple] = []
        self.servers = ServerList([Server("https://example.test/s/1", "One")])
        self.servers.subscribe(
            "server_changed",
            lambda server, name, value: self.events.append(("changed", server.name, name, value)),
        )
        self.servers.subscribe(
            "collection_changed",
            lambda action, items: self.events.append((action, [s.name for s in items])),
        )

    def test_member_edits_are_forwarded(self) -> None:
        self.servers[0].max_players = 32
        self.servers[0].max_players = 32
        self.assertEqual(self.events, [("changed", "One", "max_players", 32)])

    def test_added_servers_are_observed(self) -> None:
        added = Server("https://example.test/s/2", "Two")
        self.servers.append(added)
        added.min_players = 4
        self.assertEqual(self.events, [
            ("add", ["Two"]),
            ("changed", "Two", "min_players", 4),
        ])
        self.assertEqual([s.name for s in self.servers], ["One", "Two"])

    def test_removed_servers_are_no_longer_observed(self) -> None:
        first = self.servers[0]
        self.servers.remove(first)
        first.name = "Renamed"
        self.assertEqual(self.events, [("remove", ["One"])])
        self.assertFalse(self.servers)

    def test_insert_keeps_order(self) -> None:
        self.servers.insert(0, Server("https://example.test/s/0", "Zero"))
        self.assertEqual([s.name for s in self.servers], ["Zero", "One"])
        popped = self.servers.pop(0)
        self.assertEqual(popped.name, "Zero")

    def test_clear_detaches_everything(self) -> None:
        first = self.servers[0]
        self.servers.clear()
        first.min_players = 1
        self.assertEqual(self.events, [("remove", ["One"])])
        self.assertEqual(len(self.servers), 0)

    def test_dict_roundtrip_defaults_name_to_address(self) -> None:
        server = Server.from_dict({"address": "https://example.test/s/9"})
        self.assertEqual(server.name, "https://example.test/s/9")
        self.assertEqual(server.to_dict()["max_players"], 0)


if __name__ == "__main__":
    unittest.main()
