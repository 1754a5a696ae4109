"""servers.py - configured seeding servers and their observable list"""

from seeder.events import Observable


class Server(Observable):
    def __init__(self, address: str, name: str = "",
                 min_players: int = 0, max_players: int = 0):
        super().__init__()
        self._address = address
        self._name = name or address
        self._min_players = min_players
        self._max_players = max_players

    @property
    def address(self) -> str:
        return self._address

    @address.setter
    def address(self, value: str) -> None:
        self._set_field("address", value)

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._set_field("name", value)

    @property
    def min_players(self) -> int:
        return self._min_players

    @min_players.setter
    def min_players(self, value: int) -> None:
        self._set_field("min_players", value)

    @property
    def max_players(self) -> int:
        return self._max_players

    @max_players.setter
    def max_players(self, value: int) -> None:
        self._set_field("max_players", value)

    @classmethod
    def from_dict(cls, data: dict) -> "Server":
        return cls(
            address=data["address"],
            name=data.get("name", ""),
            min_players=int(data.get("min_players", 0) or 0),
            max_players=int(data.get("max_players", 0) or 0),
        )

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "name": self.name,
            "min_players": self.min_players,
            "max_players": self.max_players,
        }

    def __repr__(self) -> str:
        return f"Server({self.name!r}, {self.address!r})"


class ServerList(Observable):
    """Ordered servers; member edits are re-published as server_changed."""

    def __init__(self, servers=None):
        super().__init__()
        self._servers: list[Server] = []
        for server in servers or []:
            self._attach(server)
            self._servers.append(server)

    def __iter__(self):
        return iter(self._servers)

    def __len__(self):
        return len(self._servers)

    def __getitem__(self, index):
        return self._servers[index]

    def __bool__(self):
        return bool(self._servers)

    def _attach(self, server: Server) -> None:
        server.subscribe("property_changed", self._on_server_changed)

    def _detach(self, server: Server) -> None:
        server.unsubscribe("property_changed", self._on_server_changed)

    def _on_server_changed(self, server: Server, name: str, value) -> None:
        self._publish("server_changed", server, name, value)

    def append(self, server: Server) -> None:
        self._attach(server)
        self._servers.append(server)
        self._publish("collection_changed", "add", [server])

    def insert(self, index: int, server: Server) -> None:
        self._attach(server)
        self._servers.insert(index, server)
        self._publish("collection_changed", "add", [server])

    def remove(self, server: Server) -> None:
        self._servers.remove(server)
        self._detach(server)
        self._publish("collection_changed", "remove", [server])

    def pop(self, index: int = -1) -> Server:
        server = self._servers.pop(index)
        self._detach(server)
        self._publish("collection_changed", "remove", [server])
        return server

    def clear(self) -> None:
        removed = list(self._servers)
        for server in removed:
            self._detach(server)
        self._servers.clear()
        if removed:
            self._publish("collection_changed", "remove", removed)

    def to_list(self) -> list[dict]:
        return [s.to_dict() for s in self._servers]
