"""
Server record model.

Mirrors the JSON shape served by the open.mp server list and stored in the
favorites file. Short keys (ip, hn, pc, ...) are the wire format.
"""

from dataclasses import dataclass, asdict, replace
from typing import Dict, Any, Optional, Tuple


# Python attribute -> wire key
FIELD_KEYS = {
    "address": "ip",
    "hostname": "hn",
    "players": "pc",
    "max_players": "pm",
    "gamemode": "gm",
    "language": "la",
    "password": "pa",
    "version": "vn",
}

MUTABLE_FIELDS = ("hostname", "players", "max_players", "gamemode",
                  "language", "password", "version")


def _optional(data: Dict[str, Any], key: str, expected: type) -> Any:
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass; never accept it as a player count
    if expected is int and isinstance(value, bool):
        raise ValueError(f"Field '{key}' must be {expected.__name__}, got bool")
    if not isinstance(value, expected):
        raise ValueError(f"Field '{key}' must be {expected.__name__}, got {type(value).__name__}")
    return value


@dataclass
class ServerRecord:
    """A single game server. Identity is the address string."""
    address: str
    hostname: str = ""
    players: Optional[int] = None
    max_players: Optional[int] = None
    gamemode: Optional[str] = None
    language: Optional[str] = None
    password: Optional[bool] = None
    version: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServerRecord":
        """
        Build a record from the wire/file representation.

        Args:
            data: Mapping using the short JSON keys

        Returns:
            New ServerRecord

        Raises:
            ValueError: if the address is missing or a field has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"Server entry must be an object, got {type(data).__name__}")

        address = data.get("ip")
        if not isinstance(address, str) or not address:
            raise ValueError("Server entry has no address ('ip')")

        return cls(
            address=address,
            hostname=_optional(data, "hn", str) or "",
            players=_optional(data, "pc", int),
            max_players=_optional(data, "pm", int),
            gamemode=_optional(data, "gm", str),
            language=_optional(data, "la", str),
            password=_optional(data, "pa", bool),
            version=_optional(data, "vn", str),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire/file representation."""
        return {FIELD_KEYS[name]: value for name, value in asdict(self).items()}

    def same_server(self, other: "ServerRecord") -> bool:
        """Two records describe the same server iff their addresses match."""
        return self.address == other.address

    def update_from(self, other: "ServerRecord"):
        """Overwrite mutable metadata in place from a fresher copy."""
        for name in MUTABLE_FIELDS:
            setattr(self, name, getattr(other, name))

    def copy(self) -> "ServerRecord":
        return replace(self)

    def host_port(self) -> Tuple[str, str]:
        """Split the address into host and port strings."""
        host, sep, port = self.address.rpartition(":")
        if not sep or not host or not port:
            raise ValueError(f"Address '{self.address}' has no port")
        return host, port

    def row_text(self) -> str:
        players = "" if self.players is None else self.players
        max_players = "" if self.max_players is None else self.max_players
        return f"[{players}/{max_players}] {self.hostname} ({self.gamemode or ''})"

    def favorite_text(self) -> str:
        return f"{self.hostname} ({self.gamemode or 'Unknown'})"
