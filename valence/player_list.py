"""The player list (tab list)."""

from __future__ import annotations

import base64
import enum
import itertools
import uuid as uuid_module
import weakref
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, NamedTuple, Optional, Tuple, Union

from valence.player_textures import SignedPlayerTextures


class GameMode(enum.IntEnum):
    SURVIVAL = 0
    CREATIVE = 1
    ADVENTURE = 2
    SPECTATOR = 3


class _Property(NamedTuple):
    name: str
    value: str
    signature: Optional[str]


class _PlayerInfo(NamedTuple):
    uuid: uuid_module.UUID
    username: str
    properties: Tuple[_Property, ...]
    game_mode: GameMode
    ping: int
    display_name: Optional[str]


@dataclass(frozen=True)
class AddPlayer:
    """Adds players to a client's player list."""

    players: Tuple[_PlayerInfo, ...]


@dataclass(frozen=True)
class RemovePlayer:
    """Removes players from a client's player list."""

    uuids: Tuple[uuid_module.UUID, ...]


@dataclass(frozen=True)
class UpdateGameMode:
    changes: Tuple[Tuple[uuid_module.UUID, GameMode], ...]


@dataclass(frozen=True)
class UpdateLatency:
    changes: Tuple[Tuple[uuid_module.UUID, int], ...]


@dataclass(frozen=True)
class UpdateDisplayName:
    changes: Tuple[Tuple[uuid_module.UUID, Optional[str]], ...]


@dataclass(frozen=True)
class TabListHeaderFooter:
    header: str
    footer: str


Packet = Union[
    AddPlayer, RemovePlayer, UpdateGameMode, UpdateLatency, UpdateDisplayName, TabListHeaderFooter
]


class PlayerListEntry:
    """A player entry in a :class:`PlayerList`."""

    def __init__(
        self,
        username: str,
        textures: Optional[SignedPlayerTextures],
        game_mode: GameMode,
        ping: int,
        display_name: Optional[str],
    ) -> None:
        self._username = username
        self._textures = textures
        self._game_mode = game_mode
        self._ping = ping
        self._display_name = display_name
        self.created_this_tick = True
        self.modified_game_mode = False
        self.modified_ping = False
        self.modified_display_name = False

    def __repr__(self) -> str:
        return (
            f"PlayerListEntry(username={self._username!r}, game_mode={self._game_mode!r}, "
            f"ping={self._ping}, display_name={self._display_name!r})"
        )

    @property
    def username(self) -> str:
        return self._username

    @property
    def textures(self) -> Optional[SignedPlayerTextures]:
        return self._textures

    @property
    def game_mode(self) -> GameMode:
        return self._game_mode

    @game_mode.setter
    def game_mode(self, game_mode: GameMode) -> None:
        if self._game_mode != game_mode:
            self._game_mode = game_mode
            self.modified_game_mode = True

    @property
    def ping(self) -> int:
        """Latency in milliseconds."""
        return self._ping

    @ping.setter
    def ping(self, ping: int) -> None:
        if self._ping != ping:
            self._ping = ping
            self.modified_ping = True

    @property
    def display_name(self) -> Optional[str]:
        return self._display_name

    @display_name.setter
    def display_name(self, display_name: Optional[str]) -> None:
        if self._display_name != display_name:
            self._display_name = display_name
            self.modified_display_name = True

    def _reset_flags(self) -> None:
        self.created_this_tick = False
        self.modified_game_mode = False
        self.modified_ping = False
        self.modified_display_name = False

    def _info(self, uuid: uuid_module.UUID) -> _PlayerInfo:
        properties: Tuple[_Property, ...] = ()
        if self._textures is not None:
            properties = (
                _Property(
                    "textures",
                    base64.b64encode(self._textures.payload).decode("ascii"),
                    base64.b64encode(self._textures.signature).decode("ascii"),
                ),
            )
        return _PlayerInfo(
            uuid, self._username, properties, self._game_mode, self._ping, self._display_name
        )


class PlayerList:
    """The list of players shown by pressing the tab key, with a header and footer."""

    def __init__(self, state: Any = None) -> None:
        self.state = state
        self._entries: Dict[uuid_module.UUID, PlayerListEntry] = {}
        self._removed: Dict[uuid_module.UUID, None] = {}
        self._header = ""
        self._footer = ""
        self._modified_header_or_footer = False

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, uuid: object) -> bool:
        return uuid in self._entries

    def __getitem__(self, uuid: uuid_module.UUID) -> PlayerListEntry:
        return self._entries[uuid]

    def insert(
        self,
        uuid: uuid_module.UUID,
        username: str,
        textures: Optional[SignedPlayerTextures] = None,
        game_mode: GameMode = GameMode.SURVIVAL,
        ping: int = 0,
        display_name: Optional[str] = None,
    ) -> bool:
        """Insert a player; returns ``False`` if an entry with the UUID was overwritten."""
        existing = self._entries.get(uuid)
        if existing is None:
            self._entries[uuid] = PlayerListEntry(username, textures, game_mode, ping, display_name)
            return True
        if existing.username != username or existing.textures != textures:
            self._removed[uuid] = None
            self._entries[uuid] = PlayerListEntry(username, textures, game_mode, ping, display_name)
        else:
            existing.game_mode = game_mode
            existing.ping = ping
            existing.display_name = display_name
        return False

    def remove(self, uuid: uuid_module.UUID) -> bool:
        """Remove the entry with the UUID; returns whether it was present."""
        if self._entries.pop(uuid, None) is None:
            return False
        self._removed[uuid] = None
        return True

    def retain(self, predicate: Callable[[uuid_module.UUID, PlayerListEntry], bool]) -> None:
        """Remove every entry for which ``predicate`` returns false."""
        for uuid, entry in list(self._entries.items()):
            if not predicate(uuid, entry):
                del self._entries[uuid]
                self._removed[uuid] = None

    def clear(self) -> None:
        """Remove all entries."""
        self._removed.update(dict.fromkeys(self._entries))
        self._entries.clear()

    @property
    def header(self) -> str:
        return self._header

    @header.setter
    def header(self, header: str) -> None:
        if self._header != header:
            self._header = header
            self._modified_header_or_footer = True

    @property
    def footer(self) -> str:
        return self._footer

    @footer.setter
    def footer(self, footer: str) -> None:
        if self._footer != footer:
            self._footer = footer
            self._modified_header_or_footer = True

    def entries(self) -> Iterator[Tuple[uuid_module.UUID, PlayerListEntry]]:
        """Iterate over ``(uuid, entry)`` pairs."""
        return iter(list(self._entries.items()))

    def _header_footer(self) -> TabListHeaderFooter:
        return TabListHeaderFooter(self._header, self._footer)

    def initial_packets(self) -> List[Packet]:
        """Packets that show this list to a client that has not seen it yet."""
        packets: List[Packet] = []
        players = tuple(entry._info(uuid) for uuid, entry in self._entries.items())
        if players:
            packets.append(AddPlayer(players))
        if self._header or self._footer:
            packets.append(self._header_footer())
        return packets

    def update_packets(self) -> List[Packet]:
        """Packets that bring a client up to date with this tick's changes."""
        packets: List[Packet] = []
        if self._removed:
            packets.append(RemovePlayer(tuple(self._removed)))

        added: List[_PlayerInfo] = []
        game_modes: List[Tuple[uuid_module.UUID, GameMode]] = []
        pings: List[Tuple[uuid_module.UUID, int]] = []
        names: List[Tuple[uuid_module.UUID, Optional[str]]] = []
        for uuid, entry in self._entries.items():
            if entry.created_this_tick:
                added.append(entry._info(uuid))
                continue
            if entry.modified_game_mode:
                game_modes.append((uuid, entry.game_mode))
            if entry.modified_ping:
                pings.append((uuid, entry.ping))
            if entry.modified_display_name:
                names.append((uuid, entry.display_name))

        if added:
            packets.append(AddPlayer(tuple(added)))
        if game_modes:
            packets.append(UpdateGameMode(tuple(game_modes)))
        if pings:
            packets.append(UpdateLatency(tuple(pings)))
        if names:
            packets.append(UpdateDisplayName(tuple(names)))
        if self._modified_header_or_footer:
            packets.append(self._header_footer())
        return packets

    def clear_packets(self) -> List[Packet]:
        """Packets that remove every entry of this list from a client."""
        return [RemovePlayer(tuple(self._entries))]

    def end_tick(self) -> None:
        """Forget this tick's changes."""
        for entry in self._entries.values():
            entry._reset_flags()
        self._removed.clear()
        self._modified_header_or_footer = False


class PlayerListId:
    """A reference-counted handle to a player list.

    The list is deleted at the end of the tick once every handle is gone.
    Copying returns the same handle.
    """

    __slots__ = ("_key", "__weakref__")

    def __init__(self, key: int) -> None:
        self._key = key

    def __copy__(self) -> "PlayerListId":
        return self

    def __deepcopy__(self, memo: dict) -> "PlayerListId":
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlayerListId):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other: "PlayerListId") -> bool:
        return self._key < other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __repr__(self) -> str:
        return f"PlayerListId({self._key})"


class PlayerLists:
    """A container for all player lists on a server."""

    def __init__(self) -> None:
        self._lists: Dict[int, Tuple["weakref.ref[PlayerListId]", PlayerList]] = {}
        self._keys = itertools.count()

    def __len__(self) -> int:
        return len(self._lists)

    def insert(self, state: Any = None) -> Tuple[PlayerListId, PlayerList]:
        """Create a player list and return its ID and the list."""
        list_id = PlayerListId(next(self._keys))
        player_list = PlayerList(state)
        self._lists[list_id._key] = (weakref.ref(list_id), player_list)
        return list_id, player_list

    def get(self, list_id: PlayerListId) -> PlayerList:
        """Return the player list for ``list_id``."""
        return self._lists[list_id._key][1]

    def update(self) -> None:
        """Delete lists whose IDs are all gone and end the tick for the rest."""
        for key in [k for k, (ref, _) in self._lists.items() if ref() is None]:
            del self._lists[key]
        for _, player_list in self._lists.values():
            player_list.end_tick()