import logging
from dataclasses import dataclass

from escape.entities import same_name
from escape.errors import ItemNotFound, RoomNotFound, WorldError

logger = logging.getLogger(__name__)

# Outcomes of World.move_player
MOVE_OK = "ok"
MOVE_BLOCKED = "blocked"
MOVE_NO_EXIT = "no_exit"


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a move attempt; reason says why a move was blocked."""
    outcome: str
    reason: str = None
    connection: object = None


class World:
    def __init__(self, rooms, player, npcs=(), enemies=(), win_room_id=None):
        """
        The World owns every room, every character and the single player.
        Rooms are fixed once built; enemies disappear when defeated.
        """
        self.rooms = list(rooms)
        self.player = player
        self.npcs = list(npcs)
        self.enemies = list(enemies)
        self.win_room_id = win_room_id

        self._rooms_by_id = {}
        for room in self.rooms:
            if room.id in self._rooms_by_id:
                raise WorldError(f"Duplicate room id '{room.id}'")
            self._rooms_by_id[room.id] = room

        self._validate()

    def _validate(self):
        for room in self.rooms:
            for conn in room.connections:
                if conn.destination not in self._rooms_by_id:
                    raise WorldError(
                        f"Exit '{conn.direction}' of '{room.id}' leads to unknown room '{conn.destination}'"
                    )
        for character in [self.player] + self.npcs + self.enemies:
            if character.location_id not in self._rooms_by_id:
                raise WorldError(f"{character.name} stands in unknown room '{character.location_id}'")
        if self.win_room_id is not None and self.win_room_id not in self._rooms_by_id:
            raise WorldError(f"Unknown win room '{self.win_room_id}'")

    # ==========================================================
    # 1. QUERIES
    # ==========================================================
    def find_room(self, room_id):
        try:
            return self._rooms_by_id[room_id]
        except KeyError:
            raise RoomNotFound(room_id) from None

    @property
    def current_room(self):
        return self.find_room(self.player.location_id)

    def room_connections(self, room):
        return tuple(room.connections)

    def room_items(self, room):
        return tuple(room.items)

    def find_connection(self, direction, room=None):
        room = room or self.current_room
        for conn in room.connections:
            if same_name(conn.direction, direction):
                return conn
        return None

    def npcs_here(self):
        return [npc for npc in self.npcs if npc.is_in(self.player.location_id)]

    def enemies_here(self):
        return [enemy for enemy in self.enemies if enemy.is_in(self.player.location_id)]

    def find_npc(self, name):
        # Name collisions resolve to the first in stored order.
        for npc in self.npcs_here():
            if npc.matches(name):
                return npc
        return None

    def find_enemy(self, name):
        for enemy in self.enemies_here():
            if enemy.matches(name):
                return enemy
        return None

    def has_won(self):
        return self.win_room_id is not None and self.player.is_in(self.win_room_id)

    # ==========================================================
    # 2. MUTATIONS
    # ==========================================================
    def take_item(self, room, item_name):
        """Detach the first item in the room matching item_name."""
        item = room.remove_item(item_name)
        if item is None:
            raise ItemNotFound(item_name)
        logger.debug("Removed '%s' from %s", item.name, room.id)
        return item

    def pick_up(self, item_name):
        """Move an item from the player's room into the inventory."""
        item = self.take_item(self.current_room, item_name)
        self.player.add_item(item)
        return item

    def move_player(self, direction):
        conn = self.find_connection(direction)
        if conn is None:
            return MoveResult(MOVE_NO_EXIT)
        if conn.locked:
            logger.debug("Exit '%s' is locked (needs '%s')", conn.direction, conn.required_key_name)
            return MoveResult(MOVE_BLOCKED, "locked", conn)
        self.player.location_id = conn.destination
        logger.info("%s moved %s to %s", self.player.name, conn.direction, conn.destination)
        return MoveResult(MOVE_OK, connection=conn)

    def unlock(self, connection, item_name):
        unlocked = connection.unlock(item_name)
        if unlocked:
            logger.info("Exit '%s' unlocked with '%s'", connection.direction, item_name)
        return unlocked

    def remove_enemy(self, enemy):
        self.enemies.remove(enemy)
        logger.info("Enemy '%s' removed from %s", enemy.name, enemy.location_id)
