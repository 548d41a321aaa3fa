from dataclasses import dataclass


def same_name(a, b):
    """Case-insensitive identity check used for every name lookup."""
    return a.casefold() == b.casefold()


# ==========================================
# THINGS
# ==========================================

@dataclass(frozen=True, eq=False)
class Item:
    """A portable object. Identity is the object itself, not its name."""
    name: str
    description: str = ""


class Task:
    def __init__(self, name, description, required_item_name):
        self.name = name
        self.description = description
        self.required_item_name = required_item_name
        self.completed = False

    def complete(self):
        self.completed = True


class Connection:
    """
    A one-way exit out of a room.
    The destination is a room id resolved through the World, never a Room object.
    """
    def __init__(self, direction, destination, required_key_name=None):
        self.direction = direction
        self.destination = destination
        self.required_key_name = required_key_name or None
        self._locked = self.required_key_name is not None

    @property
    def locked(self):
        return self._locked

    def unlock(self, item_name):
        # Once open, a connection stays open.
        if self._locked and same_name(item_name, self.required_key_name):
            self._locked = False
            return True
        return False

    def __repr__(self):
        state = "locked" if self._locked else "open"
        return f"<Connection {self.direction}->{self.destination} {state}>"


class Room:
    def __init__(self, room_id, name, description, items=(), connections=(), tasks=()):
        self.id = room_id
        self.name = name
        self.description = description
        self.items = list(items)
        self.connections = list(connections)
        self.tasks = list(tasks)

    def add_item(self, item):
        self.items.append(item)

    def add_connection(self, connection):
        self.connections.append(connection)

    def add_task(self, task):
        self.tasks.append(task)

    def remove_item(self, item_name):
        """Detach and return the first item matching item_name, or None."""
        for index, item in enumerate(self.items):
            if same_name(item.name, item_name):
                return self.items.pop(index)
        return None

    def __repr__(self):
        return f"<Room {self.id}>"


# ==========================================
# CHARACTERS
# ==========================================

class Character:
    """Anything with a name that stands in a room."""
    def __init__(self, name, location_id):
        self.name = name
        self.location_id = location_id

    def is_in(self, room_id):
        return self.location_id == room_id

    def matches(self, name):
        return same_name(self.name, name)

    def __repr__(self):
        return f"<{type(self).__name__} {self.name} @ {self.location_id}>"


class Player(Character):
    def __init__(self, name, location_id):
        super().__init__(name, location_id)
        self.inventory = []

    def find_item(self, item_name):
        for item in self.inventory:
            if same_name(item.name, item_name):
                return item
        return None

    def has_item(self, item_name):
        return self.find_item(item_name) is not None

    def add_item(self, item):
        self.inventory.append(item)


class NonPlayerCharacter(Character):
    def __init__(self, name, location_id, dialogue):
        super().__init__(name, location_id)
        self.dialogue = dialogue


class Enemy(Character):
    def __init__(self, name, location_id, required_item_name):
        super().__init__(name, location_id)
        self.required_item_name = required_item_name

    def is_defeated_by(self, player):
        """Combat is a single check: does the player carry the weakness?"""
        return player.has_item(self.required_item_name)
