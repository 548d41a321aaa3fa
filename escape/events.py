"""
Events are plain dictionaries with an 'event_type' key.
The Director emits them; the Narrator turns them into text.
"""
from enum import Enum


class Status(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"
    STOPPED = "stopped"


# Error reasons (all non-fatal)
NOT_FOUND_HERE = "not_found_here"
DONT_HAVE_ITEM = "dont_have_item"
CANNOT_USE_HERE = "cannot_use_here"
NO_SUCH_EXIT = "no_such_exit"
DOOR_LOCKED = "door_locked"
NO_ONE_NAMED = "no_one_named"
NO_SUCH_ENEMY = "no_such_enemy"
UNKNOWN_COMMAND = "unknown_command"


def room_description(room, npcs, enemies):
    return {
        "event_type": "room_description",
        "data": {
            "room_id": room.id,
            "name": room.name,
            "description": room.description,
            "npcs": [npc.name for npc in npcs],
            "enemies": [enemy.name for enemy in enemies],
            "items": [item.name for item in room.items],
            "exits": [conn.direction for conn in room.connections],
        },
    }


def inventory_listing(items):
    return {"event_type": "inventory_listing", "data": {"items": [item.name for item in items]}}


def help_text():
    return {"event_type": "help_text", "data": {}}


def moved(direction, room):
    return {
        "event_type": "moved",
        "data": {"outcome": "SUCCESS", "direction": direction, "new_room_id": room.id, "name": room.name},
    }


def taken(item):
    return {"event_type": "taken", "data": {"outcome": "SUCCESS", "item": item.name}}


def unlocked(connection, key_name):
    return {
        "event_type": "unlocked",
        "data": {"outcome": "SUCCESS", "direction": connection.direction, "key": key_name},
    }


def dialogue(npc):
    return {"event_type": "dialogue", "data": {"speaker": npc.name, "text": npc.dialogue}}


def defeated(enemy):
    return {"event_type": "defeated", "data": {"outcome": "SUCCESS", "enemy": enemy.name}}


def slain(enemy):
    return {"event_type": "slain", "data": {"outcome": "CRITICAL_FAILURE", "enemy": enemy.name}}


def interpreted(original, mapped):
    return {"event_type": "interpreted", "data": {"original": original, "command": mapped}}


def error(reason, **details):
    return {"event_type": "error", "status": "FAILURE", "reason": reason, "details": details}


def is_error(event, reason=None):
    if event.get("event_type") != "error":
        return False
    return reason is None or event.get("reason") == reason
