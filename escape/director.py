import json
import logging

from escape import events
from escape.errors import ItemNotFound
from escape.events import Status
from escape.world import MOVE_BLOCKED, MOVE_NO_EXIT

logger = logging.getLogger(__name__)

VERBS = ["go", "look", "take", "use", "attack", "inventory", "talk", "help", "quit"]


class Command:
    def __init__(self, verb, argument=""):
        self.verb = verb
        self.argument = argument

    def __eq__(self, other):
        return isinstance(other, Command) and (self.verb, self.argument) == (other.verb, other.argument)

    def __repr__(self):
        return f"Command({self.verb!r}, {self.argument!r})"


def parse_command(line):
    """
    Splits one line of input on its first whitespace run.
    Both halves are lower-cased; the argument may be empty.
    """
    parts = line.lower().split(None, 1)
    if not parts:
        return Command("")
    verb = parts[0]
    argument = parts[1].strip() if len(parts) > 1 else ""
    return Command(verb, argument)


class Director:
    def __init__(self, world, session):
        """
        The Director is the STATE MACHINE.
        It never writes text: it mutates the World, flips the session
        status and reports what happened as a list of events.
        """
        self.world = world
        self.session = session

    # ==========================================================
    # 1. QUERIES (never mutate)
    # ==========================================================
    def cmd_look(self, argument):
        world = self.world
        return [events.room_description(world.current_room, world.npcs_here(), world.enemies_here())]

    def cmd_inventory(self, argument):
        return [events.inventory_listing(self.world.player.inventory)]

    def cmd_help(self, argument):
        return [events.help_text()]

    def cmd_quit(self, argument):
        self.session.status = Status.STOPPED
        return []

    # ==========================================================
    # 2. MOVEMENT
    # ==========================================================
    def cmd_go(self, argument):
        result = self.world.move_player(argument)

        if result.outcome == MOVE_NO_EXIT:
            # A bare "go" is silently ignored.
            if not argument:
                return []
            return [events.error(events.NO_SUCH_EXIT, argument=argument)]
        if result.outcome == MOVE_BLOCKED:
            return [events.error(events.DOOR_LOCKED, argument=argument, blocked_by=result.reason)]
        return [events.moved(argument, self.world.current_room)]

    # ==========================================================
    # 3. ITEMS
    # ==========================================================
    def cmd_take(self, argument):
        try:
            item = self.world.pick_up(argument)
        except ItemNotFound:
            return [events.error(events.NOT_FOUND_HERE, argument=argument)]
        return [events.taken(item)]

    def cmd_use(self, argument):
        item = self.world.player.find_item(argument)
        if item is None:
            return [events.error(events.DONT_HAVE_ITEM, argument=argument)]

        # Keys are matched by their stored name, first door that accepts wins.
        for conn in self.world.room_connections(self.world.current_room):
            if self.world.unlock(conn, item.name):
                return [events.unlocked(conn, item.name)]
        return [events.error(events.CANNOT_USE_HERE, argument=argument)]

    # ==========================================================
    # 4. CHARACTERS
    # ==========================================================
    def cmd_talk(self, argument):
        npc = self.world.find_npc(argument)
        if npc is None:
            return [events.error(events.NO_ONE_NAMED, argument=argument)]
        return [events.dialogue(npc)]

    def cmd_attack(self, argument):
        enemy = self.world.find_enemy(argument)
        if enemy is None:
            return [events.error(events.NO_SUCH_ENEMY, argument=argument)]

        if enemy.is_defeated_by(self.world.player):
            self.world.remove_enemy(enemy)
            return [events.defeated(enemy)]

        logger.info("%s attacked %s without '%s'", self.world.player.name, enemy.name, enemy.required_item_name)
        self.session.status = Status.LOST
        return [events.slain(enemy)]

    # ==========================================================
    # 5. ROUTING
    # ==========================================================
    def execute(self, command):
        """
        Master Router: Command -> handler.
        Returns a LIST of events.
        """
        if self.session.status is not Status.PLAYING:
            logger.warning("Ignoring %r: session is %s", command, self.session.status.value)
            return []

        handler = getattr(self, f"cmd_{command.verb}", None) if command.verb in VERBS else None
        if handler is None:
            return [events.error(events.UNKNOWN_COMMAND, command=command.verb)]

        results = handler(command.argument)
        logger.debug("%r -> %s", command, [e["event_type"] for e in results])
        return results

    def interpret(self, line):
        return self.execute(parse_command(line))

    # ==========================================================
    # 6. CONTEXT FOR THE LISTENER
    # ==========================================================
    def valid_commands(self):
        """Every command line that would do something right now."""
        world = self.world
        room = world.current_room
        cmds = ["look", "inventory", "help", "quit"]
        cmds.extend(f"go {conn.direction.lower()}" for conn in room.connections)
        cmds.extend(f"take {item.name.lower()}" for item in room.items)
        cmds.extend(f"use {item.name.lower()}" for item in world.player.inventory)
        cmds.extend(f"talk {npc.name.lower()}" for npc in world.npcs_here())
        cmds.extend(f"attack {enemy.name.lower()}" for enemy in world.enemies_here())
        return cmds

    def context(self):
        """Room snapshot as JSON, for strict LLM consumption."""
        description = self.cmd_look("")[0]["data"]
        description["inventory"] = [item.name for item in self.world.player.inventory]
        return json.dumps(description, indent=2)
