import unittest
from collections import Counter

from escape import events
from escape.campaign import build_world, load_campaign
from escape.director import Command, parse_command
from escape.entities import Connection
from escape.events import Status
from escape.session import Session


def new_session():
    return Session(build_world(load_campaign()))


def item_census(world):
    names = [item.name for room in world.rooms for item in room.items]
    names += [item.name for item in world.player.inventory]
    return Counter(names)


class TestParse(unittest.TestCase):
    def test_splits_on_first_whitespace_run(self):
        self.assertEqual(parse_command("TAKE   Rusty Key  "), Command("take", "rusty key"))
        self.assertEqual(parse_command("   go\tNorth"), Command("go", "north"))
        self.assertEqual(parse_command("look"), Command("look", ""))

    def test_empty_line(self):
        self.assertEqual(parse_command(""), Command(""))
        self.assertEqual(parse_command("   "), Command(""))


class TestDirector(unittest.TestCase):
    def setUp(self):
        self.session = new_session()
        self.director = self.session.director
        self.world = self.session.world

    def run_cmd(self, line):
        return self.director.interpret(line)

    def test_look_describes_current_room(self):
        result = self.run_cmd("look")[0]
        self.assertEqual(result["event_type"], "room_description")
        self.assertEqual(result["data"]["name"], "Prison Cell")
        self.assertEqual(result["data"]["items"], ["Rusty Key"])
        self.assertEqual(result["data"]["exits"], ["north"])

    def test_queries_never_mutate(self):
        before = item_census(self.world)
        for _ in range(3):
            self.run_cmd("look")
            self.run_cmd("inventory")
            self.run_cmd("help")
        self.assertEqual(item_census(self.world), before)
        self.assertEqual(self.world.player.location_id, "prison_cell")
        self.assertTrue(self.world.find_connection("north").locked)

    def test_inventory_lists_items(self):
        self.assertEqual(self.run_cmd("inventory")[0]["data"]["items"], [])
        self.run_cmd("take rusty key")
        self.assertEqual(self.run_cmd("inventory")[0]["data"]["items"], ["Rusty Key"])

    def test_take(self):
        result = self.run_cmd("take RUSTY key")[0]
        self.assertEqual(result["event_type"], "taken")
        self.assertEqual(result["data"]["item"], "Rusty Key")

        miss = self.run_cmd("take rusty key")[0]
        self.assertTrue(events.is_error(miss, events.NOT_FOUND_HERE))
        self.assertEqual(miss["details"]["argument"], "rusty key")

    def test_take_preserves_item_partition(self):
        before = item_census(self.world)
        self.run_cmd("take rusty key")
        self.run_cmd("take rusty key")
        self.run_cmd("take lantern")
        self.assertEqual(item_census(self.world), before)

    def test_go(self):
        result = self.run_cmd("go north")[0]
        self.assertTrue(events.is_error(result, events.DOOR_LOCKED))
        self.assertEqual(result["details"], {"argument": "north", "blocked_by": "locked"})
        self.assertTrue(events.is_error(self.run_cmd("go west")[0], events.NO_SUCH_EXIT))
        self.assertEqual(self.world.player.location_id, "prison_cell")

    def test_bare_go_is_silent(self):
        self.assertEqual(self.run_cmd("go"), [])
        self.assertEqual(self.world.player.location_id, "prison_cell")

    def test_bare_go_follows_empty_direction(self):
        self.world.current_room.add_connection(Connection("", "armory"))
        result = self.run_cmd("go")
        self.assertEqual(result[0]["event_type"], "moved")
        self.assertEqual(self.world.player.location_id, "armory")

    def test_use(self):
        self.assertTrue(events.is_error(self.run_cmd("use rusty key")[0], events.DONT_HAVE_ITEM))
        self.run_cmd("take rusty key")
        result = self.run_cmd("use Rusty KEY")[0]
        self.assertEqual(result["event_type"], "unlocked")
        self.assertEqual(result["data"], {"outcome": "SUCCESS", "direction": "north", "key": "Rusty Key"})
        self.assertFalse(self.world.find_connection("north").locked)

        # Nothing left to unlock here.
        self.assertTrue(events.is_error(self.run_cmd("use rusty key")[0], events.CANNOT_USE_HERE))

    def test_use_unlocks_only_the_first_matching_door(self):
        cell = self.world.current_room
        cell.add_connection(Connection("down", "armory", "Rusty Key"))
        self.run_cmd("take rusty key")

        result = self.run_cmd("use rusty key")[0]
        self.assertEqual(result["data"]["direction"], "north")
        self.assertFalse(self.world.find_connection("north").locked)
        self.assertTrue(self.world.find_connection("down").locked)

        # The next use moves on to the door still locked.
        result = self.run_cmd("use rusty key")[0]
        self.assertEqual(result["data"]["direction"], "down")
        self.assertFalse(self.world.find_connection("down").locked)

    def test_wrong_key_leaves_doors_locked(self):
        self.run_cmd("take rusty key")
        self.run_cmd("use rusty key")
        self.run_cmd("go north")
        self.run_cmd("go east")
        self.run_cmd("take rusty sword")
        self.run_cmd("go south")
        self.assertEqual(self.world.player.location_id, "torture_chamber")

        result = self.run_cmd("use rusty sword")[0]
        self.assertTrue(events.is_error(result, events.CANNOT_USE_HERE))
        self.assertTrue(self.world.find_connection("east").locked)

    def test_talk(self):
        self.assertTrue(events.is_error(self.run_cmd("talk guard")[0], events.NO_ONE_NAMED))

    def test_attack_missing_enemy(self):
        result = self.run_cmd("attack skeleton")[0]
        self.assertTrue(events.is_error(result, events.NO_SUCH_ENEMY))
        self.assertIs(self.session.status, Status.PLAYING)

    def test_quit(self):
        self.assertEqual(self.run_cmd("quit"), [])
        self.assertIs(self.session.status, Status.STOPPED)

    def test_unknown_commands(self):
        for line in ["dance", "", "cmd_look", "__init__"]:
            result = self.run_cmd(line)
            self.assertEqual(len(result), 1)
            self.assertTrue(events.is_error(result[0], events.UNKNOWN_COMMAND), line)

    def test_commands_ignored_once_over(self):
        self.run_cmd("quit")
        self.assertEqual(self.run_cmd("take rusty key"), [])
        self.assertEqual(len(self.world.current_room.items), 1)

    def test_valid_commands(self):
        cmds = self.director.valid_commands()
        self.assertIn("take rusty key", cmds)
        self.assertIn("go north", cmds)
        self.assertNotIn("talk guard", cmds)


if __name__ == '__main__':
    unittest.main()
