import io
import unittest

from rich.console import Console

from escape import events
from escape.campaign import build_world, load_campaign
from escape.narrator import Narrator, custom_theme
from escape.session import Session


class TestNarrator(unittest.TestCase):
    def setUp(self):
        self.out = io.StringIO()
        console = Console(file=self.out, theme=custom_theme, width=200)
        self.narrator = Narrator(console=console, title="Dungeon Escape Adventure!", intro="You must escape.")
        self.session = Session(build_world(load_campaign()), narrator=self.narrator)

    def say(self, line):
        self.narrator.render(self.session.step(line))
        text = self.out.getvalue()
        self.out.seek(0)
        self.out.truncate()
        return text

    def test_room_description(self):
        text = self.say("look")
        self.assertIn("--- You are in: Prison Cell ---", text)
        self.assertIn("A damp, cold prison cell.", text)
        self.assertIn("Items: [Rusty Key]", text)
        self.assertIn("Exits: [north]", text)

    def test_characters_in_room(self):
        for line in ["take rusty key", "use rusty key", "go north"]:
            self.say(line)
        self.assertIn("You see a Guard here.", self.say("look"))
        self.assertIn("Items: none.", self.say("look"))
        for line in ["go east", "go south"]:
            self.say(line)
        self.assertIn("A menacing Skeleton stands here!", self.say("look"))

    def test_messages(self):
        self.assertIn("Inventory: nothing.", self.say("inventory"))
        self.assertIn("The door is locked.", self.say("go north"))
        self.assertIn("You can't go that way.", self.say("go up"))
        self.assertIn("There is no 'lamp' here.", self.say("take lamp"))
        self.assertIn("You don't have a 'rusty key'.", self.say("use rusty key"))
        self.assertIn("You took the Rusty Key.", self.say("take rusty key"))
        self.assertIn("Inventory: [Rusty Key]", self.say("inventory"))
        self.assertIn("The Rusty Key fits perfectly.", self.say("use rusty key"))
        self.assertIn("You can't use the rusty key here.", self.say("use rusty key"))
        self.assertIn("There is no one named 'bob' to talk to.", self.say("talk bob"))
        self.assertIn("There is no 'bob' to attack here.", self.say("attack bob"))
        self.assertIn("I don't understand that command. Type 'help'.", self.say("dance"))

    def test_help(self):
        text = self.say("help")
        self.assertIn("--- Help Menu ---", text)
        self.assertIn("go [direction]", text)
        self.assertIn("talk [person]", text)

    def test_banners(self):
        self.narrator.welcome()
        self.narrator.game_over()
        self.narrator.farewell()
        text = self.out.getvalue()
        self.assertIn("Dungeon Escape Adventure!", text)
        self.assertIn("You must escape.", text)
        self.assertIn("Commands: go [dir], look", text)
        self.assertIn("--- GAME OVER ---", text)
        self.assertIn("Thanks for playing!", text)

    def test_debug_panel(self):
        self.narrator.debug = True
        self.assertIn('"event_type": "taken"', self.say("take rusty key"))

    def test_unknown_event_type(self):
        self.narrator.render([{"event_type": "mystery"}])
        self.assertIn("(mystery)", self.out.getvalue())

    def test_error_event_without_template(self):
        self.narrator.render([events.error("strange_reason")])
        self.assertIn("strange_reason", self.out.getvalue())


if __name__ == '__main__':
    unittest.main()
