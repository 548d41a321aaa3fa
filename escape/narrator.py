import json

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

custom_theme = Theme({
    "info": "bold #b0d8e3",       # Pale Cyan
    "text": "default",
    "dim": "dim",
    "warning": "bold #ffafaf",    # Soft red
    "success": "bold #a3be8c",    # Soft green
})

HELP_LINES = [
    ("go [direction]", "e.g., 'go north'"),
    ("look", "Describes the current room"),
    ("take [item name]", "e.g., 'take Rusty Key'"),
    ("use [item name]", "Attempts to use an item on a locked door"),
    ("attack [enemy]", "e.g., 'attack Skeleton'"),
    ("inventory", "Shows your items"),
    ("talk [person]", "e.g., 'talk Guard'"),
    ("quit", "Exits the game"),
]

ERROR_MESSAGES = {
    "not_found_here": "There is no '{argument}' here.",
    "dont_have_item": "You don't have a '{argument}'.",
    "cannot_use_here": "You can't use the {argument} here.",
    "no_such_exit": "You can't go that way.",
    "door_locked": "The door is locked.",
    "no_one_named": "There is no one named '{argument}' to talk to.",
    "no_such_enemy": "There is no '{argument}' to attack here.",
    "unknown_command": "I don't understand that command. Type 'help'.",
}


class Narrator:
    def __init__(self, console=None, title="Dungeon Escape Adventure!", intro="", debug=False):
        """
        The Narrator is the PRESENTATION LAYER.
        It takes the Director's events and writes the story. It holds no game state.
        """
        self.console = console or Console(theme=custom_theme)
        self.title = title
        self.intro = intro
        self.debug = debug

    def render(self, results):
        if self.debug and results:
            self.console.print(Panel(
                Text(json.dumps(results, indent=2)),
                title="[DEBUG: Director Output]",
                border_style="dim",
            ))
        for event in results:
            handler = getattr(self, f"_render_{event['event_type']}", None)
            if handler is None:
                self.console.print(f"[dim]({event['event_type']})[/dim]")
            else:
                handler(event)

    # --- BANNERS ---
    def welcome(self):
        body = Text(self.title, style="bold", justify="center")
        if self.intro:
            body.append("\n\n" + self.intro, style="default")
        self.console.print(Panel(body, border_style="info", padding=(1, 2), width=60))
        self.console.print(Text(
            "Commands: go [dir], look, take [item], use [item], attack [enemy], "
            "inventory, talk [person], help, quit",
            style="dim",
        ))

    def victory(self):
        self.console.print(Panel(
            "The final door swings open, and you breathe free air!\n"
            "Congratulations! You have escaped the dungeon!",
            border_style="success",
        ))

    def game_over(self):
        self.console.print("\n[warning]--- GAME OVER ---[/warning]")

    def farewell(self):
        self.console.print("Thanks for playing!")

    # --- EVENTS ---
    def _render_room_description(self, event):
        data = event["data"]
        out = self.console
        out.print(Text(f"\n--- You are in: {data['name']} ---", style="info"))
        out.print(Text(data["description"]))
        for name in data["npcs"]:
            out.print(Text(f"You see a {name} here."))
        for name in data["enemies"]:
            out.print(Text(f"A menacing {name} stands here!", style="warning"))
        out.print(Text("Items: " + (_bracketed(data["items"]) or "none.")))
        out.print(Text("Exits: " + (_bracketed(data["exits"]) or "none.")))

    def _render_inventory_listing(self, event):
        items = event["data"]["items"]
        self.console.print(Text("Inventory: " + (_bracketed(items) or "nothing.")))

    def _render_help_text(self, event):
        lines = [f" - {usage:<19} ({hint})" for usage, hint in HELP_LINES]
        self.console.print(Text("\n--- Help Menu ---\n" + "\n".join(lines)))

    def _render_moved(self, event):
        self.console.print(Text(f"You go {event['data']['direction']}.", style="dim"))

    def _render_taken(self, event):
        self.console.print(Text(f"You took the {event['data']['item']}."))

    def _render_unlocked(self, event):
        key = event["data"]["key"]
        self.console.print(Text(f"The {key} fits perfectly. The door unlocks with a click.", style="success"))

    def _render_dialogue(self, event):
        self.console.print(Text(f"'{event['data']['text']}'"))

    def _render_defeated(self, event):
        enemy = event["data"]["enemy"]
        self.console.print(Text(f"You attack the {enemy} and defeat it!", style="success"))

    def _render_slain(self, event):
        enemy = event["data"]["enemy"]
        self.console.print(Text(
            f"You attack the {enemy} but have no way to defeat it! You have been slain.",
            style="warning",
        ))

    def _render_interpreted(self, event):
        self.console.print(Text(f"(Interpreting as: {event['data']['command']})", style="dim"))

    def _render_error(self, event):
        template = ERROR_MESSAGES.get(event["reason"], "{reason}")
        message = template.format(reason=event["reason"], **event.get("details", {}))
        self.console.print(Text(message))


def _bracketed(names):
    return " ".join(f"[{name}]" for name in names)
