import logging
import os
import sys
import time

import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.markup import escape
from rich.prompt import Prompt

from escape.campaign import DEFAULT_CAMPAIGN_ID, build_world, load_campaign
from escape.errors import CampaignError, WorldError
from escape.listener import Listener
from escape.narrator import Narrator, custom_theme
from escape.session import Session

# --- CONFIGURATION ---
CONFIG_PATH = "config.yaml"

logger = logging.getLogger(__name__)

load_dotenv()
console = Console(theme=custom_theme)


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def load_config(config_path=CONFIG_PATH):
    """
    Loads config.yaml or creates default if missing.
    """
    if not os.path.exists(config_path):
        default_yaml = f"""
# DUNGEON ESCAPE CONFIGURATION
# ----------------------------
# ai_fallback sends commands the game does not understand to the
# listener model, which maps them onto a real command.
# It needs OPENAI_API_KEY in your .env file.

campaign: {DEFAULT_CAMPAIGN_ID}
listener_model: gpt-5-nano
ai_fallback: false
debug_mode: false
"""
        with open(config_path, "w") as f:
            f.write(default_yaml.strip() + "\n")

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def toggle_debug(current_config, config_path=CONFIG_PATH):
    """Toggles the debug_mode flag in config.yaml."""
    current_config['debug_mode'] = not current_config.get('debug_mode', False)
    with open(config_path, "w") as f:
        yaml.dump(current_config, f, default_flow_style=False)
    return current_config


def setup_logging(debug):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def make_listener(config):
    if not config.get('ai_fallback', False):
        return None
    if not os.getenv("OPENAI_API_KEY"):
        console.print("[warning]WARNING:[/] ai_fallback is on but no API Key was found in .env.")
        return None
    return Listener(model_name=config.get('listener_model', 'gpt-5-nano'))


def show_welcome_screen(config):
    clear_screen()

    console.print(Panel(
        "[bold]DUNGEON ESCAPE[/bold]\n\nFind the keys. Mind the Skeleton.",
        border_style="info",
        padding=(1, 2),
        width=60
    ))

    console.print("\n[dim]Select an option:[/dim]\n")

    debug_state = "On" if config.get('debug_mode', False) else "Off"
    menu_options = [
        ("1", f"Start New Campaign: {config.get('campaign', DEFAULT_CAMPAIGN_ID)}"),
        ("D", f"Toggle Debug Mode (current: {debug_state})"),
        ("2", "Quit"),
    ]
    for key, label in menu_options:
        console.print(f" [[info]{key}[/info]] {label}")

    print()
    return Prompt.ask(" >", choices=["1", "2", "D", "d"], default="1")


# ============================================
# GAME
# ============================================
def open_campaign(campaign_id):
    """
    Loads a campaign and builds its World.
    Returns (campaign, world), or (None, None) after showing what went wrong.
    """
    try:
        campaign = load_campaign(campaign_id)
        world = build_world(campaign)
    except FileNotFoundError as e:
        console.print(Panel(f"[warning]ERROR: Campaign data not found.[/] Missing file: {escape(str(e))}", border_style="warning"))
        time.sleep(3)
        return None, None
    except yaml.YAMLError as e:
        console.print(Panel(f"[warning]YAML STRUCTURE ERROR:[/]\nCheck your campaign files for indentation or syntax errors.\nDetails: {escape(str(e))}", border_style="warning"))
        time.sleep(5)
        return None, None
    except (CampaignError, WorldError) as e:
        console.print(Panel(f"[warning]CAMPAIGN ERROR:[/]\n{escape(str(e))}", border_style="warning"))
        time.sleep(5)
        return None, None
    except Exception as e:
        logger.exception("Failed to load campaign '%s'", campaign_id)
        console.print(Panel(f"[warning]CRITICAL LOAD ERROR:[/]\nFailed to load campaign data.\nDetails: {escape(str(e))}", border_style="warning"))
        time.sleep(5)
        return None, None
    return campaign, world


def start_game(config):
    clear_screen()
    campaign, world = open_campaign(config.get('campaign', DEFAULT_CAMPAIGN_ID))
    if world is None:
        return None

    manifest = campaign['manifest']
    narrator = Narrator(
        console=console,
        title=manifest.get('title', "Dungeon Escape Adventure!"),
        intro=manifest.get('intro', ""),
        debug=config.get('debug_mode', False),
    )
    session = Session(
        world,
        narrator=narrator,
        listener=make_listener(config),
        read_line=lambda: Prompt.ask("\n[info]>[/info]"),
    )
    return session.run()


# ============================================
# MAIN
# ============================================
def main():
    config = load_config()
    setup_logging(config.get('debug_mode', False))

    while True:
        # Re-load config to get the latest debug state for the menu label
        config = load_config()
        try:
            choice = show_welcome_screen(config)
        except (EOFError, KeyboardInterrupt):
            choice = "2"

        if choice == "1":
            start_game(config)
            try:
                Prompt.ask("[dim]Press Enter to return to the menu[/dim]", default="")
            except (EOFError, KeyboardInterrupt):
                console.print("\nGoodbye.")
                sys.exit()
        elif choice.upper() == "D":
            config = toggle_debug(config)
            setup_logging(config['debug_mode'])
            console.print(Panel(
                f"[info]DEBUG MODE:[/][bold]{' ON' if config['debug_mode'] else ' OFF'}[/bold]",
                border_style="info"
            ))
            time.sleep(1)
        elif choice == "2":
            console.print("\nGoodbye.")
            sys.exit()


if __name__ == "__main__":
    main()
