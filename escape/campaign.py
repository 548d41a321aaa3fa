import logging
import os

import yaml

from escape.entities import Connection, Enemy, Item, NonPlayerCharacter, Player, Room, Task
from escape.errors import CampaignError
from escape.world import World

logger = logging.getLogger(__name__)

CAMPAIGN_BASE_PATH = os.path.join(os.path.dirname(__file__), "data", "campaigns")
DEFAULT_CAMPAIGN_ID = "dungeon_escape"


def load_campaign(campaign_id=DEFAULT_CAMPAIGN_ID, base_path=CAMPAIGN_BASE_PATH):
    """
    Loads and merges all YAML files for a given campaign ID.
    """
    campaign_path = os.path.join(base_path, campaign_id)

    campaign_db = {
        'manifest': {},
        'scenes': {},
        'assets': {}
    }

    # Manifest (Title, Starting Scene ID, Win Scene ID)
    with open(os.path.join(campaign_path, "manifest.yaml"), "r") as f:
        campaign_db['manifest'] = yaml.safe_load(f) or {}

    # Scenes (Room definitions, item placement, exits)
    with open(os.path.join(campaign_path, "scenes.yaml"), "r") as f:
        campaign_db['scenes'] = yaml.safe_load(f) or {}

    # Assets (Items, NPCs, Enemies)
    with open(os.path.join(campaign_path, "assets.yaml"), "r") as f:
        campaign_db['assets'] = yaml.safe_load(f) or {}

    logger.debug("Loaded campaign '%s' with %d scenes", campaign_id, len(campaign_db['scenes']))
    return campaign_db


def build_world(campaign_db):
    """
    Turns a campaign db into a ready-to-play World.
    Every item id is created once and placed in at most one room.
    """
    manifest = _mapping(campaign_db.get('manifest') or {}, "Manifest")
    scenes = _mapping(campaign_db.get('scenes') or {}, "Scenes")
    assets = _mapping(campaign_db.get('assets') or {}, "Assets")
    if not scenes:
        raise CampaignError("Campaign has no scenes")

    item_data = _mapping(assets.get('items') or {}, "Items")
    placed = set()

    def item_name(item_id, where):
        if item_id not in item_data:
            raise CampaignError(f"{where} references unknown item '{item_id}'")
        return _require(_mapping(item_data[item_id], f"Item '{item_id}'"), 'name', f"Item '{item_id}'")

    def scene_id(raw_id, where):
        if raw_id not in scenes:
            raise CampaignError(f"{where} references unknown scene '{raw_id}'")
        return raw_id

    # 1. Rooms and their contents
    rooms = []
    for room_id, scene in scenes.items():
        scene = _mapping(scene, f"Scene '{room_id}'")
        room = Room(room_id, scene.get('name', room_id), scene.get('description', ""))

        for item_id in scene.get('items', []) or []:
            name = item_name(item_id, f"Scene '{room_id}'")
            if item_id in placed:
                raise CampaignError(f"Item '{item_id}' is placed more than once")
            placed.add(item_id)
            room.add_item(Item(name, item_data[item_id].get('description', "")))

        for exit_data in scene.get('exits', []) or []:
            exit_data = _mapping(exit_data, f"An exit of '{room_id}'")
            where = f"Exit '{exit_data.get('direction')}' of '{room_id}'"
            key_id = exit_data.get('key_id')
            room.add_connection(Connection(
                _require(exit_data, 'direction', where),
                scene_id(_require(exit_data, 'target_id', where), where),
                item_name(key_id, where) if key_id else None,
            ))

        for task_data in scene.get('tasks', []) or []:
            task_data = _mapping(task_data, f"A task of '{room_id}'")
            where = f"Task '{task_data.get('name')}' of '{room_id}'"
            room.add_task(Task(
                _require(task_data, 'name', where),
                task_data.get('description', ""),
                item_name(_require(task_data, 'item_id', where), where),
            ))

        rooms.append(room)

    # 2. Characters
    start_id = manifest.get('starting_scene_id', next(iter(scenes)))
    player = Player(manifest.get('player_name', "Hero"), scene_id(start_id, "Manifest"))

    npcs = []
    for n in assets.get('npcs', []) or []:
        n = _mapping(n, "An NPC")
        where = f"NPC '{n.get('name')}'"
        npcs.append(NonPlayerCharacter(
            _require(n, 'name', where),
            scene_id(_require(n, 'scene_id', where), where),
            n.get('dialogue', ""),
        ))

    enemies = []
    for e in assets.get('enemies', []) or []:
        e = _mapping(e, "An enemy")
        where = f"Enemy '{e.get('name')}'"
        enemies.append(Enemy(
            _require(e, 'name', where),
            scene_id(_require(e, 'scene_id', where), where),
            item_name(_require(e, 'weakness_id', where), where),
        ))

    win_id = manifest.get('win_scene_id')
    if win_id is not None:
        scene_id(win_id, "Manifest")

    logger.info("Built world: %d rooms, %d items, %d npcs, %d enemies",
                len(rooms), len(placed), len(npcs), len(enemies))
    return World(rooms, player, npcs, enemies, win_room_id=win_id)


def _mapping(data, where):
    if not isinstance(data, dict):
        raise CampaignError(f"{where} must be a mapping, got {type(data).__name__}")
    return data


def _require(data, key, where):
    if data.get(key) is None:
        raise CampaignError(f"{where} is missing '{key}'")
    return data[key]
