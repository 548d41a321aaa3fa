class EscapeError(Exception):
    """Base exception for the Dungeon Escape engine."""


class WorldError(EscapeError):
    """Raised when a World is constructed from inconsistent parts."""


class RoomNotFound(WorldError):
    """Raised when a room id does not resolve to a room."""


class ItemNotFound(EscapeError):
    """Raised when a room holds no item with the requested name."""

    def __init__(self, item_name):
        super().__init__(f"No item named '{item_name}'")
        self.item_name = item_name


class CampaignError(EscapeError):
    """Raised when campaign data references unknown or duplicated ids."""
