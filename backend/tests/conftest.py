# Ensure backend is at sys.path[0] when pytest runs (from repo root or from backend dir)
import sys
from pathlib import Path

import httpx
import pytest

_tests_dir = Path(__file__).resolve().parent
_backend = _tests_dir.parent
_str_backend = str(_backend)
if sys.path[0:1] != [_str_backend]:
    sys.path.insert(0, _str_backend)

BASE_URL = "https://opendota.test/api"


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def opendota_transport(responses: dict, calls: list | None = None) -> httpx.MockTransport:
    """MockTransport serving ``responses`` keyed by path below /api.

    A value may be JSON data, an httpx.Response, or an exception to raise.
    Unknown paths get a 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api")
        if calls is not None:
            calls.append(path)
        value = responses.get(path)
        if value is None:
            return httpx.Response(404, json={"error": "not found"})
        if isinstance(value, Exception):
            raise value
        if isinstance(value, httpx.Response):
            return value
        return httpx.Response(200, json=value)

    return httpx.MockTransport(handler)


@pytest.fixture
def clock():
    return FakeClock()


HERO_STATS = [
    {
        "id": 1,
        "name": "npc_dota_hero_antimage",
        "localized_name": "Anti-Mage",
        "primary_attr": "agi",
        "attack_type": "Melee",
        "roles": ["Carry", "Escape", "Nuker"],
        "img": "/apps/dota2/images/dota_react/heroes/antimage.png?",
        "icon": "/apps/dota2/images/dota_react/heroes/icons/antimage.png?",
        "base_health": 120,
        "base_mana": 75,
        "base_armor": 1,
        "move_speed": 310,
        "attack_range": 150,
        "base_str": 21,
        "base_agi": 24,
        "base_int": 12,
        "str_gain": 1.6,
        "agi_gain": 2.8,
        "int_gain": 1.8,
        "1_pick": 6000,
        "1_win": 3000,
        "8_pick": 6000,
        "8_win": 3300,
    },
    {
        "id": 2,
        "name": "npc_dota_hero_axe",
        "localized_name": "Axe",
        "primary_attr": "str",
        "attack_type": "Melee",
        "roles": ["Initiator", "Durable", "Disabler"],
        "img": "/apps/dota2/images/dota_react/heroes/axe.png?",
        "icon": "/apps/dota2/images/dota_react/heroes/icons/axe.png?",
        "1_pick": 20000,
        "1_win": 10400,
    },
]

ITEMS = {
    "blink": {
        "id": 1,
        "dname": "Blink Dagger",
        "cost": 2250,
        "secret_shop": False,
        "side_shop": False,
        "recipe": False,
        "components": None,
        "hint": ["Teleport to a target point."],
        "img": "/apps/dota2/images/dota_react/items/blink.png?t=1",
    },
    "power_treads": {
        "id": 63,
        "cost": 1400,
        "components": ["boots", "gloves", "belt_of_strength"],
        "img": "/apps/dota2/images/dota_react/items/power_treads.png?t=1",
    },
    "ability_base": {"cost": 0},
}

HERO_ABILITIES = {
    "npc_dota_hero_antimage": {
        "abilities": [
            "antimage_mana_break",
            "antimage_blink",
            "antimage_counterspell",
            "antimage_empty_slot",
            "antimage_mana_void",
        ],
        "talents": [
            {"name": "special_bonus_unique_antimage", "level": 1},
            {"name": "special_bonus_attack_speed_20", "level": 2},
        ],
    }
}

ABILITIES = {
    "antimage_mana_break": {
        "dname": "Mana Break",
        "desc": "Burns mana with each attack.",
        "behavior": "Passive",
        "attrib": [{"key": "mana_per_hit", "header": "MANA BURNED PER HIT:", "value": ["28", "40", "52", "64"]}],
    },
    "antimage_blink": {
        "dname": "Blink",
        "behavior": ["Point Target", "Directional"],
        "cd": ["12", "10", "8", "6"],
        "attrib": [{"key": "blink_range", "header": "RANGE:", "value": ["750", "900", "1050", "1200"]}],
    },
    "antimage_counterspell": {"dname": "Counterspell", "behavior": "No Target"},
    "antimage_empty_slot": {"behavior": "Hidden"},
    "antimage_mana_void": {"dname": "Mana Void", "behavior": "Unit Target"},
    "special_bonus_unique_antimage": {"dname": "+{s:bonus_blink_range} Blink Range", "attrib": []},
    "special_bonus_attack_speed_20": {
        "dname": "+{s:value} Attack Speed",
        "attrib": [{"key": "value", "header": "ATTACK SPEED:", "value": "20"}],
    },
}

MATCHUPS = [
    {"hero_id": 2, "games_played": 1000, "wins": 400},
    {"hero_id": 3, "games_played": 1000, "wins": 600},
    {"hero_id": 4, "games_played": 50, "wins": 0},
]

ITEM_POPULARITY = {
    "start_game_items": {"44": 120, "38": 80, "39": 150, "16": 10, "237": 5},
    "early_game_items": {"63": 500},
    "mid_game_items": {"1": 300},
}


def opendota_fixture_responses() -> dict:
    return {
        "/heroStats": HERO_STATS,
        "/constants/items": ITEMS,
        "/constants/hero_abilities": HERO_ABILITIES,
        "/constants/abilities": ABILITIES,
        "/heroes/1/matchups": MATCHUPS,
        "/heroes/1/itemPopularity": ITEM_POPULARITY,
    }
