"""Search result ranking."""

from services.search import rank_results


def _hero(hero_id, localized_name):
    return {"id": hero_id, "name": f"npc_dota_hero_{hero_id}", "localized_name": localized_name, "roles": ["Carry"]}


def _item(item_id, localized_name, cost=1000):
    return {"id": item_id, "name": localized_name.lower().replace(" ", "_"), "localized_name": localized_name, "cost": cost}


def test_prefix_matches_before_contains_and_heroes_before_items():
    heroes = [_hero(1, "Anti-Mage"), _hero(97, "Magnus")]
    items = [_item(36, "Magic Wand"), _item(34, "Magic Stick"), _item(249, "Mage Slayer")]

    results = rank_results("mag", heroes, items)

    assert [r["localized_name"] for r in results] == [
        "Magnus",
        "Mage Slayer",
        "Magic Stick",
        "Magic Wand",
        "Anti-Mage",
    ]
    assert [r["type"] for r in results] == ["hero", "item", "item", "item", "hero"]


def test_exact_match_beats_a_hero_prefix_match():
    results = rank_results("dagon", [_hero(200, "Dagon Keeper")], [_item(104, "Dagon", cost=2700)])

    assert [(r["type"], r["id"]) for r in results] == [("item", 104), ("hero", 200)]
    assert results[0]["cost"] == 2700


def test_results_are_capped_and_shaped():
    heroes = [_hero(i, f"Hero {i:02d}") for i in range(10)]
    items = [_item(100 + i, f"Item {i:02d}") for i in range(10)]

    results = rank_results("e", heroes, items)

    assert len(results) == 15
    assert results[0] == {
        "type": "hero",
        "id": 0,
        "name": "npc_dota_hero_0",
        "localized_name": "Hero 00",
        "img": None,
        "primary_attr": None,
        "roles": ["Carry"],
    }
    assert set(results[-1]) == {"type", "id", "name", "localized_name", "img", "cost"}


def test_missing_localized_name_falls_back_to_key():
    results = rank_results("blink", [], [{"id": 1, "name": "blink", "localized_name": None}])
    assert results[0]["localized_name"] == "blink"
