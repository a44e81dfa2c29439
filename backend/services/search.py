"""Combined hero and item search results, ranked by how well the name matches."""

MAX_RESULTS = 15


def hero_result(hero: dict) -> dict:
    return {
        "type": "hero",
        "id": hero["id"],
        "name": hero["name"],
        "localized_name": hero.get("localized_name") or hero["name"],
        "img": hero.get("img"),
        "primary_attr": hero.get("primary_attr"),
        "roles": hero.get("roles") or [],
    }


def item_result(item: dict) -> dict:
    return {
        "type": "item",
        "id": item["id"],
        "name": item["name"],
        "localized_name": item.get("localized_name") or item["name"],
        "img": item.get("img"),
        "cost": item.get("cost"),
    }


def _rank(query: str, result: dict) -> tuple:
    name = result["localized_name"].lower()
    return (name != query, not name.startswith(query), result["type"] != "hero", name)


def rank_results(query: str, heroes: list[dict], items: list[dict], limit: int = MAX_RESULTS) -> list[dict]:
    """Exact name matches first, then prefix matches, then heroes before
    items, then alphabetical.

    `query` is expected lowercased and stripped.
    """
    results = [hero_result(h) for h in heroes] + [item_result(i) for i in items]
    results.sort(key=lambda r: _rank(query, r))
    return results[:limit]
