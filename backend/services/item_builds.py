"""Item popularity -> ranked per-phase item lists."""

from dataclasses import asdict, dataclass, field

# (output field, OpenDota bucket, cap)
BUCKETS = [
    ("start_game", "start_game_items", 4),
    ("early_game", "early_game_items", 6),
    ("mid_game", "mid_game_items", 6),
    ("late_game", "late_game_items", 6),
]


@dataclass(frozen=True)
class ItemCount:
    item_id: int | str
    count: int


@dataclass(frozen=True)
class ItemBuilds:
    start_game: list[ItemCount] = field(default_factory=list)
    early_game: list[ItemCount] = field(default_factory=list)
    mid_game: list[ItemCount] = field(default_factory=list)
    late_game: list[ItemCount] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def rank_items(bucket: dict[str, int], limit: int = 6) -> list[ItemCount]:
    """Sort one bucket by pick count, descending, and keep the top ``limit``."""
    ranked = sorted(bucket.items(), key=lambda kv: kv[1], reverse=True)
    return [ItemCount(item_id=_item_id(item_id), count=count) for item_id, count in ranked[:limit]]


def aggregate_item_popularity(raw: dict) -> ItemBuilds:
    return ItemBuilds(**{name: rank_items(raw.get(bucket) or {}, cap) for name, bucket, cap in BUCKETS})


def _item_id(item_id) -> int | str:
    # OpenDota keys buckets by numeric id as a string; keep names as-is.
    try:
        return int(item_id)
    except (TypeError, ValueError):
        return item_id
