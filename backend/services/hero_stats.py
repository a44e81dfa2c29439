"""Hero popularity from /heroStats: top heroes by win rate and by pick count."""

from dataclasses import asdict, dataclass, field

CDN_URL = "https://cdn.cloudflare.steamstatic.com"
RANK_BRACKETS = range(1, 9)
MIN_PICKS = 10000


@dataclass(frozen=True)
class HeroStat:
    id: int
    localized_name: str
    primary_attr: str
    img: str | None
    icon: str | None
    roles: list[str]
    win_rate: float
    pick_count: int


@dataclass(frozen=True)
class HeroStatsSummary:
    top_by_win_rate: list[HeroStat] = field(default_factory=list)
    top_by_pick_rate: list[HeroStat] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def cdn(path: str | None) -> str | None:
    return f"{CDN_URL}{path}" if path else None


def to_hero_stat(hero: dict) -> HeroStat:
    """Sum picks and wins across every rank bracket."""
    picks = sum(hero.get(f"{i}_pick") or 0 for i in RANK_BRACKETS)
    wins = sum(hero.get(f"{i}_win") or 0 for i in RANK_BRACKETS)
    win_rate = wins / picks * 100 if picks > 0 else 0.0

    return HeroStat(
        id=hero["id"],
        localized_name=hero.get("localized_name", ""),
        primary_attr=hero.get("primary_attr", ""),
        img=cdn(hero.get("img")),
        icon=cdn(hero.get("icon")),
        roles=hero.get("roles") or [],
        win_rate=round(win_rate, 2),
        pick_count=picks,
    )


def summarize_hero_stats(raw: list[dict], limit: int = 10, min_picks: int = MIN_PICKS) -> HeroStatsSummary:
    stats = [to_hero_stat(h) for h in raw]
    # Rarely picked heroes swing wildly; require a minimum sample for win rate.
    eligible = [s for s in stats if s.pick_count > min_picks]

    return HeroStatsSummary(
        top_by_win_rate=sorted(eligible, key=lambda s: s.win_rate, reverse=True)[:limit],
        top_by_pick_rate=sorted(stats, key=lambda s: s.pick_count, reverse=True)[:limit],
    )
