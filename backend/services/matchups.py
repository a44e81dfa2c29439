"""Hero matchup aggregation: counters and good-against lists.

OpenDota reports, per opposing hero, how many games the subject hero played
against it and how many it won. Win rates are from the subject's side, so the
lowest win rates are the heroes that counter it.
"""

from dataclasses import asdict, dataclass, field

MIN_GAMES = 100
TOP_N = 5


@dataclass(frozen=True)
class MatchupRecord:
    hero_id: int
    games_played: int
    wins: int

    @property
    def win_rate(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.wins / self.games_played * 100

    def to_dict(self) -> dict:
        return {**asdict(self), "win_rate": self.win_rate}


@dataclass(frozen=True)
class MatchupSummary:
    counters: list[MatchupRecord] = field(default_factory=list)
    good_against: list[MatchupRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "counters": [m.to_dict() for m in self.counters],
            "good_against": [m.to_dict() for m in self.good_against],
        }


def parse_matchups(raw: list[dict]) -> list[MatchupRecord]:
    return [
        MatchupRecord(
            hero_id=int(m["hero_id"]),
            games_played=int(m.get("games_played") or 0),
            wins=int(m.get("wins") or 0),
        )
        for m in raw
    ]


def aggregate_matchups(raw: list[dict], min_games: int = MIN_GAMES, limit: int = TOP_N) -> MatchupSummary:
    """Build counters (lowest win rate first) and good-against (highest first).

    Entries under ``min_games`` are noise and dropped. Python's sort is
    stable, so ties keep upstream order.
    """
    matchups = [m for m in parse_matchups(raw) if m.games_played >= min_games]

    counters = sorted(matchups, key=lambda m: m.win_rate)[:limit]
    good_against = sorted(matchups, key=lambda m: m.win_rate, reverse=True)[:limit]

    return MatchupSummary(counters=counters, good_against=good_against)
