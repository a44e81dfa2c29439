"""Matchup aggregation: win-rate guard, noise filter, counters/good-against."""

from services.matchups import MatchupRecord, aggregate_matchups


def _matchup(hero_id, games, wins):
    return {"hero_id": hero_id, "games_played": games, "wins": wins}


def test_zero_games_win_rate_is_zero():
    assert MatchupRecord(hero_id=5, games_played=0, wins=0).win_rate == 0.0


def test_zero_games_entry_survives_when_threshold_is_zero():
    summary = aggregate_matchups([_matchup(5, 0, 0)], min_games=0)
    assert summary.counters[0].win_rate == 0.0


def test_entries_under_100_games_are_ignored():
    summary = aggregate_matchups([_matchup(2, 99, 0), _matchup(3, 100, 50)])

    assert [m.hero_id for m in summary.counters] == [3]
    assert [m.hero_id for m in summary.good_against] == [3]


def test_counters_are_the_five_lowest_win_rates_ascending():
    raw = [_matchup(hero_id, 1000, wins) for hero_id, wins in enumerate([700, 300, 500, 100, 900, 200, 600, 400], start=10)]
    raw.append(_matchup(99, 10, 0))  # lowest, but too few games

    summary = aggregate_matchups(raw)

    assert [m.hero_id for m in summary.counters] == [13, 15, 11, 17, 12]
    assert [m.win_rate for m in summary.counters] == [10.0, 20.0, 30.0, 40.0, 50.0]


def test_good_against_are_the_five_highest_win_rates_descending():
    raw = [_matchup(hero_id, 1000, wins) for hero_id, wins in enumerate([700, 300, 500, 100, 900, 200, 600, 400], start=10)]

    summary = aggregate_matchups(raw)

    assert [m.hero_id for m in summary.good_against] == [14, 10, 16, 12, 17]


def test_ties_keep_upstream_order():
    raw = [_matchup(7, 200, 100), _matchup(3, 400, 200), _matchup(9, 100, 50)]

    summary = aggregate_matchups(raw)

    assert [m.hero_id for m in summary.counters] == [7, 3, 9]
    assert [m.hero_id for m in summary.good_against] == [7, 3, 9]


def test_short_list_and_empty_input():
    assert len(aggregate_matchups([_matchup(2, 500, 250)]).counters) == 1
    empty = aggregate_matchups([])
    assert empty.to_dict() == {"counters": [], "good_against": []}


def test_to_dict_includes_win_rate():
    summary = aggregate_matchups([_matchup(2, 200, 50)])
    assert summary.to_dict()["counters"] == [{"hero_id": 2, "games_played": 200, "wins": 50, "win_rate": 25.0}]
