import pytest

from league_analytics.compute.core import group_matchups_by_week
from league_analytics.compute.power import (
    actual_record,
    calculate_power_rankings,
    consistency,
    expected_wins,
    roster_stats,
    should_be_record,
    strength_of_schedule,
    summary_stats,
    trend_score,
    weekly_ranks,
)
from league_analytics.config import PowerWeights, TrendWeights
from league_analytics.models import MatchupRecord, RosterRecord


def test_two_team_example_metrics(two_team_matchups):
    by_week = group_matchups_by_week(two_team_matchups)
    assert expected_wins(1, by_week) == pytest.approx(2.0)
    assert expected_wins(2, by_week) == pytest.approx(1.0)
    rec = actual_record(1, by_week)
    assert (rec.wins, rec.losses, rec.ties) == (2, 1, 0)
    assert consistency([100, 110, 90]) == pytest.approx(8.1650, abs=1e-4)
    assert strength_of_schedule(1, by_week) == pytest.approx(95.0)
    sb = should_be_record(1, by_week)
    assert (sb.wins, sb.losses) == (2, 1)


def test_two_team_rankings(two_team_matchups, two_team_rosters):
    rows = calculate_power_rankings(two_team_matchups, two_team_rosters)
    assert [r.roster_id for r in rows] == [1, 2]
    a, b = rows
    assert a.power_score == pytest.approx(0.85)
    assert b.power_score == pytest.approx(0.71)
    assert a.team_name == "Alpha"
    assert b.team_name == "Team 2"
    assert a.avg_points == pytest.approx(100.0)
    assert a.total_points == pytest.approx(300.0)
    assert a.weeks_played == 3
    assert [w.rank for w in a.weekly_ranks] == [1, 1, 1]


def test_expected_wins_ties_count_half():
    rows = [MatchupRecord(1, 1, 1, 100.0), MatchupRecord(2, 1, 1, 100.0), MatchupRecord(3, 2, 1, 50.0)]
    by_week = group_matchups_by_week(rows)
    # beats roster 3, ties roster 2 -> (1 + 0.5) / 2
    assert expected_wins(1, by_week) == pytest.approx(0.75)


def test_expected_wins_ceiling_for_top_scorer(four_team_matchups):
    by_week = group_matchups_by_week(four_team_matchups)
    assert expected_wins(1, by_week) == pytest.approx(4.0)


def test_should_be_ignores_exact_median():
    # median of [90, 100, 110] is 100
    rows = [MatchupRecord(1, 1, 1, 100.0), MatchupRecord(2, 1, 1, 90.0), MatchupRecord(3, None, 1, 110.0)]
    sb = should_be_record(1, group_matchups_by_week(rows))
    assert (sb.wins, sb.losses) == (0, 0)


def test_should_be_even_count_uses_middle_average():
    rows = [MatchupRecord(i, None, 1, p) for i, p in enumerate([80.0, 100.0, 104.0, 120.0], start=1)]
    by_week = group_matchups_by_week(rows)
    # median 102 -> roster 2 loses, roster 3 wins
    assert should_be_record(2, by_week).losses == 1
    assert should_be_record(3, by_week).wins == 1


def test_bye_week_skipped_for_record_and_schedule():
    rows = [MatchupRecord(1, None, 1, 100.0), MatchupRecord(2, None, 1, 90.0)]
    by_week = group_matchups_by_week(rows)
    rec = actual_record(1, by_week)
    assert (rec.wins, rec.losses, rec.ties) == (0, 0, 0)
    assert strength_of_schedule(1, by_week) == 0.0


def test_consistency_empty_is_zero():
    assert consistency([]) == 0.0


def test_power_ranks_are_permutation(four_team_matchups, four_team_rosters):
    rows = calculate_power_rankings(four_team_matchups, four_team_rosters)
    assert sorted(r.power_rank for r in rows) == [1, 2, 3, 4]
    scores = [r.power_score for r in rows]
    assert scores == sorted(scores, reverse=True)
    for r in rows:
        assert r.luck_index == pytest.approx(r.actual_wins - r.expected_wins)


def test_weekly_ranks_permutation_per_week(four_team_matchups, four_team_rosters):
    rows = calculate_power_rankings(four_team_matchups, four_team_rosters)
    by_week: dict[int, list[int]] = {}
    for r in rows:
        for wr in r.weekly_ranks:
            by_week.setdefault(wr.week, []).append(wr.rank)
    assert sorted(by_week) == [1, 2, 3, 4]
    for ranks in by_week.values():
        assert sorted(ranks) == [1, 2, 3, 4]


def test_weekly_ranks_only_rank_rosters_present_that_week():
    rows = [
        MatchupRecord(1, 1, 1, 100.0),
        MatchupRecord(2, 1, 1, 90.0),
        MatchupRecord(3, None, 1, 80.0),
        MatchupRecord(1, 1, 2, 100.0),
        MatchupRecord(2, 1, 2, 120.0),
    ]
    ranks = weekly_ranks(group_matchups_by_week(rows), [1, 2, 3])
    assert [w.week for w in ranks[3]] == [1]
    week2 = sorted(w.rank for rid in (1, 2) for w in ranks[rid] if w.week == 2)
    assert week2 == [1, 2]


def test_weekly_rank_uses_growing_window():
    # Roster 2 is terrible in week 1 and great in week 2; its week-1 rank must not see week 2
    rows = [
        MatchupRecord(1, 1, 1, 120.0),
        MatchupRecord(2, 1, 1, 60.0),
        MatchupRecord(1, 1, 2, 100.0),
        MatchupRecord(2, 1, 2, 200.0),
    ]
    ranks = weekly_ranks(group_matchups_by_week(rows), [1, 2])
    assert ranks[2][0].rank == 2
    assert ranks[2][0].points == pytest.approx(60.0)
    assert ranks[2][1].points == pytest.approx(130.0)


def test_ties_keep_input_order():
    rows = [MatchupRecord(5, 1, 1, 100.0), MatchupRecord(3, 1, 1, 100.0)]
    result = calculate_power_rankings(rows, [RosterRecord(5), RosterRecord(3)])
    assert [(r.roster_id, r.power_rank) for r in result] == [(5, 1), (3, 2)]
    assert [r.weekly_ranks[0].rank for r in result] == [1, 2]


def test_zero_rosters_empty():
    assert calculate_power_rankings([MatchupRecord(1, 1, 1, 10.0)], []) == []


def test_roster_without_data_gets_zeroed_row(two_team_matchups, two_team_rosters):
    rows = calculate_power_rankings(two_team_matchups, [*two_team_rosters, RosterRecord(3, "Ghost")])
    ghost = next(r for r in rows if r.roster_id == 3)
    assert ghost.weeks_played == 0
    assert ghost.actual_wins == 0 and ghost.expected_wins == 0.0
    assert ghost.avg_points == 0.0 and ghost.consistency_score == 0.0
    assert ghost.weekly_ranks == []
    assert ghost.power_rank == 3


def test_custom_weights_change_order():
    # Roster 1 wins more, roster 2 scores more on average
    rows = [
        MatchupRecord(1, 1, 1, 101.0),
        MatchupRecord(2, 1, 1, 100.0),
        MatchupRecord(1, 1, 2, 101.0),
        MatchupRecord(2, 1, 2, 100.0),
        MatchupRecord(1, 1, 3, 10.0),
        MatchupRecord(2, 1, 3, 300.0),
    ]
    rosters = [RosterRecord(1), RosterRecord(2)]
    default = calculate_power_rankings(rows, rosters)
    points_only = calculate_power_rankings(
        rows, rosters, weights=PowerWeights(wins=0, avg_points=1, expected_wins=0, consistency=0)
    )
    assert default[0].roster_id == 1
    assert points_only[0].roster_id == 2


def test_summary_stats(four_team_matchups, four_team_rosters):
    rows = calculate_power_rankings(four_team_matchups, four_team_rosters)
    stats = summary_stats(rows)
    assert stats.luckiest.luck_index == max(r.luck_index for r in rows)
    assert stats.unluckiest.luck_index == min(r.luck_index for r in rows)
    assert stats.most_consistent.consistency_score == min(r.consistency_score for r in rows)
    assert stats.toughest_schedule.strength_of_schedule == max(r.strength_of_schedule for r in rows)


def test_summary_stats_empty():
    stats = summary_stats([])
    assert stats.luckiest is None and stats.toughest_schedule is None


def test_custom_trend_weights_flip_weekly_order():
    # Week 1: roster 1 beats a weak opponent, roster 3 outscores it but loses to roster 4
    rows = [
        MatchupRecord(1, 1, 1, 90.0),
        MatchupRecord(2, 1, 1, 80.0),
        MatchupRecord(3, 2, 1, 200.0),
        MatchupRecord(4, 2, 1, 210.0),
    ]
    rosters = [RosterRecord(i) for i in range(1, 5)]
    default = calculate_power_rankings(rows, rosters)
    wins_only = calculate_power_rankings(
        rows, rosters, trend_weights=TrendWeights(wins=1, avg_points=0, expected_wins=0, consistency=0)
    )
    assert {r.roster_id: r.weekly_ranks[0].rank for r in default} == {4: 1, 3: 2, 1: 3, 2: 4}
    assert {r.roster_id: r.weekly_ranks[0].rank for r in wins_only} == {1: 1, 4: 2, 2: 3, 3: 4}
    # the final power ranking does not use trend weights
    assert [r.roster_id for r in default] == [r.roster_id for r in wins_only]


def test_trend_consistency_floors_at_zero_above_cap():
    rows = [MatchupRecord(1, None, 1, 0.0), MatchupRecord(1, None, 2, 200.0)]
    stats = roster_stats(1, group_matchups_by_week(rows))
    assert stats.consistency == pytest.approx(100.0)
    consistency_only = TrendWeights(wins=0, avg_points=0, expected_wins=0, consistency=1, consistency_cap=50)
    assert trend_score(stats, consistency_only) == 0.0
    wide_cap = TrendWeights(wins=0, avg_points=0, expected_wins=0, consistency=1, consistency_cap=400)
    assert trend_score(stats, wide_cap) == pytest.approx(0.75)


def test_weekly_ranks_volatile_rosters_tie_at_zero_consistency():
    # stdev 100 vs 60, both above the cap: neither goes negative, so input order breaks the tie
    rows = [
        MatchupRecord(1, None, 1, 0.0),
        MatchupRecord(2, None, 1, 40.0),
        MatchupRecord(1, None, 2, 200.0),
        MatchupRecord(2, None, 2, 160.0),
    ]
    weights = TrendWeights(wins=0, avg_points=0, expected_wins=0, consistency=1, consistency_cap=50)
    ranks = weekly_ranks(group_matchups_by_week(rows), [1, 2], weights)
    assert [w.rank for w in ranks[1]] == [1, 1]
    assert [w.rank for w in ranks[2]] == [2, 2]
