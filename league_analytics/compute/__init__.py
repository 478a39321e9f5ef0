from . import activity, core, keepers, managers, power, trades

group_matchups_by_week = core.group_matchups_by_week
weekly_points = core.weekly_points

expected_wins = power.expected_wins
actual_record = power.actual_record
consistency = power.consistency
strength_of_schedule = power.strength_of_schedule
should_be_record = power.should_be_record
power_score = power.power_score
weekly_ranks = power.weekly_ranks
calculate_power_rankings = power.calculate_power_rankings
summary_stats = power.summary_stats

pick_value = trades.pick_value
display_round = trades.display_round
calculate_trade_grade = trades.calculate_trade_grade

keeper_success_rate = keepers.keeper_success_rate
league_average_keeper_points = keepers.league_average_keeper_points

build_manager_summaries = managers.build_manager_summaries
trade_history = managers.trade_history

manager_activity = activity.manager_activity
trade_matrix = activity.trade_matrix
transaction_summary = activity.transaction_summary
position_churn = activity.position_churn

__all__ = [
    "group_matchups_by_week",
    "weekly_points",
    "expected_wins",
    "actual_record",
    "consistency",
    "strength_of_schedule",
    "should_be_record",
    "power_score",
    "weekly_ranks",
    "calculate_power_rankings",
    "summary_stats",
    "pick_value",
    "display_round",
    "calculate_trade_grade",
    "keeper_success_rate",
    "league_average_keeper_points",
    "build_manager_summaries",
    "trade_history",
    "manager_activity",
    "trade_matrix",
    "transaction_summary",
    "position_churn",
]
