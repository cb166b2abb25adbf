"""goal.pyのテスト"""

from datetime import date

import pytest
from conftest import build_round, par_scores

from golf_tracker.goal import GoalStatus, GoalTracker, ensure_goal, goal_progress, is_tracking
from golf_tracker.models import Goal

TODAY = date(2024, 6, 30)


def _with_blowups(count: int, day: int):
    """指定回数のダブルボギーを含むラウンド"""
    return build_round(
        par_scores({position: 2 for position in range(count)}),
        date=f"2024-05-{day:02d}",
    )


class TestEnsureGoal:
    """ensure_goal関数のテスト"""

    def test_inactive_goal_is_unchanged(self, index):
        """無効な目標はそのまま返すこと"""
        goal = Goal(active=False)
        rounds = [_with_blowups(3, d) for d in range(1, 6)]

        assert ensure_goal(goal, rounds, index, TODAY) is goal

    def test_not_enough_rounds(self, index):
        """ラウンドが3件未満の場合は基準値を設定しないこと"""
        goal = Goal()
        rounds = [_with_blowups(3, d) for d in range(1, 3)]

        result = ensure_goal(goal, rounds, index, TODAY)

        assert result.baseline_blowups is None
        assert not is_tracking(result)

    def test_sets_baseline_from_trailing_window(self, index):
        """直近window_rounds件の平均大叩き数を基準値にすること"""
        # 古い2件は対象外(window_rounds=5)
        rounds = [_with_blowups(9, d) for d in (1, 2)]
        rounds += [_with_blowups(n, d) for n, d in zip([1, 2, 3, 4, 5], range(3, 8))]
        goal = Goal()

        result = ensure_goal(goal, rounds, index, TODAY)

        assert result.baseline_blowups == pytest.approx(3.0)
        assert result.created_at == "2024-06-30"
        assert goal.baseline_blowups is None

    def test_baseline_is_set_only_once(self, index):
        """基準値は一度設定したら再計算しないこと"""
        rounds = [_with_blowups(3, d) for d in range(1, 4)]
        first = ensure_goal(Goal(), rounds, index, TODAY)

        second = ensure_goal(first, rounds, index, date(2024, 7, 1))
        later = ensure_goal(first, [_with_blowups(0, d) for d in range(1, 6)], index)

        assert second is first
        assert second.baseline_blowups == first.baseline_blowups
        assert second.created_at == "2024-06-30"
        assert later.baseline_blowups == pytest.approx(3.0)


class TestGoalProgress:
    """goal_progress関数のテスト"""

    def test_inactive(self, index):
        """無効な目標は進捗を返さないこと"""
        result = goal_progress(Goal(active=False), [], index)

        assert result.status == GoalStatus.INACTIVE
        assert result.pct is None

    def test_uninitialized(self, index):
        """基準値未設定の場合は進捗を返さないこと"""
        result = goal_progress(Goal(), [_with_blowups(1, 1)], index)

        assert result.status == GoalStatus.UNINITIALIZED
        assert result.pct is None

    def test_need_more_rounds(self, index):
        """直近のラウンドが3件未満の場合は割合を返さないこと"""
        goal = Goal(baseline_blowups=3.0)

        result = goal_progress(goal, [_with_blowups(1, 1)], index)

        assert result.status == GoalStatus.NEED_MORE_ROUNDS
        assert result.pct is None
        assert result.target == pytest.approx(2.4)

    def test_halfway_to_target(self, index):
        """基準3.0・目標2.4・現在2.7の場合は50%になること"""
        goal = Goal(baseline_blowups=3.0, reduction_pct=20, window_rounds=10)
        rounds = [_with_blowups(3, d) for d in range(1, 8)]
        rounds += [_with_blowups(2, d) for d in range(8, 11)]

        result = goal_progress(goal, rounds, index)

        assert result.status == GoalStatus.TRACKING
        assert result.current == pytest.approx(2.7)
        assert result.target == pytest.approx(2.4)
        assert result.baseline == pytest.approx(3.0)
        assert result.pct == pytest.approx(50.0)
        assert result.title == "Cut blow-ups by 20%"

    @pytest.mark.parametrize("blowups, expected", [(0, 100.0), (5, 0.0)])
    def test_pct_is_clamped(self, index, blowups, expected):
        """割合は0〜100に収めること"""
        goal = Goal(baseline_blowups=3.0)
        rounds = [_with_blowups(blowups, d) for d in range(1, 4)]

        assert goal_progress(goal, rounds, index).pct == expected

    def test_zero_reduction_does_not_divide_by_zero(self, index):
        """削減率0%でもゼロ除算にならないこと"""
        goal = Goal(baseline_blowups=3.0, reduction_pct=0)
        rounds = [_with_blowups(3, d) for d in range(1, 4)]

        result = goal_progress(goal, rounds, index)

        assert result.target == pytest.approx(3.0)
        assert result.pct == 0.0


class TestGoalTracker:
    """GoalTrackerクラスのテスト"""

    def test_ensure_reports_transition_once(self, index):
        """基準値を設定した呼び出しだけTrueを返すこと"""
        tracker = GoalTracker(Goal(), index)
        rounds = [_with_blowups(2, d) for d in range(1, 4)]

        assert tracker.ensure(rounds, TODAY) is True
        assert tracker.ensure(rounds, TODAY) is False
        assert tracker.goal.baseline_blowups == pytest.approx(2.0)

    def test_progress(self, index):
        """保持している目標の進捗を返すこと"""
        tracker = GoalTracker(Goal(), index)
        rounds = [_with_blowups(2, d) for d in range(1, 4)]
        tracker.ensure(rounds, TODAY)

        result = tracker.progress(rounds)

        assert result.status == GoalStatus.TRACKING
        assert result.pct == 0.0
