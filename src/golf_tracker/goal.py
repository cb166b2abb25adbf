"""目標管理モジュール

大叩き(ダブルボギー以上)削減目標の基準値設定と進捗計算を提供する。

状態は2つ:
    - 未設定: baseline_blowupsがNone
    - 追跡中: baseline_blowupsが設定済み(以降は再計算しない)
"""

import logging
import threading
from collections.abc import Iterable
from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field

from .config import Thresholds
from .geometry import CourseIndex
from .metrics import average, blowup_count
from .models import Goal, Round
from .windows import trailing_window

logger = logging.getLogger(__name__)


class GoalStatus(StrEnum):
    """目標の表示状態"""

    INACTIVE = "inactive"
    UNINITIALIZED = "uninitialized"
    NEED_MORE_ROUNDS = "need_more_rounds"
    TRACKING = "tracking"


class GoalProgress(BaseModel):
    """目標の進捗(表示用)"""

    status: GoalStatus = Field(..., description="状態")
    pct: float | None = Field(default=None, description="達成率(0〜100)")
    title: str = Field(..., description="見出し")
    subtitle: str = Field(default="", description="補足")
    baseline: float | None = Field(default=None, description="基準値")
    target: float | None = Field(default=None, description="目標値")
    current: float | None = Field(default=None, description="現在値")


def is_tracking(goal: Goal) -> bool:
    return goal.baseline_blowups is not None


def _mean_blowups(rounds: list[Round], index: CourseIndex) -> float | None:
    return average([blowup_count(r, index.tee_for(r)) for r in rounds])


def ensure_goal(
    goal: Goal,
    rounds: Iterable[Round],
    index: CourseIndex,
    today: date | None = None,
    min_rounds: int = Thresholds().min_rounds,
) -> Goal:
    """必要に応じて基準値を設定した目標を返す

    無効な目標、または基準値設定済みの目標はそのまま返す。
    直近window_rounds件にmin_rounds件以上のラウンドがあれば、
    その平均大叩き数を基準値として設定する。引数のgoalは変更しない。

    Args:
        goal: 現在の目標
        rounds: ラウンド一覧(順不同)
        index: コース参照
        today: 基準設定日(省略時は今日)
        min_rounds: 基準値設定に必要な最小ラウンド数

    Returns:
        Goal: 更新後の目標(呼び出し側で保存すること)
    """
    if not goal.active or is_tracking(goal):
        return goal

    window = trailing_window(rounds, goal.window_rounds)
    if len(window) < min_rounds:
        logger.debug(
            "基準値の設定にはラウンドが不足しています: %d/%d", len(window), min_rounds
        )
        return goal

    baseline = _mean_blowups(window, index)
    created_at = (today or date.today()).isoformat()
    logger.info("大叩き数の基準値を設定しました: %.2f (%s)", baseline, created_at)
    return goal.model_copy(
        update={"baseline_blowups": baseline, "created_at": created_at}
    )


def goal_progress(
    goal: Goal,
    rounds: Iterable[Round],
    index: CourseIndex,
    min_rounds: int = Thresholds().min_rounds,
) -> GoalProgress:
    """目標の進捗を計算する

    Args:
        goal: 現在の目標
        rounds: ラウンド一覧(順不同)
        index: コース参照
        min_rounds: 進捗計算に必要な最小ラウンド数

    Returns:
        GoalProgress: 進捗。追跡中でない場合はpctがNone
    """
    if not goal.active:
        return GoalProgress(
            status=GoalStatus.INACTIVE,
            title="No active goal",
            subtitle="Turn on a goal to track progress.",
        )
    if goal.baseline_blowups is None:
        return GoalProgress(
            status=GoalStatus.UNINITIALIZED,
            title="Goal not available yet",
            subtitle=f"Log {min_rounds} rounds to set your blow-up baseline.",
        )

    baseline = goal.baseline_blowups
    target = baseline * (1 - goal.reduction_pct / 100)

    window = trailing_window(rounds, goal.window_rounds)
    if len(window) < min_rounds:
        return GoalProgress(
            status=GoalStatus.NEED_MORE_ROUNDS,
            title="Need more rounds",
            subtitle=f"Log at least {min_rounds} rounds to measure progress.",
            baseline=baseline,
            target=target,
        )

    current = _mean_blowups(window, index)
    denominator = baseline - target
    if denominator == 0:
        denominator = 1
    pct = max(0.0, min(100.0, (baseline - current) / denominator * 100))

    return GoalProgress(
        status=GoalStatus.TRACKING,
        pct=pct,
        title=f"Cut blow-ups by {goal.reduction_pct}%",
        subtitle=(
            f"Baseline {baseline:.1f} → target {target:.1f} per round. "
            f"Last {len(window)}: {current:.1f}"
        ),
        baseline=baseline,
        target=target,
        current=current,
    )


class GoalTracker:
    """目標を保持し、基準値設定を排他制御するクラス

    複数スレッドから呼ばれるホストで、基準値の二重設定を防ぐ。
    """

    def __init__(self, goal: Goal, index: CourseIndex):
        """初期化

        Args:
            goal: 現在の目標
            index: コース参照
        """
        self._goal = goal
        self._index = index
        self._lock = threading.Lock()

    @property
    def goal(self) -> Goal:
        return self._goal

    def ensure(self, rounds: Iterable[Round], today: date | None = None) -> bool:
        """基準値を設定する(未設定の場合のみ)

        Args:
            rounds: ラウンド一覧
            today: 基準設定日

        Returns:
            bool: 今回の呼び出しで基準値が設定された場合True
        """
        with self._lock:
            updated = ensure_goal(self._goal, rounds, self._index, today)
            changed = updated is not self._goal
            self._goal = updated
        return changed

    def progress(self, rounds: Iterable[Round]) -> GoalProgress:
        return goal_progress(self._goal, rounds, self._index)
