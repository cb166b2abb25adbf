"""インサイト生成モジュール

直近ラウンドと、その前のラウンドを比較して傾向を文章で返す。
"""

from collections.abc import Iterable

from .config import Thresholds
from .geometry import CourseIndex
from .metrics import (
    average,
    average_to_par_18,
    hole_diffs,
    pens_for_round,
    scoring_by_si_bucket,
)
from .models import Round
from .windows import trailing_window

MSG_NEED_MORE_DATA = "Log at least {n} rounds to unlock trend insights."
MSG_DIFFICULTY_GAP = (
    "Hard holes (SI 1–6) are costing you noticeably more than easy ones. "
    "Play them for bogey and keep the ball in play."
)
MSG_FATIGUE_WORSE = (
    "Your second half runs {delta:.1f} strokes/hole worse than your first. "
    "Watch fuel, focus and tempo late in the round."
)
MSG_FATIGUE_STRONGER = (
    "You finish stronger: your second half runs {delta:.1f} strokes/hole better "
    "than your first. Look for a steadier start."
)
MSG_PENALTIES = (
    "Penalties are a lever: {avg:.1f} per round recently. "
    "Favour the safe side off the tee to save easy strokes."
)


def trend_message(
    recent_avg: float | None, prior_avg: float | None, prior_count: int
) -> str | None:
    """平均対パーの推移を文章にする

    Args:
        recent_avg: 直近ウィンドウの18ホール換算平均対パー
        prior_avg: 直前ウィンドウの18ホール換算平均対パー
        prior_count: 直前ウィンドウのラウンド数

    Returns:
        str | None: 直近の平均が無い場合はNone
    """
    if recent_avg is None:
        return None
    if prior_avg is None:
        return f"Averaging {recent_avg:+.1f} to par (18-hole equivalent) recently."

    delta = round(prior_avg - recent_avg, 1)
    if delta > 0:
        return (
            f"Trending better: {delta:.1f} strokes/18 lower than "
            f"your previous {prior_count} rounds."
        )
    if delta < 0:
        return (
            f"Trending worse: {abs(delta):.1f} strokes/18 higher than "
            f"your previous {prior_count} rounds."
        )
    return f"Holding steady against your previous {prior_count} rounds."


def fatigue_delta(
    rounds: Iterable[Round], index: CourseIndex, min_holes: int = 6
) -> float | None:
    """前半と後半の平均対パーの差(後半 - 前半)をラウンド平均で返す

    有効ホールがmin_holes未満のラウンドは対象外とする。
    """
    deltas: list[float] = []
    for round_ in rounds:
        diffs = hole_diffs(round_, index.tee_for(round_))
        if len(diffs) < min_holes:
            continue
        half = len(diffs) // 2
        first = sum(diffs[:half]) / half
        second = sum(diffs[half:]) / (len(diffs) - half)
        deltas.append(second - first)
    return average(deltas)


def insight_engine(
    rounds: Iterable[Round],
    index: CourseIndex,
    thresholds: Thresholds | None = None,
) -> list[str]:
    """ラウンド履歴からインサイトを生成する

    順序は「推移・難易度差・後半の崩れ・ペナルティ」で固定し、
    上限件数を超えた分は切り捨てる。

    Args:
        rounds: ラウンド一覧(順不同)
        index: コース参照
        thresholds: 判定閾値

    Returns:
        list[str]: インサイト(最大max_insights件)
    """
    thresholds = thresholds or Thresholds()
    rounds = list(rounds)
    if len(rounds) < thresholds.min_rounds:
        return [MSG_NEED_MORE_DATA.format(n=thresholds.min_rounds)]

    window = thresholds.insight_window
    recent = trailing_window(rounds, window)
    prior = trailing_window(rounds, window, skip=window)

    messages: list[str] = []

    trend = trend_message(
        average_to_par_18(recent, index),
        average_to_par_18(prior, index),
        len(prior),
    )
    if trend is not None:
        messages.append(trend)

    si = scoring_by_si_bucket(recent, index)
    if (
        si.hard is not None
        and si.easy is not None
        and si.hard - si.easy > thresholds.difficulty_gap
    ):
        messages.append(MSG_DIFFICULTY_GAP)

    drift = fatigue_delta(recent, index, thresholds.fatigue_min_holes)
    if drift is not None:
        if drift > thresholds.fatigue_drift:
            messages.append(MSG_FATIGUE_WORSE.format(delta=drift))
        elif drift < -thresholds.fatigue_drift:
            messages.append(MSG_FATIGUE_STRONGER.format(delta=abs(drift)))

    avg_pens = average([pens_for_round(r) for r in recent])
    if avg_pens is not None and avg_pens >= thresholds.penalty_burden:
        messages.append(MSG_PENALTIES.format(avg=avg_pens))

    return messages[: thresholds.max_insights]
