"""次ラウンド目標モジュール

直近のラウンドから、次のラウンドで意識する3つの目標を選ぶ。
"""

from collections.abc import Iterable

from .config import Thresholds
from .geometry import CourseIndex
from .metrics import average, blowup_count, round_volatility, scoring_by_si_bucket
from .models import Round
from .windows import trailing_window

ONBOARDING_TARGETS = (
    "Log your next round hole-by-hole (scores only is fine).",
    "Aim for stress-free golf: avoid hero shots and keep the ball in play.",
    "Pick one thing: club up on par 3s, or take less than driver on tight holes.",
)

TARGET_CUT_BLOWUPS = (
    "Cut doubles+ first: if you’re in trouble, take the boring punch-out "
    "instead of the miracle shot."
)
TARGET_PROTECT_MOMENTUM = (
    "Protect momentum: treat bogey as a save, not a failure. No tilt swings."
)
TARGET_STABILISE = (
    "Stabilise your round: pick conservative lines off the tee on 3–4 holes "
    "you usually blow up."
)
TARGET_PUSH_EDGE = (
    "You’re getting steadier—push one low-risk edge (better club choice on "
    "par 3s, or smarter layups)."
)
TARGET_HARD_HOLES = (
    "Hard holes tax you: play them as ‘bogey holes’—keep it in play, aim "
    "centre-green, accept the 5."
)
TARGET_SAFE_TARGET = (
    "On tough holes: commit to a safe target and swing at 80–90%. Clean "
    "contact beats brute force."
)


def next_round_targets(
    rounds: Iterable[Round],
    index: CourseIndex,
    thresholds: Thresholds | None = None,
) -> list[str]:
    """次ラウンドの目標を3つ返す

    Args:
        rounds: ラウンド一覧(順不同)
        index: コース参照
        thresholds: 判定閾値

    Returns:
        list[str]: 大叩き・安定度・難ホールの順に1つずつ。
            履歴が無い場合は初回向けの固定メッセージ
    """
    thresholds = thresholds or Thresholds()
    rounds = list(rounds)
    if not rounds:
        return list(ONBOARDING_TARGETS)

    window = trailing_window(rounds, thresholds.target_window)
    avg_blowups = average([blowup_count(r, index.tee_for(r)) for r in window]) or 0.0
    avg_volatility = (
        average([round_volatility(r, index.tee_for(r)) for r in window]) or 0.0
    )
    si = scoring_by_si_bucket(window, index)

    targets: list[str] = []

    if avg_blowups >= thresholds.blowup_target:
        targets.append(TARGET_CUT_BLOWUPS)
    else:
        targets.append(TARGET_PROTECT_MOMENTUM)

    if avg_volatility >= thresholds.volatility_target:
        targets.append(TARGET_STABILISE)
    else:
        targets.append(TARGET_PUSH_EDGE)

    if (
        si.hard is not None
        and si.easy is not None
        and si.hard - si.easy > thresholds.difficulty_gap
    ):
        targets.append(TARGET_HARD_HOLES)
    else:
        targets.append(TARGET_SAFE_TARGET)

    return targets
