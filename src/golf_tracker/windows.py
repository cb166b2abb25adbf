"""ラウンド期間モジュール

日付順に並べたラウンドから、直近N件などのウィンドウを切り出す。
"""

from collections.abc import Iterable

from .models import Round


def sort_by_date(rounds: Iterable[Round]) -> list[Round]:
    """日付の昇順に並べる(同日のラウンドは入力順を維持)"""
    return sorted(rounds, key=lambda r: r.date)


def trailing_window(rounds: Iterable[Round], size: int, skip: int = 0) -> list[Round]:
    """日付順で末尾からsize件のラウンドを返す

    Args:
        rounds: ラウンド一覧(順不同)
        size: 取得件数
        skip: 末尾から除外する件数(直前の比較ウィンドウ用)

    Returns:
        list[Round]: 古い順のラウンド。履歴が短い場合はsize件未満になる

    Examples:
        12ラウンドあるとき、trailing_window(rounds, 10)は直近10件、
        trailing_window(rounds, 10, skip=10)はその前の2件を返す。
    """
    ordered = sort_by_date(rounds)
    end = len(ordered) - skip
    if size <= 0 or end <= 0:
        return []
    return ordered[max(0, end - size) : end]
