"""指標計算モジュール

ラウンド単位・複数ラウンド単位のスコア指標を計算する。
すべて純粋関数で、データ不足の場合は例外を出さずに0・None・空を返す。
"""

import math
import statistics
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .geometry import CourseIndex, aligned_pairs, played_holes
from .models import Round, Tee

# ハンディキャップ計算の基準スロープ
STANDARD_SLOPE = 113
# Playing Conditions Calculation(未実装のため常に0)
PCC = 0


@dataclass(frozen=True)
class ParTypeScoring:
    """パー別の平均スコア(対パー)"""

    p3: float | None
    p4: float | None
    p5: float | None


@dataclass(frozen=True)
class SIBucketScoring:
    """ハンディキャップ順位帯別の平均スコア(対パー)

    hard: 1〜6、mid: 7〜12、easy: 13〜18
    """

    hard: float | None
    mid: float | None
    easy: float | None


@dataclass(frozen=True)
class ScoreDifferential:
    """スコアディファレンシャル

    partialは9ホールラウンドの値であることを示す。
    """

    value: float
    partial: bool


def average(values: Sequence[float]) -> float | None:
    """平均を返す(空の場合はNone)"""
    if not values:
        return None
    return statistics.fmean(values)


def gross_for_round(round_: Round) -> int:
    """グロススコアを返す(未入力ホールは0として加算)"""
    return sum(r.score for r in round_.hole_results)


def par_for_played(round_: Round, tee: Tee | None) -> int:
    """プレーしたホールのパー合計を返す"""
    return sum(h.par for h in played_holes(round_, tee))


def to_par(round_: Round, tee: Tee | None) -> int:
    """対パースコアを返す(アンダーは負の値)"""
    return gross_for_round(round_) - par_for_played(round_, tee)


def normalize_to_18(value: float, format_: int) -> float:
    """9ホールの値を18ホール相当に換算する

    比較表示専用で、換算値を保存することはない。
    """
    if format_ == 9:
        return value * 2
    return value


def average_to_par_18(rounds: Iterable[Round], index: CourseIndex) -> float | None:
    """18ホール換算の平均対パーを返す

    スコアが1ホールも入力されていないラウンドは除外する。
    """
    values = [
        normalize_to_18(to_par(r, index.tee_for(r)), r.format)
        for r in rounds
        if gross_for_round(r) > 0
    ]
    return average(values)


def hole_diffs(round_: Round, tee: Tee | None) -> list[int]:
    """スコアが入力されたホールの対パー(score - par)をプレー順に返す"""
    holes = played_holes(round_, tee)
    return [
        result.score - hole.par
        for hole, result in aligned_pairs(holes, round_.hole_results)
        if result.score > 0
    ]


def blowup_count(round_: Round, tee: Tee | None) -> int:
    """ダブルボギー以上のホール数を返す"""
    holes = played_holes(round_, tee)
    return sum(
        1
        for hole, result in aligned_pairs(holes, round_.hole_results)
        if result.score > 0 and result.score >= hole.par + 2
    )


def round_volatility(round_: Round, tee: Tee | None) -> float:
    """ホールごとの対パーの標本標準偏差を返す

    有効なホールが2未満の場合は0を返す(NaNにはしない)。
    """
    diffs = hole_diffs(round_, tee)
    if len(diffs) < 2:
        return 0.0
    return statistics.stdev(diffs)


def scoring_by_par_type(rounds: Iterable[Round], index: CourseIndex) -> ParTypeScoring:
    """パー3・4・5ごとの平均対パーを返す

    Args:
        rounds: ラウンド一覧
        index: コース参照

    Returns:
        ParTypeScoring: データの無いパーはNone
    """
    buckets: dict[int, list[int]] = {3: [], 4: [], 5: []}
    for round_ in rounds:
        holes = index.played_holes(round_)
        for hole, result in aligned_pairs(holes, round_.hole_results):
            if hole.par in buckets and result.score > 0:
                buckets[hole.par].append(result.score - hole.par)

    return ParTypeScoring(
        p3=average(buckets[3]),
        p4=average(buckets[4]),
        p5=average(buckets[5]),
    )


def scoring_by_si_bucket(
    rounds: Iterable[Round], index: CourseIndex
) -> SIBucketScoring:
    """ハンディキャップ順位帯ごとの平均対パーを返す

    ハンディキャップ順位が0(未設定)またはスコア未入力のホールは除外する。

    Args:
        rounds: ラウンド一覧
        index: コース参照

    Returns:
        SIBucketScoring: データの無い帯はNone
    """
    hard: list[int] = []
    mid: list[int] = []
    easy: list[int] = []
    for round_ in rounds:
        holes = index.played_holes(round_)
        for hole, result in aligned_pairs(holes, round_.hole_results):
            if not hole.stroke_index or not result.score:
                continue
            diff = result.score - hole.par
            if hole.stroke_index <= 6:
                hard.append(diff)
            elif hole.stroke_index <= 12:
                mid.append(diff)
            else:
                easy.append(diff)

    return SIBucketScoring(hard=average(hard), mid=average(mid), easy=average(easy))


def score_differential(round_: Round, tee: Tee | None) -> ScoreDifferential | None:
    """簡易スコアディファレンシャルを計算する

    (調整後グロス - コースレート - PCC) * 113 / スロープ。
    公式ハンディキャップ計算の代替ではない。

    Args:
        round_: ラウンド
        tee: ラウンドで使用したティー

    Returns:
        ScoreDifferential | None: レート未設定・スコア未入力・
            9/18以外のホール数の場合はNone
    """
    if tee is None or tee.course_rating is None or tee.slope_rating is None:
        return None
    rating = float(tee.course_rating)
    slope = float(tee.slope_rating)
    if not (math.isfinite(rating) and math.isfinite(slope)) or slope <= 0:
        return None
    if round_.format not in (9, 18):
        return None

    gross = (
        round_.adjusted_gross
        if round_.adjusted_gross is not None
        else gross_for_round(round_)
    )
    if gross <= 0:
        return None

    value = (gross - rating - PCC) * STANDARD_SLOPE / slope
    return ScoreDifferential(value=value, partial=round_.format == 9)


def putts_for_round(round_: Round) -> int | None:
    """パット合計を返す

    パットが1ホールも記録されていない場合は「未計測」としてNoneを返す。
    """
    putts = [r.putts for r in round_.hole_results if r.putts is not None]
    if not putts:
        return None
    return sum(p for p in putts if p > 0)


def pens_for_round(round_: Round) -> int:
    """ペナルティ合計を返す

    記録が無い場合はペナルティ無しとみなして0を返す。
    パットの扱い(None)とは意図的に異なる。
    """
    return sum(r.penalties for r in round_.hole_results if r.penalties)


def _flag_rate(flags: list[bool | None]) -> float | None:
    recorded = [f for f in flags if f is not None]
    if not recorded:
        return None
    return sum(1 for f in recorded if f) / len(recorded)


def fairway_rate(round_: Round) -> float | None:
    """フェアウェイキープ率(記録が無い場合はNone)"""
    return _flag_rate([r.fairway_hit for r in round_.hole_results])


def gir_rate(round_: Round) -> float | None:
    """パーオン率(記録が無い場合はNone)"""
    return _flag_rate([r.gir for r in round_.hole_results])
