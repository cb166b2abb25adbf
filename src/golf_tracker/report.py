"""レポートモジュール

ラウンド一覧の集計表、ポータル用のサマリー、グラフ用の系列を作成する。
"""

import logging
from collections.abc import Iterable
from pathlib import Path

import polars as pl
from pydantic import BaseModel, Field

from .config import Thresholds
from .geometry import CourseIndex
from .goal import GoalProgress, goal_progress
from .insights import insight_engine
from .metrics import (
    blowup_count,
    gross_for_round,
    normalize_to_18,
    pens_for_round,
    putts_for_round,
    round_volatility,
    score_differential,
    scoring_by_par_type,
    scoring_by_si_bucket,
    to_par,
)
from .models import Goal, Round
from .targets import next_round_targets
from .windows import sort_by_date

logger = logging.getLogger(__name__)

# ラウンドが無い場合にポータルへ表示する案内
MSG_EMPTY_PORTAL = "Add a course, then log your first round."

ROUNDS_SCHEMA = {
    "date": pl.String,
    "round_type": pl.String,
    "course": pl.String,
    "tee": pl.String,
    "format": pl.Int32,
    "gross": pl.Int32,
    "to_par": pl.Int32,
    "to_par_18": pl.Float64,
    "blowups": pl.Int32,
    "volatility": pl.Float64,
    "putts": pl.Int32,
    "penalties": pl.Int32,
    "differential": pl.Float64,
}


class ChartSeries(BaseModel):
    """グラフ用の系列(ラベルと値)"""

    labels: list[str] = Field(default_factory=list)
    values: list[float] = Field(default_factory=list)


class PortalSummary(BaseModel):
    """ポータル画面のサマリー"""

    rounds: int = Field(default=0, description="ラウンド数")
    best_to_par: float | None = Field(default=None, description="ベスト(18ホール換算)")
    avg_to_par: float | None = Field(default=None, description="平均(18ホール換算)")
    avg_blowups: float | None = Field(default=None, description="平均大叩き数")
    avg_volatility: float | None = Field(default=None, description="平均ボラティリティ")
    targets: list[str] = Field(default_factory=list, description="次ラウンドの目標")
    insights: list[str] = Field(default_factory=list, description="インサイト")
    goal: GoalProgress | None = Field(default=None, description="目標の進捗")


def rounds_frame(rounds: Iterable[Round], index: CourseIndex) -> pl.DataFrame:
    """ラウンドごとの指標をDataFrameにまとめる

    Args:
        rounds: ラウンド一覧
        index: コース参照

    Returns:
        pl.DataFrame: 日付昇順の1ラウンド1行の表
    """
    rows = []
    for round_ in sort_by_date(rounds):
        tee = index.tee_for(round_)
        diff = score_differential(round_, tee)
        raw_to_par = to_par(round_, tee)
        rows.append(
            {
                "date": round_.date,
                "round_type": round_.round_type,
                "course": index.course_label(round_.course_id),
                "tee": index.tee_label(round_.course_id, round_.tee_id),
                "format": round_.format,
                "gross": gross_for_round(round_),
                "to_par": raw_to_par,
                "to_par_18": float(normalize_to_18(raw_to_par, round_.format)),
                "blowups": blowup_count(round_, tee),
                "volatility": round_volatility(round_, tee),
                "putts": putts_for_round(round_),
                "penalties": pens_for_round(round_),
                "differential": diff.value if diff is not None else None,
            }
        )
    return pl.DataFrame(rows, schema=ROUNDS_SCHEMA)


def portal_summary(
    rounds: Iterable[Round],
    index: CourseIndex,
    goal: Goal | None = None,
    thresholds: Thresholds | None = None,
) -> PortalSummary:
    """ポータル画面のサマリーを作成する

    Args:
        rounds: ラウンド一覧(絞り込み済み)
        index: コース参照
        goal: 目標(省略時は進捗を含めない)
        thresholds: 判定閾値

    Returns:
        PortalSummary: サマリー。ラウンドが無い場合は各値がNone
    """
    thresholds = thresholds or Thresholds()
    rounds = list(rounds)
    progress = (
        goal_progress(goal, rounds, index, thresholds.min_rounds)
        if goal is not None
        else None
    )
    if not rounds:
        return PortalSummary(targets=[MSG_EMPTY_PORTAL], goal=progress)

    targets = next_round_targets(rounds, index, thresholds)

    df = rounds_frame(rounds, index)
    scored = df.filter(pl.col("gross") > 0)
    stats = df.select(
        pl.col("blowups").mean().alias("avg_blowups"),
        pl.col("volatility").mean().alias("avg_volatility"),
    ).row(0, named=True)

    best_to_par = scored.select(pl.col("to_par_18").min()).item() if len(scored) else None
    avg_to_par = scored.select(pl.col("to_par_18").mean()).item() if len(scored) else None

    return PortalSummary(
        rounds=len(rounds),
        best_to_par=best_to_par,
        avg_to_par=avg_to_par,
        avg_blowups=stats["avg_blowups"],
        avg_volatility=stats["avg_volatility"],
        targets=targets,
        insights=insight_engine(rounds, index, thresholds),
        goal=progress,
    )


def trend_series(rounds: Iterable[Round], index: CourseIndex) -> ChartSeries:
    """日付ごとの対パー(18ホール換算)の系列"""
    df = rounds_frame(rounds, index)
    return ChartSeries(
        labels=df["date"].to_list(),
        values=df["to_par_18"].to_list(),
    )


def par_type_series(rounds: Iterable[Round], index: CourseIndex) -> ChartSeries:
    """パー別平均対パーの系列(データが無いパーは0)"""
    by_par = scoring_by_par_type(rounds, index)
    return ChartSeries(
        labels=["Par 3", "Par 4", "Par 5"],
        values=[v if v is not None else 0.0 for v in (by_par.p3, by_par.p4, by_par.p5)],
    )


def si_bucket_series(rounds: Iterable[Round], index: CourseIndex) -> ChartSeries:
    """ハンディキャップ順位帯別平均対パーの系列(データが無い帯は0)"""
    by_si = scoring_by_si_bucket(rounds, index)
    return ChartSeries(
        labels=["SI 1–6", "SI 7–12", "SI 13–18"],
        values=[v if v is not None else 0.0 for v in (by_si.hard, by_si.mid, by_si.easy)],
    )


def export_rounds_csv(df: pl.DataFrame, file_path: Path) -> Path:
    """ラウンド表をCSVファイルに保存する

    Args:
        df: rounds_frameで作成した表
        file_path: 保存先のパス

    Returns:
        Path: 保存したファイルのパス
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)
    df.write_csv(file_path)
    logger.info("CSVを保存しました: %s (%d件)", file_path, len(df))
    return file_path


def format_to_par(value: float | None, digits: int = 1) -> str:
    """対パーを符号付きで表示用に整形する"""
    if value is None:
        return "—"
    if value > 0:
        return f"+{value:.{digits}f}"
    return f"{value:.{digits}f}"


def render_summary(summary: PortalSummary) -> str:
    """サマリーをテキストに整形する"""
    lines = [f"Rounds: {summary.rounds}"]
    lines.append(f"Best: {format_to_par(summary.best_to_par, 0)}")
    lines.append(f"Avg to par: {format_to_par(summary.avg_to_par)}")
    if summary.avg_blowups is not None:
        lines.append(f"Blow-ups per round: {summary.avg_blowups:.1f}")
    if summary.avg_volatility is not None:
        lines.append(f"Volatility: {summary.avg_volatility:.2f}")

    lines.append("")
    lines.append("Next round targets:")
    lines.extend(f"  - {t}" for t in summary.targets)

    if summary.insights:
        lines.append("")
        lines.append("Insights:")
        lines.extend(f"  - {i}" for i in summary.insights)

    if summary.goal is not None:
        lines.append("")
        pct = f" ({summary.goal.pct:.0f}%)" if summary.goal.pct is not None else ""
        lines.append(f"Goal: {summary.goal.title}{pct}")
        if summary.goal.subtitle:
            lines.append(f"  {summary.goal.subtitle}")

    return "\n".join(lines)
