"""保存処理モジュール

ドキュメント(コース・ラウンド・目標)をJSON形式で読み書きし、
インポート・コース削除などの更新処理を提供する。
"""

import json
import logging
import uuid
from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import Course, Hole, HoleResult, Round, Tee, TrackerData

logger = logging.getLogger(__name__)

# サンプルコースのパー配置
DEFAULT_PARS = [4, 4, 3, 4, 5, 4, 3, 4, 5, 4, 4, 3, 4, 5, 4, 3, 4, 5]
MAX_HOLE_SCORE = 30


class StoreError(Exception):
    """保存処理失敗時の例外"""

    pass


class ImportFormatError(StoreError):
    """インポートデータの形式が不正な場合の例外"""

    pass


class RoundEntryError(StoreError):
    """ラウンドの登録内容が不正な場合の例外"""

    pass


def new_id(prefix: str = "id") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def drop_orphan_rounds(data: TrackerData) -> TrackerData:
    """存在しないコース・ティーを参照するラウンドを取り除く

    Args:
        data: ドキュメント

    Returns:
        TrackerData: 参照切れのラウンドを除いたドキュメント
    """
    tee_keys = {(c.course_id, t.tee_id) for c in data.courses for t in c.tees}
    kept = [r for r in data.rounds if (r.course_id, r.tee_id) in tee_keys]
    dropped = len(data.rounds) - len(kept)
    if dropped:
        logger.warning("参照先の無いラウンドを%d件除外しました", dropped)
        return data.model_copy(update={"rounds": kept})
    return data


def import_document(payload: Any) -> TrackerData:
    """インポートデータからドキュメントを作成する

    既存のドキュメントを丸ごと置き換える用途を想定する。

    Args:
        payload: JSONをデコードした値

    Returns:
        TrackerData: 検証済みのドキュメント

    Raises:
        ImportFormatError: courses・roundsが配列でない、または内容が不正な場合
    """
    if not isinstance(payload, dict) or not (
        isinstance(payload.get("courses"), list)
        and isinstance(payload.get("rounds"), list)
    ):
        raise ImportFormatError("courses と rounds の配列が必要です")

    try:
        data = TrackerData.model_validate(payload)
    except ValidationError as e:
        raise ImportFormatError(f"インポートデータが不正です: {e}") from e

    return drop_orphan_rounds(data)


def load_tracker_data(file_path: Path) -> TrackerData:
    """JSONファイルからドキュメントを読み込む

    Args:
        file_path: JSONファイルのパス

    Returns:
        TrackerData: ドキュメント(ファイルが無い場合は空)

    Raises:
        ImportFormatError: ファイルの内容が不正な場合
    """
    if not file_path.exists():
        logger.info("データファイルがありません。空のデータで開始します: %s", file_path)
        return TrackerData()

    with file_path.open("r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ImportFormatError(f"JSONの読み込みに失敗しました: {e}") from e

    data = import_document(payload)
    logger.info(
        "データを読み込みました: %s (コース%d件, ラウンド%d件)",
        file_path,
        len(data.courses),
        len(data.rounds),
    )
    return data


def save_tracker_data(data: TrackerData, file_path: Path) -> Path:
    """ドキュメントをJSONファイルに保存する

    Args:
        data: ドキュメント
        file_path: 保存先のパス

    Returns:
        Path: 保存したファイルのパス
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with file_path.open("w", encoding="utf-8") as f:
        json.dump(data.to_dict(), f, ensure_ascii=False, indent=2)

    logger.info("データを保存しました: %s (ラウンド%d件)", file_path, len(data.rounds))
    return file_path


def export_filename(today: date | None = None) -> str:
    return f"golf-tracker-export-{(today or date.today()).isoformat()}.json"


def example_course() -> Course:
    """サンプルコースを作成する"""
    holes = [
        Hole(
            hole_number=i + 1,
            par=par,
            yardage=350 + (i % 5) * 20,
            stroke_index=i + 1,
        )
        for i, par in enumerate(DEFAULT_PARS)
    ]
    tee = Tee(
        tee_id=new_id("tee"),
        tee_name="White",
        course_rating=71.2,
        slope_rating=128,
        par_total=sum(h.par for h in holes),
        holes=holes,
    )
    return Course(
        course_id=new_id("course"),
        name="Example Course (edit me)",
        location="—",
        tees=[tee],
    )


def seed_if_empty(data: TrackerData) -> TrackerData:
    """コースが1件も無い場合にサンプルコースを追加する"""
    if data.courses:
        return data
    logger.info("サンプルコースを追加しました")
    return data.model_copy(update={"courses": [example_course()]})


def merge_courses(data: TrackerData, courses: list[Course]) -> TrackerData:
    """コースをcourseId単位で追加・置き換えする"""
    merged = {c.course_id: c for c in data.courses}
    for course in courses:
        merged[course.course_id] = course
    return data.model_copy(update={"courses": list(merged.values())})


def validate_course_layout(course: Course) -> Course:
    """編集されたコースレイアウトを検証し、パー合計を設定する

    コース名は必須、ハンディキャップ順位は各ホール1〜18でティー内で重複しないこと。
    parTotalは入力値を使わず、ホールのパーの合計で置き換える。

    Args:
        course: 検証するコース

    Returns:
        Course: parTotalを設定し直したコース

    Raises:
        ImportFormatError: レイアウトが不正な場合
    """
    name = course.name.strip()
    if not name:
        raise ImportFormatError(f"コース名がありません: {course.course_id}")

    tees = []
    for tee in course.tees:
        stroke_indexes = [h.stroke_index for h in tee.holes]
        if not all(1 <= si <= 18 for si in stroke_indexes):
            raise ImportFormatError(
                f"ハンディキャップ順位は1〜18で指定してください: {name} / {tee.tee_name}"
            )
        if len(set(stroke_indexes)) != len(stroke_indexes):
            raise ImportFormatError(
                f"ハンディキャップ順位が重複しています: {name} / {tee.tee_name}"
            )

        par_total = sum(h.par for h in tee.holes)
        if tee.par_total != par_total:
            logger.debug(
                "パー合計をホールから再計算しました: %s / %s (%d -> %d)",
                name,
                tee.tee_name,
                tee.par_total,
                par_total,
            )
        tees.append(tee.model_copy(update={"par_total": par_total}))

    return course.model_copy(update={"name": name, "tees": tees})


def load_courses_from_yaml(file_path: Path) -> list[Course]:
    """YAMLファイルからコースレイアウトを読み込む

    Args:
        file_path: YAMLファイルのパス(トップレベルはコースの配列、
            または courses キーを持つマッピング)

    Returns:
        list[Course]: コース一覧

    Raises:
        ImportFormatError: 形式が不正な場合
    """
    with file_path.open(encoding="utf-8") as f:
        raw = yaml.safe_load(f) or []

    if isinstance(raw, dict):
        raw = raw.get("courses", [])
    if not isinstance(raw, list):
        raise ImportFormatError(f"コース定義の形式が不正です: {file_path}")

    try:
        courses = [Course.model_validate(item) for item in raw]
    except ValidationError as e:
        raise ImportFormatError(f"コース定義が不正です: {e}") from e
    courses = [validate_course_layout(c) for c in courses]

    logger.info("コースを読み込みました: %s (%d件)", file_path, len(courses))
    return courses


def add_round(data: TrackerData, round_: Round) -> TrackerData:
    """ラウンドを追加する

    Args:
        data: ドキュメント
        round_: 追加するラウンド

    Returns:
        TrackerData: ラウンド追加後のドキュメント

    Raises:
        RoundEntryError: コース・ティーが存在しない、またはスコアが未入力の場合
    """
    course = next((c for c in data.courses if c.course_id == round_.course_id), None)
    if course is None or not any(t.tee_id == round_.tee_id for t in course.tees):
        raise RoundEntryError("コースとティーを選択してください")

    if not any(r.score > 0 for r in round_.hole_results):
        raise RoundEntryError("少なくとも1ホールのスコアを入力してください")

    return data.model_copy(update={"rounds": [*data.rounds, round_]})


def build_round(
    course_id: str,
    tee_id: str,
    date_str: str,
    scores: list[int],
    round_type: str = "course",
    format_: int = 18,
    start_hole: int = 1,
    notes: str = "",
) -> Round:
    """入力されたスコアからラウンドを作成する

    スコアは0〜30に丸め、hole_numberはプレー順の連番とする。
    """
    hole_results = [
        HoleResult(hole_number=i + 1, score=max(0, min(MAX_HOLE_SCORE, score)))
        for i, score in enumerate(scores)
    ]
    return Round(
        round_id=new_id("round"),
        date=date_str,
        round_type=round_type,
        format=format_,
        start_hole=start_hole,
        course_id=course_id,
        tee_id=tee_id,
        notes=notes.strip(),
        hole_results=hole_results,
    )


def delete_course(data: TrackerData, course_id: str) -> TrackerData:
    """コースを削除し、そのコースのラウンドも削除する"""
    courses = [c for c in data.courses if c.course_id != course_id]
    rounds = [r for r in data.rounds if r.course_id != course_id]
    removed = len(data.rounds) - len(rounds)
    logger.info("コースを削除しました: %s (ラウンド%d件も削除)", course_id, removed)
    return data.model_copy(update={"courses": courses, "rounds": rounds})
