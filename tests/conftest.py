"""テスト共通のフィクスチャ"""

import pytest

from golf_tracker.geometry import CourseIndex
from golf_tracker.models import Course, Hole, HoleResult, Round, Tee

PARS = [4, 4, 3, 4, 5, 4, 3, 4, 5, 4, 4, 3, 4, 5, 4, 3, 4, 5]
COURSE_ID = "course_a"
TEE_ID = "tee_white"


def build_tee(
    pars: list[int] | None = None,
    stroke_indexes: list[int] | None = None,
    course_rating: float | None = 72.0,
    slope_rating: int | None = 113,
    tee_id: str = TEE_ID,
) -> Tee:
    """テスト用のティーを作成する(ハンディキャップ順位はホール番号と同じ)"""
    pars = pars if pars is not None else PARS
    holes = [
        Hole(
            hole_number=i + 1,
            par=par,
            yardage=300 + i * 10,
            stroke_index=stroke_indexes[i] if stroke_indexes else i + 1,
        )
        for i, par in enumerate(pars)
    ]
    return Tee(
        tee_id=tee_id,
        tee_name="White",
        course_rating=course_rating,
        slope_rating=slope_rating,
        par_total=sum(pars),
        holes=holes,
    )


def build_round(
    scores: list[int],
    date: str = "2024-06-15",
    format_: int | None = None,
    start_hole: int = 1,
    course_id: str = COURSE_ID,
    tee_id: str = TEE_ID,
    round_type: str = "course",
    putts: list[int | None] | None = None,
    penalties: list[int | None] | None = None,
    adjusted_gross: int | None = None,
    round_id: str | None = None,
) -> Round:
    """テスト用のラウンドを作成する"""
    results = [
        HoleResult(
            hole_number=i + 1,
            score=score,
            putts=putts[i] if putts else None,
            penalties=penalties[i] if penalties else None,
        )
        for i, score in enumerate(scores)
    ]
    return Round(
        round_id=round_id or f"round_{date}_{len(scores)}",
        date=date,
        round_type=round_type,
        format=format_ if format_ is not None else (9 if len(scores) <= 9 else 18),
        start_hole=start_hole,
        course_id=course_id,
        tee_id=tee_id,
        adjusted_gross=adjusted_gross,
        hole_results=results,
    )


def par_scores(over: dict[int, int] | None = None) -> list[int]:
    """全ホールパーのスコアに、指定したプレー順(0始まり)だけ打数を加える"""
    scores = list(PARS)
    for position, extra in (over or {}).items():
        scores[position] += extra
    return scores


@pytest.fixture
def tee() -> Tee:
    """標準的な18ホールのティー"""
    return build_tee()


@pytest.fixture
def course(tee: Tee) -> Course:
    """ティーを1つ持つコース"""
    return Course(course_id=COURSE_ID, name="Test Course", location="Tokyo", tees=[tee])


@pytest.fixture
def index(course: Course) -> CourseIndex:
    """コース参照"""
    return CourseIndex([course])


@pytest.fixture
def sample_round() -> Round:
    """ダブルボギー2回を含む18ホールのラウンド"""
    return build_round(par_scores({0: 2, 3: 2, 5: 1}), date="2024-06-15")
