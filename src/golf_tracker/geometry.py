"""ラウンド構成モジュール

ラウンドのスタートホール・ホール数から、実際にプレーしたホールの並びを求める。
パー・ハンディキャップ順位・ヤード数を参照する処理はすべてここを経由する。
"""

from collections.abc import Iterable, Iterator, Sequence

from .models import Course, Hole, HoleResult, Round, Tee

# 表示用のプレースホルダ
UNKNOWN_LABEL = "—"


def played_holes(round_: Round, tee: Tee | None) -> list[Hole]:
    """プレーしたホールをプレー順に返す

    Args:
        round_: ラウンド
        tee: ラウンドで使用したティー

    Returns:
        list[Hole]: プレー順のホール一覧(ティーが無い場合は空)

    Examples:
        10番スタートの18ホールでは、0番目が10番ホール、9番目が1番ホールになる。
    """
    if tee is None:
        return []

    holes = list(tee.holes)
    if round_.start_hole == 10:
        holes = holes[9:] + holes[:9]

    return holes[: round_.format]


def aligned_pairs(
    holes: Sequence[Hole], results: Sequence[HoleResult]
) -> Iterator[tuple[Hole, HoleResult]]:
    """ホールと結果をプレー順で対応付ける

    長さが異なる場合は短い方に合わせ、余りは捨てる。
    """
    return zip(holes, results)


class CourseIndex:
    """コース・ティーの参照を解決するコンテキスト

    分析関数にはこのオブジェクトを明示的に渡し、グローバルな状態は持たない。
    """

    def __init__(self, courses: Iterable[Course]):
        """初期化

        Args:
            courses: コース一覧
        """
        self._courses: dict[str, Course] = {c.course_id: c for c in courses}

    def __contains__(self, course_id: object) -> bool:
        return course_id in self._courses

    @property
    def courses(self) -> list[Course]:
        return list(self._courses.values())

    def course(self, course_id: str) -> Course | None:
        return self._courses.get(course_id)

    def tee(self, course_id: str, tee_id: str) -> Tee | None:
        course = self.course(course_id)
        if course is None:
            return None
        return next((t for t in course.tees if t.tee_id == tee_id), None)

    def tee_for(self, round_: Round) -> Tee | None:
        """ラウンドが参照するティーを返す(存在しない場合はNone)"""
        return self.tee(round_.course_id, round_.tee_id)

    def played_holes(self, round_: Round) -> list[Hole]:
        return played_holes(round_, self.tee_for(round_))

    def course_label(self, course_id: str) -> str:
        course = self.course(course_id)
        return course.name if course is not None else UNKNOWN_LABEL

    def tee_label(self, course_id: str, tee_id: str) -> str:
        tee = self.tee(course_id, tee_id)
        return tee.tee_name if tee is not None else UNKNOWN_LABEL
