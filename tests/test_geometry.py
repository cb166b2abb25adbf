"""geometry.pyのテスト"""

from conftest import build_round, par_scores

from golf_tracker.geometry import UNKNOWN_LABEL, CourseIndex, aligned_pairs, played_holes
from golf_tracker.models import Course, Tee


class TestPlayedHoles:
    """played_holes関数のテスト"""

    def test_without_tee_returns_empty(self):
        """ティーが無い場合は空を返すこと"""
        assert played_holes(build_round(par_scores()), None) == []

    def test_front_start_keeps_natural_order(self, tee: Tee):
        """1番スタートはホール番号順になること"""
        holes = played_holes(build_round(par_scores()), tee)

        assert [h.hole_number for h in holes] == list(range(1, 19))

    def test_back_start_rotates_holes(self, tee: Tee):
        """10番スタートは10番ホールから始まり、1番ホールに戻ること"""
        holes = played_holes(build_round(par_scores(), start_hole=10), tee)

        assert holes[0].hole_number == 10
        assert holes[8].hole_number == 18
        assert holes[9].hole_number == 1
        assert holes[17].hole_number == 9

    def test_nine_hole_front(self, tee: Tee):
        """9ホール・1番スタートは1〜9番になること"""
        holes = played_holes(build_round([4] * 9, format_=9), tee)

        assert [h.hole_number for h in holes] == list(range(1, 10))

    def test_nine_hole_back(self, tee: Tee):
        """9ホール・10番スタートは10〜18番になること"""
        holes = played_holes(build_round([4] * 9, format_=9, start_hole=10), tee)

        assert [h.hole_number for h in holes] == list(range(10, 19))


class TestAlignedPairs:
    """aligned_pairs関数のテスト"""

    def test_truncates_to_shorter_sequence(self, tee: Tee):
        """短い方の長さで打ち切ること"""
        round_ = build_round([5, 5, 5], format_=18)

        pairs = list(aligned_pairs(played_holes(round_, tee), round_.hole_results))

        assert len(pairs) == 3
        assert pairs[2][0].hole_number == 3


class TestCourseIndex:
    """CourseIndexクラスのテスト"""

    def test_resolve_tee_for_round(self, index: CourseIndex, tee: Tee):
        """ラウンドのティーを解決できること"""
        assert index.tee_for(build_round(par_scores())) == tee

    def test_unknown_references_return_none(self, index: CourseIndex):
        """存在しないコース・ティーはNoneになること"""
        assert index.course("missing") is None
        assert index.tee("course_a", "missing") is None
        assert index.tee_for(build_round(par_scores(), course_id="missing")) is None
        assert index.played_holes(build_round(par_scores(), tee_id="missing")) == []

    def test_labels(self, index: CourseIndex):
        """表示名を返し、不明な場合はプレースホルダを返すこと"""
        assert index.course_label("course_a") == "Test Course"
        assert index.tee_label("course_a", "tee_white") == "White"
        assert index.course_label("missing") == UNKNOWN_LABEL
        assert index.tee_label("course_a", "missing") == UNKNOWN_LABEL

    def test_course_without_tees(self):
        """ティーの無いコースでもエラーにならないこと"""
        index = CourseIndex([Course(course_id="empty", name="Empty")])

        assert "empty" in index
        assert index.tee("empty", "tee_white") is None
