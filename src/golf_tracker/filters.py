"""フィルタモジュール

期間・コース・ティー・ラウンド種別・ホール数でラウンドを絞り込む。
"""

from collections.abc import Iterable

from pydantic import BaseModel, Field

from .models import Course, Round

ALL = "all"
# コース未選択時のティーキー区切り(courseId::teeId)
TEE_KEY_SEPARATOR = "::"


class FilterCriteria(BaseModel):
    """絞り込み条件

    tee_keyはcourse_idが"all"のとき"courseId::teeId"、
    コースを選択しているときはteeIdのみとなる。
    """

    date_from: str | None = Field(default=None, description="開始日(YYYY-MM-DD、含む)")
    date_to: str | None = Field(default=None, description="終了日(YYYY-MM-DD、含む)")
    course_id: str = Field(default=ALL, description="コースID")
    tee_key: str = Field(default=ALL, description="ティーキー")
    round_type: str = Field(default=ALL, description="ラウンド種別")
    format: str | int = Field(default=ALL, description="ホール数(9/18)")


class FilterOption(BaseModel):
    """選択肢(値と表示名)"""

    value: str
    label: str


class FilterOptions(BaseModel):
    """絞り込み画面の選択肢一覧"""

    courses: list[FilterOption] = Field(default_factory=list)
    tees: list[FilterOption] = Field(default_factory=list)
    round_types: list[str] = Field(default_factory=list)


def make_tee_key(course_id: str, tee_id: str) -> str:
    return f"{course_id}{TEE_KEY_SEPARATOR}{tee_id}"


def _matches_tee(round_: Round, criteria: FilterCriteria) -> bool:
    if criteria.tee_key == ALL:
        return True
    if criteria.course_id != ALL:
        return round_.tee_id == criteria.tee_key

    course_id, sep, tee_id = criteria.tee_key.partition(TEE_KEY_SEPARATOR)
    if not sep:
        # 区切りが無い場合はteeIdのみで照合
        return round_.tee_id == criteria.tee_key
    return round_.course_id == course_id and round_.tee_id == tee_id


def matches(round_: Round, criteria: FilterCriteria) -> bool:
    """ラウンドが条件をすべて満たすか判定する"""
    # 日付はYYYY-MM-DD固定長のため文字列比較で判定できる
    if criteria.date_from and round_.date < criteria.date_from:
        return False
    if criteria.date_to and round_.date > criteria.date_to:
        return False
    if criteria.course_id != ALL and round_.course_id != criteria.course_id:
        return False
    if not _matches_tee(round_, criteria):
        return False
    if criteria.round_type != ALL and round_.round_type != criteria.round_type:
        return False
    if str(criteria.format) != ALL and str(round_.format) != str(criteria.format):
        return False
    return True


def apply_filters(rounds: Iterable[Round], criteria: FilterCriteria) -> list[Round]:
    """条件に一致するラウンドを入力順のまま返す

    Args:
        rounds: ラウンド一覧
        criteria: 絞り込み条件

    Returns:
        list[Round]: 一致したラウンド(並べ替えは行わない)
    """
    return [r for r in rounds if matches(r, criteria)]


def filter_options(
    courses: Iterable[Course], rounds: Iterable[Round], course_id: str = ALL
) -> FilterOptions:
    """絞り込み条件の選択肢を作成する

    Args:
        courses: コース一覧
        rounds: ラウンド一覧
        course_id: 選択中のコースID("all"で全コース)

    Returns:
        FilterOptions: コース・ティー・ラウンド種別の選択肢
    """
    courses = list(courses)
    course_options = [FilterOption(value=ALL, label="All courses")]
    course_options += [FilterOption(value=c.course_id, label=c.name) for c in courses]

    tee_options = [FilterOption(value=ALL, label="All tees")]
    for course in courses:
        if course_id != ALL and course.course_id != course_id:
            continue
        for tee in course.tees:
            if course_id == ALL:
                tee_options.append(
                    FilterOption(
                        value=make_tee_key(course.course_id, tee.tee_id),
                        label=f"{course.name} / {tee.tee_name}",
                    )
                )
            else:
                tee_options.append(FilterOption(value=tee.tee_id, label=tee.tee_name))

    round_types = sorted({r.round_type for r in rounds if r.round_type})

    return FilterOptions(courses=course_options, tees=tee_options, round_types=round_types)
