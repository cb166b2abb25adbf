"""データモデルモジュール

コース・ラウンド・目標の型定義とバリデーションを提供する。
JSONドキュメントのキーはcamelCase(例: holeNumber)で、既存データとの互換性を維持する。
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

FirstPuttBucket = Literal["", "0-3", "4-6", "7-10", "11-20", "20+"]


class TrackerModel(BaseModel):
    """全モデル共通の基底クラス

    属性名はsnake_case、JSON上のキーはcamelCaseとする。
    入力はどちらの形式でも受け付ける。
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict:
        """辞書形式に変換(JSON出力用)

        Returns:
            dict: camelCaseキーの辞書表現
        """
        return self.model_dump(by_alias=True)


class Hole(TrackerModel):
    """ティーごとの1ホール分の情報"""

    hole_number: int = Field(..., ge=1, le=18, description="ホール番号")
    par: int = Field(..., ge=3, le=5, description="パー")
    yardage: int = Field(default=0, ge=0, description="ヤード数")
    # 0は未設定。エディタ側で1〜18を保証する
    stroke_index: int = Field(default=0, ge=0, le=18, description="ハンディキャップ順位")


class Tee(TrackerModel):
    """ティー情報(18ホール分のレイアウトを保持)"""

    tee_id: str = Field(..., description="ティーID")
    tee_name: str = Field(default="White", description="ティー名")
    course_rating: float | None = Field(default=None, description="コースレート")
    slope_rating: int | None = Field(default=None, description="スロープレート")
    par_total: int = Field(default=0, ge=0, description="パー合計")
    holes: list[Hole] = Field(default_factory=list, description="ホール一覧")


class Course(TrackerModel):
    """コース情報"""

    course_id: str = Field(..., description="コースID")
    name: str = Field(..., description="コース名")
    location: str = Field(default="", description="所在地")
    tees: list[Tee] = Field(default_factory=list, description="ティー一覧")


class HoleResult(TrackerModel):
    """1ホール分の結果

    hole_numberはラウンド内で何番目にプレーしたか(1始まり)であり、
    コース上のホール番号ではない。scoreが0のホールは未入力として扱う。
    """

    hole_number: int = Field(..., ge=1, description="プレー順")
    score: int = Field(default=0, ge=0, le=30, description="打数(0は未入力)")
    putts: int | None = Field(default=None, ge=0, le=6, description="パット数")
    penalties: int | None = Field(
        default=None, ge=0, le=5, description="ペナルティ数"
    )
    fairway_hit: bool | None = Field(default=None, description="フェアウェイキープ")
    gir: bool | None = Field(default=None, description="パーオン")
    first_putt_bucket: FirstPuttBucket = Field(
        default="", description="ファーストパットの距離帯(フィート)"
    )
    hole_notes: str = Field(default="", description="ホールメモ")


class Round(TrackerModel):
    """1ラウンド分のスコアデータ"""

    round_id: str = Field(..., description="ラウンドID")
    date: str = Field(
        ..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="日付(YYYY-MM-DD形式)"
    )
    round_type: str = Field(default="course", description="ラウンド種別")
    format: Literal[9, 18] = Field(default=18, description="ホール数")
    start_hole: Literal[1, 10] = Field(default=1, description="スタートホール")
    course_id: str = Field(..., description="コースID")
    tee_id: str = Field(..., description="ティーID")
    adjusted_gross: int | None = Field(
        default=None, gt=0, description="調整後グロス"
    )
    notes: str = Field(default="", description="メモ")
    hole_results: list[HoleResult] = Field(
        default_factory=list, description="各ホールの結果(プレー順)"
    )


class PlayerProfile(TrackerModel):
    """プレーヤー情報(分析では参照のみ)"""

    home_country_ruleset: str = Field(default="", description="適用ルールセット")
    handicap_index: float | None = Field(default=None, description="ハンディキャップ")


class Goal(TrackerModel):
    """大叩き削減目標

    baseline_blowupsは一度だけ設定され、以降は再計算しない。
    """

    active: bool = Field(default=True, description="目標が有効か")
    type: Literal["reduce_blowups"] = Field(
        default="reduce_blowups", description="目標種別"
    )
    window_rounds: int = Field(default=5, ge=1, description="集計対象ラウンド数")
    reduction_pct: int = Field(default=20, ge=0, le=100, description="削減率(%)")
    baseline_blowups: float | None = Field(
        default=None, description="基準となる平均大叩き数"
    )
    created_at: str | None = Field(default=None, description="基準設定日")


class TrackerData(TrackerModel):
    """保存ドキュメント全体"""

    version: int = Field(default=1, description="ドキュメントバージョン")
    courses: list[Course] = Field(default_factory=list, description="コース一覧")
    rounds: list[Round] = Field(default_factory=list, description="ラウンド一覧")
    profile: PlayerProfile = Field(
        default_factory=PlayerProfile, description="プレーヤー情報"
    )
    goal: Goal = Field(default_factory=Goal, description="目標")
