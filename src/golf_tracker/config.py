"""設定管理モジュール

環境変数から設定を読み込み、アプリケーション全体で使用する設定を提供する。
分析で使う閾値もここで一元管理する。
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Thresholds(BaseModel):
    """インサイト・目標判定の閾値

    環境変数 THRESHOLDS__BLOWUP_TARGET などで個別に上書きできる。
    """

    model_config = ConfigDict(frozen=True)

    blowup_target: float = Field(
        default=3,
        description="平均大叩き数がこの値以上なら大叩き削減を優先",
    )
    volatility_target: float = Field(
        default=1.2,
        description="平均ボラティリティがこの値以上なら安定化を優先",
    )
    difficulty_gap: float = Field(
        default=0.6,
        description="難ホールと易ホールのスコア差がこの値を超えたら指摘",
    )
    fatigue_drift: float = Field(
        default=0.4,
        description="前半と後半のスコア差がこの値を超えたら指摘",
    )
    penalty_burden: float = Field(
        default=2,
        description="平均ペナルティ数がこの値以上なら指摘",
    )
    insight_window: int = Field(
        default=10, ge=1, description="インサイトの比較ウィンドウ(ラウンド数)"
    )
    target_window: int = Field(
        default=6, ge=1, description="次ラウンド目標の集計ウィンドウ(ラウンド数)"
    )
    min_rounds: int = Field(
        default=3, ge=1, description="インサイト・目標に必要な最小ラウンド数"
    )
    max_insights: int = Field(default=4, ge=1, description="インサイトの最大件数")
    fatigue_min_holes: int = Field(
        default=6, ge=2, description="前後半比較に必要な最小ホール数"
    )


class Settings(BaseSettings):
    """アプリケーション設定

    環境変数または.envファイルから設定を読み込む。
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    data_file: Path = Field(
        default=Path("data") / "golf_tracker.json",
        description="保存ドキュメントのパス",
    )
    courses_file: Path | None = Field(
        default=None,
        description="取り込むコースレイアウト(YAML)のパス",
    )
    debug: bool = Field(
        default=False,
        description="デバッグモード(true: デバッグ情報出力)",
    )
    seed_example: bool = Field(
        default=True,
        description="空のドキュメントにサンプルコースを追加するか",
    )

    thresholds: Thresholds = Field(
        default_factory=Thresholds,
        description="分析の閾値",
    )


def get_settings() -> Settings:
    """設定インスタンスを取得する

    Returns:
        Settings: アプリケーション設定
    """
    return Settings()
