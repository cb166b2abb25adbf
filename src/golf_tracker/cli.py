"""CLIエントリーポイントモジュール

保存済みのラウンドデータを分析し、ポータルのレポートを表示する。
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from . import __version__
from .config import Settings, get_settings
from .filters import FilterCriteria, apply_filters
from .geometry import CourseIndex
from .goal import ensure_goal
from .report import export_rounds_csv, portal_summary, render_summary, rounds_frame
from .store import (
    StoreError,
    load_courses_from_yaml,
    load_tracker_data,
    merge_courses,
    save_tracker_data,
    seed_if_empty,
)


def setup_logging(debug: bool = False) -> None:
    """ロギングを設定する

    Args:
        debug: デバッグモードの場合True
    """
    level = logging.DEBUG if debug else logging.INFO
    format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """コマンドライン引数をパースする

    Returns:
        argparse.Namespace: パース済み引数
    """
    parser = argparse.ArgumentParser(
        prog="golf-tracker",
        description="ラウンドデータから傾向・目標・インサイトを表示するツール",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--data",
        type=Path,
        default=None,
        help="データファイル(デフォルト: 環境変数DATA_FILEまたはdata/golf_tracker.json)",
    )

    parser.add_argument(
        "--courses",
        type=Path,
        default=None,
        help="取り込むコースレイアウトのYAMLファイル",
    )

    parser.add_argument("--from", dest="date_from", default=None, help="開始日(YYYY-MM-DD)")
    parser.add_argument("--to", dest="date_to", default=None, help="終了日(YYYY-MM-DD)")
    parser.add_argument("--course", default="all", help="コースID")
    parser.add_argument(
        "--tee",
        default="all",
        help="ティー(コース指定時はteeId、未指定時はcourseId::teeId)",
    )
    parser.add_argument("--type", dest="round_type", default="all", help="ラウンド種別")
    parser.add_argument(
        "--format",
        choices=["all", "9", "18"],
        default="all",
        help="ホール数",
    )

    parser.add_argument(
        "--csv",
        type=Path,
        default=None,
        help="ラウンド表を出力するCSVファイル",
    )

    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="デバッグモードを有効にする",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """メインエントリーポイント

    Returns:
        int: 終了コード(0: 成功, 1: 失敗)
    """
    args = parse_args(argv)

    # 設定を読み込み
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"設定の読み込みに失敗しました: {e}", file=sys.stderr)
        print("環境変数または.envファイルを確認してください。", file=sys.stderr)
        return 1

    # コマンドライン引数で設定を上書き
    overrides = {}
    if args.data is not None:
        overrides["data_file"] = args.data
    if args.courses is not None:
        overrides["courses_file"] = args.courses
    if args.debug:
        overrides["debug"] = True
    if overrides:
        settings = Settings(**(settings.model_dump() | overrides))

    # ロギング設定
    setup_logging(settings.debug)
    logger = logging.getLogger(__name__)

    logger.info("golf-tracker v%s を開始します", __version__)

    try:
        data = load_tracker_data(settings.data_file)
        loaded = data

        if settings.courses_file is not None:
            data = merge_courses(data, load_courses_from_yaml(settings.courses_file))
        if settings.seed_example:
            data = seed_if_empty(data)

        index = CourseIndex(data.courses)

        # 基準値は絞り込み前の全ラウンドで設定する
        goal = ensure_goal(
            data.goal, data.rounds, index, min_rounds=settings.thresholds.min_rounds
        )
        if goal is not data.goal:
            data = data.model_copy(update={"goal": goal})

        if data is not loaded:
            save_tracker_data(data, settings.data_file)

        criteria = FilterCriteria(
            date_from=args.date_from,
            date_to=args.date_to,
            course_id=args.course,
            tee_key=args.tee,
            round_type=args.round_type,
            format=args.format,
        )
        rounds = apply_filters(data.rounds, criteria)
        logger.info("対象ラウンド: %d/%d件", len(rounds), len(data.rounds))

        summary = portal_summary(rounds, index, data.goal, settings.thresholds)
        print(render_summary(summary))

        if args.csv is not None:
            export_rounds_csv(rounds_frame(rounds, index), args.csv)

    except (StoreError, ValidationError) as e:
        logger.exception("データの処理に失敗しました: %s", e)
        return 1
    except OSError as e:
        logger.exception("ファイルの読み書きに失敗しました: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
