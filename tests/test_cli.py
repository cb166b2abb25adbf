"""cli.pyのテスト"""

import json
from pathlib import Path

import pytest
from conftest import build_round, par_scores

from golf_tracker.cli import main, parse_args
from golf_tracker.models import Course, TrackerData
from golf_tracker.store import save_tracker_data


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """カレントディレクトリの.envや既存の環境変数の影響を受けないようにする"""
    monkeypatch.chdir(tmp_path)
    for name in ("DATA_FILE", "COURSES_FILE", "DEBUG", "SEED_EXAMPLE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def data_file(tmp_path: Path, course: Course) -> Path:
    """ラウンド4件を保存したデータファイル"""
    rounds = [
        build_round(par_scores({0: 2}), date=f"2024-06-{d:02d}", round_id=f"r{d}")
        for d in (1, 8, 15)
    ]
    rounds.append(build_round(par_scores(), date="2024-07-01", round_id="r_july"))
    return save_tracker_data(
        TrackerData(courses=[course], rounds=rounds), tmp_path / "tracker.json"
    )


class TestParseArgs:
    """parse_args関数のテスト"""

    def test_defaults(self):
        """デフォルト値が設定されること"""
        args = parse_args([])

        assert args.data is None
        assert args.course == "all"
        assert args.format == "all"
        assert args.debug is False

    def test_filters(self):
        """絞り込み条件を受け取れること"""
        args = parse_args(["--from", "2024-06-01", "--to", "2024-06-30", "--format", "9"])

        assert args.date_from == "2024-06-01"
        assert args.date_to == "2024-06-30"
        assert args.format == "9"


class TestMain:
    """main関数のテスト"""

    def test_report_and_goal_baseline(self, data_file: Path, capsys):
        """レポートを表示し、基準値を設定したデータを保存すること"""
        assert main(["--data", str(data_file)]) == 0

        output = capsys.readouterr().out
        assert "Rounds: 4" in output
        assert "Cut blow-ups by 20%" in output

        saved = json.loads(data_file.read_text(encoding="utf-8"))
        assert saved["goal"]["baselineBlowups"] == pytest.approx(0.75)
        assert saved["goal"]["createdAt"] is not None

    def test_filtered_report(self, data_file: Path, capsys):
        """絞り込んだラウンドでレポートを表示すること"""
        assert main(["--data", str(data_file), "--from", "2024-06-01", "--to", "2024-06-30"]) == 0

        assert "Rounds: 3" in capsys.readouterr().out

    def test_csv_export(self, data_file: Path, tmp_path: Path):
        """CSVを出力できること"""
        csv_path = tmp_path / "rounds.csv"

        assert main(["--data", str(data_file), "--csv", str(csv_path)]) == 0
        assert csv_path.exists()

    def test_new_data_file_is_seeded(self, tmp_path: Path, capsys):
        """データファイルが無い場合はサンプルコースを保存すること"""
        data_path = tmp_path / "new" / "tracker.json"

        assert main(["--data", str(data_path)]) == 0

        saved = json.loads(data_path.read_text(encoding="utf-8"))
        assert saved["courses"][0]["name"] == "Example Course (edit me)"
        assert "Rounds: 0" in capsys.readouterr().out

    def test_broken_data_file_fails(self, tmp_path: Path):
        """データファイルが不正な場合は終了コード1を返すこと"""
        data_path = tmp_path / "broken.json"
        data_path.write_text("[]", encoding="utf-8")

        assert main(["--data", str(data_path)]) == 1
