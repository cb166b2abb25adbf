"""ゴルフラウンド分析ツール

コース情報とホールごとのスコアから、傾向・安定度・次ラウンドの目標を導出する。
"""

__version__ = "0.1.0"
