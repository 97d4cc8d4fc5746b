"""
カテドラル - 陣取りボードゲームのルールエンジン
"""

__version__ = "1.0.0"
