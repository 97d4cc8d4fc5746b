"""
pytest共通設定とフィクスチャ
"""

import pytest
import sys
from pathlib import Path

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


# 10x10 の盤をすき間なく埋める配置
# (チーム, 駒の種類, 時計回りの回転数, 形の左上の位置)
# チームが None のものは大聖堂
FULL_TILING = [
    ("WHITE", "CASTLE", 3, (0, 0)),
    ("WHITE", "INFIRMARY", 0, (1, 0)),
    ("BLACK", "CASTLE", 1, (3, 0)),
    ("WHITE", "TOWER", 1, (5, 0)),
    ("WHITE", "INN", 3, (5, 1)),
    ("WHITE", "BRIDGE", 1, (7, 0)),
    ("WHITE", "SQUARE", 0, (8, 1)),
    (None, "CATHEDRAL", 0, (0, 6)),
    ("BLACK", "STABLE", 0, (0, 8)),
    ("BLACK", "INFIRMARY", 0, (0, 3)),
    ("WHITE", "TAVERN", 0, (0, 3)),
    ("WHITE", "STABLE", 0, (0, 5)),
    ("BLACK", "BRIDGE", 1, (2, 3)),
    ("BLACK", "INN", 2, (2, 4)),
    ("BLACK", "ABBEY", 0, (2, 6)),
    ("BLACK", "SQUARE", 0, (2, 8)),
    ("WHITE", "MANOR", 0, (5, 3)),
    ("BLACK", "STABLE", 1, (8, 3)),
    ("BLACK", "ACADEMY", 0, (7, 4)),
    ("WHITE", "STABLE", 1, (8, 4)),
    ("WHITE", "ABBEY", 1, (4, 4)),
    ("WHITE", "TAVERN", 0, (5, 4)),
    ("BLACK", "TAVERN", 0, (4, 6)),
    ("WHITE", "INN", 3, (6, 5)),
    ("WHITE", "ACADEMY", 0, (7, 6)),
    ("BLACK", "INN", 2, (8, 8)),
    ("BLACK", "TOWER", 0, (4, 7)),
    ("BLACK", "MANOR", 2, (5, 8)),
    ("BLACK", "TAVERN", 0, (7, 8)),
]


@pytest.fixture
def empty_board():
    """空の盤面を提供するフィクスチャ"""
    from cathedral.engine import Board
    return Board()


@pytest.fixture
def white_team():
    """白チームを提供するフィクスチャ"""
    from cathedral.engine import Team
    return Team.WHITE


@pytest.fixture
def black_team():
    """黒チームを提供するフィクスチャ"""
    from cathedral.engine import Team
    return Team.BLACK


@pytest.fixture
def new_game():
    """黒が大聖堂を置くところから始まるゲームを提供するフィクスチャ"""
    from cathedral.engine import GameState
    return GameState()


@pytest.fixture
def full_tiling():
    """
    盤を埋める配置を (ReleasedPiece, Position) の一覧で提供するフィクスチャ
    駒は回転済み
    """
    from cathedral.engine import PieceKind, Position, Team, new_piece
    moves = []
    for team_name, kind_name, turns, (x, y) in FULL_TILING:
        team = Team[team_name] if team_name else None
        piece = new_piece(PieceKind[kind_name], team)
        piece.rotate(turns)
        moves.append((piece, Position(x, y)))
    return moves
