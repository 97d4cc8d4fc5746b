"""
カテドラルのゲームエンジン - パッケージ初期化
"""

from .position import Position
from .errors import (
    CathedralError,
    PlacementError,
    OutOfBoundsError,
    OnOccupiedTileError,
    OnEnemyTileError,
    RemovalError,
    NotOnBoardError,
    PieceConsumedError,
    GameError,
    NotYourTurnError,
    PieceNotInHandError,
    GameOverError,
)
from .piece import (
    Team,
    PieceKind,
    Rotation,
    Piece,
    ReleasedPiece,
    PlacedPiece,
    PIECE_NAMES,
    new_piece,
    new_cathedral,
)
from .board import Board, Tile, TileState, BOARD_SIZE
from .move import Move
from .rules import Rules, CaptureRule, Capture
from .initial_setup import PIECE_COUNTS
from .game import GameState

__all__ = [
    'Position',
    'CathedralError',
    'PlacementError',
    'OutOfBoundsError',
    'OnOccupiedTileError',
    'OnEnemyTileError',
    'RemovalError',
    'NotOnBoardError',
    'PieceConsumedError',
    'GameError',
    'NotYourTurnError',
    'PieceNotInHandError',
    'GameOverError',
    'Team',
    'PieceKind',
    'Rotation',
    'Piece',
    'ReleasedPiece',
    'PlacedPiece',
    'PIECE_NAMES',
    'new_piece',
    'new_cathedral',
    'Board',
    'Tile',
    'TileState',
    'BOARD_SIZE',
    'Move',
    'Rules',
    'CaptureRule',
    'Capture',
    'PIECE_COUNTS',
    'GameState',
]
