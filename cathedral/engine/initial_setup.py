"""
初期の持ち駒の設定とユーティリティ
"""

from typing import Dict

from .piece import PieceKind, Team, canonical_shape
from .position import Position

# 各チームが持つ駒の初期数（大聖堂は別扱い）
PIECE_COUNTS = {
    PieceKind.TAVERN: 2,
    PieceKind.STABLE: 2,
    PieceKind.INN: 2,
    PieceKind.BRIDGE: 1,
    PieceKind.SQUARE: 1,
    PieceKind.MANOR: 1,
    PieceKind.ABBEY: 1,
    PieceKind.ACADEMY: 1,
    PieceKind.INFIRMARY: 1,
    PieceKind.CASTLE: 1,
    PieceKind.TOWER: 1,
}


def get_initial_hand_pieces(team: Team, with_cathedral: bool = False) -> Dict[PieceKind, int]:
    """
    チームの初期の持ち駒を返す
    with_cathedral: 最初に大聖堂を置くチームならTrue
    """
    if team not in (Team.WHITE, Team.BLACK):
        raise ValueError(f"Invalid team: {team}")
    hand_pieces = dict(PIECE_COUNTS)
    if with_cathedral:
        hand_pieces[PieceKind.CATHEDRAL] = 1
    return hand_pieces


def hand_size(hand_pieces: Dict[PieceKind, int], team: Team) -> int:
    """持ち駒の合計マス数（少ないほど良い）"""
    total = 0
    for kind, count in hand_pieces.items():
        if kind == PieceKind.CATHEDRAL:
            continue
        shape = canonical_shape(kind, team)
        total += count * sum(cell for row in shape for cell in row)
    return total


def format_position(position: Position) -> str:
    """
    盤面の位置を文字列に変換
    例: (0, 0) -> "a1", (9, 9) -> "j10", (26, 0) -> "aa1"
    """
    column = ""
    x = position.x + 1
    while x > 0:
        x, rest = divmod(x - 1, 26)
        column = chr(ord('a') + rest) + column
    return f"{column}{position.y + 1}"
