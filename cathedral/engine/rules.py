"""
カテドラルのルール判定を行うモジュール
占領（囲んだ領域の確定）と置ける場所の列挙
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Optional, Set, Tuple

from .board import Board
from .piece import PieceKind, PlacedPiece, ReleasedPiece, Team, new_piece
from .position import Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaptureRule:
    """
    占領の判定ルール

    max_enclosed_pieces: 領域内にあってよい相手の駒の数の上限
    spare_largest_region: 一番大きい領域（開けた盤面側）は占領しない
    allow_edge_regions: Falseなら盤の端に接する領域は占領しない
    """
    max_enclosed_pieces: int = 1
    spare_largest_region: bool = True
    allow_edge_regions: bool = True


DEFAULT_CAPTURE_RULE = CaptureRule()


@dataclass(frozen=True)
class Capture:
    """占領される領域と、その中にある相手の駒"""
    region: FrozenSet[Position]
    enclosed_pieces: Tuple[PlacedPiece, ...]


class Rules:
    """カテドラルのルールを管理するクラス"""

    @staticmethod
    def find_captures(
        board: Board,
        placed: PlacedPiece,
        rule: CaptureRule = DEFAULT_CAPTURE_RULE
    ) -> List[Capture]:
        """
        駒を置いた直後に占領される領域を求める（盤面は変更しない）
        """
        regions = board.adjacent_capturable_region(placed)
        if not regions:
            return []

        candidates = list(regions)
        if rule.spare_largest_region:
            largest = max(candidates, key=len)
            candidates = [region for region in candidates if region is not largest]

        captures = []
        for region in candidates:
            if not rule.allow_edge_regions and Rules._touches_edge(board, region):
                continue

            enclosed = Rules._enclosed_pieces(board, region)
            if len(enclosed) > rule.max_enclosed_pieces:
                continue

            captures.append(Capture(region=frozenset(region), enclosed_pieces=tuple(enclosed)))

        return captures

    @staticmethod
    def apply_captures(board: Board, captures: List[Capture], team: Team) -> List[ReleasedPiece]:
        """
        占領を盤面に適用する
        領域内の相手の駒を取り除き、領域のマスを team の陣地にする
        返り値: 取り除いた駒（持ち主に返す）
        """
        released = []
        for capture in captures:
            for piece in capture.enclosed_pieces:
                released.append(board.try_remove(piece))
            for position in sorted(capture.region):
                board.claim_tile(position, team)
            logger.debug(
                "%s captured %d tiles (%d pieces removed)",
                team.name, len(capture.region), len(capture.enclosed_pieces)
            )
        return released

    @staticmethod
    def _touches_edge(board: Board, region: Set[Position]) -> bool:
        last = board.size - 1
        return any(
            position.x in (0, last) or position.y in (0, last)
            for position in region
        )

    @staticmethod
    def _enclosed_pieces(board: Board, region: Set[Position]) -> List[PlacedPiece]:
        """領域内のマスを占めている駒（重複なし）"""
        pieces = []
        anchors = set()
        for position in sorted(region):
            piece = board.piece_at(position)
            if piece is not None and piece.anchor not in anchors:
                anchors.add(piece.anchor)
                pieces.append(piece)
        return pieces

    @staticmethod
    def _orientations(piece: ReleasedPiece) -> Iterator[Tuple[int, ReleasedPiece]]:
        """向きの違う駒を列挙（同じ形になる向きは省く）"""
        seen = set()
        for turns in range(4):
            rotated = piece.copy()
            rotated.rotate(turns)
            if rotated.shape in seen:
                continue
            seen.add(rotated.shape)
            yield turns, rotated

    @staticmethod
    def _iter_placements(board: Board, piece: ReleasedPiece) -> Iterator[Tuple[int, Position]]:
        """置ける (時計回りの回転数, 形の左上の位置) を順に返す"""
        for turns, rotated in Rules._orientations(piece):
            for y in range(board.size - rotated.height + 1):
                for x in range(board.size - rotated.width + 1):
                    position = Position(x, y)
                    if board.can_place(rotated, position):
                        yield turns, position

    @staticmethod
    def legal_placements(board: Board, piece: ReleasedPiece) -> List[Tuple[int, Position]]:
        """
        駒を置ける (時計回りの回転数, 形の左上の位置) をすべて取得
        """
        return list(Rules._iter_placements(board, piece))

    @staticmethod
    def has_legal_placement(board: Board, kind: PieceKind, team: Optional[Team]) -> bool:
        """指定の種類の駒を置ける場所が1つでもあるか"""
        return any(True for _ in Rules._iter_placements(board, new_piece(kind, team)))
