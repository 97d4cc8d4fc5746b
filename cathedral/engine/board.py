"""
カテドラルの盤面を管理するモジュール
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional, Set, Union

from .errors import (
    NotOnBoardError,
    OnEnemyTileError,
    OnOccupiedTileError,
    OutOfBoundsError,
    PlacementError,
)
from .piece import PIECE_NAMES, PieceKind, PlacedPiece, ReleasedPiece, Team
from .position import Position

logger = logging.getLogger(__name__)

# 盤面サイズ（10x10）
BOARD_SIZE = 10


class TileState(Enum):
    """マスの状態"""
    EMPTY = auto()     # 空き（陣地としてチームに属することもある）
    OCCUPIED = auto()  # 建物がある


@dataclass(frozen=True)
class Tile:
    """盤面の1マス"""
    state: TileState
    team: Team = Team.NONE

    @classmethod
    def empty(cls, team: Team = Team.NONE) -> 'Tile':
        return cls(TileState.EMPTY, team)

    @classmethod
    def occupied(cls, team: Team) -> 'Tile':
        return cls(TileState.OCCUPIED, team)

    @property
    def is_empty(self) -> bool:
        return self.state == TileState.EMPTY

    @property
    def is_occupied(self) -> bool:
        return self.state == TileState.OCCUPIED

    def is_capturable_by(self, team: Team) -> bool:
        """
        team から見て取れるマスか
        空きマス（陣地のチームは問わない）か、相手チームの建物
        """
        if self.is_empty:
            return True
        return self.team.is_opposing(team)


EMPTY_TILE = Tile.empty()


class Board:
    """カテドラルのゲームボードを表すクラス"""

    def __init__(self, size: int = BOARD_SIZE):
        if size <= 0:
            raise ValueError(f"Invalid board size: {size}")
        self.size = size
        # tiles[y][x]
        self._tiles: List[List[Tile]] = [
            [EMPTY_TILE for _ in range(size)]
            for _ in range(size)
        ]
        # アンカー -> 盤上の駒
        self._pieces: Dict[Position, PlacedPiece] = {}
        # 建物のあるマス -> その駒のアンカー
        self._cell_anchors: Dict[Position, Position] = {}

    def is_valid_position(self, position: Position) -> bool:
        """位置が盤面内か確認"""
        return 0 <= position.x < self.size and 0 <= position.y < self.size

    def tile(self, position: Position) -> Tile:
        """指定位置のマスを取得"""
        if not self.is_valid_position(position):
            raise ValueError(f"Invalid position: {position}")
        return self._tiles[position.y][position.x]

    def tiles(self) -> List[List[Tile]]:
        """盤面全体のコピー（描画用、tiles[y][x]）"""
        return [list(row) for row in self._tiles]

    def positions(self):
        """盤面の全マスの座標（行優先）"""
        for y in range(self.size):
            for x in range(self.size):
                yield Position(x, y)

    def pieces(self) -> List[PlacedPiece]:
        """盤上の駒の一覧"""
        return list(self._pieces.values())

    def get_piece(self, anchor: Position) -> Optional[PlacedPiece]:
        """アンカーで登録されている駒"""
        return self._pieces.get(anchor)

    def piece_at(self, position: Position) -> Optional[PlacedPiece]:
        """指定マスを占めている駒"""
        anchor = self._cell_anchors.get(position)
        if anchor is None:
            return None
        return self._pieces[anchor]

    def count_tiles(self, state: TileState, team: Optional[Team] = None) -> int:
        """指定の状態（とチーム）のマスの数"""
        return sum(
            1
            for row in self._tiles
            for tile in row
            if tile.state == state and (team is None or tile.team == team)
        )

    def validate_placement(self, piece: ReleasedPiece, position: Position):
        """
        駒を position（形の左上）に置けるか確認し、置けなければ例外を投げる

        マスごとに 盤外 -> 建物との重なり -> 相手の陣地 の順で確認し、
        最初に見つかったエラーを投げる
        """
        for cell in piece.occupied_cells():
            target = position + cell
            if not self.is_valid_position(target):
                raise OutOfBoundsError(target)
            tile = self._tiles[target.y][target.x]
            if tile.is_occupied:
                raise OnOccupiedTileError(target)
            if tile.team.is_opposing(piece.team):
                raise OnEnemyTileError(target)

    def can_place(self, piece: ReleasedPiece, position: Position) -> bool:
        """駒を置けるならTrue"""
        try:
            self.validate_placement(piece, position)
        except PlacementError:
            return False
        return True

    def try_place(self, piece: ReleasedPiece, position: Position) -> PlacedPiece:
        """
        駒を盤に置いて、置かれた駒を返す
        置けない場合は PlacementError を投げ、渡した駒はそのまま使える
        """
        if not isinstance(piece, ReleasedPiece):
            raise TypeError(f"only released pieces can be placed, got {piece!r}")

        self.validate_placement(piece, position)

        placed = piece.placed_at(position)
        anchor = placed.anchor
        tile = Tile.occupied(placed.team)
        for cell in placed.cells():
            self._tiles[cell.y][cell.x] = tile
            self._cell_anchors[cell] = anchor
        self._pieces[anchor] = placed

        logger.debug("placed %r (anchor %s)", placed, anchor)
        return placed

    def try_remove(self, target: Union[Position, PlacedPiece]) -> ReleasedPiece:
        """
        駒を盤から取り除き、盤に置かれていない状態の駒を返す
        target はアンカーの座標か、盤上の駒
        取り除いたマスは、置く前に陣地だったマスも含めて中立の空きマスに戻る
        """
        if isinstance(target, PlacedPiece):
            if target.consumed:
                raise NotOnBoardError()
            anchor = target.anchor
            if self._pieces.get(anchor) is not target:
                raise NotOnBoardError(anchor)
        else:
            anchor = target
            if anchor not in self._pieces:
                raise NotOnBoardError(anchor)

        placed = self._pieces.pop(anchor)
        for cell in placed.cells():
            assert self._tiles[cell.y][cell.x].is_occupied, f"registered cell {cell} is not occupied"
            self._tiles[cell.y][cell.x] = EMPTY_TILE
            del self._cell_anchors[cell]

        logger.debug("removed %r (anchor %s)", placed, anchor)
        return placed.released()

    def claim_tile(self, position: Position, team: Team):
        """空きマスを team の陣地にする（占領処理で使う）"""
        tile = self.tile(position)
        if tile.is_occupied:
            raise ValueError(f"cannot claim occupied tile {position}")
        self._tiles[position.y][position.x] = Tile.empty(team)

    def is_capturable(self, position: Position, team: Team) -> bool:
        """team から見て取れるマスか"""
        return self.tile(position).is_capturable_by(team)

    def adjacent_capturable_region(self, piece: PlacedPiece) -> List[Set[Position]]:
        """
        置いた駒の周囲（8近傍）から、取れる可能性のある領域を求める

        駒の周囲で取れるマスを起点に、8近傍で取れるマスだけをたどって
        つながった領域を作る。起点はどれか1つの領域に必ず含まれる
        返り値: 連結成分ごとの座標の集合（起点を見つけた順）
        """
        if self._pieces.get(piece.anchor) is not piece:
            raise NotOnBoardError(piece.anchor)

        team = piece.team
        own_cells = set(piece.cells())

        # 起点となるマスを集める
        seeds: List[Position] = []
        seen: Set[Position] = set()
        for cell in piece.cells():
            for neighbor in cell.diagonal_adjacent(self.size):
                if neighbor in own_cells or neighbor in seen:
                    continue
                seen.add(neighbor)
                if self.is_capturable(neighbor, team):
                    seeds.append(neighbor)

        regions: List[Set[Position]] = []
        assigned: Set[Position] = set()
        for seed in seeds:
            if seed in assigned:
                continue
            region = self._flood_fill(seed, team)
            assigned |= region
            regions.append(region)

        return regions

    def _flood_fill(self, start: Position, team: Team) -> Set[Position]:
        """start から8近傍で取れるマスをたどる（再帰しない）"""
        region = {start}
        stack = [start]
        while stack:
            current = stack.pop()
            for neighbor in current.diagonal_adjacent(self.size):
                if neighbor in region:
                    continue
                if self.is_capturable(neighbor, team):
                    region.add(neighbor)
                    stack.append(neighbor)
        return region

    def check_invariants(self):
        """盤面の整合性を確認（崩れていたらバグなので assert）"""
        registered: Set[Position] = set()
        for anchor, piece in self._pieces.items():
            assert piece.anchor == anchor, f"{piece!r} is registered under {anchor}"
            for cell in piece.cells():
                assert cell not in registered, f"{cell} belongs to more than one piece"
                tile = self._tiles[cell.y][cell.x]
                assert tile == Tile.occupied(piece.team), f"{cell} is {tile}, expected {piece.team}"
                registered.add(cell)

        occupied = {
            position for position in self.positions()
            if self._tiles[position.y][position.x].is_occupied
        }
        assert occupied == registered, "occupied tiles don't match the placed pieces"
        assert set(self._cell_anchors) == registered

    def copy(self) -> 'Board':
        """盤面のコピーを作成"""
        new_board = Board(self.size)
        new_board._tiles = self.tiles()
        for anchor, piece in self._pieces.items():
            new_piece = PlacedPiece(piece.kind, piece.team, piece.shape, piece.rotation, piece.position)
            new_board._pieces[anchor] = new_piece
            for cell in new_piece.cells():
                new_board._cell_anchors[cell] = anchor
        return new_board

    def to_dict(self) -> dict:
        """盤面を辞書形式に変換（保存用）"""
        from .snapshot import snapshot_board
        return snapshot_board(self).model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> 'Board':
        """辞書形式から盤面を復元"""
        from .snapshot import BoardSnapshot, restore_board
        return restore_board(BoardSnapshot.model_validate(data))

    def _tile_str(self, position: Position) -> str:
        tile = self._tiles[position.y][position.x]
        if tile.is_empty:
            return {Team.NONE: " .", Team.WHITE: " -", Team.BLACK: " ="}[tile.team]
        piece = self.piece_at(position)
        name = PIECE_NAMES[piece.kind]
        if piece.kind == PieceKind.CATHEDRAL:
            return f" {name}"
        return f"{'w' if piece.team == Team.WHITE else 'b'}{name}"

    def __str__(self):
        """盤面の文字列表現を返す"""
        result = []

        # 列インデックスヘッダー
        header = "   " + "".join(f"{x:>3}" for x in range(self.size))
        result.append(header)
        result.append("   " + "-" * (self.size * 3))

        for y in range(self.size):
            row_str = f"{y:>2}|"
            for x in range(self.size):
                row_str += f" {self._tile_str(Position(x, y))}"
            result.append(row_str)

        return "\n".join(result)
