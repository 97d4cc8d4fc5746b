"""
盤面の保存・復元用のモデル
盤面サイズ、盤上の駒（種類・チーム・向き・アンカー）、陣地のマスを保存する
"""

from typing import List

from pydantic import BaseModel, Field, model_validator

from .board import Board, TileState
from .piece import PieceKind, Rotation, Team, new_piece
from .position import Position


class PieceModel(BaseModel):
    kind: PieceKind
    team: Team
    rotation: Rotation = Rotation.UP
    anchor_x: int = Field(ge=0)
    anchor_y: int = Field(ge=0)

    @model_validator(mode="after")
    def check_team(self):
        is_cathedral = self.kind == PieceKind.CATHEDRAL
        if is_cathedral != (self.team == Team.NONE):
            raise ValueError(f"{self.kind.name} cannot belong to team {self.team.name}")
        return self


class TerritoryModel(BaseModel):
    """チームの陣地になっている空きマス"""
    x: int = Field(ge=0)
    y: int = Field(ge=0)
    team: Team


class BoardSnapshot(BaseModel):
    size: int = Field(gt=0)
    pieces: List[PieceModel] = []
    territory: List[TerritoryModel] = []


def snapshot_board(board: Board) -> BoardSnapshot:
    """盤面からスナップショットを作成"""
    pieces = [
        PieceModel(
            kind=piece.kind,
            team=piece.team,
            rotation=piece.rotation,
            anchor_x=piece.anchor.x,
            anchor_y=piece.anchor.y,
        )
        for piece in board.pieces()
    ]
    territory = [
        TerritoryModel(x=position.x, y=position.y, team=tile.team)
        for position in board.positions()
        for tile in [board.tile(position)]
        if tile.state == TileState.EMPTY and tile.team != Team.NONE
    ]
    return BoardSnapshot(size=board.size, pieces=pieces, territory=territory)


def restore_board(snapshot: BoardSnapshot) -> Board:
    """
    スナップショットから盤面を復元
    陣地を先に戻してから駒を置き直す（置けない場合は PlacementError）
    """
    board = Board(snapshot.size)

    for claimed in snapshot.territory:
        board.claim_tile(Position(claimed.x, claimed.y), claimed.team)

    for model in snapshot.pieces:
        team = None if model.kind == PieceKind.CATHEDRAL else model.team
        piece = new_piece(model.kind, team)
        piece.rotate_to(model.rotation)
        anchor = Position(model.anchor_x, model.anchor_y)
        # アンカーから形の左上の位置を逆算
        position = anchor.checked_sub(piece.first_cell())
        if position is None:
            raise ValueError(f"anchor {anchor} is not valid for {model.kind.name}")
        board.try_place(piece, position)

    return board
