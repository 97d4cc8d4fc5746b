"""
カテドラルの手（Move）を表現するモジュール
"""

from typing import Optional

from .initial_setup import format_position
from .piece import PieceKind, Rotation, Team
from .position import Position


class Move:
    """カテドラルの一手（駒を置いた記録）を表すクラス"""

    def __init__(
        self,
        team: Team,
        kind: PieceKind,
        position: Position,
        rotation: Rotation = Rotation.UP,
        anchor: Optional[Position] = None,
        captured_tiles: int = 0,
        returned_pieces: int = 0
    ):
        self.team = team                    # 手番のチーム
        self.kind = kind                    # 置いた駒の種類
        self.position = position            # 形の左上の位置
        self.rotation = rotation            # 置いたときの向き
        self.anchor = anchor                # 盤上の登録キー
        self.captured_tiles = captured_tiles    # 占領したマス数
        self.returned_pieces = returned_pieces  # 占領で持ち主に返した駒の数

    def __str__(self):
        text = f"{self.team.name} {self.kind.name}({self.rotation.name}) -> {format_position(self.position)}"
        if self.captured_tiles:
            text += f" [captured {self.captured_tiles}]"
        return text

    def __repr__(self):
        return (
            f"Move(team={self.team.name}, kind={self.kind.name}, "
            f"position={self.position}, rotation={self.rotation.name}, "
            f"captured_tiles={self.captured_tiles})"
        )

    def to_dict(self) -> dict:
        """手を辞書形式に変換"""
        return {
            "team": self.team.name,
            "kind": self.kind.name,
            "position": self.position.to_tuple(),
            "rotation": self.rotation.name,
            "anchor": self.anchor.to_tuple() if self.anchor else None,
            "captured_tiles": self.captured_tiles,
            "returned_pieces": self.returned_pieces,
        }

    @staticmethod
    def from_dict(data: dict) -> 'Move':
        """辞書形式から手を復元"""
        return Move(
            team=Team[data["team"]],
            kind=PieceKind[data["kind"]],
            position=Position.from_tuple(data["position"]),
            rotation=Rotation[data.get("rotation", "UP")],
            anchor=Position.from_tuple(data["anchor"]) if data.get("anchor") else None,
            captured_tiles=data.get("captured_tiles", 0),
            returned_pieces=data.get("returned_pieces", 0),
        )
