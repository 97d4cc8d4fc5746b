"""
カテドラルのエンジンで使う例外
すべて呼び出し側で回復可能なエラー
"""

from typing import Optional

from .position import Position


class CathedralError(Exception):
    """エンジンの例外の基底クラス"""


class PlacementError(CathedralError):
    """駒を置けない場合のエラー（どのマスで失敗したかを保持）"""

    reason = "piece cannot be placed"

    def __init__(self, position: Position):
        self.position = position
        super().__init__(f"{self.reason}: {position}")


class OutOfBoundsError(PlacementError):
    """盤外にはみ出す"""
    reason = "piece was placed out of bounds"


class OnOccupiedTileError(PlacementError):
    """既に建物があるマスに重なる"""
    reason = "piece was placed on occupied tile"


class OnEnemyTileError(PlacementError):
    """相手の陣地に重なる"""
    reason = "piece was placed on other team's tile"


class RemovalError(CathedralError):
    """駒を取り除けない場合のエラー"""


class NotOnBoardError(RemovalError):
    """盤上に登録されていない駒"""

    def __init__(self, position: Optional[Position] = None):
        self.position = position
        if position is None:
            super().__init__("piece doesn't belong to this board")
        else:
            super().__init__(f"no piece is anchored at {position}")


class PieceConsumedError(CathedralError):
    """配置・解放で使い切った駒を再利用しようとした"""


class GameError(CathedralError):
    """ゲーム進行のエラー"""


class NotYourTurnError(GameError):
    pass


class PieceNotInHandError(GameError):
    pass


class GameOverError(GameError):
    pass
