"""
カテドラルの駒（建物）の種類・形・回転を定義するモジュール
"""

from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

from .errors import PieceConsumedError
from .position import Position

Shape = Tuple[Tuple[bool, ...], ...]


class Team(Enum):
    """チームの定義（NONEは中立：カテドラルと誰のものでもないマス）"""
    WHITE = 0
    BLACK = 1
    NONE = 2

    @property
    def opponent(self) -> 'Team':
        """相手チームを返す（NONEの相手はNONE）"""
        if self == Team.WHITE:
            return Team.BLACK
        if self == Team.BLACK:
            return Team.WHITE
        return Team.NONE

    def is_opposing(self, other: 'Team') -> bool:
        """白と黒の組み合わせのときだけ敵対する"""
        return {self, other} == {Team.WHITE, Team.BLACK}


class PieceKind(Enum):
    """駒の種類"""
    TAVERN = auto()     # 酒場 - 1マス
    STABLE = auto()     # 厩舎 - 2マス
    INN = auto()        # 宿屋 - L字3マス
    BRIDGE = auto()     # 橋 - 直線3マス
    SQUARE = auto()     # 広場 - 2x2
    MANOR = auto()      # 館 - T字
    ABBEY = auto()      # 修道院 - S/Z字（チームで鏡像）
    ACADEMY = auto()    # 学院 - F字（チームで鏡像）
    INFIRMARY = auto()  # 病院 - 十字
    CASTLE = auto()     # 城 - U字
    TOWER = auto()      # 塔 - W字
    CATHEDRAL = auto()  # 大聖堂 - 中立


class Rotation(Enum):
    """駒の向き（時計回りに UP -> RIGHT -> DOWN -> LEFT -> UP）"""
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def clockwise(self) -> 'Rotation':
        return Rotation((self.value + 1) % 4)

    @property
    def counterclockwise(self) -> 'Rotation':
        return Rotation((self.value - 1) % 4)

    @property
    def turns(self) -> int:
        """UPから時計回りに何回回したか"""
        return self.value


def _shape(rows: List[List[int]]) -> Shape:
    return tuple(tuple(bool(cell) for cell in row) for row in rows)


# 駒の表示名（盤面の文字列表現で使う）
PIECE_NAMES = {
    PieceKind.TAVERN: "T",
    PieceKind.STABLE: "S",
    PieceKind.INN: "I",
    PieceKind.BRIDGE: "B",
    PieceKind.SQUARE: "Q",
    PieceKind.MANOR: "M",
    PieceKind.ABBEY: "A",
    PieceKind.ACADEMY: "D",
    PieceKind.INFIRMARY: "F",
    PieceKind.CASTLE: "C",
    PieceKind.TOWER: "W",
    PieceKind.CATHEDRAL: "X",
}

# 駒の形（UP向き、左上が原点、Trueが建物のあるマス）
PIECE_SHAPES: Dict[PieceKind, Shape] = {
    PieceKind.TAVERN: _shape([[1]]),
    PieceKind.STABLE: _shape([
        [1],
        [1],
    ]),
    PieceKind.INN: _shape([
        [1, 1],
        [1, 0],
    ]),
    PieceKind.BRIDGE: _shape([
        [1],
        [1],
        [1],
    ]),
    PieceKind.SQUARE: _shape([
        [1, 1],
        [1, 1],
    ]),
    PieceKind.MANOR: _shape([
        [1, 1, 1],
        [0, 1, 0],
    ]),
    PieceKind.INFIRMARY: _shape([
        [0, 1, 0],
        [1, 1, 1],
        [0, 1, 0],
    ]),
    PieceKind.CASTLE: _shape([
        [1, 1, 1],
        [1, 0, 1],
    ]),
    PieceKind.TOWER: _shape([
        [0, 1, 1],
        [1, 1, 0],
        [1, 0, 0],
    ]),
    PieceKind.CATHEDRAL: _shape([
        [0, 1, 0],
        [1, 1, 1],
        [0, 1, 0],
        [0, 1, 0],
    ]),
}

# 白と黒で左右反転している駒
TEAM_PIECE_SHAPES: Dict[PieceKind, Dict[Team, Shape]] = {
    PieceKind.ABBEY: {
        Team.WHITE: _shape([
            [0, 1, 1],
            [1, 1, 0],
        ]),
        Team.BLACK: _shape([
            [1, 1, 0],
            [0, 1, 1],
        ]),
    },
    PieceKind.ACADEMY: {
        Team.WHITE: _shape([
            [0, 0, 1],
            [1, 1, 1],
            [0, 1, 0],
        ]),
        Team.BLACK: _shape([
            [1, 0, 0],
            [1, 1, 1],
            [0, 1, 0],
        ]),
    },
}


def canonical_shape(kind: PieceKind, team: Team) -> Shape:
    """駒の種類とチームからUP向きの形を返す"""
    if kind in TEAM_PIECE_SHAPES:
        return TEAM_PIECE_SHAPES[kind][team]
    return PIECE_SHAPES[kind]


def rotate_shape_clockwise(shape: Shape) -> Shape:
    """行の順番を逆にしてから転置する"""
    return tuple(zip(*reversed(shape)))


def rotate_shape_counterclockwise(shape: Shape) -> Shape:
    """転置してから行の順番を逆にする"""
    return tuple(reversed(tuple(zip(*shape))))


class Piece:
    """
    駒の共通部分（種類・チーム・形・向き）
    盤上の位置は持たない。配置状態は ReleasedPiece / PlacedPiece で区別する
    """

    def __init__(self, kind: PieceKind, team: Team, shape: Shape, rotation: Rotation = Rotation.UP):
        self._kind = kind
        self._team = team
        self._shape = shape
        self._rotation = rotation
        self._consumed = False

    def _check_alive(self):
        if self._consumed:
            raise PieceConsumedError(f"{self!r} has already been consumed")

    def _consume(self):
        self._check_alive()
        self._consumed = True

    @property
    def consumed(self) -> bool:
        return self._consumed

    @property
    def kind(self) -> PieceKind:
        self._check_alive()
        return self._kind

    @property
    def team(self) -> Team:
        self._check_alive()
        return self._team

    @property
    def shape(self) -> Shape:
        self._check_alive()
        return self._shape

    @property
    def rotation(self) -> Rotation:
        self._check_alive()
        return self._rotation

    @property
    def height(self) -> int:
        return len(self.shape)

    @property
    def width(self) -> int:
        return len(self.shape[0])

    @property
    def size(self) -> int:
        """駒が占めるマスの数"""
        return sum(cell for row in self.shape for cell in row)

    def occupied_cells(self) -> List[Position]:
        """形の中で建物があるマス（駒内の座標、行優先順）"""
        return [
            Position(x, y)
            for y, row in enumerate(self.shape)
            for x, cell in enumerate(row)
            if cell
        ]

    def first_cell(self) -> Position:
        """行優先で最初に建物があるマス（アンカーの計算に使う）"""
        return self.occupied_cells()[0]

    def __str__(self):
        return "\n".join(
            "".join("#" if cell else "." for cell in row)
            for row in self._shape
        )

    def __repr__(self):
        return f"{type(self).__name__}({self._kind.name}, {self._team.name}, {self._rotation.name})"


class ReleasedPiece(Piece):
    """盤に置かれていない駒（回転と配置ができる）"""

    def rotate_clockwise(self):
        self._check_alive()
        self._shape = rotate_shape_clockwise(self._shape)
        self._rotation = self._rotation.clockwise

    def rotate_counterclockwise(self):
        self._check_alive()
        self._shape = rotate_shape_counterclockwise(self._shape)
        self._rotation = self._rotation.counterclockwise

    def rotate(self, clockwise_turns: int):
        """時計回りに指定回数だけ回す（負の値は反時計回り）"""
        turns = clockwise_turns % 4
        for _ in range(turns):
            self.rotate_clockwise()

    def rotate_to(self, rotation: Rotation):
        """指定の向きになるまで時計回りに回す"""
        self.rotate(rotation.turns - self.rotation.turns)

    def placed_at(self, position: Position) -> 'PlacedPiece':
        """
        盤上の position（形の左上）に置いた駒を返す
        この駒自身は使用済みになる
        """
        placed = PlacedPiece(self._kind, self._team, self._shape, self._rotation, position)
        self._consume()
        return placed

    def copy(self) -> 'ReleasedPiece':
        self._check_alive()
        return ReleasedPiece(self._kind, self._team, self._shape, self._rotation)


class PlacedPiece(Piece):
    """盤に置かれた駒（位置を持ち、回転はできない）"""

    def __init__(
        self,
        kind: PieceKind,
        team: Team,
        shape: Shape,
        rotation: Rotation,
        position: Position
    ):
        super().__init__(kind, team, shape, rotation)
        self._position = position

    @property
    def position(self) -> Position:
        """形の左上が置かれた盤上の座標"""
        self._check_alive()
        return self._position

    @property
    def anchor(self) -> Position:
        """盤の登録キー（最初に建物があるマスの盤上座標）"""
        return self.position + self.first_cell()

    def cells(self) -> List[Position]:
        """建物がある盤上のマス"""
        position = self.position
        return [position + cell for cell in self.occupied_cells()]

    def released(self) -> ReleasedPiece:
        """盤から外した駒を返す（この駒自身は使用済みになる）"""
        released = ReleasedPiece(self._kind, self._team, self._shape, self._rotation)
        self._consume()
        return released

    def __repr__(self):
        return (
            f"PlacedPiece({self._kind.name}, {self._team.name}, "
            f"{self._rotation.name}, at={self._position})"
        )


def _require_team(team: Team) -> Team:
    if team not in (Team.WHITE, Team.BLACK):
        raise ValueError(f"a piece can be either black or white, got {team!r}")
    return team


def _new(kind: PieceKind, team: Team) -> ReleasedPiece:
    team = _require_team(team)
    return ReleasedPiece(kind, team, canonical_shape(kind, team))


def new_tavern(team: Team) -> ReleasedPiece:
    return _new(PieceKind.TAVERN, team)


def new_stable(team: Team) -> ReleasedPiece:
    return _new(PieceKind.STABLE, team)


def new_inn(team: Team) -> ReleasedPiece:
    return _new(PieceKind.INN, team)


def new_bridge(team: Team) -> ReleasedPiece:
    return _new(PieceKind.BRIDGE, team)


def new_square(team: Team) -> ReleasedPiece:
    return _new(PieceKind.SQUARE, team)


def new_manor(team: Team) -> ReleasedPiece:
    return _new(PieceKind.MANOR, team)


def new_abbey(team: Team) -> ReleasedPiece:
    return _new(PieceKind.ABBEY, team)


def new_academy(team: Team) -> ReleasedPiece:
    return _new(PieceKind.ACADEMY, team)


def new_infirmary(team: Team) -> ReleasedPiece:
    return _new(PieceKind.INFIRMARY, team)


def new_castle(team: Team) -> ReleasedPiece:
    return _new(PieceKind.CASTLE, team)


def new_tower(team: Team) -> ReleasedPiece:
    return _new(PieceKind.TOWER, team)


def new_cathedral() -> ReleasedPiece:
    """大聖堂（チームなし）"""
    return ReleasedPiece(PieceKind.CATHEDRAL, Team.NONE, canonical_shape(PieceKind.CATHEDRAL, Team.NONE))


def new_piece(kind: PieceKind, team: Optional[Team] = None) -> ReleasedPiece:
    """種類とチームから駒を作る（大聖堂はチームを指定しない）"""
    if kind == PieceKind.CATHEDRAL:
        if team not in (None, Team.NONE):
            raise ValueError("the cathedral doesn't belong to a team")
        return new_cathedral()
    return _new(kind, team)
