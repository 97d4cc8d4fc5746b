"""
単体テスト: 駒のテスト
駒の形、回転、配置状態の切り替えを確認
"""

import pytest
from cathedral.engine import (
    PieceConsumedError,
    PieceKind,
    PlacedPiece,
    Position,
    ReleasedPiece,
    Rotation,
    Team,
    new_cathedral,
    new_piece,
)
from cathedral.engine.piece import (
    canonical_shape,
    new_inn,
    new_manor,
    new_stable,
    new_tavern,
)


def _layout(*rows):
    return tuple(tuple(bool(cell) for cell in row) for row in rows)


TEAM_KINDS = [kind for kind in PieceKind if kind != PieceKind.CATHEDRAL]


class TestTeam:
    """チームのテストクラス"""

    def test_opponent(self):
        """相手チーム"""
        assert Team.WHITE.opponent == Team.BLACK
        assert Team.BLACK.opponent == Team.WHITE
        assert Team.NONE.opponent == Team.NONE

    @pytest.mark.parametrize("a,b,expected", [
        (Team.WHITE, Team.BLACK, True),
        (Team.BLACK, Team.WHITE, True),
        (Team.WHITE, Team.WHITE, False),
        (Team.WHITE, Team.NONE, False),
        (Team.NONE, Team.BLACK, False),
        (Team.NONE, Team.NONE, False),
    ])
    def test_is_opposing(self, a, b, expected):
        """白と黒だけが敵対することを確認"""
        assert a.is_opposing(b) == expected


class TestPieceCatalog:
    """駒の形の定義のテストクラス"""

    @pytest.mark.parametrize("kind,size", [
        (PieceKind.TAVERN, 1),
        (PieceKind.STABLE, 2),
        (PieceKind.INN, 3),
        (PieceKind.BRIDGE, 3),
        (PieceKind.SQUARE, 4),
        (PieceKind.MANOR, 4),
        (PieceKind.ABBEY, 4),
        (PieceKind.ACADEMY, 5),
        (PieceKind.INFIRMARY, 5),
        (PieceKind.CASTLE, 5),
        (PieceKind.TOWER, 5),
    ])
    def test_piece_sizes(self, kind, size):
        """各駒のマス数が正しいことを確認"""
        assert new_piece(kind, Team.WHITE).size == size
        assert new_piece(kind, Team.BLACK).size == size

    def test_cathedral(self):
        """大聖堂は中立で6マス"""
        cathedral = new_cathedral()
        assert cathedral.team == Team.NONE
        assert cathedral.kind == PieceKind.CATHEDRAL
        assert cathedral.size == 6

    @pytest.mark.parametrize("kind", [PieceKind.ABBEY, PieceKind.ACADEMY])
    def test_team_shapes_are_mirrored(self, kind):
        """修道院と学院は白と黒で左右反転していることを確認"""
        white = canonical_shape(kind, Team.WHITE)
        black = canonical_shape(kind, Team.BLACK)
        assert white != black
        assert tuple(tuple(reversed(row)) for row in white) == black

    @pytest.mark.parametrize("kind", TEAM_KINDS)
    def test_new_piece_starts_up(self, kind):
        """作ったばかりの駒は UP 向き"""
        piece = new_piece(kind, Team.BLACK)
        assert isinstance(piece, ReleasedPiece)
        assert piece.rotation == Rotation.UP
        assert piece.kind == kind
        assert piece.team == Team.BLACK

    @pytest.mark.parametrize("kind", TEAM_KINDS)
    def test_team_piece_requires_team(self, kind):
        """チームの駒は NONE では作れない"""
        with pytest.raises(ValueError):
            new_piece(kind, Team.NONE)
        with pytest.raises(ValueError):
            new_piece(kind)

    def test_cathedral_rejects_team(self):
        """大聖堂にはチームを指定できない"""
        with pytest.raises(ValueError):
            new_piece(PieceKind.CATHEDRAL, Team.WHITE)
        assert new_piece(PieceKind.CATHEDRAL).team == Team.NONE

    def test_occupied_cells_row_major(self):
        """建物のあるマスが行優先で並ぶことを確認"""
        manor = new_manor(Team.WHITE)
        assert manor.occupied_cells() == [
            Position(0, 0), Position(1, 0), Position(2, 0), Position(1, 1)
        ]
        assert new_cathedral().first_cell() == Position(1, 0)


class TestRotation:
    """回転のテストクラス"""

    def test_tavern_clockwise(self):
        """酒場は回しても形が変わらない"""
        tavern = new_tavern(Team.WHITE)
        for _ in range(4):
            tavern.rotate_clockwise()
            assert tavern.shape == _layout([1])

    def test_stable_clockwise(self):
        """厩舎は横と縦を繰り返す"""
        stable = new_stable(Team.WHITE)
        expected = [_layout([1, 1]), _layout([1], [1])] * 2
        for layout in expected:
            stable.rotate_clockwise()
            assert stable.shape == layout

    def test_inn_clockwise(self):
        """宿屋を時計回りに回す"""
        inn = new_inn(Team.WHITE)
        expected = [
            _layout([1, 1], [0, 1]),
            _layout([0, 1], [1, 1]),
            _layout([1, 0], [1, 1]),
            _layout([1, 1], [1, 0]),
        ]
        for layout in expected:
            inn.rotate_clockwise()
            assert inn.shape == layout

    def test_inn_counterclockwise(self):
        """宿屋を反時計回りに回す"""
        inn = new_inn(Team.WHITE)
        expected = [
            _layout([1, 0], [1, 1]),
            _layout([0, 1], [1, 1]),
            _layout([1, 1], [0, 1]),
            _layout([1, 1], [1, 0]),
        ]
        for layout in expected:
            inn.rotate_counterclockwise()
            assert inn.shape == layout

    def test_manor_clockwise(self):
        """館を時計回りに回す"""
        manor = new_manor(Team.WHITE)
        expected = [
            _layout([0, 1], [1, 1], [0, 1]),
            _layout([0, 1, 0], [1, 1, 1]),
            _layout([1, 0], [1, 1], [1, 0]),
            _layout([1, 1, 1], [0, 1, 0]),
        ]
        for layout in expected:
            manor.rotate_clockwise()
            assert manor.shape == layout

    def test_manor_counterclockwise(self):
        """館を反時計回りに回す"""
        manor = new_manor(Team.WHITE)
        expected = [
            _layout([1, 0], [1, 1], [1, 0]),
            _layout([0, 1, 0], [1, 1, 1]),
            _layout([0, 1], [1, 1], [0, 1]),
            _layout([1, 1, 1], [0, 1, 0]),
        ]
        for layout in expected:
            manor.rotate_counterclockwise()
            assert manor.shape == layout

    def test_cathedral_clockwise(self):
        """大聖堂を時計回りに回す"""
        cathedral = new_cathedral()
        expected = [
            _layout([0, 0, 1, 0], [1, 1, 1, 1], [0, 0, 1, 0]),
            _layout([0, 1, 0], [0, 1, 0], [1, 1, 1], [0, 1, 0]),
            _layout([0, 1, 0, 0], [1, 1, 1, 1], [0, 1, 0, 0]),
            _layout([0, 1, 0], [1, 1, 1], [0, 1, 0], [0, 1, 0]),
        ]
        for layout in expected:
            cathedral.rotate_clockwise()
            assert cathedral.shape == layout

    def test_cathedral_counterclockwise(self):
        """大聖堂を反時計回りに回す"""
        cathedral = new_cathedral()
        expected = [
            _layout([0, 1, 0, 0], [1, 1, 1, 1], [0, 1, 0, 0]),
            _layout([0, 1, 0], [0, 1, 0], [1, 1, 1], [0, 1, 0]),
            _layout([0, 0, 1, 0], [1, 1, 1, 1], [0, 0, 1, 0]),
            _layout([0, 1, 0], [1, 1, 1], [0, 1, 0], [0, 1, 0]),
        ]
        for layout in expected:
            cathedral.rotate_counterclockwise()
            assert cathedral.shape == layout

    @pytest.mark.parametrize("kind", list(PieceKind))
    def test_four_turns_is_identity(self, kind):
        """同じ向きに4回まわすと元に戻ることを確認"""
        team = None if kind == PieceKind.CATHEDRAL else Team.WHITE
        clockwise = new_piece(kind, team)
        counterclockwise = new_piece(kind, team)
        original = clockwise.shape
        for _ in range(4):
            clockwise.rotate_clockwise()
            counterclockwise.rotate_counterclockwise()
        assert clockwise.shape == original
        assert counterclockwise.shape == original
        assert clockwise.rotation == Rotation.UP

    @pytest.mark.parametrize("kind", list(PieceKind))
    def test_rotations_are_inverse(self, kind):
        """時計回りと反時計回りを1回ずつで元に戻ることを確認"""
        team = None if kind == PieceKind.CATHEDRAL else Team.BLACK
        piece = new_piece(kind, team)
        original = piece.shape
        piece.rotate_clockwise()
        piece.rotate_counterclockwise()
        assert piece.shape == original
        piece.rotate_counterclockwise()
        piece.rotate_clockwise()
        assert piece.shape == original

    def test_rotation_tracks_direction(self):
        """向きが UP -> RIGHT -> DOWN -> LEFT と進む"""
        piece = new_manor(Team.WHITE)
        piece.rotate_clockwise()
        assert piece.rotation == Rotation.RIGHT
        piece.rotate(2)
        assert piece.rotation == Rotation.LEFT
        piece.rotate(-1)
        assert piece.rotation == Rotation.DOWN
        piece.rotate_to(Rotation.UP)
        assert piece.rotation == Rotation.UP
        assert piece.shape == canonical_shape(PieceKind.MANOR, Team.WHITE)


class TestPieceLifecycle:
    """配置状態の切り替えのテストクラス"""

    def test_placed_at_consumes_released(self):
        """配置すると元の駒は使えなくなることを確認"""
        inn = new_inn(Team.WHITE)
        placed = inn.placed_at(Position(3, 4))

        assert isinstance(placed, PlacedPiece)
        assert placed.position == Position(3, 4)
        assert inn.consumed
        with pytest.raises(PieceConsumedError):
            inn.rotate_clockwise()
        with pytest.raises(PieceConsumedError):
            inn.placed_at(Position(0, 0))

    def test_placed_piece_cells(self):
        """盤上のマスと アンカーの計算"""
        cathedral = new_cathedral().placed_at(Position(2, 3))
        assert cathedral.anchor == Position(3, 3)
        assert cathedral.cells() == [
            Position(3, 3),
            Position(2, 4), Position(3, 4), Position(4, 4),
            Position(3, 5),
            Position(3, 6),
        ]

    def test_placed_piece_cannot_rotate(self):
        """置いた駒には回転のメソッドがない"""
        placed = new_manor(Team.BLACK).placed_at(Position(0, 0))
        assert not hasattr(placed, "rotate_clockwise")
        assert not hasattr(placed, "rotate_counterclockwise")

    def test_released_keeps_rotation(self):
        """盤から外しても向きは保たれる"""
        manor = new_manor(Team.BLACK)
        manor.rotate_clockwise()
        placed = manor.placed_at(Position(1, 1))
        released = placed.released()

        assert isinstance(released, ReleasedPiece)
        assert released.rotation == Rotation.RIGHT
        assert released.team == Team.BLACK
        assert placed.consumed
        with pytest.raises(PieceConsumedError):
            placed.cells()

    def test_copy_is_independent(self):
        """コピーした駒を回しても元の駒は変わらない"""
        original = new_manor(Team.WHITE)
        copied = original.copy()
        copied.rotate_clockwise()
        assert original.rotation == Rotation.UP
        assert copied.rotation == Rotation.RIGHT
