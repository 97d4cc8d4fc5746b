"""
盤面上の座標を表すモジュール
"""

from dataclasses import dataclass
from typing import Iterator, Optional

# 上下左右の差分 (dx, dy)
ORTHOGONAL_OFFSETS = [(0, -1), (-1, 0), (1, 0), (0, 1)]
# 8近傍の差分（上下左右 + 斜め）
NEIGHBOR_OFFSETS = [
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
]


@dataclass(frozen=True, order=True)
class Position:
    """
    盤面上の座標（x: 列, y: 行）
    どちらも0以上の整数で、負の座標は作れない
    """
    x: int
    y: int

    def __post_init__(self):
        for value in (self.x, self.y):
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"Invalid coordinate: {value!r}")
            if value < 0:
                raise ValueError(f"Negative coordinate: ({self.x}, {self.y})")

    @classmethod
    def from_tuple(cls, value) -> 'Position':
        """(x, y) のタプルから作成"""
        x, y = value
        return cls(x, y)

    def to_tuple(self):
        return (self.x, self.y)

    def __add__(self, other: 'Position') -> 'Position':
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Position') -> 'Position':
        """
        成分ごとの引き算
        どちらかの軸が負になる場合は ValueError
        """
        if other.x > self.x or other.y > self.y:
            raise ValueError(f"Position underflow: {self} - {other}")
        return Position(self.x - other.x, self.y - other.y)

    def add(self, other: 'Position') -> 'Position':
        return self + other

    def sub(self, other: 'Position') -> 'Position':
        return self - other

    def checked_add(self, other: 'Position', upper_bound: Optional[int] = None) -> Optional['Position']:
        """
        足し算（範囲外ならNone）
        upper_bound を指定した場合、どちらかの軸が upper_bound 以上になるとNone
        """
        x = self.x + other.x
        y = self.y + other.y
        if upper_bound is not None and (x >= upper_bound or y >= upper_bound):
            return None
        return Position(x, y)

    def checked_sub(self, other: 'Position') -> Optional['Position']:
        """引き算（負になるならNone）"""
        if other.x > self.x or other.y > self.y:
            return None
        return Position(self.x - other.x, self.y - other.y)

    def manhattan_distance(self, other: 'Position') -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def orthogonal_adjacent(self, upper_bound: int) -> Iterator['Position']:
        """上下左右の隣接マス（[0, upper_bound) の範囲内のみ）"""
        return self._offset_iter(ORTHOGONAL_OFFSETS, upper_bound)

    def diagonal_adjacent(self, upper_bound: int) -> Iterator['Position']:
        """斜めを含む8近傍の隣接マス（[0, upper_bound) の範囲内のみ）"""
        return self._offset_iter(NEIGHBOR_OFFSETS, upper_bound)

    def _offset_iter(self, offsets, upper_bound: int) -> Iterator['Position']:
        for dx, dy in offsets:
            x = self.x + dx
            y = self.y + dy
            if 0 <= x < upper_bound and 0 <= y < upper_bound:
                yield Position(x, y)

    def __str__(self):
        return f"({self.x}, {self.y})"
