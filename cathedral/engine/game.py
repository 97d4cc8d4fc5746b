"""
カテドラルのゲーム進行（手番・持ち駒・得点）を管理するモジュール
盤面の操作はすべて Board と Rules を通して行う
"""

import logging
from typing import Dict, FrozenSet, List, Optional, Tuple

from .board import Board
from .errors import GameError, GameOverError, NotYourTurnError, PieceNotInHandError
from .initial_setup import get_initial_hand_pieces, hand_size
from .move import Move
from .piece import PieceKind, Team, new_piece
from .position import Position
from .rules import DEFAULT_CAPTURE_RULE, CaptureRule, Rules

logger = logging.getLogger(__name__)


class GameState:
    """
    ゲームの状態を管理するクラス

    最初の手番のチームは、まず大聖堂を置く。その後は交互に自分の駒を置き、
    相手が置けなくなったら置ける側が続けて置く。両方置けなくなったら終了
    """

    def __init__(
        self,
        board: Optional[Board] = None,
        first_team: Team = Team.BLACK,
        rule: CaptureRule = DEFAULT_CAPTURE_RULE
    ):
        if first_team not in (Team.WHITE, Team.BLACK):
            raise ValueError(f"Invalid first team: {first_team}")
        self.board = board if board is not None else Board()
        self.rule = rule
        self.current_team = first_team
        self.move_history: List[Move] = []
        self.captured_regions: Dict[Team, List[FrozenSet[Position]]] = {Team.WHITE: [], Team.BLACK: []}
        self.hand_pieces: Dict[Team, Dict[PieceKind, int]] = {
            Team.WHITE: get_initial_hand_pieces(Team.WHITE, with_cathedral=first_team == Team.WHITE),
            Team.BLACK: get_initial_hand_pieces(Team.BLACK, with_cathedral=first_team == Team.BLACK),
        }
        self.game_over = False
        self.winner: Optional[Team] = None

    def switch_turn(self):
        """手番を交代"""
        self.current_team = self.current_team.opponent

    def can_move(self, team: Team) -> bool:
        """team が持ち駒のどれかを盤に置けるか"""
        for kind, count in self.hand_pieces[team].items():
            if count <= 0:
                continue
            piece_team = None if kind == PieceKind.CATHEDRAL else team
            if Rules.has_legal_placement(self.board, kind, piece_team):
                return True
        return False

    def legal_placements(self, kind: PieceKind) -> List[Tuple[int, Position]]:
        """現在の手番で kind を置ける (回転数, 位置) の一覧"""
        if self.hand_pieces[self.current_team].get(kind, 0) <= 0:
            return []
        piece_team = None if kind == PieceKind.CATHEDRAL else self.current_team
        return Rules.legal_placements(self.board, new_piece(kind, piece_team))

    def place(
        self,
        kind: PieceKind,
        position: Position,
        clockwise_turns: int = 0,
        team: Optional[Team] = None
    ) -> Move:
        """
        現在の手番のチームが駒を置く
        置けない場合は PlacementError（盤面も持ち駒も変わらない）
        team を渡すと手番のチームか確認し、違えば NotYourTurnError
        """
        if self.game_over:
            raise GameOverError("the game is already over")
        if team is not None and team != self.current_team:
            raise NotYourTurnError(f"it is {self.current_team.name}'s turn")

        hand = self.hand_pieces[self.current_team]
        if hand.get(kind, 0) <= 0:
            raise PieceNotInHandError(f"{self.current_team.name} has no {kind.name} left")
        if hand.get(PieceKind.CATHEDRAL, 0) > 0 and kind != PieceKind.CATHEDRAL:
            raise GameError("the cathedral must be placed first")

        piece_team = None if kind == PieceKind.CATHEDRAL else self.current_team
        piece = new_piece(kind, piece_team)
        piece.rotate(clockwise_turns)
        placed = self.board.try_place(piece, position)
        hand[kind] -= 1

        captured_tiles = 0
        returned = []
        if kind != PieceKind.CATHEDRAL:
            captures = Rules.find_captures(self.board, placed, self.rule)
            returned = Rules.apply_captures(self.board, captures, self.current_team)
            captured_tiles = sum(len(capture.region) for capture in captures)
            self.captured_regions[self.current_team].extend(capture.region for capture in captures)
            # 取り除いた駒は持ち主に返す（大聖堂はゲームから除外）
            for released in returned:
                if released.kind == PieceKind.CATHEDRAL:
                    continue
                owner_hand = self.hand_pieces[released.team]
                owner_hand[released.kind] = owner_hand.get(released.kind, 0) + 1

        move = Move(
            team=self.current_team,
            kind=kind,
            position=position,
            rotation=placed.rotation,
            anchor=placed.anchor,
            captured_tiles=captured_tiles,
            returned_pieces=len(returned),
        )
        self.move_history.append(move)
        logger.debug("move %d: %s", len(self.move_history), move)

        self._advance_turn()
        return move

    def _advance_turn(self):
        """次に置けるチームに手番を渡す（どちらも置けなければ終了）"""
        opponent = self.current_team.opponent
        if self.can_move(opponent):
            self.switch_turn()
        elif not self.can_move(self.current_team):
            self._finish()

    def _finish(self):
        self.game_over = True
        white = self.score(Team.WHITE)
        black = self.score(Team.BLACK)
        if white < black:
            self.winner = Team.WHITE
        elif black < white:
            self.winner = Team.BLACK
        else:
            self.winner = None
        logger.info("game over: WHITE=%d BLACK=%d winner=%s", white, black,
                    self.winner.name if self.winner else None)

    def score(self, team: Team) -> int:
        """置けずに残った持ち駒のマス数（少ないほど良い）"""
        return hand_size(self.hand_pieces[team], team)

    def to_dict(self) -> dict:
        """ゲーム状態を辞書形式に変換"""
        return {
            "board": self.board.to_dict(),
            "current_team": self.current_team.name,
            "move_count": len(self.move_history),
            "moves": [move.to_dict() for move in self.move_history],
            "hand_pieces": {
                team.name: {kind.name: count for kind, count in hand.items()}
                for team, hand in self.hand_pieces.items()
            },
            "game_over": self.game_over,
            "winner": self.winner.name if self.winner else None,
        }
