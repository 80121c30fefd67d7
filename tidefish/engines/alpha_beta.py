import logging
import random
import time
from dataclasses import dataclass

from chess import Move

from tidefish.cache import LRUScoreCache, ScoreCache
from tidefish.config import Config
from tidefish.evaluation import ClassicalEvaluator, Evaluator
from tidefish.move_ordering import organize_moves, organize_moves_quiescence
from tidefish.position import NoLegalMovesError, Position, played
from tidefish.psqt import EvaluationTables, endgame_progression
from tidefish.time_control import Timer, TimeGovernor

logger = logging.getLogger(__name__)


@dataclass
class SearchInfo:
    """Statistics of the last `search_move` call."""

    nodes: int = 0
    depth: int = 0
    score: int = 0
    best_move: Move | None = None
    cache_hits: int = 0
    aborted: bool = False
    elapsed_ms: float = 0.0


class AlphaBeta:
    """
    Iterative deepening negamax with alpha-beta pruning, a capture and
    check quiescence search, MVV-LVA move ordering and a position score
    cache.

    Arguments:
        - config: engine settings.
        - evaluator: static evaluation used at quiescence leaves.
        - cache: position score cache, owned by this engine.
        - tables: evaluation tables shared with the move orderer.
        - clock: seconds counter handed to the per-move timer.
    """

    def __init__(
        self,
        config: Config | None = None,
        evaluator: Evaluator | None = None,
        cache: ScoreCache | None = None,
        tables: EvaluationTables | None = None,
        clock=time.perf_counter,
    ):
        self.config = config or Config()
        self.tables = tables or EvaluationTables.default()
        self.evaluator = evaluator or ClassicalEvaluator(self.tables, self.config)
        self.cache = cache if cache is not None else LRUScoreCache(self.config.cache_size)
        self.governor = TimeGovernor(self.config)
        self.rng = random.Random(self.config.seed)
        self.clock = clock
        self.info = SearchInfo()

        self._timer: Timer | None = None
        self._aborted = False
        self._root_depth = 0
        self._best_move: Move | None = None
        self._best_score = self._nothing

    @property
    def _nothing(self) -> int:
        # below any reachable score: marks a node where no move was searched
        return -self.config.mate_score - 1

    def new_game(self) -> None:
        """Forget cached scores from the previous game."""
        self.cache.clear()

    def random_move(self, moves: list[Move]) -> Move:
        return self.rng.choice(moves)

    def _mate_distance(self, score: int) -> int:
        """
        A mate found one ply further away is worth one point less.

        Child windows are not widened to match, so a child bound that lands
        within a point of alpha or beta near mate can be taken as exact by
        the parent. Only the ranking among mate scores is affected.
        """
        if score > self.config.checkmate_threshold:
            return score - 1
        if score < -self.config.checkmate_threshold:
            return score + 1
        return score

    def _time_up(self, position: Position, quiescence: bool = False) -> bool:
        if self._aborted:
            return True
        if self._timer is None:
            return False
        budget = self._timer.budget()
        if quiescence:
            stop = self.governor.should_stop_quiescence(budget)
        else:
            progression = endgame_progression(position.piece_count())
            stop = self.governor.should_stop_search(budget, progression)
        if stop:
            self._aborted = True
        return stop

    def _score_child(self, position: Position, alpha: int, search) -> int:
        """
        Score the position reached after a move, from the mover's side.

        A cached score that cannot raise alpha is trusted as is; anything
        else is searched again and the cache entry refreshed, unless the
        search was stopped by the clock on the way.
        """
        key = position.identity()
        cached = self.cache.get(key)
        if cached is not None and cached <= alpha:
            self.info.cache_hits += 1
            return cached

        score = self._mate_distance(-search())
        # a subtree cut short by the clock is not a real score
        if not self._aborted:
            self.cache.put(key, score)
        return score

    def quiescence_search(
        self, position: Position, alpha: int, beta: int, ply: int = 0
    ) -> int:
        """
        This function extends the search along captures and checking
        moves until none are left, so a leaf is never scored in the
        middle of an exchange. Outside of check the side to move may stand
        pat, so the static evaluation is a lower bound on the result.

        Arguments:
            - position: position state, restored before returning
            - alpha: score the side to move is already guaranteed
            - beta: score the opponent is already guaranteed
            - ply: quiescence plies played so far

        Returns:
            - best_score: static evaluation when the position is quiet,
                otherwise the better of standing pat and the best tactical
                continuation.
        """
        self.info.nodes += 1

        # repeated positions would otherwise cycle through perpetual checks
        if ply and position.is_draw():
            return 0

        moves = organize_moves_quiescence(position, self.tables)
        if not moves or ply >= self.config.quiescence_ply_limit:
            return self.evaluator.evaluate(position)

        best_score = self._nothing
        if not position.is_in_check():
            best_score = self.evaluator.evaluate(position)
            if best_score >= beta:
                return best_score
            alpha = max(alpha, best_score)

        for move in moves:
            if self._time_up(position, quiescence=True):
                break

            with played(position, move):
                score = self._score_child(
                    position,
                    alpha,
                    lambda: self.quiescence_search(position, -beta, -alpha, ply + 1),
                )

            best_score = max(best_score, score)
            alpha = max(alpha, score)

            # beta-cutoff
            if alpha >= beta:
                break

        if best_score == self._nothing:
            return self.evaluator.evaluate(position)
        return best_score

    def negamax(self, position: Position, depth: int, alpha: int, beta: int) -> int:
        """
        This function searches `depth` plies ahead and returns the score of
        the position for the side to move. At the root of an iteration it
        also records the best move found.

        Arguments:
            - position: position state, restored before returning
            - depth: plies left to search, 0 hands over to quiescence
            - alpha: best score for the side to move found so far
            - beta: best score for the opponent found so far. When alpha
                reaches beta the opponent would never allow this position,
                so the remaining moves are skipped.

        Returns:
            - best_score: score of the best move searched.
        """
        if depth <= 0:
            return self.quiescence_search(position, alpha, beta)

        self.info.nodes += 1
        is_root = depth == self._root_depth

        moves = organize_moves(position, position.legal_moves(), self.tables)
        if not moves:
            # checkmate or stalemate
            return self.evaluator.evaluate(position)

        if (
            is_root
            and self.config.root_best_first
            and self.info.depth
            and self._best_move in moves
        ):
            moves.remove(self._best_move)
            moves.insert(0, self._best_move)

        best_score = self._nothing
        for move in moves:
            if self._time_up(position):
                break

            with played(position, move):
                score = self._score_child(
                    position,
                    alpha,
                    lambda: self.negamax(position, depth - 1, -beta, -alpha),
                )

            if score > best_score:
                best_score = score
            if is_root and score > self._best_score:
                self._best_score = score
                self._best_move = move

            alpha = max(alpha, score)

            # beta-cutoff
            if alpha >= beta:
                break

        if best_score == self._nothing:
            return self.evaluator.evaluate(position)
        return best_score

    def search_move(
        self,
        position: Position,
        time_this_turn_ms: float | None,
        time_remaining_ms: float,
    ) -> Move:
        """
        Pick a move by iterative deepening until time runs out or
        `max_depth` is reached.

        Arguments:
            - position: position to move in; left as it was on return.
            - time_this_turn_ms: hard ceiling for this move, None for none.
            - time_remaining_ms: time left on the engine's clock, math.inf
                to search until `max_depth`.

        Returns:
            - best_move: a legal move, even when no iteration completed.
        """
        moves = position.legal_moves()
        if not moves:
            raise NoLegalMovesError(f"no legal moves in {position!r}")

        config = self.config
        self.info = SearchInfo()
        self._timer = Timer(time_remaining_ms, time_this_turn_ms, self.clock)
        self._aborted = False
        self._best_move = self.random_move(moves)
        self.info.best_move = self._best_move

        try:
            for depth in range(1, config.max_depth + 1):
                self._root_depth = depth
                self._best_score = self._nothing
                score = self.negamax(
                    position, depth, -config.mate_score, config.mate_score
                )

                self.info.best_move = self._best_move
                if self._aborted:
                    self.info.aborted = True
                    logger.info(
                        "search stopped by the clock at depth %d after %d nodes",
                        depth,
                        self.info.nodes,
                    )
                    break

                self.info.depth = depth
                self.info.score = score
                logger.debug(
                    "depth %d score %d nodes %d cache hits %d time %.0fms move %s",
                    depth,
                    score,
                    self.info.nodes,
                    self.info.cache_hits,
                    self._timer.elapsed_ms(),
                    self._best_move,
                )

                if score > config.checkmate_threshold:
                    # forced mate found, deeper iterations cannot improve it
                    break
        finally:
            self.info.elapsed_ms = self._timer.elapsed_ms()
            self._timer = None
            self._root_depth = 0

        if self.info.depth == 0:
            logger.info("no iteration completed, playing fallback move %s", self._best_move)
        return self._best_move
