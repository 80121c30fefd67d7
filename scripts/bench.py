#!/usr/bin/env python3
"""
Search benchmark: runs the engine on a fixed set of positions with a fixed
clock and reports nodes, depth reached and the chosen moves.

Usage:
    python scripts/bench.py --remaining-ms 20000 --max-depth 6
    python scripts/bench.py --blend convex --verbose
"""

import argparse
import logging
import sys
import time

import chess

from tidefish import BoardPosition, Config, get_engine

# Positions from the Stockfish bench set
BENCH_POSITIONS = [
    "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
    "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 10",
    "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 11",
    "4rrk1/pp1n3p/3q2pQ/2p1pb2/2PP4/2P3N1/P2B2PP/4RRK1 b - - 7 19",
    "r1bq1r1k/1pp1n1pp/1p1p4/4p2Q/4Pp2/1BNP4/PPP2PPP/3R1RK1 w - - 2 14",
    "r3r1k1/2p2ppp/p1p1bn2/8/1q2P3/2NPQN2/PPP3PP/R4RK1 b - - 2 15",
    "r1bbk1nr/pp3p1p/2n5/1N4p1/2Np1B2/8/PPP2PPP/2KR1B1R w kq - 0 13",
    "r1bq1rk1/ppp1nppp/4n3/3p3Q/3P4/1BP1B3/PP1N2PP/R4RK1 w - - 1 16",
    "4r1k1/r1q2ppp/ppp2n2/4P3/5Rb1/1N1BQ3/PPP3PP/R5K1 w - - 1 17",
    "2rqkb1r/ppp2p2/2npb1p1/1N1Nn2p/2P1PP2/8/PP2B1PP/R1BQK2R b KQ - 0 11",
    "r1bq1r1k/b1p1npp1/p2p3p/1p6/3PP3/1B2NN2/PP3PPP/R2Q1RK1 w - - 1 16",
    "3r1rk1/p5pp/bpp1pp2/8/q1PP1P2/b3P3/P2NQRPP/1R2B1K1 b - - 6 22",
    "r1q2rk1/2p1bppp/2Pp4/p6b/Q1PNp3/4B3/PP1R1PPP/2K4R w - - 2 18",
    "4k2r/1pb2ppp/1p2p3/1R1p4/3P4/2r1PN2/P4PPP/1R4K1 b - - 3 22",
    "3q2k1/pb3p1p/4pbp1/2r5/PpN2N2/1P2P2P/5PP1/Q2R2K1 b - - 4 26",
    "6k1/6p1/6Pp/ppp5/3pn2P/1P3K2/1PP2P2/3N4 b - - 0 1",
    "3b4/5kp1/1p1p1p1p/pP1PpP1P/P1P1P3/3KN3/8/8 w - - 0 1",
    "8/6pk/1p6/8/PP3p1p/5P2/4KP1q/3Q4 w - - 0 1",
    "7k/3p2pp/4q3/8/4Q3/5Kp1/P6b/8 w - - 0 1",
    "8/2p5/8/2kPKp1p/2p4P/2P5/3P4/8 w - - 0 1",
]


def run(config: Config, remaining_ms: float, turn_ms: float | None) -> int:
    engine = get_engine(config)
    total_nodes = 0
    start_time = time.time()

    for index, fen in enumerate(BENCH_POSITIONS, 1):
        position = BoardPosition(chess.Board(fen))
        move = engine.search_move(position, turn_ms, remaining_ms)
        info = engine.info
        total_nodes += info.nodes
        print(
            f"{index:2d} {move.uci():6s} depth {info.depth:2d} "
            f"score {info.score:6d} nodes {info.nodes:8d} "
            f"time {info.elapsed_ms:7.0f}ms"
        )
        engine.new_game()

    elapsed = time.time() - start_time
    print(f"Total nodes: {total_nodes}")
    print(f"Time: {elapsed:.1f}s, {total_nodes / max(elapsed, 1e-9):.0f} nps")
    return total_nodes


def main():
    parser = argparse.ArgumentParser(description="Benchmark the tidefish search")
    parser.add_argument(
        "--remaining-ms", type=float, default=20000,
        help="Clock time handed to the engine for every position",
    )
    parser.add_argument(
        "--turn-ms", type=float, default=None,
        help="Hard ceiling per position",
    )
    parser.add_argument(
        "--max-depth", type=int, default=None,
        help="Deepest iteration (default from TIDEFISH_MAX_DEPTH or 20)",
    )
    parser.add_argument(
        "--blend", choices=("literal", "convex"), default=None,
        help="Middlegame/endgame blend",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log every completed iteration",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    overrides = {}
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    if args.blend is not None:
        overrides["blend"] = args.blend

    try:
        config = Config.from_env(**overrides)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    run(config, args.remaining_ms, args.turn_ms)


if __name__ == "__main__":
    main()
