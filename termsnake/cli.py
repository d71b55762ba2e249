from __future__ import annotations

import argparse
import json
import random
import sys
from pathlib import Path

from termsnake.config import GameSettings, load_settings
from termsnake.errors import ConfigError, TerminalInitError
from termsnake.game import SnakeGame
from termsnake.render import render_ascii
from termsnake.replay import Replay, load_replay, run_replay
from termsnake.session import Session
from termsnake.types import GameState

_COMMANDS = {"play", "replay"}


def _existing_path(value: str) -> Path:
    p = Path(value)
    if not p.exists():
        raise argparse.ArgumentTypeError(f"path not found: {value}")
    return p


def _summary(state: GameState) -> dict[str, object]:
    return {
        "alive": not state.game_over,
        "score": state.score,
        "high_score": state.high_score,
        "ticks": state.ticks,
        "head": [state.head.x, state.head.y],
        "length": len(state.snake),
    }


def _play(settings: GameSettings, *, seed: int | None) -> int:
    # Imported lazily so headless commands work where curses is unavailable.
    from termsnake.loop import GameLoop
    from termsnake.terminal import CursesSurface

    game = SnakeGame(settings=settings, rng=random.Random(seed))
    session = Session(game)
    try:
        with CursesSurface() as surface:
            code = GameLoop(session=session, surface=surface).run()
    except TerminalInitError as e:
        print(f"termsnake: {e}", file=sys.stderr)
        return 1
    print(f"Score: {session.game.state.score}  High score: {session.high_score}")
    return code


def _replay(replay: Replay, *, frames: bool) -> int:
    def _print_frame(state: GameState) -> None:
        print(render_ascii(state))

    final = run_replay(replay, on_tick=_print_frame if frames else None)
    print(json.dumps(_summary(final), sort_keys=True))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="termsnake")
    sub = parser.add_subparsers(dest="cmd")

    play_p = sub.add_parser("play", help="play in the terminal (default)")
    play_p.add_argument("--config", type=_existing_path, default=None, help="YAML settings file")
    play_p.add_argument("--seed", type=int, default=None)

    replay_p = sub.add_parser("replay", help="run a scripted game headlessly")
    replay_p.add_argument("path", type=_existing_path)
    replay_p.add_argument("--frames", action="store_true", help="print the board after every tick")

    raw = list(sys.argv[1:] if argv is None else argv)
    if not raw or (raw[0] not in _COMMANDS and raw[0] not in {"-h", "--help"}):
        raw.insert(0, "play")
    args = parser.parse_args(raw)

    if args.cmd == "play":
        try:
            settings = load_settings(args.config)
        except ConfigError as e:
            print(f"termsnake: {e}", file=sys.stderr)
            return 2
        return _play(settings, seed=args.seed)

    if args.cmd == "replay":
        try:
            replay = load_replay(args.path)
        except (OSError, ValueError) as e:
            print(f"termsnake: invalid replay: {e}", file=sys.stderr)
            return 2
        return _replay(replay, frames=args.frames)

    raise AssertionError(f"unhandled cmd: {args.cmd}")
