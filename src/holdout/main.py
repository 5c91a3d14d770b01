"""Holdout entry point — runs a headless session.

Steps:
1. Load configuration (config/game.yaml)
2. Open the peer channel when hosting or joining
3. Create the session for the resolved role
4. Run the frame loop until a signal or the frame limit

Usage:
    python -m holdout.main                      # solo
    python -m holdout.main --host 8765          # wait for a peer
    python -m holdout.main --join ws://h:8765   # join a host
    # or via entry point:
    holdout --frames 600 --seed 1
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import signal
from typing import Optional, Sequence

from holdout.engine.frame_loop import FrameLoop
from holdout.engine.session import GameSession
from holdout.loaders.game_config_loader import DEFAULT_GAME_CONFIG_PATH, load_game_config
from holdout.models.simulation import Role
from holdout.network.ws_channel import WebSocketChannel

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="holdout", description="Run a headless Holdout session.")
    parser.add_argument("--config", default=DEFAULT_GAME_CONFIG_PATH,
                        help="path to game.yaml (default: %(default)s)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--host", type=int, nargs="?", const=0, metavar="PORT",
                      help="host a two-player session on PORT (default: ws_port from config)")
    mode.add_argument("--join", metavar="URL",
                      help="join a hosted session at URL (ws://host:port)")
    parser.add_argument("--frames", type=int, default=None,
                        help="stop after N frames (default: run until interrupted)")
    parser.add_argument("--seed", type=int, default=None,
                        help="random seed for spawns and particles")
    parser.add_argument("--debug", action="store_true", help="enable DEBUG logging")
    return parser


def resolve_role(args: argparse.Namespace) -> Role:
    if args.host is not None:
        return Role.HOST
    if args.join:
        return Role.JOINER
    return Role.SOLO


async def _start(args: argparse.Namespace) -> None:
    """Initialize and run one session."""
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    log.info("=== Holdout starting ===")

    config = load_game_config(args.config)
    role = resolve_role(args)

    channel: Optional[WebSocketChannel] = None
    if role is not Role.SOLO:
        channel = WebSocketChannel(compress=config.compress_messages)

    session = GameSession(role, config, channel, random.Random(args.seed))

    if channel is not None and role is Role.HOST:
        await channel.host(config.ws_host, args.host or config.ws_port)
    elif channel is not None:
        await channel.join(args.join)

    frame_loop = FrameLoop(session, max_frames=args.frames)
    loop = asyncio.get_running_loop()

    def _request_shutdown() -> None:
        log.info("Shutdown signal received, stopping")
        frame_loop.stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _request_shutdown)
        except NotImplementedError:
            log.debug("Signal handlers unavailable on this platform")
            break

    try:
        await frame_loop.run()
    finally:
        if channel is not None:
            channel.close()
        state = session.state
        log.info("Session ended: %d frames, wave %d, %d zombies alive, health %.0f",
                  frame_loop.frame_count, state.wave, state.zombies_alive, state.player.health)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point for the headless runner."""
    args = build_parser().parse_args(argv)
    asyncio.run(_start(args))


if __name__ == "__main__":
    main()
