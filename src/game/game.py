# src/game/game.py
# command is python -m src.game.game
import sys, argparse, random
import pygame

from .config import GameConfig, SCREEN_WIDTH, SCREEN_HEIGHT, FPS, TITLE, SEED_DEFAULT
from .console import PygameConsole
from .state import State


def parse_args(argv=None):
    p = argparse.ArgumentParser(description=TITLE)
    p.add_argument("--no-obstacles", action="store_true",
                   help="Free-fall variant: no walls, only the floor can kill you.")
    p.add_argument("--seed", type=int, default=SEED_DEFAULT,
                   help="Seed for wall gaps. Omit for a different run every launch.")
    return p.parse_args(argv)


def main_loop(ctx, state: State):
    """Drive state.tick once per frame until the game (or the window) asks to quit."""
    try:
        while not ctx.quitting:
            ctx.poll()
            state.tick(ctx)
            ctx.present()
    finally:
        ctx.close()


def run(argv=None):
    args = parse_args(argv)
    config = GameConfig(obstacles=not args.no_obstacles)
    rng = random.Random(args.seed)

    try:
        ctx = PygameConsole(SCREEN_WIDTH, SCREEN_HEIGHT, title=TITLE, fps=FPS)
    except pygame.error as e:
        print(f"ERROR: could not open the game window: {e}", file=sys.stderr)
        raise

    mode = "obstacles" if config.obstacles else "free-fall"
    print(f"{TITLE}: {SCREEN_WIDTH}x{SCREEN_HEIGHT} cells, {mode}, seed={args.seed}")
    main_loop(ctx, State(config, rng))


if __name__ == "__main__":
    run()
