"""
Elf Invaders - Command Line
===========================

Usage:
    # Play
    elf-invaders
    python -m elf_invaders
    python main.py

    # Reproducible enemy fire and effects
    elf-invaders --seed 42

    # Verbose logging, no log file
    elf-invaders --log-level debug --no-log-file

    # Skip the remote commentary call
    elf-invaders --offline

Press:
    - LEFT/RIGHT or A/D: Move
    - SPACE: Shoot
    - ENTER: Start / Play again
    - ESC or Q: Quit

Mouse and touch: on-screen arrows and gift button while playing,
START GAME / PLAY AGAIN buttons on the cards.
"""

# Suppress pygame's pkg_resources deprecation warning (pygame issue #4557)
import warnings
warnings.filterwarnings("ignore", category=UserWarning, module="pygame.pkgdata")

import argparse

from .config import Config
from .utils.logger import LogLevel, get_log_path, setup_logging


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='elf-invaders',
        description="Elf Invaders - defend the North Pole from rebellious elves",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--fps', type=int, default=None,
                        help='Target frame rate (default: config FPS)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for enemy fire and effects')
    parser.add_argument('--log-level', type=str, default=None,
                        choices=['debug', 'info', 'warning', 'error'],
                        help='Console log level (default: config LOG_LEVEL)')
    parser.add_argument('--no-log-file', action='store_true',
                        help='Do not write a session log file')
    parser.add_argument('--offline', action='store_true',
                        help='Disable the round-end commentary request')
    parser.add_argument('--no-touch-controls', action='store_true',
                        help='Hide the on-screen move/fire buttons')
    parser.add_argument('--max-frames', type=int, default=None,
                        help='Exit after this many frames (smoke testing)')
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Apply CLI overrides to the default config. Invalid values raise AssertionError."""
    config = Config()
    if args.fps is not None:
        config.FPS = args.fps
    if args.seed is not None:
        config.SEED = args.seed
    if args.log_level:
        config.LOG_LEVEL = args.log_level.upper()
    if args.offline:
        config.COMMENTARY_ENABLED = False
    if args.no_touch_controls:
        config.TOUCH_CONTROLS_ENABLED = False
    config.__post_init__()
    return config


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    config = build_config(args)

    setup_logging(
        log_dir=config.LOG_DIR,
        level=LogLevel.from_name(config.LOG_LEVEL),
        file_output=not args.no_log_file,
    )
    log_path = get_log_path()
    if log_path is not None:
        print(f"Session log: {log_path}")

    # Import after logging is configured so module loggers inherit handlers
    from .app import GameApp

    app = GameApp(config)
    try:
        app.run(max_frames=args.max_frames)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
