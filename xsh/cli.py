#!/usr/bin/env python3
import argparse
import sys


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="xsh",
        description="xsh: a minimal interactive command interpreter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  xsh                          # Start interactive shell
  xsh -c 'echo hello > out'    # Run one command line and exit
  xsh < commands.txt           # Read commands from a file
  xsh --config-reload          # Rewrite missing config files and reload
        """,
    )

    parser.add_argument(
        "--version", "-v",
        action="store_true",
        help="Show version information",
    )

    parser.add_argument(
        "-c",
        dest="command",
        metavar="LINE",
        help="Run a single command line and exit",
    )

    parser.add_argument(
        "--no-banner",
        action="store_true",
        help="Do not show the welcome banner",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output to the terminal",
    )

    parser.add_argument(
        "--config-reload",
        action="store_true",
        help="Reload configuration and exit",
    )

    args = parser.parse_args(argv)

    if args.version:
        from xsh import __version__

        print(f"xsh version {__version__}")
        return 0

    if args.config_reload:
        from xsh.config import Config

        if Config.reload():
            print(f"Configuration reloaded from {Config.CONFIG_JSON_FILE}")
        else:
            print("Failed to reload configuration")
        return 0

    from xsh import app

    try:
        return app.main(
            command=args.command,
            show_banner=not args.no_banner,
            verbose=args.verbose,
        )
    except KeyboardInterrupt:
        print("\nBye!")
        return 0


if __name__ == "__main__":
    sys.exit(main())
