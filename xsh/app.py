#!/usr/bin/env python3
import logging
from typing import Optional

from .config import Config
from .core import Shell
from .logs import setup_logging

logger = logging.getLogger(__name__)


def main(
    command: Optional[str] = None,
    show_banner: bool = True,
    verbose: bool = False,
) -> int:
    try:
        Config.ensure_directories()
    except OSError as error:
        logger.warning("could not create %s: %s", Config.CONFIG_DIR, error)
    setup_logging(verbose=verbose)

    if not show_banner:
        Config.SHOW_STARTUP_BANNER = False

    if command is not None:
        shell = Shell(interactive=False)
        shell.execute_shell_command(command)
        return 0

    shell = Shell()
    logger.info("session started (interactive=%s)", shell.interactive)
    return shell.run()


if __name__ == "__main__":
    raise SystemExit(main())
