#!/usr/bin/env python3

import pathlib
import sys

from loguru import logger

from replframe.config import ReplConfig, load_environment
from replframe.demos import DEMOS
from replframe.interpreter import Interpreter
from replframe.repl import Repl, ReplIOError


def setupLogging(level: str, logdir: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), colorize=True)

    # Also log all activity (including TRACE user input) to a file for historical lookback.
    if logdir:
        LOGDIR = pathlib.Path(logdir)
        LOGDIR.mkdir(exist_ok=True, parents=True)
        logger.add(sink=LOGDIR / "replframe.log", level="TRACE", colorize=False)


def build(config: dict) -> Repl:
    demo = config.get("REPLFRAME_DEMO") or "keystore"
    if demo not in DEMOS:
        raise ValueError(f"Unknown demo {demo!r}, pick one of: {sorted(DEMOS)}")

    repl = DEMOS[demo]()

    # environment settings override the demo's own settings
    repl.apply_config(ReplConfig.from_mapping(config, base=repl.config))
    return repl


def runit():
    """Entry point for the replframe script and __main__ for the entire package."""
    CONFIG = load_environment()
    setupLogging(CONFIG["REPLFRAME_LOGLEVEL"] or "INFO", CONFIG["REPLFRAME_LOGDIR"] or "")

    try:
        repl = build(CONFIG)

        if script := CONFIG["REPLFRAME_SCRIPT"]:
            Interpreter.from_repl(repl).run(script)
            return

        repl.run()
    except ReplIOError as e:
        logger.error("Terminal I/O failed, exiting: {}", e)
        sys.exit(1)
    except (KeyboardInterrupt, SystemExit):
        # known-good exit condition
        ...
    except Exception:
        logger.exception("Uncaught exception, exiting")
        sys.exit(1)


if __name__ == "__main__":
    runit()
