"""Runtime configuration for REPLs.

Settings come from (lowest to highest priority):
  - the REPL's own settings (or ReplConfig defaults)
  - a dotenv file (default: .env.replframe in the current directory)
  - the process environment
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import dotenv_values

ENV_FILE = ".env.replframe"

# settings for the runner itself (REPL display settings default to whatever the REPL has)
CONFIG_DEFAULT = dict(
    REPLFRAME_DEMO="keystore",
    REPLFRAME_LOGLEVEL="INFO",
    REPLFRAME_LOGDIR="",
    REPLFRAME_SCRIPT="",
)

TRUTHY = {"1", "y", "yes", "true", "on"}


def isset(val: str | None) -> bool:
    return (val or "").strip().lower() in TRUTHY


@dataclass(slots=True)
class ReplConfig:
    """Display and exit settings copied into a Repl by Repl.with_config()."""

    prompt: str = ">>>"
    exit_command: str = "exit"
    exit_message: str = "repl terminated"
    empty_argument_message: str = ""
    unknown_command_message: str = ""

    # False: log tokenize errors and keep reading. True: raise them out of run().
    abort_on_tokenize_error: bool = False

    @classmethod
    def from_mapping(
        cls, config: Mapping[str, str | None], base: "ReplConfig | None" = None
    ) -> "ReplConfig":
        """Read REPLFRAME_* keys from 'config', using 'base' for anything missing."""
        base = base or cls()

        def get(key: str, default: str) -> str:
            val = config.get(key)
            return default if val is None else val

        abort = config.get("REPLFRAME_ABORT_ON_TOKENIZE_ERROR")

        return cls(
            prompt=get("REPLFRAME_PROMPT", base.prompt),
            exit_command=get("REPLFRAME_EXIT_COMMAND", base.exit_command),
            exit_message=get("REPLFRAME_EXIT_MESSAGE", base.exit_message),
            empty_argument_message=get(
                "REPLFRAME_EMPTY_MESSAGE", base.empty_argument_message
            ),
            unknown_command_message=get(
                "REPLFRAME_UNKNOWN_MESSAGE", base.unknown_command_message
            ),
            abort_on_tokenize_error=(
                base.abort_on_tokenize_error if abort is None else isset(abort)
            ),
        )


def load_environment(
    env_file: str | os.PathLike | None = ENV_FILE,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str | None]:
    """Merge defaults, dotenv file values, and environment into one flat dict."""
    fromfile = dotenv_values(env_file) if env_file and os.path.exists(env_file) else {}
    fromenv = os.environ if environ is None else environ

    return {**CONFIG_DEFAULT, **fromfile, **fromenv}


def load_config(
    env_file: str | os.PathLike | None = ENV_FILE,
    environ: Mapping[str, str] | None = None,
    base: ReplConfig | None = None,
) -> ReplConfig:
    return ReplConfig.from_mapping(load_environment(env_file, environ), base)
