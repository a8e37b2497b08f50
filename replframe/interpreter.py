"""Replay a file of commands through a command registry.

Each line is tokenized and routed exactly like a REPL line except there is
no prompt and no exit command: every line in the file runs.
"""

import os
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TextIO

from loguru import logger

from replframe.lexer import TokenizeError, tokenize
from replframe.repl import Handler, Parser, Repl, ReplIOError, S


@dataclass
class Interpreter(Generic[S]):
    data: S | None = None
    functions: dict[str, Handler] = field(default_factory=dict)
    parser: Parser = tokenize
    unknown_command_message: str = ""
    stdout: TextIO = field(default_factory=lambda: sys.stdout, repr=False)

    @classmethod
    def from_repl(cls, repl: Repl[S]) -> "Interpreter[S]":
        """Build an interpreter sharing the registry, parser, and state of 'repl'."""
        return cls(
            data=repl.data,
            functions=repl.functions,
            parser=repl.parser,
            unknown_command_message=repl.unknown_command_message,
            stdout=repl.stdout,
        )

    def register(self, name: str, handler: Handler) -> None:
        self.functions[name] = handler

    add_function = register

    def dispatch(self, tokens: list[str]) -> Any:
        cmd, *args = tokens
        if cmd and cmd in self.functions:
            return self.functions[cmd](self.data, args)

        if "" in self.functions:
            return self.functions[""](self.data, tokens)

        print(self.unknown_command_message, file=self.stdout)
        return None

    def run_lines(self, lines: Iterable[str], debug: bool = False) -> None:
        for lineno, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")
            try:
                tokens = self.parser(line)
            except TokenizeError as e:
                logger.error("[line {}] Skipping unparseable line: {}", lineno, e)
                continue

            if not any(tokens):
                continue

            if debug:
                logger.debug("[line {}] {} ({} tokens)", lineno, tokens, len(tokens))

            self.dispatch(tokens)

    def read(self, filename: str | os.PathLike) -> list[str]:
        try:
            with open(filename, encoding="utf-8") as f:
                # only \n ends a line (form feeds, \u2028 etc. stay inside the command)
                return f.read().split("\n")
        except OSError as e:
            raise ReplIOError(f"Could not read {filename}: {e}") from e

    def run(self, filename: str | os.PathLike) -> None:
        """Run every line of 'filename' as a command."""
        self.run_lines(self.read(filename))

    def run_debug(self, filename: str | os.PathLike) -> None:
        """Same as run(), but logs the tokens of each line before running it."""
        logger.debug("Running {} with commands: {}", filename, sorted(self.functions))
        self.run_lines(self.read(filename), debug=True)
