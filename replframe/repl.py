"""The REPL: read a line, tokenize it, route it to a registered handler.

Handlers are plain callables taking (state, args) where 'state' is the
Repl's shared `data` object and 'args' is a list of string tokens.

    repl = (
        Repl(Store())
        .with_prompt("store> ")
        .with_function("get", Store.get)
        .with_function("set", Store.set)
    )
    repl.run()

A handler registered under the empty name "" is the fallback: it receives the
full token list (command name included) for any line that didn't match a
registered command.
"""

import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TextIO, TypeVar

from loguru import logger

from replframe.config import ReplConfig
from replframe.lexer import TokenizeError, split_whitespace, tokenize

S = TypeVar("S")

Handler = Callable[[S, list[str]], Any]
Parser = Callable[[str], list[str]]


class ReplIOError(OSError):
    """Reading input or writing the prompt failed."""


@dataclass
class Repl(Generic[S]):
    # shared state passed to every handler
    data: S

    prompt: str = ">>>"
    exit_command: str = "exit"
    exit_message: str = "repl terminated"
    empty_argument_message: str = ""
    unknown_command_message: str = ""

    # command name -> handler ("" is the fallback handler)
    functions: dict[str, Handler] = field(default_factory=dict)

    parser: Parser = tokenize
    abort_on_tokenize_error: bool = False

    stdin: TextIO = field(default_factory=lambda: sys.stdin, repr=False)
    stdout: TextIO = field(default_factory=lambda: sys.stdout, repr=False)

    @classmethod
    def with_whitespace_parser(cls, data: S) -> "Repl[S]":
        """Build a Repl splitting input on whitespace only (no quotes, no escapes)."""
        return cls(data, parser=split_whitespace)

    @property
    def commands(self) -> list[str]:
        """Names of all registered commands (excluding the fallback)."""
        return sorted(name for name in self.functions if name)

    # Registration

    def register(self, name: str, handler: Handler) -> None:
        """Add (or replace) the handler for command 'name'.

        Registering under "" sets the fallback handler."""
        self.functions[name] = handler

    add_function = register

    def with_function(self, name: str, handler: Handler) -> "Repl[S]":
        self.register(name, handler)
        return self

    def command(self, name: str) -> Callable[[Handler], Handler]:
        """Decorator registering the decorated function under 'name'.

        @repl.command("hello")
        def hello(state, args):
            print("hello", *args)
        """

        def decorator(handler: Handler) -> Handler:
            self.register(name, handler)
            return handler

        return decorator

    # Settings (set_* modify in place, with_* do the same and return self for chaining)

    def set_prompt(self, prompt: str) -> None:
        self.prompt = prompt

    def with_prompt(self, prompt: str) -> "Repl[S]":
        self.set_prompt(prompt)
        return self

    def set_exit_command(self, exit_command: str) -> None:
        self.exit_command = exit_command

    def with_exit_command(self, exit_command: str) -> "Repl[S]":
        self.set_exit_command(exit_command)
        return self

    def set_exit_message(self, exit_message: str) -> None:
        self.exit_message = exit_message

    def with_exit_message(self, exit_message: str) -> "Repl[S]":
        self.set_exit_message(exit_message)
        return self

    def set_empty_argument_message(self, empty_argument_message: str) -> None:
        self.empty_argument_message = empty_argument_message

    def with_empty_argument_message(self, empty_argument_message: str) -> "Repl[S]":
        self.set_empty_argument_message(empty_argument_message)
        return self

    def set_unknown_command_message(self, unknown_command_message: str) -> None:
        self.unknown_command_message = unknown_command_message

    def with_unknown_command_message(self, unknown_command_message: str) -> "Repl[S]":
        self.set_unknown_command_message(unknown_command_message)
        return self

    def set_parser(self, parser: Parser) -> None:
        self.parser = parser

    def with_parser(self, parser: Parser) -> "Repl[S]":
        self.set_parser(parser)
        return self

    def set_data(self, data: S) -> None:
        self.data = data

    def with_data(self, data: S) -> "Repl[S]":
        self.set_data(data)
        return self

    @property
    def config(self) -> ReplConfig:
        """Current display and exit settings."""
        return ReplConfig(
            prompt=self.prompt,
            exit_command=self.exit_command,
            exit_message=self.exit_message,
            empty_argument_message=self.empty_argument_message,
            unknown_command_message=self.unknown_command_message,
            abort_on_tokenize_error=self.abort_on_tokenize_error,
        )

    def apply_config(self, config: ReplConfig) -> None:
        self.prompt = config.prompt
        self.exit_command = config.exit_command
        self.exit_message = config.exit_message
        self.empty_argument_message = config.empty_argument_message
        self.unknown_command_message = config.unknown_command_message
        self.abort_on_tokenize_error = config.abort_on_tokenize_error

    def with_config(self, config: ReplConfig) -> "Repl[S]":
        self.apply_config(config)
        return self

    # Running

    def say(self, msg: str) -> None:
        print(msg, file=self.stdout)

    def read_line(self) -> list[str]:
        """Show the prompt, read one line of input, and return it tokenized.

        Raises:
            ReplIOError: writing the prompt or reading input failed
            EOFError: input is exhausted
            TokenizeError: the line has an unterminated quote or a bad escape
        """
        try:
            self.stdout.write(self.prompt)
            self.stdout.flush()
            line = self.stdin.readline()
        except (OSError, ValueError) as e:
            # ValueError is what closed file objects raise on access
            raise ReplIOError(f"Failed to read input: {e}") from e

        if not line:
            raise EOFError

        line = line.rstrip("\r\n")

        # log user input to the TRACE facility (the console already shows it)
        logger.trace("{} {}", self.prompt, line)

        return self.parser(line)

    def dispatch(self, tokens: list[str]) -> bool:
        """Run the handler for one tokenized line.

        Returns False if the line was the exit command, else True."""
        if not any(tokens):
            self.say(self.empty_argument_message)
            return True

        if "".join(tokens) == self.exit_command:
            self.say(self.exit_message)
            return False

        cmd, *args = tokens
        if cmd and cmd in self.functions:
            self.functions[cmd](self.data, args)
        elif "" in self.functions:
            self.functions[""](self.data, tokens)
        else:
            self.say(self.unknown_command_message)

        return True

    def step(self) -> bool:
        """Read and dispatch a single line. Returns False when the REPL should stop."""
        try:
            tokens = self.read_line()
        except KeyboardInterrupt:
            # Control-C pressed. Try again.
            self.say("")
            return True
        except EOFError:
            # Control-D pressed (or input stream closed)
            logger.info("End of input, exiting...")
            return False
        except TokenizeError as e:
            if self.abort_on_tokenize_error:
                raise

            logger.error("Error parsing your input: {}", e)
            return True

        return self.dispatch(tokens)

    def run(self) -> None:
        """Run until the exit command or end of input.

        Handler exceptions are not caught here.

        Raises:
            ReplIOError: the input or output stream failed
            TokenizeError: only if abort_on_tokenize_error is set
        """
        while self.step():
            pass

    def run_debug(self) -> None:
        """Same as run(), but logs the full REPL state after every command (exit included)."""
        while True:
            running = self.step()
            logger.debug("{!r}", self)
            if not running:
                break
