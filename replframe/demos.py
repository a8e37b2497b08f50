"""Small ready-to-run REPLs showing the different ways to wire handlers.

Each builder returns a configured (but not yet running) Repl.
"""

import pathlib
from collections.abc import Callable
from dataclasses import dataclass, field

from loguru import logger

from replframe.repl import Repl


@dataclass(slots=True)
class Store:
    """Key/value state for the keystore demo."""

    data: dict[str, str] = field(default_factory=dict)

    def get(self, args: list[str]) -> None:
        for key in args:
            if key not in self.data:
                logger.warning("[get {}] Key not found", key)
                continue

            print(self.data[key])

    def set(self, args: list[str]) -> None:
        if len(args) % 2:
            logger.warning("[set] Ignoring trailing key without value: {}", args[-1])

        for key, val in zip(args[::2], args[1::2]):
            self.data[key] = val

    def delete(self, args: list[str]) -> None:
        for key in args:
            self.data.pop(key, None)

    def keys(self, _args: list[str]) -> None:
        for key in sorted(self.data):
            print(key)


def keystore() -> Repl[Store]:
    return (
        Repl(Store())
        .with_prompt("store> ")
        .with_function("get", Store.get)
        .with_function("set", Store.set)
        .with_function("del", Store.delete)
        .with_function("keys", Store.keys)
        .with_unknown_command_message("commands: get set del keys exit")
    )


def reverse(_state: None, words: list[str]) -> None:
    print(" ".join(word[::-1] for word in words))


def reverse_bot() -> Repl[None]:
    # every line goes to the fallback handler
    return Repl(None).with_function("", reverse)


def cat(_state: None, files: list[str]) -> None:
    for name in files:
        try:
            print(pathlib.Path(name).read_text(), end="")
        except OSError as e:
            logger.error("[{}] Can't read file: {}", name, e)


def cat_help(_state: None, _args: list[str]) -> None:
    print("help:\n\t[files] : prints contents of files")


def catter() -> Repl[None]:
    return (
        Repl(None)
        .with_prompt("read:> ")
        .with_function("", cat)
        .with_function("help", cat_help)
    )


def dotted() -> Repl[None]:
    """Custom parser demo: 'a.b.c' prints 'a/b/c'."""
    repl = Repl(None).with_prompt("print:> ")
    repl.set_parser(lambda line: line.split("."))

    @repl.command("")
    def joinpath(_state: None, parts: list[str]) -> None:
        print("/".join(parts))

    return repl


DEMOS: dict[str, Callable[[], Repl]] = {
    "keystore": keystore,
    "reverse": reverse_bot,
    "cat": catter,
    "dotted": dotted,
}
