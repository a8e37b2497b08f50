"""Line-oriented REPLs: a quote-aware tokenizer plus a command dispatch loop.

This module provides:
- Repl: the read/tokenize/dispatch loop with a name -> handler registry
- Interpreter: replays a file of commands through the same registry
- tokenize: the default quote- and escape-aware line tokenizer
"""

from .config import ReplConfig, load_config
from .interpreter import Interpreter
from .lexer import (
    TokenizeError,
    UnknownEscapeError,
    UnterminatedQuoteError,
    split_whitespace,
    tokenize,
)
from .repl import Repl, ReplIOError

__all__ = [
    "Interpreter",
    "Repl",
    "ReplConfig",
    "ReplIOError",
    "TokenizeError",
    "UnknownEscapeError",
    "UnterminatedQuoteError",
    "load_config",
    "split_whitespace",
    "tokenize",
]
