"""Input line tokenizers.

`tokenize()` is the default: a quote- and escape-aware splitter which turns one
line of user input into a list of argument tokens.

`split_whitespace()` is the old plain-whitespace splitter, kept for REPLs which
want every character passed through literally.
"""

from dataclasses import dataclass, field

QUOTES = frozenset("\"'")

# escape target -> emitted character
ESCAPES = {
    "t": "\t",
    "n": "\n",
    '"': '"',
    "'": "'",
    "\\": "\\",
}


class TokenizeError(ValueError):
    """Input line could not be tokenized."""

    def __init__(self, msg: str, line: str, position: int):
        super().__init__(f"{msg} (at column {position}): {line!r}")
        self.line = line
        self.position = position


class UnterminatedQuoteError(TokenizeError):
    def __init__(self, line: str, position: int, quote: str):
        super().__init__(f"unterminated quote {quote}", line, position)
        self.quote = quote


class UnknownEscapeError(TokenizeError):
    def __init__(self, line: str, position: int, char: str | None):
        if char is None:
            msg = "dangling escape at end of input"
        else:
            msg = f"unknown escape \\{char}"

        super().__init__(msg, line, position)
        self.char = char


@dataclass(slots=True)
class _LexState:
    """Scanner state for a single tokenize() call."""

    line: str
    tokens: list[str] = field(default_factory=list)
    current: list[str] = field(default_factory=list)

    # quote character which opened the region we are inside (None if not quoted)
    quote: str | None = None
    quoteStart: int = 0

    # position of a backslash waiting for its escape target (None if no escape pending)
    escapeAt: int | None = None

    def flush(self, keepEmpty: bool = False) -> None:
        if self.current or keepEmpty:
            self.tokens.append("".join(self.current))
            self.current.clear()

    def feed(self, pos: int, char: str) -> None:
        if self.escapeAt is not None:
            try:
                self.current.append(ESCAPES[char])
            except KeyError:
                raise UnknownEscapeError(self.line, self.escapeAt, char) from None

            self.escapeAt = None
            return

        if char == "\\":
            self.escapeAt = pos
            return

        if self.quote:
            if char == self.quote:
                # a quoted region is always its own token, even when empty
                self.flush(keepEmpty=True)
                self.quote = None
            else:
                self.current.append(char)

            return

        if char == " ":
            self.flush()
        elif char in QUOTES:
            # quote opening ends whatever unquoted token came right before it
            self.flush()
            self.quote = char
            self.quoteStart = pos
        else:
            self.current.append(char)

    def finish(self) -> list[str]:
        if self.quote:
            raise UnterminatedQuoteError(self.line, self.quoteStart, self.quote)

        if self.escapeAt is not None:
            raise UnknownEscapeError(self.line, self.escapeAt, None)

        # trailing token is always emitted, but an empty one only stands in for "no input at all"
        self.flush(keepEmpty=not self.tokens)
        return self.tokens


def tokenize(line: str) -> list[str]:
    """Split 'line' into tokens honoring quotes and backslash escapes.

    Rules:
      - spaces separate tokens (runs of spaces never generate empty tokens)
      - "double" or 'single' quotes group everything up to the matching quote
        into one token, including spaces and the other quote style
      - quoted regions never merge with neighboring text: 'a'"b" is two tokens
      - escapes: \\t \\n \\" \\' \\\\ (anything else is an error)

    An empty (or all-space) line returns [""] so callers always get at least one token.

    Raises UnterminatedQuoteError or UnknownEscapeError (both TokenizeError).
    """
    state = _LexState(line)
    for pos, char in enumerate(line):
        state.feed(pos, char)

    return state.finish()


def split_whitespace(line: str) -> list[str]:
    """Split 'line' on runs of whitespace with no quote or escape processing."""
    return line.rstrip("\r\n").split()
