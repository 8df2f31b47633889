"""Splitting of raw command lines into words.

Words are separated by whitespace. A word that starts with the quote
character runs to the matching closing quote and may contain whitespace; the
quotes themselves are dropped and, inside the quoted span, the escape
character makes the following character literal. An unterminated quote never
raises: the rest of the line becomes the last word.
"""

from batch_shell.utils import get_logger

logger = get_logger(__name__)

DEFAULT_QUOTE = '"'
DEFAULT_ESCAPE = "\\"


def tokenize(
    line: str,
    quote: str = DEFAULT_QUOTE,
    escape: str = DEFAULT_ESCAPE,
) -> list[str]:
    """Split a line into words.

    Args:
        line: Raw input line. A trailing line terminator is dropped before
            splitting, so it never ends up inside an unterminated quote.
        quote: Quote delimiter character.
        escape: Escape character honoured inside quoted spans.

    Returns:
        List of words; empty for a blank line.

    Example:
        >>> tokenize('run "a b" c')
        ['run', 'a b', 'c']
    """
    line = line.rstrip("\r\n")
    words: list[str] = []
    pos = 0
    end = len(line)

    while pos < end:
        if line[pos].isspace():
            pos += 1
            continue

        if line[pos] == quote:
            pos, word = _read_quoted(line, pos + 1, quote, escape)
        else:
            start = pos
            while pos < end and not line[pos].isspace():
                pos += 1
            word = line[start:pos]

        words.append(word)

    return words


def _read_quoted(line: str, pos: int, quote: str, escape: str) -> tuple[int, str]:
    """Read a quoted span starting just after its opening quote.

    Returns:
        (position after the closing quote, unquoted text) tuple
    """
    chars: list[str] = []
    end = len(line)

    while pos < end:
        char = line[pos]
        if char == escape and pos + 1 < end:
            chars.append(line[pos + 1])
            pos += 2
            continue
        if char == quote:
            return pos + 1, "".join(chars)
        chars.append(char)
        pos += 1

    logger.debug(f"Unterminated quote in line: {line.rstrip()!r}")
    return pos, "".join(chars)
