"""Classification of tokenized lines into interpreter actions."""

from collections.abc import Sequence

from batch_shell.exceptions import ParseError
from batch_shell.models import ExecutionMode, LineAction
from batch_shell.utils import get_logger

logger = get_logger(__name__)

COMMENT_MARKER = "#"
EXIT_COMMAND = "exit"

DIRECTIVES: dict[str, ExecutionMode] = {
    "SERIAL": ExecutionMode.SERIAL,
    "PARALLEL": ExecutionMode.PARALLEL,
}


def is_ignored(tokens: Sequence[str]) -> bool:
    """Whether a line is blank or a comment."""
    return not tokens or tokens[0].startswith(COMMENT_MARKER)


def classify(tokens: Sequence[str]) -> LineAction:
    """Decide what the interpreter should do with a tokenized line.

    Args:
        tokens: Words of one input line.

    Returns:
        LineAction describing the line.

    Raises:
        ParseError: If a SERIAL/PARALLEL directive has no file path.
    """
    if is_ignored(tokens):
        return LineAction.ignore()

    name = tokens[0]

    if name == EXIT_COMMAND:
        return LineAction.terminate()

    if name in DIRECTIVES:
        if len(tokens) < 2:
            raise ParseError(
                f"{name} requires a file path",
                details={"directive": name},
            )
        if len(tokens) > 2:
            logger.warning(f"Ignoring extra arguments after {name} {tokens[1]}: {tokens[2:]}")
        return LineAction.recurse(DIRECTIVES[name], tokens[1])

    return LineAction.execute(list(tokens))
