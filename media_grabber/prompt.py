import logging
import signal
import sys
from contextlib import contextmanager

from rich.console import Console

from media_grabber.i18n import get_message

logger = logging.getLogger(__name__)


class Prompter:
    """
    Gatekeeper for the questions a session asks on the console.

    rich reads answers with the builtin input(), so there is no handle to
    release: closing only refuses further prompts. It is closed on every
    exit path, including termination signals. End of input reads as an
    empty answer.
    """

    def __init__(self, console: Console):
        self._console = console
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def ask(self, question: str) -> str:
        if self._closed:
            raise RuntimeError("The prompt has already been closed.")
        try:
            return self._console.input(question)
        except EOFError:
            logger.debug("End of input reached while prompting.")
            return ""

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            logger.debug("Prompt closed.")

    def __enter__(self) -> "Prompter":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


def termination_handler(prompter: Prompter, console: Console, message_key: str):
    """Builds a signal handler that closes the prompt and exits with status 0."""

    def handler(signum, frame):
        console.print(f"\n{get_message(message_key)}")
        prompter.close()
        sys.exit(0)

    return handler


@contextmanager
def handle_termination(prompter: Prompter, console: Console):
    """Installs SIGINT/SIGTERM handlers for the duration of the block."""
    previous = {}
    for signum, message_key in ((signal.SIGINT, "interrupted"), (signal.SIGTERM, "terminated")):
        previous[signum] = signal.signal(signum, termination_handler(prompter, console, message_key))
    try:
        yield
    finally:
        for signum, handler in previous.items():
            if handler is not None:
                signal.signal(signum, handler)
