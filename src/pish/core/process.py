"""Foreground process launching for the ``run`` host function."""

from __future__ import annotations

import logging
import re
import signal
import subprocess
import threading
from collections.abc import Iterable

from pish.core.paths import expand

logger = logging.getLogger(__name__)

# A double-quoted span or a run of non-whitespace
TOKEN_PATTERN = re.compile(r'("[^"]*")|\S+')


def tokenize(argument: str) -> list[str]:
    """Split one argument string into words.

    Quoted spans are kept whole, quotes included.

    Example:
        >>> tokenize('grep "a b" file')
        ['grep', '"a b"', 'file']
    """
    return [match.group(0) for match in TOKEN_PATTERN.finditer(argument)]


def expand_token(token: str) -> str:
    """Unquote a quoted span and expand a leading ``~``.

    Example:
        >>> expand_token('"a b"')
        'a b'
    """
    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        token = token[1:-1]
    if token.startswith("~"):
        return expand(token)
    return token


def build_argv(arguments: Iterable[str]) -> list[str]:
    """Tokenize and expand every argument into one argv list."""
    argv: list[str] = []
    for argument in arguments:
        argv.extend(expand_token(token) for token in tokenize(argument))
    return argv


def _default_sigint() -> None:
    # An ignored disposition survives exec, so the child resets it.
    signal.signal(signal.SIGINT, signal.SIG_DFL)


def spawn_and_wait(argv: list[str]) -> int:
    """Run argv in the foreground with inherited stdio and environment.

    Ctrl-C belongs to the child while it runs: the shell ignores SIGINT
    until the wait returns, then puts its own handler back.

    Returns:
        The child's exit status, negative if a signal ended it.

    Raises:
        OSError: If the program cannot be started.
    """
    logger.debug("spawn: argv=%r", argv)
    # Handlers can only be changed from the main thread.
    owns_signals = threading.current_thread() is threading.main_thread()
    original_handler = signal.signal(signal.SIGINT, signal.SIG_IGN) if owns_signals else None
    try:
        with subprocess.Popen(argv, preexec_fn=_default_sigint) as child:
            returncode = child.wait()
    finally:
        if owns_signals:
            signal.signal(signal.SIGINT, original_handler or signal.SIG_DFL)
    logger.debug("exit: argv[0]=%r status=%d", argv[0], returncode)
    return returncode
