"""Interactive operator gate used by unbounded sprint cycles.

Reads answers from stdin and writes prompts to stderr, so tick lines on
stdout stay clean when piped.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from .errors import InvalidInput
from .timer.duration import Duration, normalize

logger = logging.getLogger(__name__)

STOP_WORDS = ("q", "sair")


class ConsoleOperator:
    def __init__(
        self,
        stdin: TextIO | None = None,
        prompt_stream: TextIO | None = None,
    ) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._prompt_stream = prompt_stream if prompt_stream is not None else sys.stderr

    def read_line(self, prompt: str) -> str | None:
        """Prompt and block for one line.  ``None`` on end of input."""
        self._prompt_stream.write(prompt)
        self._prompt_stream.flush()
        line = self._stdin.readline()
        if not line:
            return None
        return line.strip()

    def ask_interval(self) -> Duration:
        """Interval length in minutes.  End of input means zero."""
        answer = self.read_line("Minutos de intervalo (0 para encerrar): ")
        if answer is None:
            logger.info("No more input, treating interval as zero")
            return Duration(0, 0)
        try:
            minutes = int(answer)
        except ValueError:
            raise InvalidInput(f"minutos de intervalo inválidos: {answer!r}") from None
        return normalize(minutes=minutes)

    def wait_for_continue(self) -> bool:
        """Block until the operator asks for the next sprint."""
        answer = self.read_line("Enter para o próximo sprint (q para sair): ")
        if answer is None:
            return False
        return answer.lower() not in STOP_WORDS
