# src/mstodo_exporter/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class ConsoleConfirmer:
    """
    Ask a yes/no question on the console.

    Only an answer of exactly "y" (any case, no surrounding spaces) counts as yes.
    EOF or Ctrl+C count as no.
    """

    def __init__(self, read_line: Callable[[str], str] = input) -> None:
        self._read_line = read_line

    def confirm(self, prompt: str) -> bool:
        print(prompt, flush=True)
        try:
            answer = self._read_line("")
        except EOFError:
            logger.info("Console EOF received, treating as 'no'.")
            return False
        except KeyboardInterrupt:
            print()
            logger.info("Console KeyboardInterrupt, treating as 'no'.")
            return False
        return answer.lower() == "y"

