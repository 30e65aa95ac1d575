# src/mstodo_exporter/cli/main.py

"""
CLI entrypoint.

Resolves settings, initializes logging, then runs one export.
Exit code 0 on success, 1 when the run was refused (bad settings) or aborted.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from ..cli.bootstrap import create_exporter
from ..config import load_settings
from ..core.exporter import ExportAborted
from ..core.ports import Confirmer
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None, *, confirmer: Confirmer | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        settings = load_settings(args)
    except ValueError as e:
        # Logging is not configured yet.
        setup_logging()
        logger.error("%s", e)
        return 1

    console_level = getattr(logging, settings.log_level, logging.INFO)
    if not isinstance(console_level, int):
        console_level = logging.INFO
    setup_logging(console_level=console_level, log_file=settings.log_file)

    try:
        settings.validate()
    except ValueError as e:
        logger.error("%s", e)
        return 1

    exporter = create_exporter(settings, confirmer=confirmer)
    try:
        exporter.run()
    except ExportAborted as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
