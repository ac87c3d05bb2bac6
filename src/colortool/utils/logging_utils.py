from __future__ import annotations

import logging
from pathlib import Path
import sys


def configure_logging(level: str, log_file: Path | None = None) -> None:
    # Reports go to stdout; keep log records on stderr so they never mix.
    resolved_level = getattr(logging, str(level).upper(), logging.WARNING)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    handlers: list[logging.Handler] = [console]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        handlers.append(file_handler)

    logging.basicConfig(level=resolved_level, handlers=handlers, force=True)
