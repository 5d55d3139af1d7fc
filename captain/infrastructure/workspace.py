"""Scoped acquisition of a build's working directory."""

import contextlib
import logging
import tempfile
from pathlib import Path
from typing import Generator, Optional

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def working_directory(configured: Optional[str] = None) -> Generator[Path, None, None]:
    """
    Provides the directory an image is assembled in.

    A configured directory is created if needed and left in place afterwards.
    Without one, a fresh temporary directory is used and removed when the
    block exits, including when it exits with an error.
    """
    if configured:
        path = Path(configured)
        path.mkdir(parents=True, exist_ok=True)
        yield path
        return

    with tempfile.TemporaryDirectory(prefix="captain") as tmp:
        logger.debug(f"Using temporary working directory {tmp}")
        yield Path(tmp)
