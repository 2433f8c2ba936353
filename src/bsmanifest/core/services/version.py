from __future__ import annotations

"""Install version lookup used as the report title."""

import logging
import os

from bsmanifest.domain.constants import VERSION_FILE, VERSION_MISSING
from bsmanifest.infra import fs

logger = logging.getLogger(__name__)


def read_version(directory: str) -> str:
    """
    Return the raw contents of the version marker at the install root.

    Falls back to the 'Version Missing' sentinel when the marker is absent.
    """
    marker = os.path.join(directory, VERSION_FILE)
    if not fs.exists(marker):
        logger.info(f"No {VERSION_FILE} found in {directory}")
        return VERSION_MISSING
    return fs.read_text(marker)
