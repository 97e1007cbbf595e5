"""Write decoded payloads to disk."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from .errors import OutputWriteError

LOGGER = logging.getLogger(__name__)

# Temporary names stay short so any target name that fits the filesystem
# limit can be written.
TMP_PREFIX = ".har-"
TMP_SUFFIX = ".tmp"


def _default_file_mode() -> int:
    # mkstemp creates 0600 files; extracted files get the usual umask mode
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_payload(path: Union[str, Path], payload: bytes) -> int:
    """Write *payload* to *path*, creating missing parent directories.

    The bytes go to a temporary file in the same directory first which
    then replaces the target, so an existing file is either fully
    replaced or left alone.

    Returns:
        Number of bytes written.

    Raises:
        OutputWriteError: If a directory or the file cannot be written.
    """
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(
            f"Cannot create directory {target.parent}: {exc}", path=str(target.parent)
        ) from exc

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=TMP_PREFIX, suffix=TMP_SUFFIX
        )
        with os.fdopen(fd, "wb") as fh:
            fh.write(payload)
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, target)
    except OSError as exc:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            except OSError:
                LOGGER.debug("Could not remove temporary file %s", tmp_name)
        raise OutputWriteError(f"Cannot write {target}: {exc}", path=str(target)) from exc

    LOGGER.debug("Wrote %d bytes to %s", len(payload), target)
    return len(payload)
