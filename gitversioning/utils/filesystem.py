"""
Writing version files.

``gitversioning file`` may run while another build step reads the
previous ``version.properties``, so the file is replaced atomically: the
content goes to a temporary file in the same directory which is then
renamed over the target. Readers see the old or the new file, never a
partial one.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Union

from gitversioning.utils.logger import get_logger
from gitversioning.exceptions import FileOperationError

logger = get_logger("filesystem")

PathLike = Union[str, Path]


def resolve_output_path(output: PathLike, root: PathLike) -> Path:
    """Resolve ``output`` against the project directory ``root``.

    Absolute paths are kept; relative paths such as the default
    ``build/version.properties`` land inside the project.
    """
    path = Path(output).expanduser()
    if not path.is_absolute():
        path = Path(root) / path
    return path.resolve(strict=False)


def write_text_atomic(path: PathLike, content: str) -> Path:
    """Replace the file at ``path`` with ``content`` in one step.

    Missing parent directories are created.

    Returns:
        The resolved path written.

    Raises:
        FileOperationError: The directory or file cannot be written.
    """
    target = Path(path).resolve(strict=False)

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    except OSError as exc:
        raise FileOperationError(
            f"Cannot create {target.parent}: {exc}",
            file_path=str(target),
            operation="write",
            original_error=exc,
        ) from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
        os.replace(temp_name, target)
    except OSError as exc:
        try:
            os.unlink(temp_name)
        except FileNotFoundError:
            pass
        raise FileOperationError(
            f"Cannot write {target}: {exc}",
            file_path=str(target),
            operation="write",
            original_error=exc,
        ) from exc

    logger.debug("Wrote %d characters to %s", len(content), target)
    return target
