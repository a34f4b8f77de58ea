"""
Download and print surfaces for receipt documents.
"""

import os
import shutil
import subprocess
import sys
import tempfile
import webbrowser
from collections.abc import Callable
from pathlib import Path

from parishdesk.logging import get_logger

from .document import ReceiptDocument
from .renderer import render_pdf

logger = get_logger(__name__)

Opener = Callable[[str], bool]
PrintCommand = Callable[[Path], None]


def to_bytes(document: ReceiptDocument) -> bytes:
    """Serialise a receipt to PDF bytes."""
    return render_pdf(document)


def save(document: ReceiptDocument, directory: str | Path) -> Path:
    """Write the receipt PDF into ``directory`` under its conventional filename."""
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / document.filename
    path.write_bytes(to_bytes(document))
    logger.info("Receipt PDF saved", path=str(path))
    return path


def _default_opener(uri: str) -> bool:
    return webbrowser.open(uri)


def _system_print(path: Path) -> None:
    """Send a file to the default printer using whatever the platform offers."""
    if sys.platform == "win32":
        os.startfile(str(path), "print")  # type: ignore[attr-defined]
        return
    command = shutil.which("lp") or shutil.which("lpr")
    if command is None:
        raise OSError("no print command available")
    subprocess.run([command, str(path)], check=True, capture_output=True)


def present(
    document: ReceiptDocument,
    *,
    auto_print: bool = True,
    opener: Opener | None = None,
    print_command: PrintCommand | None = None,
) -> bool:
    """Open the receipt for viewing and request printing.

    Best effort: when no display surface or printer is available the failure
    is logged and ``False`` is returned instead of raising. The temporary PDF
    is removed when nothing could show it; otherwise it is left for the
    viewer, which reads it after this call returns.
    """
    opener = opener or _default_opener
    print_command = print_command or _system_print

    fd, name = tempfile.mkstemp(prefix="receipt_", suffix=".pdf")
    path = Path(name)
    with os.fdopen(fd, "wb") as handle:
        handle.write(to_bytes(document))

    try:
        shown = bool(opener(path.as_uri()))
    except (OSError, webbrowser.Error) as exc:
        logger.warning("Receipt display unavailable", path=str(path), error=str(exc))
        shown = False

    if not shown:
        logger.info("Receipt not shown; print skipped", path=str(path))
        path.unlink(missing_ok=True)
        return False

    if auto_print:
        try:
            print_command(path)
        except (OSError, subprocess.CalledProcessError) as exc:
            logger.warning("Receipt print request failed", path=str(path), error=str(exc))
    return True


__all__ = ["present", "save", "to_bytes"]
