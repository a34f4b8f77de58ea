"""
Tests for saving and presenting receipts.
"""

import webbrowser
from pathlib import Path
from urllib.parse import unquote, urlparse

import pytest

from parishdesk.receipts import ReceiptFormat, present, save


def _uri_path(uri: str) -> Path:
    return Path(unquote(urlparse(uri).path))


@pytest.fixture
def document(builder, transaction, organization, payer):
    return builder.compose(transaction, organization, payer, ReceiptFormat.THERMAL_WIDE)


@pytest.mark.unit
class TestSave:
    def test_writes_conventional_filename(self, document, tmp_path):
        path = save(document, tmp_path / "out")

        assert path == tmp_path / "out" / "receipt_OR-2026-00045.pdf"
        assert path.read_bytes().startswith(b"%PDF-")


@pytest.mark.unit
class TestPresent:
    def test_opens_then_prints(self, document):
        opened: list[str] = []
        printed: list[Path] = []

        def opener(uri: str) -> bool:
            opened.append(uri)
            return True

        assert present(document, opener=opener, print_command=printed.append) is True
        assert len(opened) == 1 and opened[0].startswith("file://")
        assert printed and printed[0].read_bytes().startswith(b"%PDF-")
        assert printed[0].as_uri() == opened[0]

    def test_no_print_when_disabled(self, document):
        printed: list[Path] = []

        assert present(
            document, auto_print=False, opener=lambda uri: True, print_command=printed.append
        )
        assert printed == []

    def test_no_display_surface(self, document):
        printed: list[Path] = []

        assert present(document, opener=lambda uri: False, print_command=printed.append) is False
        assert printed == []

    def test_opener_error_is_swallowed(self, document):
        def opener(uri: str) -> bool:
            raise webbrowser.Error("could not locate runnable browser")

        assert present(document, opener=opener, print_command=lambda path: None) is False

    def test_unshown_file_is_removed(self, document):
        opened: list[str] = []

        def opener(uri: str) -> bool:
            opened.append(uri)
            return False

        assert present(document, opener=opener) is False
        assert not _uri_path(opened[0]).exists()

    def test_shown_file_is_kept_for_the_viewer(self, document):
        opened: list[str] = []

        def opener(uri: str) -> bool:
            opened.append(uri)
            return True

        assert present(document, auto_print=False, opener=opener) is True
        path = _uri_path(opened[0])
        assert path.read_bytes().startswith(b"%PDF-")
        path.unlink()

    def test_print_failure_is_swallowed(self, document):
        def print_command(path: Path) -> None:
            raise OSError("no print command available")

        assert present(document, opener=lambda uri: True, print_command=print_command) is True
