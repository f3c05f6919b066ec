"""Shared fixtures for the splitter tests."""

import pytest


@pytest.fixture
def write_fasta(tmp_path):
    """Write text to a FASTA file under tmp_path and return its path."""

    def _write(text: str, name: str = "Proteins.fasta") -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


def make_fasta(lengths, prefix="Prot", residue="A") -> str:
    """FASTA text with one protein per entry of lengths."""
    entries = []
    for i, length in enumerate(lengths, start=1):
        entries.append(f">{prefix}{i} Protein number {i}\n{residue * length}\n")
    return "".join(entries)


class FailingCloseHandle:
    """Wraps a file handle whose close() releases it and then raises."""

    def __init__(self, handle):
        self._handle = handle

    def write(self, text: str) -> int:
        return self._handle.write(text)

    def close(self) -> None:
        self._handle.close()
        raise OSError(5, "Input/output error")
