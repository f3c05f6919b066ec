"""Streaming reader for protein FASTA files."""

import os
from dataclasses import dataclass
from typing import BinaryIO

from fasta_splitter.options import DEFAULT_ACCESSION_END_CHAR, DEFAULT_START_CHAR


@dataclass(frozen=True, slots=True)
class FastaRecord:
    """One protein entry: accession name, free-text description and residues."""

    name: str
    description: str
    sequence: str


class FastaFileReader:
    """
    Read a FASTA file one protein at a time.

    A protein starts at a line beginning with ``start_char``. The name runs
    up to the first ``accession_end_char`` and the rest of the line is the
    description. Following lines, up to the next header, are joined to form
    the sequence.

    Non-blank lines that cannot belong to a protein (text before the first
    header, or lines under a header with no name) are skipped and counted.
    """

    def __init__(self, start_char=DEFAULT_START_CHAR, accession_end_char=DEFAULT_ACCESSION_END_CHAR,
                 encoding="utf-8"):
        self.start_char = start_char
        self.accession_end_char = accession_end_char
        self.encoding = encoding

        self.lines_read = 0
        self.line_skip_count = 0

        self._handle: BinaryIO | None = None
        self._file_size = 0
        self._bytes_read = 0
        self._pending_header: tuple[str, str] | None = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __iter__(self):
        while True:
            record = self.read_next_record()
            if record is None:
                return
            yield record

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    @property
    def percent_file_processed(self) -> float:
        if self._file_size == 0:
            return 100.0
        return min(100.0, self._bytes_read / self._file_size * 100)

    def open(self, fasta_file):
        """Open fasta_file for reading; raises OSError if that is not possible."""
        self.close()
        self._file_size = os.path.getsize(fasta_file)
        self._handle = open(fasta_file, "rb")
        self._bytes_read = 0
        self._pending_header = None
        self.lines_read = 0
        self.line_skip_count = 0
        return self

    def close(self):
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def parse_header(self, line: str) -> tuple[str, str] | None:
        """Split a header line into (name, description); None if it has no name."""
        header = line[len(self.start_char):]
        name, _, description = header.partition(self.accession_end_char)
        name = name.strip()
        if not name:
            return None
        return name, description.strip()

    def read_next_record(self) -> FastaRecord | None:
        """Return the next protein, or None once the file is exhausted."""
        if self._handle is None:
            raise ValueError("read_next_record() called before open()")

        self.line_skip_count = 0
        header = self._pending_header
        self._pending_header = None
        residues = []

        for raw_line in self._handle:
            self._bytes_read += len(raw_line)
            self.lines_read += 1

            line = raw_line.decode(self.encoding, errors="replace").strip()
            if not line:
                continue

            if line.startswith(self.start_char):
                parsed = self.parse_header(line)
                if parsed is None:
                    # Nameless header: drop it and everything under it
                    self.line_skip_count += 1
                    if header is not None:
                        return FastaRecord(header[0], header[1], "".join(residues))
                    continue

                if header is not None:
                    self._pending_header = parsed
                    return FastaRecord(header[0], header[1], "".join(residues))

                header = parsed
                continue

            if header is None:
                self.line_skip_count += 1
                continue

            residues.append(line)

        if header is not None:
            return FastaRecord(header[0], header[1], "".join(residues))
        return None
