"""FASTA File Splitter - split protein FASTA files into residue-balanced parts."""

from fasta_splitter.splitter import FastaFileSplitter, ProcessResult, SplitState

__all__ = ["FastaFileSplitter", "ProcessResult", "SplitState"]
