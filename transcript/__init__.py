from __future__ import annotations  # Transcript package exports

from .assembler import TRANSCRIPT_HEADER, Transcript, assemble

__all__ = ["TRANSCRIPT_HEADER", "Transcript", "assemble"]
