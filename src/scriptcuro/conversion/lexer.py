#!/usr/bin/env python3
"""
SCRIPTCURO LEXER - Line Sharder (Phase 1.1)
-------------------------------------------
Cleans raw script text and decomposes it into numbered SourceLine models.
Line numbering follows the physical layout of the input, blank lines
included, so diagnostics can point back at the exact source position.

Author: ScriptCuro Team
Date: 2026-10-19
"""

from typing import List
from scriptcuro.core.models import SourceLine


class ScriptLexer:
    """Turns raw legacy script text into an ordered list of SourceLines."""

    def _clean_artifacts(self, text: str) -> str:
        """
        Removes invisible UTF-8 BOM markers and standardizes line endings.
        """
        text = text.lstrip('\ufeff')
        return text.replace('\r\n', '\n').replace('\r', '\n')

    def shard(self, raw_text: str) -> List[SourceLine]:
        """
        Primary interface for the ConversionPipeline.
        Empty input yields no lines; a trailing newline does not add one.
        """
        clean_text = self._clean_artifacts(raw_text or "")
        if not clean_text:
            return []

        lines = clean_text.split('\n')
        if lines[-1] == "":
            lines.pop()

        return [SourceLine(line_no=i, raw=line) for i, line in enumerate(lines, 1)]
