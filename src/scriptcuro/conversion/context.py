#!/usr/bin/env python3
"""
SCRIPTCURO CONVERSION CONTEXT
-----------------------------
The per-call record of a script undergoing conversion. Created by the
ConversionPipeline for a single run and discarded once the report has
been assembled; nothing in it outlives the call.

Author: ScriptCuro Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from typing import List
from scriptcuro.core.models import (
    ConstructKind, ConversionReport, Diagnostic, Severity,
    SourceLanguage, SourceLine, TargetDialect, TranslationOutcome
)


@dataclass
class ConversionContext:
    """
    Accumulates output lines and diagnostics in input order.
    """
    dialect: TargetDialect
    source_language: SourceLanguage = SourceLanguage.AUTO
    lines: List[SourceLine] = field(default_factory=list)     # Sharded input
    preamble: List[str] = field(default_factory=list)         # Header block
    body: List[str] = field(default_factory=list)             # Translated lines
    kinds: List[ConstructKind] = field(default_factory=list)  # One per input line
    warnings: List[Diagnostic] = field(default_factory=list)
    unsupported: List[Diagnostic] = field(default_factory=list)

    def record(self, outcome: TranslationOutcome):
        """Appends one line's outcome; diagnostics are never reordered or merged."""
        self.kinds.append(outcome.kind)
        self.body.extend(outcome.lines)
        diagnostic = outcome.diagnostic
        if diagnostic is None:
            return
        if diagnostic.severity is Severity.UNSUPPORTED:
            self.unsupported.append(diagnostic)
        else:
            self.warnings.append(diagnostic)

    def to_report(self) -> ConversionReport:
        return ConversionReport(
            converted_code="\n".join(self.preamble + self.body),
            target_dialect=self.dialect,
            source_language=self.source_language,
            warnings=list(self.warnings),
            unsupported_constructs=list(self.unsupported),
        )
