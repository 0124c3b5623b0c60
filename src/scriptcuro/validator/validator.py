#!/usr/bin/env python3
"""
SCRIPTCURO VALIDATOR - The Judge
--------------------------------
Post-flight check on an assembled ConversionReport. Verifies the report
still honours the line-level contract of the conversion engine before the
ConversionEngine hands it to a caller or writes it to disk.

Author: ScriptCuro Team
Date: 2026-10-19
"""

from typing import List, Sequence, Tuple
from scriptcuro.core.models import ConversionReport, SourceLine
from scriptcuro.conversion.preamble import emit_preamble


class ReportValidator:
    """
    Enforces the report invariants. Returns a (passed, message) pair in the
    same style for every check so callers can log or surface the reason.
    """

    def validate(self, report: ConversionReport, lines: Sequence[SourceLine]) -> Tuple[bool, str]:
        code_lines = [line for line in lines if line.is_code]

        # --- TEST 1: Diagnostic budget ---
        total = len(report.warnings) + len(report.unsupported_constructs)
        if total > len(code_lines):
            return False, (f"Validation Failed: {total} diagnostics for "
                           f"{len(code_lines)} convertible lines.")

        # --- TEST 2: Ordering within each list ---
        for name, diagnostics in (("warnings", report.warnings),
                                  ("unsupported", report.unsupported_constructs)):
            numbers = [d.line_no for d in diagnostics]
            if any(b <= a for a, b in zip(numbers, numbers[1:])):
                return False, f"Validation Failed: {name} are not in source order."

        # --- TEST 3: Diagnostics point at real code lines ---
        valid_numbers = {line.line_no for line in code_lines}
        stray = self._stray_lines(report, valid_numbers)
        if stray:
            return False, f"Validation Failed: diagnostics reference non-code lines {stray}."

        # --- TEST 4: Every input line produced output ---
        preamble_len = len(emit_preamble(report.target_dialect))
        body_len = len(report.converted_code.split("\n")) - preamble_len
        if lines and body_len < len(lines):
            return False, f"Validation Failed: {len(lines)} input lines but {body_len} output lines."

        return True, "Report passes line-level integrity check."

    def _stray_lines(self, report: ConversionReport, valid_numbers) -> List[int]:
        return [d.line_no for d in report.diagnostics if d.line_no not in valid_numbers]
