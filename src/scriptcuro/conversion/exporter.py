#!/usr/bin/env python3
"""
SCRIPTCURO EXPORTER - Report Serialization
------------------------------------------
Author: ScriptCuro Team
Date: 2026-10-19
"""

import io
import json
from typing import Any, Dict, List
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from scriptcuro.core.models import ConversionReport, Diagnostic, TargetDialect

DOWNLOAD_STEM = "converted_code"


def download_filename(dialect: TargetDialect) -> str:
    """
    Both dialects download as a plain '.py' file.
    TODO: confirm whether pyspark output should get its own extension.
    """
    extension = "py" if dialect is TargetDialect.DATA_PROCESSING else "py"
    return f"{DOWNLOAD_STEM}.{extension}"


class ReportExporter:
    """
    The Reconstructor: converts a ConversionReport into YAML, JSON or text.
    """

    def __init__(self):
        self.yaml = YAML(typ='rt')
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096

    def _diagnostics(self, diagnostics: List[Diagnostic]) -> List[Dict[str, Any]]:
        return [
            {"line": d.line_no, "severity": d.severity.value, "message": d.message}
            for d in diagnostics
        ]

    def to_dict(self, report: ConversionReport) -> Dict[str, Any]:
        return {
            "target_dialect": report.target_dialect.value,
            "source_language": report.source_language.value,
            "filename": download_filename(report.target_dialect),
            "converted_code": report.converted_code,
            "warnings": self._diagnostics(report.warnings),
            "unsupported_constructs": self._diagnostics(report.unsupported_constructs),
        }

    def to_yaml(self, report: ConversionReport) -> str:
        """Round-trip dump; key order follows to_dict()."""
        stream = io.StringIO()
        doc = CommentedMap(self.to_dict(report))
        self.yaml.dump(doc, stream)
        return stream.getvalue()

    def to_json(self, report: ConversionReport) -> str:
        return json.dumps(self.to_dict(report), indent=2)

    def to_text(self, report: ConversionReport) -> str:
        """Human-readable diagnostics summary."""
        out = []
        if report.warnings:
            out.append("Conversion Warnings:")
            out.extend(f"  L{d.line_no}: {d.message}" for d in report.warnings)
        if report.unsupported_constructs:
            out.append("Unsupported Constructs:")
            out.extend(f"  L{d.line_no}: {d.message}" for d in report.unsupported_constructs)
        return "\n".join(out)
