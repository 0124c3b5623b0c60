#!/usr/bin/env python3
"""
SCRIPTCURO ENGINE - The High Orchestrator
-----------------------------------------
The ConversionEngine manages the lifecycle of a legacy script file through
the conversion phases. It owns everything around the pure conversion core:
file discovery, decoding, empty-input rejection, post-flight validation,
atomic persistence of the converted output and batch summaries.

Author: ScriptCuro Team
Date: 2026-10-19
"""

import os
import time
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional, Callable, Sequence, Union

from scriptcuro.conversion.exporter import download_filename
from scriptcuro.conversion.pipeline import ConversionPipeline
from scriptcuro.core.models import ConversionReport, SourceLanguage, TargetDialect
from scriptcuro.core.settings import ConverterSettings
from scriptcuro.validator.validator import ReportValidator

# Setup standardized logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("scriptcuro.engine")

DEFAULT_EXTENSIONS = (".sh", ".bash", ".ksh", ".pl")
CONVERTED_SUFFIX = "_converted"


class ConversionEngine:
    """
    Principal orchestrator for script conversion.
    Per-file problems are reported as status dicts; a batch never aborts
    because one file could not be read or written.
    """

    def __init__(self, workspace_path: Union[str, Path],
                 settings: Optional[ConverterSettings] = None,
                 output_dir: Optional[Union[str, Path]] = None):
        self.workspace = Path(workspace_path).resolve()
        self.settings = settings or ConverterSettings()
        self.output_dir = Path(output_dir).resolve() if output_dir else None
        self.pipeline = ConversionPipeline(self.settings)
        self.validator = ReportValidator()

    def convert_text(self, label: str, raw_text: str,
                     dialect: Union[TargetDialect, str] = TargetDialect.GENERAL_PURPOSE,
                     source_language: Union[SourceLanguage, str] = SourceLanguage.AUTO) -> Dict[str, Any]:
        """
        Converts in-memory text (stdin, editor buffer). Never writes.
        """
        if not raw_text.strip():
            return self._file_error(label, "EMPTY_INPUT", "No code to convert")

        report = self.pipeline.run(raw_text, dialect, source_language)
        valid, message = self.validator.validate(report, self.pipeline.lexer.shard(raw_text))
        if not valid:
            logger.warning(f"{label}: {message}")

        return {
            "file_path": label,
            "success": valid,
            "status": self._derive_status(report),
            "report": report,
            "converted_content": report.converted_code,
            "warnings": [d.message for d in report.warnings],
            "unsupported": [d.message for d in report.unsupported_constructs],
            "validation_error": "" if valid else message,
            "written": False,
            "output_path": None,
            "timestamp": time.time()
        }

    def convert_file(self, relative_path: str,
                     dialect: Union[TargetDialect, str] = TargetDialect.GENERAL_PURPOSE,
                     source_language: Union[SourceLanguage, str] = SourceLanguage.AUTO,
                     dry_run: bool = True) -> Dict[str, Any]:
        """
        Performs a full conversion cycle on a single script.
        """
        full_path = (self.workspace / relative_path).resolve()

        if not full_path.exists():
            return self._file_error(relative_path, "FILE_NOT_FOUND", f"Path missing: {full_path}")

        try:
            # BOM-aware read
            raw_text = full_path.read_text(encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading {relative_path}: {str(e)}")
            return self._file_error(relative_path, "ENGINE_ERROR", str(e))

        result = self.convert_text(str(relative_path), raw_text, dialect, source_language)
        if "report" not in result or dry_run:
            return result

        output_path = self.output_path_for(full_path, result["report"].target_dialect)
        try:
            self._atomic_write(output_path, result["converted_content"] + "\n")
            result["written"] = True
            result["output_path"] = str(output_path)
        except OSError as e:
            result["write_error"] = str(e)
            result["success"] = False

        return result

    def scan_directory(self, extensions: Sequence[str] = DEFAULT_EXTENSIONS,
                       dialect: Union[TargetDialect, str] = TargetDialect.GENERAL_PURPOSE,
                       source_language: Union[SourceLanguage, str] = SourceLanguage.AUTO,
                       dry_run: bool = True, max_depth: int = 10,
                       progress_callback: Optional[Callable[[int, int], None]] = None) -> List[Dict[str, Any]]:
        """
        Recursively discovers and converts scripts under the workspace.
        """
        try:
            max_depth = int(max_depth)
        except (ValueError, TypeError):
            logger.warning(f"Invalid max_depth '{max_depth}'. Falling back to default: 10")
            max_depth = 10

        targets = self.discover(extensions, max_depth)
        reports = []
        for processed, file_path in enumerate(targets, 1):
            rel_path = str(file_path.relative_to(self.workspace))
            reports.append(self.convert_file(rel_path, dialect, source_language, dry_run=dry_run))
            if progress_callback:
                progress_callback(processed, len(targets))

        return reports

    def discover(self, extensions: Sequence[str] = DEFAULT_EXTENSIONS, max_depth: int = 10) -> List[Path]:
        """Sorted script paths; symlinks, converted outputs and deep paths are skipped."""
        wanted = {ext.lower() if ext.startswith('.') else f".{ext.lower()}" for ext in extensions}
        found = []
        for f in self.workspace.rglob("*"):
            if not f.is_file() or f.is_symlink() or f.suffix.lower() not in wanted:
                continue
            if f.stem.endswith(CONVERTED_SUFFIX):
                continue
            if len(f.relative_to(self.workspace).parts) > max_depth:
                continue
            found.append(f)
        return sorted(found)

    def output_path_for(self, source_path: Path, dialect: TargetDialect) -> Path:
        """
        'deploy.sh' -> 'deploy_sh_converted.py' (same extension for every dialect).
        The source extension stays in the name so 'deploy.sh' and 'deploy.pl'
        never share an output; under output_dir the workspace tree is mirrored.
        """
        extension = Path(download_filename(dialect)).suffix
        tag = source_path.suffix.lstrip('.')
        stem = f"{source_path.stem}_{tag}" if tag else source_path.stem

        target_dir = source_path.parent
        if self.output_dir:
            try:
                target_dir = self.output_dir / source_path.parent.relative_to(self.workspace)
            except ValueError:
                target_dir = self.output_dir
        return target_dir / f"{stem}{CONVERTED_SUFFIX}{extension}"

    def generate_summary(self, reports: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Aggregate counters for the CLI footer."""
        if not reports:
            return {
                "total_files": 0, "success_rate": 0, "successful": 0,
                "warnings": 0, "unsupported": 0, "written_to_disk": 0, "system_errors": 0
            }

        total = len(reports)
        successful = sum(1 for r in reports if r.get('success', False))
        return {
            "total_files": total,
            "success_rate": successful / total,
            "successful": successful,
            "warnings": sum(len(r.get('warnings', [])) for r in reports),
            "unsupported": sum(len(r.get('unsupported', [])) for r in reports),
            "written_to_disk": sum(1 for r in reports if r.get('written', False)),
            "system_errors": sum(1 for r in reports if r.get('status') == "ENGINE_ERROR"),
            "summary_timestamp": time.strftime("%Y-%m-%d %H:%M:%S")
        }

    def _derive_status(self, report: ConversionReport) -> str:
        if report.unsupported_constructs: return "UNSUPPORTED"
        if report.warnings: return "NEEDS_REVIEW"
        return "CONVERTED"

    def _atomic_write(self, target_path: Path, content: str):
        target_path.parent.mkdir(parents=True, exist_ok=True)
        if not os.access(target_path.parent, os.W_OK):
            raise PermissionError(f"No write access to {target_path.parent}")
        temp_file = target_path.with_suffix('.scriptcuro.tmp')
        try:
            temp_file.write_text(content, encoding='utf-8')
            os.replace(temp_file, target_path)
        except OSError as e:
            if temp_file.exists(): temp_file.unlink()
            raise IOError(f"Atomic write failed: {str(e)}")

    def _file_error(self, path: str, status: str, error: str) -> Dict[str, Any]:
        return {
            "file_path": path, "status": status, "error": error,
            "success": False, "warnings": [], "unsupported": [],
            "written": False, "output_path": None
        }
