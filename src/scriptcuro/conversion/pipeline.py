#!/usr/bin/env python3
"""
SCRIPTCURO CONVERSION PIPELINE - The Chief Surgeon
--------------------------------------------------
Central coordinator that runs a script through the conversion phases in a
strict sequence: sharding, preamble, per-line translation, assembly.

The pipeline is synchronous and keeps no state between runs. Two calls with
the same arguments return identical reports, and concurrent calls on one
pipeline instance do not interfere with each other.

Author: ScriptCuro Team
Date: 2026-10-19
"""

import logging
from typing import Optional, Union

from scriptcuro.conversion.context import ConversionContext
from scriptcuro.conversion.lexer import ScriptLexer
from scriptcuro.conversion.preamble import emit_preamble
from scriptcuro.conversion.translator import LineTranslator
from scriptcuro.core.models import ConversionReport, SourceLanguage, TargetDialect
from scriptcuro.core.settings import ConverterSettings

logger = logging.getLogger("scriptcuro.pipeline")


class ConversionPipeline:
    """
    The Orchestrator: ensures sharding, preamble emission and line
    translation happen in a strictly defined order.
    """

    def __init__(self, settings: Optional[ConverterSettings] = None):
        self.settings = settings or ConverterSettings()
        self.lexer = ScriptLexer()
        self.translator = LineTranslator(self.settings)

    def run(self, source_text: str,
            dialect: Union[TargetDialect, str] = TargetDialect.GENERAL_PURPOSE,
            source_language: Union[SourceLanguage, str] = SourceLanguage.AUTO) -> ConversionReport:
        """
        Converts the full script text and returns the assembled report.
        Never raises for any text input.
        """
        context = ConversionContext(
            dialect=TargetDialect.parse(dialect),
            source_language=SourceLanguage.parse(source_language),
        )

        # --- PHASE 1: SHARDING ---
        context.lines = self.lexer.shard(source_text)

        # --- PHASE 2: PREAMBLE ---
        context.preamble = emit_preamble(context.dialect, self.settings)

        # --- PHASE 3: LINE TRANSLATION ---
        # The source language hint does not select rules; it is carried
        # through to the report only.
        for line in context.lines:
            context.record(self.translator.translate_line(line, context.dialect))

        # --- PHASE 4: ASSEMBLY ---
        report = context.to_report()
        logger.debug(
            f"Converted {len(context.lines)} lines to {context.dialect.value}: "
            f"{len(report.warnings)} warnings, {len(report.unsupported_constructs)} unsupported"
        )
        return report


def convert(source_text: str,
            source_language_hint: Union[SourceLanguage, str] = SourceLanguage.AUTO,
            target_dialect: Union[TargetDialect, str] = TargetDialect.GENERAL_PURPOSE,
            settings: Optional[ConverterSettings] = None) -> ConversionReport:
    """Engine entry point: (sourceText, sourceLanguageHint, targetDialect) -> report."""
    return ConversionPipeline(settings).run(source_text, target_dialect, source_language_hint)
