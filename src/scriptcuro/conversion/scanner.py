#!/usr/bin/env python3
"""
SCRIPTCURO SCANNER - The Archeologist (Phase 1.2)
-------------------------------------------------
Assigns exactly one ConstructKind to each SourceLine by walking the
recognition table in priority order. No backtracking: the first rule that
matches decides the kind.

Author: ScriptCuro Team
Date: 2026-10-19
"""

from typing import List, Optional
from scriptcuro.core.models import ConstructKind, SourceLine, TargetDialect
from scriptcuro.core.settings import ConverterSettings
from scriptcuro.rules.constructs import ConstructRule, build_rules


class ConstructScanner:
    """
    Classifies source lines. Holds only the immutable rule table, so a
    single instance can be shared between concurrent conversions.
    """

    def __init__(self, settings: Optional[ConverterSettings] = None):
        self.settings = settings or ConverterSettings()
        self.rules: List[ConstructRule] = build_rules(self.settings)

    def classify(self, line: SourceLine, dialect: TargetDialect) -> ConstructKind:
        text = line.text
        for rule in self.rules:
            if rule.applies(text, dialect):
                return rule.kind
        return ConstructKind.UNCLASSIFIED

    def priority_order(self) -> List[ConstructKind]:
        """The table order, fallback last."""
        return [rule.kind for rule in self.rules] + [ConstructKind.UNCLASSIFIED]
