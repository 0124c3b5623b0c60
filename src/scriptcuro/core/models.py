#!/usr/bin/env python3
"""
SCRIPTCURO CORE MODELS
----------------------
Defines the fundamental data structures used across the ScriptCuro engine.
These models represent the lowest level of script abstraction: a physical
source line, the construct it was classified as, and the diagnostics that
travel with the converted output.

Author: ScriptCuro Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class TargetDialect(Enum):
    """The output flavour requested by the caller."""
    GENERAL_PURPOSE = "python"
    DATA_PROCESSING = "pyspark"

    @classmethod
    def parse(cls, value) -> "TargetDialect":
        """Accepts an enum member or its CLI spelling ('python' / 'pyspark')."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unknown target dialect: {value!r}")


class SourceLanguage(Enum):
    """
    Hint describing the legacy script flavour.
    Accepted for forward compatibility; classification ignores it.
    """
    AUTO = "auto"
    BASH = "bash"
    PERL = "perl"
    MIXED = "mixed"

    @classmethod
    def parse(cls, value) -> "SourceLanguage":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        for member in cls:
            if key == member.value:
                return member
        return cls.AUTO


class ConstructKind(Enum):
    """Closed set of construct categories, one per source line."""
    BLANK = "blank"
    COMMENT = "comment"
    ASSIGNMENT = "assignment"
    PRINT_LIKE = "print_like"
    CONDITIONAL = "conditional"
    FOR_LOOP = "for_loop"
    WHILE_LOOP = "while_loop"
    FILE_READ = "file_read"
    FILTER_COMMAND = "filter_command"
    UNSUPPORTED_COMMAND = "unsupported_command"
    UNCLASSIFIED = "unclassified"


class Severity(Enum):
    WARNING = "warning"          # may need manual review
    UNSUPPORTED = "unsupported"  # no equivalent exists


@dataclass(frozen=True)
class SourceLine:
    """
    A single physical line of the legacy script.

    The raw content is kept for passthrough; the stripped view is what the
    scanner matches against.
    """
    line_no: int   # 1-indexed position in the input text
    raw: str       # The original unmutated line

    @property
    def text(self) -> str:
        return self.raw.strip()

    @property
    def is_code(self) -> bool:
        """False for blank and comment lines."""
        stripped = self.text
        return bool(stripped) and not stripped.startswith('#')


@dataclass(frozen=True)
class Diagnostic:
    """A structured note attached to one source line."""
    severity: Severity
    line_no: int
    message: str

    @classmethod
    def warning(cls, line_no: int, message: str) -> "Diagnostic":
        return cls(Severity.WARNING, line_no, message)

    @classmethod
    def unsupported(cls, line_no: int, message: str) -> "Diagnostic":
        return cls(Severity.UNSUPPORTED, line_no, message)

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class TranslationOutcome:
    """Result of translating one SourceLine."""
    kind: ConstructKind
    lines: Tuple[str, ...]
    diagnostic: Optional[Diagnostic] = None


@dataclass
class ConversionReport:
    """
    The externally visible result of one conversion call.
    Built fresh per call and handed over to the caller.
    """
    converted_code: str
    target_dialect: TargetDialect
    source_language: SourceLanguage = SourceLanguage.AUTO
    warnings: List[Diagnostic] = field(default_factory=list)
    unsupported_constructs: List[Diagnostic] = field(default_factory=list)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """All diagnostics merged back into source order."""
        return sorted(self.warnings + self.unsupported_constructs, key=lambda d: d.line_no)

    @property
    def is_clean(self) -> bool:
        return not self.warnings and not self.unsupported_constructs
