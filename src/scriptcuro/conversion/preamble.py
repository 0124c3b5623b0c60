#!/usr/bin/env python3
"""
SCRIPTCURO PREAMBLE EMITTER
---------------------------
Produces the fixed header lines (imports and session setup) that precede
every converted body. Pure: same dialect and settings, same lines.

Author: ScriptCuro Team
Date: 2026-10-19
"""

from typing import List, Optional
from scriptcuro.core.models import TargetDialect
from scriptcuro.core.settings import ConverterSettings


def emit_preamble(dialect: TargetDialect, settings: Optional[ConverterSettings] = None) -> List[str]:
    """Returns the header block for the dialect, ending with a blank separator."""
    settings = settings or ConverterSettings()

    if dialect is TargetDialect.DATA_PROCESSING:
        return [
            "from pyspark.sql import SparkSession",
            "import pyspark.sql.functions as F",
            "",
            "# Initialize SparkSession",
            f"{settings.session_name} = SparkSession.builder"
            f".appName('{settings.spark_app_name}').getOrCreate()",
            "",
        ]

    return [
        "import os",
        "import re",
        "import sys",
        "",
    ]
