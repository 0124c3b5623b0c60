import json

from ruamel.yaml import YAML

from scriptcuro.conversion.exporter import ReportExporter, download_filename
from scriptcuro.conversion.lexer import ScriptLexer
from scriptcuro.conversion.pipeline import convert
from scriptcuro.core.models import ConversionReport, Diagnostic, TargetDialect
from scriptcuro.validator.validator import ReportValidator

SCRIPT = "x=1\nls -la\nawk '{print}' f\n"


def test_download_filename_is_always_py():
    assert download_filename(TargetDialect.GENERAL_PURPOSE) == "converted_code.py"
    assert download_filename(TargetDialect.DATA_PROCESSING) == "converted_code.py"


def test_to_dict_shape():
    data = ReportExporter().to_dict(convert(SCRIPT, "bash", "pyspark"))
    assert data["target_dialect"] == "pyspark"
    assert data["source_language"] == "bash"
    assert data["filename"] == "converted_code.py"
    assert data["warnings"] == [
        {"line": 2, "severity": "warning", "message": "Line may need manual conversion: ls -la"}
    ]
    assert data["unsupported_constructs"] == [
        {"line": 3, "severity": "unsupported", "message": "AWK command: awk '{print}' f"}
    ]


def test_yaml_export_loads_back():
    exporter = ReportExporter()
    report = convert(SCRIPT, "auto", "python")
    loaded = YAML(typ='safe').load(exporter.to_yaml(report))
    assert loaded == exporter.to_dict(report)


def test_json_export_loads_back():
    exporter = ReportExporter()
    report = convert(SCRIPT, "auto", "python")
    assert json.loads(exporter.to_json(report)) == exporter.to_dict(report)


def test_text_summary():
    text = ReportExporter().to_text(convert(SCRIPT, "auto", "python"))
    assert text.splitlines() == [
        "Conversion Warnings:",
        "  L2: Line may need manual conversion: ls -la",
        "Unsupported Constructs:",
        "  L3: AWK command: awk '{print}' f",
    ]
    assert ReportExporter().to_text(convert("x=1", "auto", "python")) == ""


def test_validator_accepts_engine_output():
    report = convert(SCRIPT, "auto", "pyspark")
    ok, message = ReportValidator().validate(report, ScriptLexer().shard(SCRIPT))
    assert ok, message


def test_validator_rejects_diagnostic_overflow():
    lines = ScriptLexer().shard("ls\n")
    report = ConversionReport(
        converted_code="import os\nimport re\nimport sys\n\n# ls",
        target_dialect=TargetDialect.GENERAL_PURPOSE,
        warnings=[Diagnostic.warning(1, "a"), Diagnostic.warning(1, "b")],
    )
    ok, message = ReportValidator().validate(report, lines)
    assert not ok
    assert "diagnostics" in message


def test_validator_rejects_out_of_order_and_stray_lines():
    lines = ScriptLexer().shard("ls\npwd\n\n")
    code = "import os\nimport re\nimport sys\n\n# ls\n# pwd\n"
    unordered = ConversionReport(code, TargetDialect.GENERAL_PURPOSE,
                                 warnings=[Diagnostic.warning(2, "b"), Diagnostic.warning(1, "a")])
    assert ReportValidator().validate(unordered, lines)[0] is False

    stray = ConversionReport(code, TargetDialect.GENERAL_PURPOSE,
                             unsupported_constructs=[Diagnostic.unsupported(3, "blank line")])
    ok, message = ReportValidator().validate(stray, lines)
    assert not ok
    assert "[3]" in message


def test_validator_rejects_missing_output_lines():
    lines = ScriptLexer().shard("ls\npwd\n")
    short = ConversionReport("import os\nimport re\nimport sys\n\n# ls", TargetDialect.GENERAL_PURPOSE)
    ok, message = ReportValidator().validate(short, lines)
    assert not ok
    assert "output lines" in message
