#!/usr/bin/env python3
"""
SCRIPTCURO ENGINE SUITE
-----------------------
File-level behaviour of the ConversionEngine:
1. Dry runs never touch the disk
2. Atomic writes of converted output
3. Empty / missing / undecodable inputs
4. Recursive discovery and batch summaries

Author: ScriptCuro Team
Date: 2026-10-19
"""

import pytest

from scriptcuro.core.engine import ConversionEngine
from scriptcuro.core.models import TargetDialect
from scriptcuro.core.settings import ConverterSettings

DEPLOY_SH = "#!/bin/sh\nAPP=web\necho $APP\nawk '{print $1}' hosts\nrsync -a src/ dst/\n"


@pytest.fixture
def workspace(tmp_path):
    (tmp_path / "deploy.sh").write_text(DEPLOY_SH)
    return tmp_path


def test_dry_run_does_not_write(workspace):
    engine = ConversionEngine(workspace)
    result = engine.convert_file("deploy.sh", dry_run=True)

    assert result["success"] is True
    assert result["status"] == "UNSUPPORTED"
    assert result["written"] is False
    assert result["unsupported"] == ["AWK command: awk '{print $1}' hosts"]
    assert result["warnings"] == ["Line may need manual conversion: rsync -a src/ dst/"]
    assert "APP = web" in result["converted_content"]
    assert not (workspace / "deploy_sh_converted.py").exists()


def test_write_beside_source(workspace):
    engine = ConversionEngine(workspace)
    result = engine.convert_file("deploy.sh", dry_run=False)

    target = workspace / "deploy_sh_converted.py"
    assert result["written"] is True
    assert result["output_path"] == str(target)
    assert target.read_text() == result["converted_content"] + "\n"
    assert not list(workspace.rglob("*.scriptcuro.tmp"))


def test_pyspark_output_keeps_py_extension(workspace, tmp_path_factory):
    out_dir = tmp_path_factory.mktemp("out")
    engine = ConversionEngine(workspace, output_dir=out_dir)
    result = engine.convert_file("deploy.sh", TargetDialect.DATA_PROCESSING, dry_run=False)

    target = out_dir / "deploy_sh_converted.py"
    assert target.exists()
    assert target.read_text().startswith("from pyspark.sql import SparkSession")
    assert result["report"].target_dialect is TargetDialect.DATA_PROCESSING


def test_clean_script_status(workspace):
    (workspace / "clean.sh").write_text("x=1\necho $x\n")
    result = ConversionEngine(workspace).convert_file("clean.sh")
    assert result["status"] == "CONVERTED"
    assert result["warnings"] == [] and result["unsupported"] == []


def test_warning_only_status(workspace):
    (workspace / "review.sh").write_text("ls -la\n")
    assert ConversionEngine(workspace).convert_file("review.sh")["status"] == "NEEDS_REVIEW"


def test_missing_file(workspace):
    result = ConversionEngine(workspace).convert_file("ghost.sh")
    assert result["status"] == "FILE_NOT_FOUND"
    assert result["success"] is False


def test_empty_input_is_rejected(workspace):
    (workspace / "empty.sh").write_text("   \n\n")
    result = ConversionEngine(workspace).convert_file("empty.sh", dry_run=False)
    assert result["status"] == "EMPTY_INPUT"
    assert not (workspace / "empty_sh_converted.py").exists()


def test_binary_garbage_is_an_engine_error(workspace):
    (workspace / "garbage.sh").write_bytes(b"\xff\xfe\xfa\x00\x81")
    result = ConversionEngine(workspace).convert_file("garbage.sh")
    assert result["status"] == "ENGINE_ERROR"
    assert result["error"]


def test_bom_is_ignored(workspace):
    (workspace / "bom.sh").write_bytes("\ufeffx=1\n".encode("utf-8"))
    result = ConversionEngine(workspace).convert_file("bom.sh")
    assert result["converted_content"].endswith("x = 1")


def test_custom_settings_reach_the_pipeline(workspace):
    (workspace / "edit.sh").write_text("sed -i 's/a/b/' f\n")
    engine = ConversionEngine(workspace, ConverterSettings(unsupported_commands=("sed",)))
    assert engine.convert_file("edit.sh")["unsupported"] == ["SED command: sed -i 's/a/b/' f"]


def test_scan_directory_and_summary(workspace):
    (workspace / "tool.pl").write_text('print "hi";\n')
    (workspace / "notes.txt").write_text("echo not a script\n")
    nested = workspace / "jobs" / "nightly"
    nested.mkdir(parents=True)
    (nested / "run.bash").write_text("for f in *.csv; do\n")

    engine = ConversionEngine(workspace)
    seen = []
    reports = engine.scan_directory(dry_run=False, progress_callback=lambda done, total: seen.append((done, total)))

    paths = sorted(r["file_path"] for r in reports)
    assert paths == sorted(["deploy.sh", "tool.pl", "jobs/nightly/run.bash"])
    assert seen[-1] == (3, 3)
    assert (nested / "run_bash_converted.py").exists()

    # Converted outputs are never picked up as inputs on a rerun
    again = engine.scan_directory(extensions=[".sh", ".bash", ".pl", ".py"])
    assert len(again) == 3

    summary = engine.generate_summary(reports)
    assert summary["total_files"] == 3
    assert summary["successful"] == 3
    assert summary["unsupported"] == 1
    assert summary["warnings"] == 1
    assert summary["written_to_disk"] == 3
    assert summary["system_errors"] == 0


def test_same_stem_scripts_get_distinct_outputs(workspace):
    (workspace / "deploy.pl").write_text('print "perl";\n')

    reports = ConversionEngine(workspace).scan_directory(dry_run=False)
    outputs = {r["output_path"] for r in reports}

    assert len(outputs) == 2
    assert (workspace / "deploy_sh_converted.py").read_text().rstrip().endswith("# rsync -a src/ dst/")
    assert (workspace / "deploy_pl_converted.py").read_text().rstrip().endswith('print("perl")')


def test_output_dir_mirrors_workspace_tree(workspace, tmp_path_factory):
    for sub in ("a", "b"):
        (workspace / sub).mkdir()
        (workspace / sub / "run.sh").write_text(f"echo {sub}\n")
    out_dir = tmp_path_factory.mktemp("out")

    ConversionEngine(workspace, output_dir=out_dir).scan_directory(dry_run=False)

    assert (out_dir / "a" / "run_sh_converted.py").read_text().rstrip().endswith("print(a)")
    assert (out_dir / "b" / "run_sh_converted.py").read_text().rstrip().endswith("print(b)")
    assert (out_dir / "deploy_sh_converted.py").exists()


def test_scan_respects_max_depth(workspace):
    deep = workspace
    for i in range(4):
        deep = deep / f"d{i}"
    deep.mkdir(parents=True)
    (deep / "deep.sh").write_text("x=1\n")

    engine = ConversionEngine(workspace)
    shallow = [r["file_path"] for r in engine.scan_directory(max_depth=2)]
    assert shallow == ["deploy.sh"]
    assert len(engine.scan_directory(max_depth="bogus")) == 2


def test_empty_summary():
    summary = ConversionEngine(".").generate_summary([])
    assert summary["total_files"] == 0
    assert summary["success_rate"] == 0
