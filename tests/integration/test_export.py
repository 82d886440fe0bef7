"""
Integration tests for export orchestration, compilation and the CLI.
"""

import importlib.util
import shutil
from pathlib import Path

import pytest
from typer.testing import CliRunner

from vitae.contexts.rendering import compile_latex
from vitae.contexts.templating import DocumentAssembler, SchemaTemplate, export_cv
from vitae.contexts.templating.registries import TemplateRegistry

FIXTURES = Path(__file__).parent.parent / "fixtures"
SCRIPT_PATH = Path(__file__).parent.parent.parent / "scripts" / "export_cv.py"

XELATEX_AVAILABLE = shutil.which("xelatex") is not None
skip_if_no_xelatex = pytest.mark.skipif(
    not XELATEX_AVAILABLE,
    reason="xelatex not installed - install TeX Live, MiKTeX, or MacTeX"
)


def load_cli():
    spec = importlib.util.spec_from_file_location("export_cv_script", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.app


@pytest.mark.integration
def test_export_writes_tex(tmp_path):
    output = tmp_path / "out" / "cv.tex"
    result = export_cv(FIXTURES / "sample_cv.org", output, log_dir=tmp_path / "logs")

    assert result.success, result.error
    assert result.output_path == output
    assert output.exists()
    assert "\\cvname{Jane Doe}" in output.read_text(encoding="utf-8")
    assert (tmp_path / "logs" / "template.log").exists()


@pytest.mark.integration
def test_export_default_output_path(tmp_path):
    source = tmp_path / "cv.yaml"
    shutil.copy(FIXTURES / "sample_cv.yaml", source)

    result = export_cv(source, log_dir=tmp_path / "logs")

    assert result.success, result.error
    assert result.output_path == tmp_path / "cv.tex"


@pytest.mark.integration
def test_export_is_byte_identical_across_runs(tmp_path):
    first = export_cv(FIXTURES / "sample_cv.org", tmp_path / "a.tex", log_dir=tmp_path / "logs")
    second = export_cv(FIXTURES / "sample_cv.org", tmp_path / "b.tex", log_dir=tmp_path / "logs")

    assert first.success and second.success
    assert first.output_path.read_bytes() == second.output_path.read_bytes()


@pytest.mark.integration
def test_export_stamp(tmp_path):
    result = export_cv(
        FIXTURES / "sample_cv.org", tmp_path / "cv.tex", stamp=True, log_dir=tmp_path / "logs"
    )

    assert result.success
    assert "\\cvstamp{" in result.output_path.read_text(encoding="utf-8")


@pytest.mark.integration
def test_export_invalid_yaml_reports_failure(tmp_path):
    source = tmp_path / "broken.yaml"
    source.write_text("metadata:\n  author: Nobody\n", encoding="utf-8")

    result = export_cv(source, log_dir=tmp_path / "logs")

    assert not result.success
    assert "sections" in result.error
    assert result.output_path is None
    assert not (tmp_path / "broken.tex").exists()


@pytest.mark.integration
def test_export_missing_source_reports_failure(tmp_path):
    result = export_cv(tmp_path / "missing.org", log_dir=tmp_path / "logs")

    assert not result.success
    assert result.error


@pytest.mark.integration
def test_export_missing_templates_reports_failure(tmp_path):
    assembler = DocumentAssembler(schema=SchemaTemplate(TemplateRegistry(tmp_path / "no-templates")))

    result = export_cv(
        FIXTURES / "sample_cv.org", tmp_path / "cv.tex", assembler=assembler, log_dir=tmp_path / "logs"
    )

    assert not result.success
    assert "preamble" in result.error
    assert not (tmp_path / "cv.tex").exists()


@pytest.mark.integration
def test_export_keeps_dollar_braces_in_text(tmp_path):
    source = tmp_path / "cv.yaml"
    source.write_text(
        "sections:\n  - title: Projects\n    text: 'cost ${price}'\n", encoding="utf-8"
    )

    result = export_cv(source, log_dir=tmp_path / "logs")

    assert result.success, result.error
    assert "cost \\$\\{price\\}" in result.output_path.read_text(encoding="utf-8")


@pytest.mark.integration
def test_compile_missing_tex_file(tmp_path):
    result = compile_latex(tmp_path / "missing.tex")

    assert not result.success
    assert "not found" in result.errors[0]


@pytest.mark.integration
def test_compile_missing_compiler(tmp_path):
    tex_file = tmp_path / "cv.tex"
    tex_file.write_text("\\documentclass{article}\n", encoding="utf-8")

    result = compile_latex(tex_file, compiler="no-such-latex-compiler")

    assert not result.success
    assert "no-such-latex-compiler" in result.errors[0]


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_xelatex
def test_exported_cv_compiles(tmp_path):
    export = export_cv(FIXTURES / "sample_cv.org", tmp_path / "cv.tex", log_dir=tmp_path / "logs")
    assert export.success

    result = compile_latex(export.output_path, compile_dir=tmp_path / "compile")

    assert result.success, f"Compilation failed with errors: {result.errors}"
    assert result.pdf_path.exists()
    assert result.pdf_path.stat().st_size > 0
    assert not (tmp_path / "compile" / "cv.aux").exists()


@pytest.mark.integration
def test_cli_export(tmp_path, monkeypatch):
    monkeypatch.setattr("vitae.contexts.templating.converter.LOGS_PATH", tmp_path / "logs")
    output = tmp_path / "cv.tex"

    result = CliRunner().invoke(load_cli(), ["export", str(FIXTURES / "sample_cv.org"), str(output)])

    assert result.exit_code == 0, result.output
    assert output.exists()


@pytest.mark.integration
def test_cli_export_failure_exit_code(tmp_path, monkeypatch):
    monkeypatch.setattr("vitae.contexts.templating.converter.LOGS_PATH", tmp_path / "logs")
    source = tmp_path / "broken.yaml"
    source.write_text("sections: []\nextra: [\n", encoding="utf-8")

    result = CliRunner().invoke(load_cli(), ["export", str(source), str(tmp_path / "cv.tex")])

    assert result.exit_code == 1


@pytest.mark.integration
def test_cli_schema(tmp_path):
    result = CliRunner().invoke(load_cli(), ["schema", str(tmp_path / "schema")])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "schema" / "types" / "entry" / "template.tex.jinja").exists()
    assert (tmp_path / "schema" / "structure" / "document.tex.jinja").exists()
