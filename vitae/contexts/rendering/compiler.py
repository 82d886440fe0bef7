"""
LaTeX Compilation Module

Handles compilation of generated .tex files to PDF. The schema preamble uses
fontspec, so the default compiler is xelatex.
"""

import os
import re
import shutil
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from vitae.contexts.rendering.logger import log_compilation_result, log_compilation_start

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "xelatex")
KEEP_LATEX_ARTIFACTS = os.getenv("KEEP_LATEX_ARTIFACTS", "false").lower() == "true"

# LaTeX intermediate files created during compilation
LATEX_ARTIFACTS = [".aux", ".log", ".out", ".toc"]


@dataclass
class CompilationResult:
    """
    Result of LaTeX compilation.

    Attributes:
        success: Whether compilation succeeded
        pdf_path: Path to generated PDF (None if failed)
        stdout: Standard output from the compiler
        stderr: Standard error from the compiler
        errors: List of parsed LaTeX errors
        warnings: List of parsed LaTeX warnings
    """

    success: bool
    pdf_path: Optional[Path] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _parse_latex_log(log_content: str) -> tuple[List[str], List[str]]:
    """
    Parse LaTeX log file for errors and warnings.

    Args:
        log_content: Content of the .log file

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []

    # LaTeX error pattern: "! Error message"
    error_pattern = re.compile(r"^! (.+)$", re.MULTILINE)
    for match in error_pattern.finditer(log_content):
        errors.append(match.group(1).strip())

    warning_patterns = [
        r"LaTeX Warning: (.+)",
        r"Package \w+ Warning: (.+)",
        r"Overfull \\hbox \((.+)\)",
        r"Underfull \\hbox \((.+)\)",
    ]

    for pattern in warning_patterns:
        compiled = re.compile(pattern, re.MULTILINE)
        for match in compiled.finditer(log_content):
            warnings.append(match.group(1).strip())

    return errors, warnings


def _remove_artifacts(tex_path: Path) -> None:
    """Remove intermediate LaTeX files next to tex_path."""
    base_path = tex_path.parent / tex_path.stem

    for ext in LATEX_ARTIFACTS:
        artifact_path = base_path.with_suffix(ext)
        if artifact_path.exists():
            artifact_path.unlink()


def compile_latex(
    tex_file: Path,
    compile_dir: Optional[Path] = None,
    num_passes: int = 2,
    keep_artifacts: bool = KEEP_LATEX_ARTIFACTS,
    compiler: str = LATEX_COMPILER,
    verbose: bool = False,
) -> CompilationResult:
    """
    Compile a LaTeX file to PDF.

    Args:
        tex_file: Path to the .tex file to compile
        compile_dir: Output directory (default: next to tex_file)
        num_passes: Number of compiler passes (default: 2 for cross-references)
        keep_artifacts: Keep intermediate files (default: from KEEP_LATEX_ARTIFACTS env)
        compiler: Compiler executable (default: from LATEX_COMPILER env, else xelatex)
        verbose: Log full compiler output

    Returns:
        CompilationResult with success status and diagnostic information
    """
    tex_file = Path(tex_file).resolve()
    if not tex_file.exists():
        return CompilationResult(success=False, errors=[f"TeX file not found: {tex_file}"])

    if shutil.which(compiler) is None:
        return CompilationResult(success=False, errors=[f"LaTeX compiler not found: {compiler}"])

    original_tex_file = tex_file
    if compile_dir is None:
        compile_dir = tex_file.parent
    else:
        compile_dir = Path(compile_dir).resolve()
        compile_dir.mkdir(parents=True, exist_ok=True)
        if compile_dir != tex_file.parent:
            tex_file = compile_dir / tex_file.name
            shutil.copy2(original_tex_file, tex_file)

    # Clean any existing output files to ensure unambiguous success detection
    stem = tex_file.stem
    for ext in [".pdf"] + LATEX_ARTIFACTS:
        old_file = compile_dir / f"{stem}{ext}"
        if old_file.exists():
            old_file.unlink()

    log_compilation_start(tex_file, num_passes, compile_dir)
    start_time = time.time()

    all_stdout = []
    all_stderr = []
    success = True

    for _ in range(num_passes):
        cmd = [
            compiler,
            "-interaction=nonstopmode",
            "-file-line-error",
            tex_file.name,
        ]

        result = subprocess.run(
            cmd,
            cwd=compile_dir,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )

        all_stdout.append(result.stdout)
        all_stderr.append(result.stderr)

        if result.returncode != 0:
            success = False
            break

    log_file = compile_dir / f"{stem}.log"
    errors = []
    warnings = []

    if log_file.exists():
        log_content = log_file.read_text(encoding="utf-8", errors="replace")
        errors, warnings = _parse_latex_log(log_content)

    pdf_path = compile_dir / f"{stem}.pdf"
    if not pdf_path.exists():
        success = False
        if not errors:
            errors.append("PDF file was not generated")
    elif len(errors) == 0:
        # A PDF without logged errors counts as success even on a non-zero exit
        success = True

    if not keep_artifacts:
        _remove_artifacts(tex_file)

    if original_tex_file != tex_file and tex_file.exists():
        tex_file.unlink()

    compilation = CompilationResult(
        success=success,
        pdf_path=pdf_path if pdf_path.exists() else None,
        stdout="\n".join(all_stdout),
        stderr="\n".join(all_stderr),
        errors=errors,
        warnings=warnings,
    )
    log_compilation_result(tex_file, compilation, time.time() - start_time, verbose=verbose)
    return compilation
