"""
Export Orchestration

Reads a CV source, assembles the LaTeX document and writes it to disk, with
timing and logging around the pure assembly step.
"""

import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from vitae.contexts.intake.yaml_loader import load_tree
from vitae.contexts.templating.assembler import DocumentAssembler
from vitae.contexts.templating.exceptions import TemplateRenderError
from vitae.contexts.templating.logger import (
    _log_error,
    log_export_result,
    log_export_start,
    setup_templating_logger,
)
from vitae.utils.timestamp import now, today

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


@dataclass
class ExportResult:
    """Result from export_cv() orchestration function."""

    success: bool
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    error: Optional[str] = None
    time_s: float = 0.0
    log_dir: Optional[Path] = None


def export_cv(
    input_path: Path,
    output_path: Optional[Path] = None,
    stamp: bool = False,
    assembler: Optional[DocumentAssembler] = None,
    log_dir: Optional[Path] = None,
) -> ExportResult:
    """
    Export a CV source (.org outline or .yaml) to a LaTeX file.

    Args:
        input_path: CV source file
        output_path: Target .tex file (default: input path with .tex suffix)
        stamp: Add today's date to the header
        assembler: Assembler to use (default: one built on the packaged schema)
        log_dir: Log directory (default: LOGS_PATH/export_<timestamp>)

    Returns:
        ExportResult describing the outcome
    """
    input_path = Path(input_path)
    output_path = Path(output_path) if output_path else input_path.with_suffix(".tex")
    log_dir = log_dir or LOGS_PATH / f"export_{now()}"

    log_file = setup_templating_logger(log_dir, source=input_path)
    log_export_start(input_path, log_file)
    start_time = time.time()

    try:
        tree = load_tree(input_path)
        assembler = assembler or DocumentAssembler()
        latex = assembler.assemble(tree, stamp=today() if stamp else None)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(latex, encoding="utf-8")
    except (OSError, ValueError, TemplateRenderError) as e:
        # InvalidYAMLStructureError is a ValueError
        _log_error(f"Failed to export {input_path.name}: {e}")
        return ExportResult(
            success=False,
            input_path=input_path,
            error=str(e),
            time_s=time.time() - start_time,
            log_dir=log_dir,
        )

    elapsed = time.time() - start_time
    log_export_result(input_path, output_path, elapsed)
    return ExportResult(
        success=True,
        input_path=input_path,
        output_path=output_path,
        time_s=elapsed,
        log_dir=log_dir,
    )
