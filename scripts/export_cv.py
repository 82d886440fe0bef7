#!/usr/bin/env python3
"""
CV Export CLI

Exports CV sources (org-style outlines or YAML) to LaTeX, optionally compiling
the result, and exports the unfilled schema templates.

Commands:
    export - Export a CV source to a .tex file (optionally compile to PDF)
    schema - Write the unfilled schema templates to a directory

Examples:\n

    export_cv.py export cv.org                       # Writes cv.tex next to the source

    export_cv.py export cv.yaml out/cv.tex --compile # Export and compile with xelatex

    export_cv.py export cv.org --stamp               # Add today's date to the header

    export_cv.py schema out/schema                   # Export templates for manual use
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from vitae.contexts.rendering import compile_latex
from vitae.contexts.templating import SchemaTemplate, export_cv

app = typer.Typer(
    help="Export section outlines to LaTeX CVs",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command()
def export(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="CV source (.org outline or .yaml)",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    output_file: Annotated[
        Optional[Path],
        typer.Argument(
            help="Output .tex file (defaults to the input name with .tex)",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    compile_pdf: Annotated[
        bool,
        typer.Option("--compile", "-c", help="Compile the generated .tex to PDF"),
    ] = False,
    stamp: Annotated[
        bool,
        typer.Option("--stamp", help="Add today's date to the header"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show full compiler output in the log"),
    ] = False,
):
    """
    Export a CV source to LaTeX.

    The output carries no date unless --stamp is given, so exporting an
    unchanged source twice yields identical files.
    """
    result = export_cv(input_file, output_file, stamp=stamp)

    if not result.success:
        typer.echo(f"✗ {input_file.name}: {result.error}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"✓ {result.output_path}")

    if compile_pdf:
        compilation = compile_latex(result.output_path, verbose=verbose)
        if not compilation.success:
            for error in compilation.errors[:5]:
                typer.echo(f"  {error}", err=True)
            typer.echo(f"✗ Compilation failed (log: {result.log_dir})", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"✓ {compilation.pdf_path}")


@app.command()
def schema(
    dest_dir: Annotated[
        Path,
        typer.Argument(help="Directory to write the templates to", file_okay=False, resolve_path=True),
    ],
):
    """Write the unfilled schema templates for manual use."""
    written = SchemaTemplate().export(dest_dir)
    for path in written:
        typer.echo(f"✓ {path}")


if __name__ == "__main__":
    app()
