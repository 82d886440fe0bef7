"""
Rendering Context

Responsibilities:
- Compiles generated LaTeX to PDF with the configured compiler
- Reports LaTeX errors and warnings

Owns: LaTeX compilation
Never: Modifies generated content
"""

from vitae.contexts.rendering.compiler import CompilationResult, compile_latex

__all__ = ["CompilationResult", "compile_latex"]
