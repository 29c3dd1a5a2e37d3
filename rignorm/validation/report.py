"""
Validation report records and their renderings.

A ValidationReport is an immutable snapshot of one validation run. The
plain-text and HTML renderings are pure functions of the report: they keep
the order of errors and warnings and add no logic of their own.
"""

from typing import NamedTuple, Optional, Tuple
import html
import logging
import numpy as np

logger = logging.getLogger(__name__)

RULE = '=' * 60


class AssetInfo(NamedTuple):
    """Descriptive facts gathered while validating."""
    has_mesh: bool = False
    mesh_type: Optional[str] = None
    bone_count: int = 0
    animation_count: int = 0
    has_textures: bool = False
    mesh_size: Optional[np.ndarray] = None                      # (3,) or None if not measured
    mesh_bounds: Optional[Tuple[np.ndarray, np.ndarray]] = None  # (min, max) or None


class ValidationReport(NamedTuple):
    """Outcome of validating one asset."""
    is_valid: bool
    errors: Tuple[str, ...]
    warnings: Tuple[str, ...]
    info: AssetInfo


def _format_size(size: np.ndarray, precision: int = 2, sep: str = ' x ') -> str:
    return sep.join(f"{value:.{precision}f}" for value in size)


def format_report_text(report: ValidationReport, model_name: str = '') -> str:
    """
    Render a report as a plain-text block.

    Args:
        report: Report to render
        model_name: Asset name shown in the title

    Returns:
        Multi-line string
    """
    info = report.info
    title = f"Validation Report: {model_name}" if model_name else "Validation Report"
    lines = [RULE, title, RULE, '', 'Model Information:']
    lines.append(f"   Mesh Type: {info.mesh_type or 'None'}")
    lines.append(f"   Bone Count: {info.bone_count}")
    lines.append(f"   Animation Count: {info.animation_count}")
    lines.append(f"   Has Textures: {'Yes' if info.has_textures else 'No'}")
    if info.mesh_size is not None:
        lines.append(f"   Mesh Size: {_format_size(info.mesh_size)} units")

    if report.errors:
        lines.extend(['', 'ERRORS:'])
        lines.extend(f"   {error}" for error in report.errors)

    if report.warnings:
        lines.extend(['', 'WARNINGS:'])
        lines.extend(f"   {warning}" for warning in report.warnings)

    lines.extend(['', RULE])
    if report.is_valid:
        lines.append('VALIDATION PASSED - Model is ready to use')
    else:
        lines.append('VALIDATION FAILED - Model cannot be used')
    lines.append(RULE)

    return '\n'.join(lines)


def format_report_html(report: ValidationReport) -> str:
    """Render a report as a self-contained HTML fragment."""
    info = report.info
    parts = [
        '<div style="font-family: monospace; padding: 10px; background: #1a1a2e; '
        'color: #fff; border-radius: 5px;">',
        '<h3 style="margin: 0 0 10px 0;">Validation Report</h3>',
        '<div style="margin-bottom: 10px;">',
        f"<div>Bones: <strong>{info.bone_count}</strong></div>",
        f"<div>Animations: <strong>{info.animation_count}</strong></div>",
    ]
    if info.mesh_size is not None:
        size = _format_size(info.mesh_size, precision=1, sep=' &times; ')
        parts.append(f"<div>Size: <strong>{size}</strong></div>")
    parts.append('</div>')

    if report.errors:
        parts.append('<div style="color: #ff6b6b; margin-bottom: 10px;">')
        parts.append('<strong>ERRORS:</strong><br>')
        for error in report.errors:
            parts.append(f'<div style="margin-left: 10px;">{html.escape(error)}</div>')
        parts.append('</div>')

    if report.warnings:
        parts.append('<div style="color: #ffd93d; margin-bottom: 10px;">')
        parts.append('<strong>WARNINGS:</strong><br>')
        for warning in report.warnings:
            parts.append(f'<div style="margin-left: 10px;">{html.escape(warning)}</div>')
        parts.append('</div>')

    if report.is_valid:
        parts.append('<div style="color: #6bcf7f; font-weight: bold;">VALIDATION PASSED</div>')
    else:
        parts.append('<div style="color: #ff6b6b; font-weight: bold;">VALIDATION FAILED</div>')

    parts.append('</div>')
    return ''.join(parts)


def log_report(report: ValidationReport, model_name: str = '') -> None:
    """Write the text rendering through logging, at warning level when invalid."""
    level = logging.INFO if report.is_valid else logging.WARNING
    for line in format_report_text(report, model_name).splitlines():
        logger.log(level, line)
