"""
Asset validation and report rendering.
"""

from .report import (
    AssetInfo,
    ValidationReport,
    format_report_text,
    format_report_html,
    log_report,
)
from .validator import AssetValidator, validate_asset

__all__ = [
    "AssetInfo",
    "ValidationReport",
    "format_report_text",
    "format_report_html",
    "log_report",
    "AssetValidator",
    "validate_asset",
]
