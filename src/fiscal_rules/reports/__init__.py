"""Report generators."""

from .excel_generator import Model182ExcelReport

__all__ = ["Model182ExcelReport"]
