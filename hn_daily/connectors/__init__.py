"""Connectors module - external tool integrations."""

from hn_daily.connectors.pdf_converter import ConversionResult, PdfConverter

__all__ = ["ConversionResult", "PdfConverter"]
