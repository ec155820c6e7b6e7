# menu_extract/errors.py
"""
Exception types for the menu extraction pipeline.

Three families of problems raise:
- load-time problems (bad config, malformed knowledge base records)
- caller contract violations (text AND elements, or neither)
- OCR adapter failures (no tesseract binary, unreadable image)

Garbage input never raises; it degrades to an empty or low-confidence menu.
"""

from __future__ import annotations

from typing import Optional


class MenuExtractError(Exception):
    """Base class for every error raised by menu_extract."""


class ConfigError(MenuExtractError):
    """Configuration could not be loaded or failed validation."""


class KnowledgeBaseError(ConfigError):
    """A dish knowledge base record is malformed."""

    def __init__(self, message: str, index: Optional[int] = None):
        self.index = index
        if index is not None:
            message = f"record {index}: {message}"
        super().__init__(message)


class ContractViolation(MenuExtractError, ValueError):
    """The caller supplied an invalid input combination."""


class OcrError(MenuExtractError):
    """The OCR engine is missing or could not read the image."""
