"""
Utilities for the arf.json tools.
"""

from arf_tools.utils.logging import ConsoleFormatter, StructuredFormatter, setup_logger

__all__ = ['ConsoleFormatter', 'StructuredFormatter', 'setup_logger']
