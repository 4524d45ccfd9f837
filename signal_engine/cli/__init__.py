"""
Command-line interface modules for the signal engine.
"""

from .analyzer import SymbolAnalyzer
from .formatter import OutputFormatter

__all__ = ["SymbolAnalyzer", "OutputFormatter"]
