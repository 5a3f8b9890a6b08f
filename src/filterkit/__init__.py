"""
FilterKit - loot filter rule-file toolkit

FilterKit parses, edits, and re-serializes the line-oriented rule files used
to control item display, keeping stable block identities across reparses so
an editor can switch between raw text and structured views.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
