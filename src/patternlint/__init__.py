"""
patternlint - block pattern metadata linter

Checks that WordPress block pattern files declare a required base category
in their file-level docblock.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
