"""
COBOL-specific modules for the Formatter.

This package contains COBOL language handling:
- constants: Column geometry and keyword vocabularies
- column_handler: Fixed-format line views and rendering
- patterns: Regexes for line classification
"""
