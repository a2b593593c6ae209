"""
Output modules for the COBOL Formatter.

This package contains:
- validator: Verification of formatted output against its source
"""
