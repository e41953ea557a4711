"""
macroasm Command-Line Interface
===============================

This package provides the ``macroasm`` command-line tool, implemented as a
Click application in :mod:`macroasm.cli.masm`.
"""

__all__ = ["masm"]
