"""
isoblock - Code Block Isolator

Copies a code block's asset dependencies into a sandboxed output directory.
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"

__all__ = ["__version__"]
