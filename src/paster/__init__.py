"""
paster - materialize clipboard content into a directory.

File lists are copied, bitmaps are written as PNG and text is echoed as a
fenced block. Every artifact is reported as a Markdown reference on stdout.
"""

__version__ = "0.2.0"
