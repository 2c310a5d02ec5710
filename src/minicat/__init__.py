"""minicat: concatenate text files to stdout with optional line numbering."""

__version__ = "0.1.0"
