"""Helm Whatup - check installed Helm releases against cached repository indices."""

__version__ = "0.1.0"
