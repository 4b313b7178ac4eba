"""Toolboard website: catalog service and static page generator."""

__version__ = "1.0.0"
