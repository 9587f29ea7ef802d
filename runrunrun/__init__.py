"""Resolve files and URIs to commands through ordered matching rules."""

__version__ = "0.1.0"
