"""Paprika archive storage layer.

This package serializes mapped recipes into Paprika import archives
and reads those archives back for inspection.
"""
