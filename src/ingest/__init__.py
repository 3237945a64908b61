"""Mela archive ingestion.

This package reads Mela export archives into typed recipe records
and drives the end-to-end conversion pipeline.
"""
