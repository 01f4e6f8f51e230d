"""Integration tests for the conversion engine.

These tests exercise the public API end to end: classification, Markdown
rendering with sanitization, HTML to Markdown conversion, and round trips
checked with the conversion validator. No external services are used.
"""
