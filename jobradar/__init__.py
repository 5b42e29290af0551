"""Golang fresher job radar: filter, score, deduplicate and report postings."""

__version__ = "0.1.0"
