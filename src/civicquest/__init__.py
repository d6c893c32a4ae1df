"""Civics Word Quest: a word-grouping quiz served with FastAPI."""

__version__ = "0.1.0"
