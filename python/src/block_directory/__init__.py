"""
Block Directory Service

A read-only search service for discovering installable blocks in a remote catalog.
It filters out blocks that are already installed locally, normalizes catalog metadata
into a stable schema and attaches install/view links for the caller.
"""

__version__ = "1.0.0"
