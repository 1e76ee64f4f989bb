# Path: assetindex/__init__.py
# Purpose: Package initializer for the CDN image index utilities.
# Layer: root.
# Details: Aggregates configuration, core indexing, purge workflow, and CLI scripts.

__version__ = "0.1.0"
