# Path: assetindex/core/__init__.py
# Purpose: Package initializer for core application layer.
# Layer: core.
# Details: Aggregates key subpackages for models, indexing, and purging.
