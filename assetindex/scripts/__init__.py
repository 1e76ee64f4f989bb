# Path: assetindex/scripts/__init__.py
# Purpose: Package initializer for command-line entry points.
# Layer: scripts.
# Details: Each module exposes ``main(argv) -> int`` used by the console scripts.
