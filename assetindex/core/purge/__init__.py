# Path: assetindex/core/purge/__init__.py
# Purpose: Package initializer for the image purge workflow.
# Layer: core/purge.
# Details: Exposes the purger and its plan/report types.

from .purger import ImagePurger, PurgeCandidate, PurgePlan, PurgeReport, SkippedSidecar, parse_cutoff

__all__ = ["ImagePurger", "PurgeCandidate", "PurgePlan", "PurgeReport", "SkippedSidecar", "parse_cutoff"]
