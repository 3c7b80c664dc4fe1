"""
Saved object import processing.

This module handles:
- Applying import ID substitutions from conflict resolution
- Bulk creating imported objects in the target namespace
- Mapping creation outcomes back to the caller's import IDs
- Classifying failed outcomes into typed import errors
"""

from savedimport.import_.create_saved_objects import create_saved_objects
from savedimport.import_.extract_errors import extract_errors, partition_results
from savedimport.import_.import_id_map import (
    ImportIdEntry,
    ImportIdKey,
    ImportIdMap,
    build_import_id_map,
)

__all__ = [
    "create_saved_objects",
    "extract_errors",
    "partition_results",
    "ImportIdEntry",
    "ImportIdKey",
    "ImportIdMap",
    "build_import_id_map",
]
