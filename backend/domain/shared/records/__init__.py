"""Generic record/collection capability composed by entity types."""

from domain.shared.records.record_ref import RecordRef, join_path
from domain.shared.records.record_collection import RecordCollection

__all__ = [
    "RecordRef",
    "RecordCollection",
    "join_path",
]
