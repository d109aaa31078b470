from app.consistency.locks import KeyedLocks
from app.consistency.requirements import completion_status, required_document_types
from app.consistency.upsert import UpsertAction, UpsertResult, upsert
from app.consistency.years import YearConsistency, year_consistency

__all__ = [
    "KeyedLocks",
    "UpsertAction",
    "UpsertResult",
    "YearConsistency",
    "completion_status",
    "required_document_types",
    "upsert",
    "year_consistency",
]
