from app.validation.base import BaseDocumentValidator, ValidationSubject
from app.validation.factory import IntegrityGateFactory, ValidatorFactory
from app.validation.integrity import (
    CorruptionPolicy,
    IntegrityGate,
    NeverCorruptPolicy,
    RandomCorruptionPolicy,
)

__all__ = [
    "BaseDocumentValidator",
    "CorruptionPolicy",
    "IntegrityGate",
    "IntegrityGateFactory",
    "NeverCorruptPolicy",
    "RandomCorruptionPolicy",
    "ValidationSubject",
    "ValidatorFactory",
]
