from app.config.settings import Settings
from app.documents.models import DocumentType
from app.oracle.base import BaseOracle
from app.validation.balance import BalanceValidator
from app.validation.base import BaseDocumentValidator
from app.validation.cashflow import CashflowValidator
from app.validation.deta import DetaValidator
from app.validation.dicose import DicoseValidator
from app.validation.integrity import (
    CorruptionPolicy,
    IntegrityGate,
    NeverCorruptPolicy,
    RandomCorruptionPolicy,
)
from app.validation.professional_report import ProfessionalReportValidator
from app.validation.unrecognized import UnrecognizedValidator


class ValidatorFactory:
    @staticmethod
    def create(oracle: BaseOracle) -> dict[DocumentType, BaseDocumentValidator]:
        return {
            DocumentType.DICOSE: DicoseValidator(),
            DocumentType.DETA: DetaValidator(oracle),
            DocumentType.CASHFLOW: CashflowValidator(oracle),
            DocumentType.BALANCE: BalanceValidator(oracle),
            DocumentType.PROFESSIONAL_REPORT: ProfessionalReportValidator(oracle),
            DocumentType.UNRECOGNIZED: UnrecognizedValidator(),
        }


class IntegrityGateFactory:
    @staticmethod
    def create(settings: Settings) -> IntegrityGate:
        policy: CorruptionPolicy
        if settings.corruption_rate <= 0:
            policy = NeverCorruptPolicy()
        else:
            policy = RandomCorruptionPolicy(settings.corruption_rate, settings.corruption_seed)
        return IntegrityGate(policy)
