"""Ordered keyword tables for document-type detection.

Order is precedence: agricultural registry types come first because their
documents also mention generic financial vocabulary. Only DICOSE and DETA
match on a bare filename token; every other type must be recognized from
content (which, for binary uploads, is the filename itself).

``patterns`` are regular expressions searched in the normalized content. A
bare "deta" is matched as a whole word so that "detalle" stays out.
"""

from dataclasses import dataclass

from app.documents.models import DocumentType


@dataclass(frozen=True)
class KeywordRule:
    document_type: DocumentType
    keywords: tuple[str, ...]
    filename_tokens: tuple[str, ...] = ()
    patterns: tuple[str, ...] = ()


DICOSE_KEYWORDS = (
    "dicose",
    "registro dicose",
    "declaración jurada dicose",
    "declaración dicose",
    "certificado dicose",
    "dicose certificate",
    "agricultural registration",
    "contralor de semovientes",
)

DETA_KEYWORDS = (
    "declaración deta",
    "registro deta",
    "certificado deta",
    "documento deta",
    "deta certificate",
    "agricultural declaration",
    "declaración técnica agropecuaria",
)

CASHFLOW_KEYWORDS = (
    "flujo de fondos",
    "flujo de caja",
    "proyección de fondos",
    "cashflow",
    "cash flow",
    "cash-flow",
    "projected cashflow",
    "cash projection",
    "actividades operativas",
    "actividades de inversión",
    "actividades de financiación",
    "operating activities",
    "investing activities",
    "financing activities",
    "net cash flow",
    "cash receipts",
    "cash payments",
    "cash position",
)

BALANCE_KEYWORDS = (
    "balance",
    "estado de situación",
    "estados contables",
    "estado de resultados",
    "financial statement",
    "balance sheet",
    "income statement",
    "profit and loss",
    "p&l",
    "statement of financial position",
    "activo",
    "pasivo",
    "patrimonio",
    "assets",
    "liabilities",
    "equity",
    "revenue",
    "expenses",
    "net income",
    "comprehensive income",
    "retained earnings",
)

PROFESSIONAL_REPORT_KEYWORDS = (
    "informe profesional",
    "informe de compilación",
    "revisión limitada",
    "informe de auditoría",
    "dictamen",
    "contador público",
    "accountant declaration",
    "accountant statement",
    "cpa declaration",
    "certified public accountant",
    "auditor declaration",
    "professional opinion",
    "accountant certification",
    "financial review",
    "compilation report",
    "certified by",
    "prepared by cpa",
    "accountant signature",
)

KEYWORD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(DocumentType.DICOSE, DICOSE_KEYWORDS, filename_tokens=("dicose",)),
    KeywordRule(
        DocumentType.DETA,
        DETA_KEYWORDS,
        filename_tokens=("deta",),
        patterns=(r"\bdeta\b",),
    ),
    KeywordRule(DocumentType.CASHFLOW, CASHFLOW_KEYWORDS),
    KeywordRule(DocumentType.BALANCE, BALANCE_KEYWORDS),
    KeywordRule(DocumentType.PROFESSIONAL_REPORT, PROFESSIONAL_REPORT_KEYWORDS),
)
