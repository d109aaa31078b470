"""Concept-presence checks shared by the structural validators.

Texts reaching these helpers are already normalized (lowercase, accents
folded), so the synonyms below are plain ASCII.
"""

CASHFLOW_CONCEPTS: dict[str, tuple[str, ...]] = {
    "operating": ("operating", "operativ"),
    "investing": ("investing", "inversion"),
    "financing": ("financing", "financiacion", "financiamiento"),
    "cash": ("cash", "caja", "efectivo"),
}

BALANCE_CONCEPTS: dict[str, tuple[str, ...]] = {
    "assets": ("assets", "activo"),
    "liabilities": ("liabilities", "pasivo"),
    "income": ("income", "revenue", "ingreso", "resultado"),
    "equity": ("equity", "patrimonio"),
}

PROFESSIONAL_REPORT_CONCEPTS: dict[str, tuple[str, ...]] = {
    "certification": ("certif",),
    "declaration": ("declara",),
    "accountant": ("accountant", "contador"),
}

MIN_LENGTH_DICOSE = 50
MIN_LENGTH_DETA = 100
MIN_LENGTH_CASHFLOW = 100
MIN_LENGTH_BALANCE = 150
MIN_LENGTH_PROFESSIONAL_REPORT = 50


def missing_concepts(text: str, concepts: dict[str, tuple[str, ...]]) -> list[str]:
    """Names of the concepts none of whose synonyms appear in *text*."""
    return [
        name
        for name, synonyms in concepts.items()
        if not any(synonym in text for synonym in synonyms)
    ]
