import re

from app.classification.keywords import KEYWORD_RULES, KeywordRule
from app.documents.models import DocumentType
from app.extraction.normalizer import TextNormalizer


class TypeClassifier:
    """First-match-wins keyword classifier over an ordered rule table."""

    def __init__(
        self,
        normalizer: TextNormalizer,
        rules: tuple[KeywordRule, ...] = KEYWORD_RULES,
    ) -> None:
        self._normalizer = normalizer
        self._rules = tuple(
            KeywordRule(
                document_type=rule.document_type,
                keywords=normalizer.normalize_all(rule.keywords),
                filename_tokens=normalizer.normalize_all(rule.filename_tokens),
                patterns=rule.patterns,
            )
            for rule in rules
        )
        self._compiled: dict[DocumentType, tuple[re.Pattern[str], ...]] = {
            rule.document_type: tuple(re.compile(pattern) for pattern in rule.patterns)
            for rule in rules
        }

    def classify(self, normalized_text: str, filename: str) -> DocumentType:
        """Return the first type whose rule matches, else ``Unrecognized``."""
        normalized_name = self._normalizer.normalize(filename)
        for rule in self._rules:
            if self._matches(rule, normalized_text, normalized_name):
                return rule.document_type
        return DocumentType.UNRECOGNIZED

    def _matches(self, rule: KeywordRule, text: str, filename: str) -> bool:
        if any(keyword in text for keyword in rule.keywords):
            return True
        if any(pattern.search(text) for pattern in self._compiled[rule.document_type]):
            return True
        return any(token in filename for token in rule.filename_tokens)
