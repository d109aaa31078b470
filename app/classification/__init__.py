from app.classification.classifier import TypeClassifier
from app.classification.keywords import KEYWORD_RULES, KeywordRule

__all__ = ["KEYWORD_RULES", "KeywordRule", "TypeClassifier"]
