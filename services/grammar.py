import re
from typing import Iterable, List, Optional, Protocol
from config import Config
from models import GrammarAnalysis, GrammarError
from services.lexicon import CLAUSE_MARKERS, split_sentences, tokenize


class GrammarChecker(Protocol):
    """Anything that can list grammar errors in a transcript."""

    def check(self, text: str) -> List[GrammarError]:
        ...


class NullGrammarChecker:
    """Reports no errors. Used when no checker is wired in."""

    def check(self, text: str) -> List[GrammarError]:
        return []


class GrammarAnalyzer:
    def __init__(self,
                 checker: Optional[GrammarChecker] = None,
                 clause_markers: Optional[Iterable[str]] = None):
        self.checker = checker or NullGrammarChecker()
        markers = clause_markers if clause_markers is not None else CLAUSE_MARKERS
        self.clause_re = re.compile(
            r"\b(" + "|".join(re.escape(m.lower()) for m in markers) + r")\b"
        )

    def analyze_grammar(self, transcript: str) -> GrammarAnalysis:
        """Error density from the checker plus a clause-based complexity estimate"""
        total_words = len(tokenize(transcript))
        sentences = split_sentences(transcript)

        errors = self.checker.check(transcript) if total_words else []
        error_density = len(errors) / total_words * 100 if total_words else 0.0

        complex_sentences = sum(1 for s in sentences if self.clause_re.search(s.lower()))
        ratio = complex_sentences / len(sentences) if sentences else 0.0

        return GrammarAnalysis(
            error_count=len(errors),
            error_density=round(error_density, 2),
            errors=list(errors),
            sentence_complexity=self.classify_complexity(ratio),
            complex_sentence_ratio=round(ratio, 3),
            sentence_count=len(sentences),
        )

    def classify_complexity(self, ratio: float) -> str:
        if ratio > Config.COMPLEX_RATIO:
            return "complex"
        elif ratio > Config.VARIED_RATIO:
            return "varied"
        elif ratio > Config.MODERATE_RATIO:
            return "moderate"
        return "simple"
