from typing import Iterable, Optional, Sequence
from models import VocabularyAnalysis
from services.lexicon import ADVANCED_VOCABULARY, COMMON_IDIOMS, tokenize

# Topic relevance reported when there is nothing to compare against
NEUTRAL_TOPIC_RELEVANCE = 0.5


class VocabularyAnalyzer:
    def __init__(self,
                 advanced_words: Optional[Iterable[str]] = None,
                 idioms: Optional[Iterable[str]] = None):
        words = advanced_words if advanced_words is not None else ADVANCED_VOCABULARY
        self.advanced_words = {w.lower() for w in words}
        self.idioms = list(idioms if idioms is not None else COMMON_IDIOMS)

    def analyze_vocabulary(self,
                           transcript: str,
                           topic_keywords: Sequence[str] = ()) -> VocabularyAnalysis:
        """Lexical diversity, advanced word use, idioms and topic relevance"""
        tokens = tokenize(transcript)
        total_words = len(tokens)
        unique = set(tokens)

        advanced = [t for t in tokens if t in self.advanced_words]
        advanced_seen = list(dict.fromkeys(advanced))

        # Idioms are matched against the normalised token stream so that
        # punctuation and casing in the transcript do not matter
        normalised = " " + " ".join(tokenize(transcript, min_length=1)) + " "
        found_idioms = [
            idiom for idiom in self.idioms
            if " " + " ".join(tokenize(idiom, min_length=1)) + " " in normalised
        ]

        return VocabularyAnalysis(
            unique_words=len(unique),
            total_words=total_words,
            lexical_diversity=len(unique) / total_words if total_words else 0.0,
            advanced_vocabulary_count=len(advanced),
            advanced_vocabulary_ratio=len(advanced) / total_words if total_words else 0.0,
            advanced_words=advanced_seen,
            idioms=found_idioms,
            topic_relevance=self.topic_relevance(unique, topic_keywords),
        )

    def topic_relevance(self, transcript_words: set, topic_keywords: Sequence[str]) -> float:
        """Share of the expected topic keywords that were actually used"""
        keywords = set()
        for phrase in topic_keywords:
            keywords.update(t for t in tokenize(phrase) if len(t) > 2)
        if not keywords:
            return NEUTRAL_TOPIC_RELEVANCE
        hits = len(keywords & transcript_words)
        return min(hits / len(keywords), 1.0)
