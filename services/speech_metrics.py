import logging
from statistics import mean
from typing import Iterable, List, Mapping, Optional, Sequence
from config import Config
from models import (
    AudioQualitySummary,
    SpeakingEvaluation,
    SpeakingTranscripts,
    TranscriptionResult,
)
from services.fluency import FluencyAnalyzer
from services.grammar import GrammarAnalyzer, GrammarChecker
from services.lexicon import transcript_text
from services.pronunciation import PronunciationAnalyzer
from services.scoring import BandScorer, band_description
from services.vocabulary import VocabularyAnalyzer

logger = logging.getLogger(__name__)

SPEAKING_PARTS = (1, 2, 3)
QUALITY_ORDER = ("good", "fair", "poor")


class SpeechMetricsAnalyzer:
    """Turns transcription results into metrics and IELTS band estimates.

    Stateless: every call depends only on its arguments and on the word
    lists and grammar checker given at construction. Bad input (no
    recordings, empty transcript, zero duration, low recognition
    confidence) never raises; it lowers the confidence label and adds
    warnings instead.
    """

    def __init__(self,
                 filler_words: Optional[Iterable[str]] = None,
                 advanced_words: Optional[Iterable[str]] = None,
                 idioms: Optional[Iterable[str]] = None,
                 grammar_checker: Optional[GrammarChecker] = None,
                 scorer: Optional[BandScorer] = None):
        self.fluency_analyzer = FluencyAnalyzer(filler_words)
        self.grammar_analyzer = GrammarAnalyzer(grammar_checker)
        self.vocabulary_analyzer = VocabularyAnalyzer(advanced_words, idioms)
        self.pronunciation_analyzer = PronunciationAnalyzer()
        self.scorer = scorer or BandScorer()

    def evaluate(self,
                 transcription: TranscriptionResult,
                 topic_keywords: Sequence[str] = ()) -> SpeakingEvaluation:
        """Evaluate a single spoken response"""
        return self._evaluate({1: transcription}, topic_keywords, full_test=False)

    def evaluate_parts(self,
                       parts: Mapping[int, TranscriptionResult],
                       topic_keywords: Sequence[str] = ()) -> SpeakingEvaluation:
        """Evaluate a full test: part number (1, 2, 3) to its transcription"""
        return self._evaluate(parts, topic_keywords, full_test=True)

    def _evaluate(self,
                  parts: Mapping[int, TranscriptionResult],
                  topic_keywords: Sequence[str],
                  full_test: bool) -> SpeakingEvaluation:
        warnings: List[str] = []
        ordered = [parts[n] for n in sorted(parts)]

        if not ordered:
            warnings.append("No recordings were provided.")
        elif full_test:
            for n in SPEAKING_PARTS:
                if n not in parts:
                    warnings.append(f"Part {n} was not recorded.")

        for n in sorted(parts):
            for w in parts[n].warnings:
                warnings.append(f"Part {n}: {w}")

        full_text = " ".join(t for t in (transcript_text(p).strip() for p in ordered) if t)
        all_words = [w for p in ordered for w in p.words]
        total_duration = sum(p.audio_duration for p in ordered)
        long_turn = parts[2].audio_duration if full_test and 2 in parts else None

        fluency = self.fluency_analyzer.analyze_fluency(ordered, long_turn_duration=long_turn)
        grammar = self.grammar_analyzer.analyze_grammar(full_text)
        vocabulary = self.vocabulary_analyzer.analyze_vocabulary(full_text, topic_keywords)

        audio_quality = self._worst_quality(ordered)
        overall_confidence = self._overall_confidence(ordered)
        pronunciation = self.pronunciation_analyzer.analyze_pronunciation(all_words, overall_confidence)

        degraded = not ordered
        if ordered and fluency.total_words == 0:
            degraded = True
            if full_text.strip():
                warnings.append("Transcript has no countable words; no speech could be evaluated.")
            else:
                warnings.append("Transcript is empty; no speech could be evaluated.")
        if ordered and total_duration <= 0:
            degraded = True
            warnings.append("Audio duration is zero; speaking rate could not be measured.")
        if fluency.total_words and not fluency.timing_available:
            warnings.append("Word timings unavailable; pause analysis skipped.")
        if ordered and overall_confidence < Config.LOW_CONFIDENCE_THRESHOLD:
            warnings.append("Low transcription confidence; scores may be unreliable.")
        if degraded:
            logger.warning(f"Degraded speaking evaluation: {'; '.join(warnings)}")

        base = self.scorer.input_confidence(audio_quality, overall_confidence)
        scores = {
            "fluency_coherence": self.scorer.score_fluency(fluency, base),
            "lexical_resource": self.scorer.score_lexical(vocabulary, base),
            "grammatical_range": self.scorer.score_grammar(grammar, fluency.total_words, base),
            "pronunciation": self.scorer.score_pronunciation(
                pronunciation, fluency.total_words, base, word_level=bool(all_words)
            ),
        }
        band = self.scorer.overall_band(scores)

        transcripts = {f"part{n}": transcript_text(parts[n]) for n in SPEAKING_PARTS if n in parts}

        return SpeakingEvaluation(
            estimated_band=band,
            band_range=self.scorer.band_range(band, audio_quality),
            band_description=band_description(band),
            confidence=self.scorer.confidence_label(audio_quality, overall_confidence, degraded),
            fluency_coherence=scores["fluency_coherence"],
            lexical_resource=scores["lexical_resource"],
            grammatical_range=scores["grammatical_range"],
            pronunciation=scores["pronunciation"],
            fluency_metrics=fluency,
            grammar_analysis=grammar,
            vocabulary_analysis=vocabulary,
            pronunciation_analysis=pronunciation,
            transcripts=SpeakingTranscripts(**transcripts),
            audio_quality=AudioQualitySummary(
                overall=audio_quality,
                warnings=[w for p in ordered for w in p.warnings],
                adjustment_applied=audio_quality != "good",
            ),
            total_speaking_time=total_duration,
            warnings=warnings,
            disclaimer=Config.DISCLAIMER,
        )

    def _worst_quality(self, parts: Sequence[TranscriptionResult]) -> str:
        if not parts:
            return "poor"
        return max((p.audio_quality for p in parts), key=QUALITY_ORDER.index)

    def _overall_confidence(self, parts: Sequence[TranscriptionResult]) -> float:
        """Recognition confidence across parts, weighted by word count"""
        if not parts:
            return 0.0
        total = sum(len(p.words) for p in parts)
        if total == 0:
            return sum(self._part_confidence(p) for p in parts) / len(parts)
        return sum(self._part_confidence(p) * len(p.words) for p in parts) / total

    def _part_confidence(self, part: TranscriptionResult) -> float:
        if part.overall_confidence is not None:
            return part.overall_confidence
        if part.words:
            return mean(w.confidence for w in part.words)
        return 0.0
