"""Band scoring policy.

Every criterion score is a clamped, monotonic function of one metrics
record. The weights and penalties below are calibration constants; they
are not official IELTS formulas.
"""
import math
from typing import Dict, List, Optional
from config import Config
from models import (
    BandRange,
    CriterionScore,
    FluencyMetrics,
    GrammarAnalysis,
    PronunciationAnalysis,
    VocabularyAnalysis,
)

MIN_BAND = 1.0
MAX_BAND = 9.0

FILLER_PENALTY = 10.0  # per unit of hesitation ratio
PAUSE_PENALTY_PER_MINUTE = 0.2
MAX_PAUSE_PENALTY = 2.5
RATE_PENALTY = {"slow": 1.5, "moderate": 0.0, "fast": 0.0, "very-fast": 1.0}

LEXICAL_BASE = 4.0
DIVERSITY_WEIGHT = 3.0
ADVANCED_WEIGHT = 50.0
MAX_ADVANCED_BONUS = 1.5
IDIOM_BONUS = 0.25
MAX_IDIOM_BONUS = 0.5
TOPIC_WEIGHT = 0.5

GRAMMAR_BASE = 5.5
COMPLEXITY_BONUS = {"simple": 0.0, "moderate": 0.75, "varied": 1.5, "complex": 2.0}
ERROR_DENSITY_PENALTY = 0.3
MAX_ERROR_PENALTY = 4.0

PRONUNCIATION_BASE = 2.0
PRONUNCIATION_SPAN = 7.0
CLARITY_WEIGHT = 0.5
CONSISTENCY_WEIGHT = 0.2
INTELLIGIBILITY_WEIGHT = 0.3

BAND_DESCRIPTIONS = (
    (9.0, "Expert User"),
    (8.0, "Very Good User"),
    (7.0, "Good User"),
    (6.0, "Competent User"),
    (5.0, "Modest User"),
    (4.0, "Limited User"),
)


def round_half_band(value: float) -> float:
    """Round to the nearest 0.5, halves rounding up as IELTS does."""
    return math.floor(value * 2 + 0.5) / 2


def clamp_band(value: float) -> float:
    return round_half_band(min(max(value, MIN_BAND), MAX_BAND))


def band_description(band: float) -> str:
    for floor, label in BAND_DESCRIPTIONS:
        if band >= floor:
            return label
    return "Extremely Limited User"


class BandScorer:
    def __init__(self, weights: Optional[Dict[str, float]] = None):
        self.weights = dict(weights or Config.CRITERION_WEIGHTS)

    # -- input confidence -------------------------------------------------

    def input_confidence(self, audio_quality: str, overall_confidence: float) -> float:
        return Config.QUALITY_CONFIDENCE_FACTOR[audio_quality] * overall_confidence

    def criterion_confidence(self, base: float, total_words: int) -> float:
        coverage = min(total_words / Config.FULL_CONFIDENCE_WORDS, 1.0)
        return round(base * coverage, 2)

    def confidence_label(self, audio_quality: str, overall_confidence: float, degraded: bool) -> str:
        if degraded or audio_quality == "poor" or overall_confidence < Config.LOW_CONFIDENCE_THRESHOLD:
            return "low"
        if audio_quality == "fair" or overall_confidence < Config.HIGH_CONFIDENCE_THRESHOLD:
            return "medium"
        return "high"

    # -- criteria ---------------------------------------------------------

    def score_fluency(self, metrics: FluencyMetrics, base_confidence: float) -> CriterionScore:
        strengths: List[str] = []
        improvements: List[str] = []
        if metrics.total_words == 0:
            return self._no_speech(improvements)

        minutes = metrics.speaking_time / 60.0
        pauses_per_minute = metrics.total_pauses / minutes if minutes > 0 else 0.0
        raw = (MAX_BAND
               - metrics.hesitation_ratio * FILLER_PENALTY
               - min(pauses_per_minute * PAUSE_PENALTY_PER_MINUTE, MAX_PAUSE_PENALTY)
               - RATE_PENALTY[metrics.speech_rate])

        short_long_turn = (metrics.long_turn_duration is not None
                           and metrics.long_turn_duration < Config.MIN_LONG_TURN_SEC)
        if short_long_turn:
            raw = min(raw, Config.SHORT_LONG_TURN_CAP)
            improvements.append("Speak for the full two minutes in Part 2; the long turn was under a minute.")

        if metrics.speaking_time <= 0:
            raw = min(raw, Config.UNKNOWN_RATE_FLUENCY_CAP)
            feedback = "Speaking pace could not be measured because the recording length is unknown."
            improvements.append("Submit the full recording so pace and pauses can be assessed.")
        elif metrics.speech_rate == "slow":
            feedback = "Your speaking pace is slow. Try to keep talking without long gaps."
            improvements.append("Build speed by practising answers on familiar topics.")
        elif metrics.speech_rate == "very-fast":
            feedback = "Your speaking pace is very fast. Slow down a little so ideas stay clear."
            improvements.append("Pause briefly between ideas instead of rushing.")
        else:
            feedback = "Your speaking pace is appropriate."
            strengths.append("Natural speaking pace.")

        if metrics.hesitation_ratio > 0.05:
            improvements.append(
                "Reduce filler words such as " + ", ".join(f'"{w}"' for w in metrics.filler_words[:3]) + "."
            )
        else:
            strengths.append("Few filler words or hesitations.")

        if pauses_per_minute > 6:
            improvements.append("Your speech has many long pauses. Practice speaking more continuously.")
        elif metrics.timing_available and minutes > 0:
            strengths.append("Speech flows without frequent long pauses.")

        return CriterionScore(
            score=clamp_band(raw),
            confidence=self.criterion_confidence(base_confidence, metrics.total_words),
            feedback=feedback,
            strengths=strengths,
            improvements=improvements,
        )

    def score_lexical(self, analysis: VocabularyAnalysis, base_confidence: float) -> CriterionScore:
        strengths: List[str] = []
        improvements: List[str] = []
        if analysis.total_words == 0:
            return self._no_speech(improvements)

        raw = (LEXICAL_BASE
               + analysis.lexical_diversity * DIVERSITY_WEIGHT
               + min(analysis.advanced_vocabulary_ratio * ADVANCED_WEIGHT, MAX_ADVANCED_BONUS)
               + min(len(analysis.idioms) * IDIOM_BONUS, MAX_IDIOM_BONUS)
               + analysis.topic_relevance * TOPIC_WEIGHT)

        if analysis.lexical_diversity >= 0.5:
            strengths.append("Good variety of words with little repetition.")
        else:
            improvements.append("Paraphrase instead of repeating the same words.")
        if analysis.advanced_words:
            strengths.append("Uses less common vocabulary: " + ", ".join(analysis.advanced_words[:5]) + ".")
        else:
            improvements.append("Introduce some less common, topic-specific vocabulary.")
        if analysis.idioms:
            strengths.append("Uses idiomatic expressions naturally.")
        if analysis.topic_relevance < 0.3:
            improvements.append("Stay closer to the topic and use its key words.")

        return CriterionScore(
            score=clamp_band(raw),
            confidence=self.criterion_confidence(base_confidence, analysis.total_words),
            feedback=f"Lexical diversity {analysis.lexical_diversity:.2f} across {analysis.total_words} words.",
            strengths=strengths,
            improvements=improvements,
        )

    def score_grammar(self, analysis: GrammarAnalysis, total_words: int, base_confidence: float) -> CriterionScore:
        strengths: List[str] = []
        improvements: List[str] = []
        if total_words == 0:
            return self._no_speech(improvements)

        raw = (GRAMMAR_BASE
               + COMPLEXITY_BONUS[analysis.sentence_complexity]
               - min(analysis.error_density * ERROR_DENSITY_PENALTY, MAX_ERROR_PENALTY))

        if analysis.sentence_complexity in ("varied", "complex"):
            strengths.append("Mixes simple and complex sentence structures.")
        else:
            improvements.append("Use more complex sentences with because, although, which or when.")
        if analysis.error_count == 0:
            strengths.append("No grammar errors were flagged.")
        else:
            improvements.append(f"{analysis.error_count} grammar error(s) flagged; review the suggested corrections.")

        return CriterionScore(
            score=clamp_band(raw),
            confidence=self.criterion_confidence(base_confidence, total_words),
            feedback=f"Sentence complexity is {analysis.sentence_complexity}.",
            strengths=strengths,
            improvements=improvements,
        )

    def score_pronunciation(self,
                            analysis: PronunciationAnalysis,
                            total_words: int,
                            base_confidence: float,
                            word_level: bool = True) -> CriterionScore:
        strengths: List[str] = []
        improvements: List[str] = []
        if total_words == 0:
            return self._no_speech(improvements, feedback=analysis.note)

        raw = PRONUNCIATION_BASE + PRONUNCIATION_SPAN * (
            CLARITY_WEIGHT * analysis.clarity_score
            + CONSISTENCY_WEIGHT * analysis.consistency_score
            + INTELLIGIBILITY_WEIGHT * analysis.intelligibility_estimate
        )

        if analysis.clarity_score >= Config.HIGH_CONFIDENCE_THRESHOLD:
            strengths.append("Speech is clear and easy to recognise.")
        if analysis.unclear_words:
            sample = ", ".join(w.word for w in analysis.unclear_words[:5])
            improvements.append(f"Some words were hard to recognise: {sample}.")

        confidence = self.criterion_confidence(base_confidence, total_words)
        if not word_level:
            confidence = round(confidence * 0.5, 2)
            improvements.append(
                "Word-level recognition confidence was unavailable; this score uses the overall transcript confidence."
            )

        return CriterionScore(
            score=clamp_band(raw),
            confidence=confidence,
            feedback=analysis.note,
            strengths=strengths,
            improvements=improvements,
        )

    # -- overall ----------------------------------------------------------

    def overall_band(self, scores: Dict[str, CriterionScore]) -> float:
        total_weight = sum(self.weights.get(name, 0.0) for name in scores)
        if total_weight <= 0:
            return 0.0
        raw = sum(scores[name].score * self.weights.get(name, 0.0) for name in scores) / total_weight
        return round_half_band(raw)

    def band_range(self, band: float, audio_quality: str) -> BandRange:
        spread = Config.BAND_RANGE_BY_QUALITY[audio_quality]
        return BandRange(low=max(0.0, band - spread), high=min(MAX_BAND, band + spread))

    def _no_speech(self, improvements: List[str], feedback: str = "No speech was detected.") -> CriterionScore:
        improvements.append("Record a spoken answer so this criterion can be assessed.")
        return CriterionScore(score=0.0, confidence=0.0, feedback=feedback,
                              strengths=[], improvements=improvements)
