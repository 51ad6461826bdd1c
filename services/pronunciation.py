from statistics import mean, pstdev
from typing import List, Sequence
from config import Config
from models import PronunciationAnalysis, UnclearWord, WordConfidence

class PronunciationAnalyzer:
    """Clarity estimates built only from speech recognition confidence.

    Accent is never measured. A word the recogniser understood with high
    confidence counts as clear however it was pronounced.
    """

    def __init__(self):
        self.threshold = Config.PRONUNCIATION_THRESHOLD
        self.note = Config.PRONUNCIATION_NOTE

    def analyze_pronunciation(self,
                              words: Sequence[WordConfidence],
                              overall_confidence: float = 0.0) -> PronunciationAnalysis:
        """Analyze pronunciation clarity based on confidence scores"""
        warnings: List[str] = []
        if not words:
            if overall_confidence > 0:
                warnings.append(
                    "Word-level confidence unavailable; clarity estimated from overall recognition confidence."
                )
            else:
                warnings.append("No recognised speech; pronunciation could not be assessed.")
            return PronunciationAnalysis(
                clarity_score=round(overall_confidence, 3),
                consistency_score=0.0,
                intelligibility_estimate=round(overall_confidence, 3),
                unclear_words=[],
                warnings=warnings,
                note=self.note,
            )

        confidences = [w.confidence for w in words]
        clarity = mean(confidences)
        consistency = min(max(1.0 - 2.0 * pstdev(confidences), 0.0), 1.0)
        intelligible = sum(1 for c in confidences if c >= self.threshold) / len(confidences)

        # Find unclear words
        unclear_words = []
        for word in words:
            if word.confidence < self.threshold:
                unclear_words.append(UnclearWord(
                    word=word.word,
                    start=word.start,
                    confidence=word.confidence,
                ))

        if clarity < Config.LOW_CONFIDENCE_THRESHOLD:
            warnings.append("Low recognition confidence; background noise or microphone quality may affect this score.")

        return PronunciationAnalysis(
            clarity_score=round(clarity, 3),
            consistency_score=round(consistency, 3),
            intelligibility_estimate=round(intelligible, 3),
            unclear_words=unclear_words,
            warnings=warnings,
            note=self.note,
        )
