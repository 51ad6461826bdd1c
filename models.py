from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

AudioQuality = Literal["good", "fair", "poor"]
ConfidenceLabel = Literal["high", "medium", "low"]


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class WordConfidence(FrozenModel):
    word: str
    confidence: float = Field(ge=0.0, le=1.0)
    start: Optional[float] = None
    end: Optional[float] = None

class TranscriptionResult(FrozenModel):
    transcript: str = ""
    words: List[WordConfidence] = Field(default_factory=list)
    # None means not reported; the mean word confidence is used instead
    overall_confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    audio_duration: float = Field(default=0.0, ge=0.0)
    audio_quality: AudioQuality = "good"
    warnings: List[str] = Field(default_factory=list)

class FluencyMetrics(FrozenModel):
    words_per_minute: float
    total_words: int
    speaking_time: float
    total_pauses: int
    average_pause_length: float
    longest_pause: float
    filler_count: int
    filler_words: List[str]
    speech_rate: Literal["slow", "moderate", "fast", "very-fast"]
    hesitation_ratio: float
    timing_available: bool
    long_turn_duration: Optional[float] = None

class GrammarError(FrozenModel):
    text: str
    suggestion: str = ""
    type: Literal["grammar", "spelling", "punctuation", "word-choice"] = "grammar"
    severity: Literal["minor", "moderate", "major"] = "moderate"

class GrammarAnalysis(FrozenModel):
    error_count: int
    error_density: float  # errors per 100 words
    errors: List[GrammarError]
    sentence_complexity: Literal["simple", "moderate", "varied", "complex"]
    complex_sentence_ratio: float
    sentence_count: int

class VocabularyAnalysis(FrozenModel):
    unique_words: int
    total_words: int
    lexical_diversity: float  # type-token ratio
    advanced_vocabulary_count: int
    advanced_vocabulary_ratio: float
    advanced_words: List[str]
    idioms: List[str]
    topic_relevance: float

class UnclearWord(FrozenModel):
    word: str
    start: Optional[float] = None
    confidence: float

class PronunciationAnalysis(FrozenModel):
    clarity_score: float
    consistency_score: float
    intelligibility_estimate: float
    unclear_words: List[UnclearWord]
    warnings: List[str]
    note: str

class CriterionScore(FrozenModel):
    score: float
    confidence: float
    feedback: str
    strengths: List[str]
    improvements: List[str]

class BandRange(FrozenModel):
    low: float
    high: float

class SpeakingTranscripts(FrozenModel):
    part1: str = ""
    part2: str = ""
    part3: str = ""

class AudioQualitySummary(FrozenModel):
    overall: AudioQuality
    warnings: List[str]
    adjustment_applied: bool

class SpeakingEvaluation(FrozenModel):
    estimated_band: float
    band_range: BandRange
    band_description: str
    confidence: ConfidenceLabel

    fluency_coherence: CriterionScore
    lexical_resource: CriterionScore
    grammatical_range: CriterionScore
    pronunciation: CriterionScore

    fluency_metrics: FluencyMetrics
    grammar_analysis: GrammarAnalysis
    vocabulary_analysis: VocabularyAnalysis
    pronunciation_analysis: PronunciationAnalysis

    transcripts: SpeakingTranscripts
    audio_quality: AudioQualitySummary
    total_speaking_time: float
    warnings: List[str]
    disclaimer: str
    overall_feedback: Optional[str] = None
    evaluated_at: Optional[datetime] = None

class PartTranscription(FrozenModel):
    part: Literal[1, 2, 3]
    transcription: TranscriptionResult
    questions: List[str] = Field(default_factory=list)

class EvaluationRequest(FrozenModel):
    parts: List[PartTranscription] = Field(default_factory=list)
    cue_card_topic: str = ""
    part3_theme: str = ""
    topic_keywords: List[str] = Field(default_factory=list)
