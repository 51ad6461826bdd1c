from typing import Iterable, List, Optional, Sequence, Tuple
from config import Config
from models import FluencyMetrics, TranscriptionResult, WordConfidence
from services.lexicon import FILLER_WORDS, tokenize, transcript_text

class FluencyAnalyzer:
    def __init__(self, filler_words: Optional[Iterable[str]] = None):
        self.pause_threshold = Config.PAUSE_THRESHOLD
        self.slow_threshold = Config.SLOW_WPM_THRESHOLD
        self.moderate_threshold = Config.MODERATE_WPM_THRESHOLD
        self.fast_threshold = Config.FAST_WPM_THRESHOLD

        self.single_fillers = set()
        self.double_fillers = set()
        for filler in filler_words if filler_words is not None else FILLER_WORDS:
            tokens = tuple(tokenize(filler, min_length=1))
            if len(tokens) == 1:
                self.single_fillers.add(tokens[0])
            elif len(tokens) == 2:
                self.double_fillers.add(tokens)

    def analyze_fluency(self,
                        parts: Sequence[TranscriptionResult],
                        long_turn_duration: Optional[float] = None) -> FluencyMetrics:
        """Analyze speaking pace, pauses and fillers over one or more parts"""
        tokens: List[str] = []
        stream: List[str] = []
        pauses: List[float] = []
        timing_available = False
        speaking_time = 0.0

        for part in parts:
            text = transcript_text(part)
            tokens.extend(tokenize(text))
            stream.extend(tokenize(text, min_length=1))
            speaking_time += part.audio_duration
            timed = [w for w in part.words if w.start is not None and w.end is not None]
            if timed:
                timing_available = True
            # Gaps are only measured inside a part, never across parts
            pauses.extend(self.find_pauses(timed))

        total_words = len(tokens)
        wpm = total_words / (speaking_time / 60.0) if speaking_time > 0 else 0.0
        filler_count, filler_words = self.count_fillers(stream)
        hesitation_ratio = filler_count / total_words if total_words else 0.0

        return FluencyMetrics(
            words_per_minute=wpm,
            total_words=total_words,
            speaking_time=speaking_time,
            total_pauses=len(pauses),
            average_pause_length=round(sum(pauses) / len(pauses), 2) if pauses else 0.0,
            longest_pause=round(max(pauses), 2) if pauses else 0.0,
            filler_count=filler_count,
            filler_words=filler_words,
            speech_rate=self.classify_rate(wpm),
            hesitation_ratio=min(hesitation_ratio, 1.0),
            timing_available=timing_available,
            long_turn_duration=long_turn_duration,
        )

    def find_pauses(self, words: Sequence[WordConfidence]) -> List[float]:
        """Gaps between consecutive words longer than the pause threshold"""
        pauses = []
        for i in range(1, len(words)):
            pause_duration = words[i].start - words[i-1].end
            if pause_duration > self.pause_threshold:
                pauses.append(pause_duration)
        return pauses

    def count_fillers(self, tokens: Sequence[str]) -> Tuple[int, List[str]]:
        count = 0
        seen: List[str] = []
        i = 0
        while i < len(tokens):
            pair = tuple(tokens[i:i + 2])
            if len(pair) == 2 and pair in self.double_fillers:
                filler = " ".join(pair)
                i += 2
            elif tokens[i] in self.single_fillers:
                filler = tokens[i]
                i += 1
            else:
                i += 1
                continue
            count += 1
            if filler not in seen:
                seen.append(filler)
        return count, seen

    def classify_rate(self, wpm: float) -> str:
        # No duration means the rate is unknown; report the neutral band
        if wpm <= 0:
            return "moderate"
        if wpm < self.slow_threshold:
            return "slow"
        elif wpm < self.moderate_threshold:
            return "moderate"
        elif wpm < self.fast_threshold:
            return "fast"
        return "very-fast"
