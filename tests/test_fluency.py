"""Tests for fluency analysis."""

import pytest

from models import TranscriptionResult, WordConfidence
from services.fluency import FluencyAnalyzer


def timed_words(spans):
    return [
        WordConfidence(word="hello", confidence=0.9, start=start, end=end)
        for start, end in spans
    ]


class TestWordsAndFillers:
    """Tests for word counts, fillers and speaking rate."""

    def test_reference_example(self):
        """Test the filler-heavy ten second answer."""
        transcription = TranscriptionResult(
            transcript="um so I think um this is good", audio_duration=10.0
        )
        metrics = FluencyAnalyzer().analyze_fluency([transcription])

        assert metrics.total_words == 7
        assert metrics.filler_count == 2
        assert metrics.filler_words == ["um"]
        assert metrics.hesitation_ratio == pytest.approx(0.286, abs=1e-3)
        assert metrics.words_per_minute == 42
        assert metrics.speech_rate == "slow"

    def test_wpm_is_word_count_over_minutes(self):
        """Test that words per minute is not rounded."""
        transcription = TranscriptionResult(
            transcript="one two three four five six seven eight nine ten eleven",
            audio_duration=7.0,
        )
        metrics = FluencyAnalyzer().analyze_fluency([transcription])
        assert metrics.words_per_minute == 11 / (7.0 / 60)

    def test_two_word_fillers_count_once(self):
        """Test that multi-word fillers are matched on consecutive words."""
        transcription = TranscriptionResult(
            transcript="You know, I mean it is kind of nice.", audio_duration=5.0
        )
        metrics = FluencyAnalyzer().analyze_fluency([transcription])
        assert metrics.filler_count == 3
        assert metrics.filler_words == ["you know", "i mean", "kind of"]
        assert metrics.total_words == 8

    def test_filler_words_unique_in_first_seen_order(self):
        """Test filler list deduplication."""
        transcription = TranscriptionResult(transcript="um uh um hello", audio_duration=2.0)
        metrics = FluencyAnalyzer().analyze_fluency([transcription])
        assert metrics.filler_count == 3
        assert metrics.filler_words == ["um", "uh"]

    def test_hesitation_ratio_bounded(self):
        """Test that a transcript of only fillers has ratio 1."""
        transcription = TranscriptionResult(transcript="um um um", audio_duration=3.0)
        metrics = FluencyAnalyzer().analyze_fluency([transcription])
        assert metrics.hesitation_ratio == 1.0

    def test_custom_filler_list(self):
        """Test injecting a different filler list."""
        transcription = TranscriptionResult(transcript="so so um good", audio_duration=2.0)
        metrics = FluencyAnalyzer(filler_words=["so"]).analyze_fluency([transcription])
        assert metrics.filler_count == 2
        assert metrics.filler_words == ["so"]

    def test_zero_duration(self):
        """Test that zero duration gives zero rate without dividing by zero."""
        transcription = TranscriptionResult(transcript="hello there", audio_duration=0.0)
        metrics = FluencyAnalyzer().analyze_fluency([transcription])
        assert metrics.words_per_minute == 0.0
        assert metrics.speech_rate == "moderate"

    def test_empty_transcript(self):
        """Test empty input."""
        metrics = FluencyAnalyzer().analyze_fluency([TranscriptionResult()])
        assert metrics.total_words == 0
        assert metrics.hesitation_ratio == 0.0
        assert metrics.timing_available is False

    def test_falls_back_to_word_list_text(self):
        """Test counting words from the word list when the text is blank."""
        transcription = TranscriptionResult(
            transcript="",
            words=timed_words([(0.0, 0.3), (0.4, 0.7)]),
            audio_duration=1.0,
        )
        metrics = FluencyAnalyzer().analyze_fluency([transcription])
        assert metrics.total_words == 2


class TestSpeechRate:
    """Tests for speech rate bands."""

    @pytest.mark.parametrize(
        "wpm,expected",
        [
            (60, "slow"),
            (99.9, "slow"),
            (100, "moderate"),
            (129, "moderate"),
            (130, "fast"),
            (169, "fast"),
            (170, "very-fast"),
            (240, "very-fast"),
        ],
    )
    def test_classify_rate(self, wpm, expected):
        """Test fixed WPM bands."""
        assert FluencyAnalyzer().classify_rate(wpm) == expected


class TestPauses:
    """Tests for pause detection from word timings."""

    def test_pauses_from_gaps(self):
        """Test that only gaps over the threshold count."""
        words = timed_words([(0.0, 0.4), (0.5, 0.9), (1.6, 2.0), (2.1, 2.5), (3.5, 4.0)])
        transcription = TranscriptionResult(
            transcript="a b c d e", words=words, audio_duration=4.0
        )
        metrics = FluencyAnalyzer().analyze_fluency([transcription])
        assert metrics.total_pauses == 2
        assert metrics.average_pause_length == 0.85
        assert metrics.longest_pause == 1.0
        assert metrics.timing_available is True

    def test_gap_equal_to_threshold_is_not_a_pause(self):
        """Test the strict threshold comparison."""
        words = timed_words([(0.0, 1.0), (1.5, 2.0)])
        assert FluencyAnalyzer().find_pauses(words) == []

    def test_gaps_not_measured_across_parts(self):
        """Test that the boundary between two recordings is not a pause."""
        first = TranscriptionResult(
            transcript="hello there",
            words=timed_words([(0.0, 0.3), (0.4, 0.7)]),
            audio_duration=5.0,
        )
        second = TranscriptionResult(
            transcript="good morning",
            words=timed_words([(0.0, 0.3), (0.4, 0.7)]),
            audio_duration=5.0,
        )
        metrics = FluencyAnalyzer().analyze_fluency([first, second])
        assert metrics.total_pauses == 0
        assert metrics.speaking_time == 10.0
        assert metrics.total_words == 4

    def test_untimed_words_skip_pause_analysis(self, make_transcription):
        """Test words without timings."""
        transcription = make_transcription("hello there friend", duration=3.0, timed=False)
        metrics = FluencyAnalyzer().analyze_fluency([transcription])
        assert metrics.total_pauses == 0
        assert metrics.timing_available is False

    def test_long_turn_duration_recorded(self, make_transcription):
        """Test that the part 2 duration is carried on the metrics."""
        transcription = make_transcription("hello there", duration=45.0)
        metrics = FluencyAnalyzer().analyze_fluency([transcription], long_turn_duration=45.0)
        assert metrics.long_turn_duration == 45.0
