"""Pytest configuration and fixtures."""

import pytest

from models import TranscriptionResult, WordConfidence


def build_transcription(
    text,
    duration=None,
    confidences=None,
    word_length=0.3,
    gap=0.1,
    overall_confidence=0.95,
    audio_quality="good",
    timed=True,
):
    """Build a transcription with evenly spaced word timings."""
    tokens = text.split()
    if confidences is None:
        confidences = [overall_confidence] * len(tokens)
    words = []
    t = 0.0
    for token, confidence in zip(tokens, confidences):
        words.append(
            WordConfidence(
                word=token.strip(".,!?"),
                confidence=confidence,
                start=round(t, 3) if timed else None,
                end=round(t + word_length, 3) if timed else None,
            )
        )
        t += word_length + gap
    if duration is None:
        duration = round(t, 3)
    return TranscriptionResult(
        transcript=text,
        words=words,
        overall_confidence=overall_confidence,
        audio_duration=duration,
        audio_quality=audio_quality,
    )


@pytest.fixture
def make_transcription():
    """Factory for transcriptions with synthetic word timings."""
    return build_transcription


@pytest.fixture
def part1_text():
    return (
        "Well I live in a small town near the coast. I really enjoy it there because "
        "the people are friendly and the environment is quiet. To be honest I would "
        "not change anything about it."
    )


@pytest.fixture
def part2_text():
    return (
        "I would like to describe a journey that I took last summer. We travelled by "
        "train through the mountains, which was a significant experience for me. "
        "Although the trip was long, the views were essential to remember and they "
        "had a considerable impact on how I perceive nature. Um the train stopped in "
        "several villages where we tried local food. In a nutshell it was a wonderful "
        "opportunity to relax and see a different environment."
    )


@pytest.fixture
def part3_text():
    return (
        "I think tourism can be beneficial for local communities since it creates jobs. "
        "On the other hand it may have a detrimental influence on the environment. "
        "Governments should maintain a balance between growth and protection."
    )
