from dotenv import load_dotenv
import os

load_dotenv()

# Configuration class for the application
class Config:
    # Optional: narrative feedback is skipped when no key is set
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
    FEEDBACK_MODEL = os.getenv("FEEDBACK_MODEL", "gemini-2.0-flash-lite")

    # Fluency thresholds
    PAUSE_THRESHOLD = 0.5  # seconds
    SLOW_WPM_THRESHOLD = 100
    MODERATE_WPM_THRESHOLD = 130
    FAST_WPM_THRESHOLD = 170
    MIN_LONG_TURN_SEC = 60  # Part 2 shorter than this caps fluency
    SHORT_LONG_TURN_CAP = 5.5
    UNKNOWN_RATE_FLUENCY_CAP = 5.0  # no audio duration, so pace and pauses are unmeasured

    # Grammar complexity buckets (share of complex sentences)
    COMPLEX_RATIO = 0.6
    VARIED_RATIO = 0.3
    MODERATE_RATIO = 0.1

    # Pronunciation (ASR confidence, never accent)
    PRONUNCIATION_THRESHOLD = 0.75

    # Input quality
    LOW_CONFIDENCE_THRESHOLD = 0.6
    HIGH_CONFIDENCE_THRESHOLD = 0.85
    FULL_CONFIDENCE_WORDS = 100

    # Overall band policy
    CRITERION_WEIGHTS = {
        "fluency_coherence": 0.25,
        "lexical_resource": 0.25,
        "grammatical_range": 0.25,
        "pronunciation": 0.25,
    }
    BAND_RANGE_BY_QUALITY = {"good": 0.5, "fair": 0.75, "poor": 1.0}
    QUALITY_CONFIDENCE_FACTOR = {"good": 1.0, "fair": 0.8, "poor": 0.6}

    DISCLAIMER = (
        "This is an AI-generated estimate. Official scores can only be "
        "obtained through certified test centers."
    )
    PRONUNCIATION_NOTE = (
        "Pronunciation is scored on speech clarity measured from recognition "
        "confidence, not on accent."
    )
