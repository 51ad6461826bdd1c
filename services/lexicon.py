"""Word lists and tokenizing shared by the speech analyzers."""
import re
from typing import List

_TOKEN_RE = re.compile(r"[a-z']+")
_SENTENCE_RE = re.compile(r"[.!?]+")

# Disfluency markers. Two-word entries are matched on consecutive tokens.
FILLER_WORDS = (
    "uh", "um", "umm", "er", "erm", "ah", "hmm", "like", "basically",
    "actually", "literally", "you know", "i mean", "kind of", "sort of",
)

# B2-C2 academic vocabulary
ADVANCED_VOCABULARY = (
    "furthermore", "nevertheless", "consequently", "substantial", "significant",
    "predominantly", "comprehensive", "fundamental", "inevitable", "perceive",
    "demonstrate", "indicate", "contribute", "maintain", "enhance", "facilitate",
    "implement", "subsequent", "prior", "considerable", "numerous", "crucial",
    "essential", "beneficial", "detrimental", "adequate", "sufficient",
    "perspective", "aspect", "factor", "impact", "influence", "tendency",
    "phenomenon", "circumstances", "environment", "opportunity", "challenge",
)

COMMON_IDIOMS = (
    "at the end of the day", "in my opinion", "on the other hand",
    "as far as i know", "to be honest", "generally speaking",
    "it goes without saying", "all in all", "by and large",
    "for the most part", "in a nutshell", "to some extent",
)

# Subordinating conjunctions and relative pronouns
CLAUSE_MARKERS = (
    "because", "although", "though", "while", "whereas", "if", "unless",
    "when", "whenever", "since", "after", "before", "until", "which", "who",
    "whom", "whose", "where", "that",
)


def tokenize(text: str, min_length: int = 2) -> List[str]:
    """Lowercase word tokens. Single letters ("I", "a") are not counted as words."""
    return [t for t in _TOKEN_RE.findall(text.lower()) if len(t) >= min_length]


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_RE.split(text) if s.strip()]


def transcript_text(transcription) -> str:
    """Transcript text, rebuilt from the word list when the text is blank."""
    if transcription.transcript.strip():
        return transcription.transcript
    return " ".join(w.word for w in transcription.words)
