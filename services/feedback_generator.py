import logging
import google.generativeai as genai
from config import Config
from models import SpeakingEvaluation

FALLBACK_FEEDBACK = "Could not generate detailed feedback at this moment. Please try again later."


class FeedbackGenerator:
    def __init__(self, api_key: str = None, model_name: str = None):
        # Configure the Gemini API with your key
        genai.configure(api_key=api_key or Config.GEMINI_API_KEY)
        self.model = genai.GenerativeModel(model_name or Config.FEEDBACK_MODEL)

    def generate_feedback(self, evaluation: SpeakingEvaluation) -> str:
        """Generate an encouraging summary of a finished evaluation using Gemini API"""
        fluency = evaluation.fluency_metrics
        vocabulary = evaluation.vocabulary_analysis
        grammar = evaluation.grammar_analysis
        pronunciation = evaluation.pronunciation_analysis

        prompt = f"""
        Write constructive, encouraging feedback for an IELTS Speaking candidate based on
        the following analysis of their recorded answers.

        **Estimated band:** {evaluation.estimated_band} ({evaluation.band_description}), confidence {evaluation.confidence}

        **Fluency & Coherence ({evaluation.fluency_coherence.score}):**
        - Words per minute: {fluency.words_per_minute:.0f} ({fluency.speech_rate})
        - Long pauses: {fluency.total_pauses}, average {fluency.average_pause_length:.2f} seconds
        - Filler words: {fluency.filler_count} ({', '.join(fluency.filler_words) or 'none'})

        **Lexical Resource ({evaluation.lexical_resource.score}):**
        - Lexical diversity: {vocabulary.lexical_diversity:.2f}
        - Less common words: {', '.join(vocabulary.advanced_words) or 'none'}
        - Idioms: {', '.join(vocabulary.idioms) or 'none'}

        **Grammatical Range & Accuracy ({evaluation.grammatical_range.score}):**
        - Sentence complexity: {grammar.sentence_complexity}
        - Errors flagged: {grammar.error_count}

        **Pronunciation ({evaluation.pronunciation.score}):**
        - Clarity: {self._format_ratio(pronunciation.clarity_score)}
        - Hard to recognise: {', '.join(w.word for w in pronunciation.unclear_words) or 'none'}

        **Instructions for Feedback:**
        1. Start with a positive encouraging statement.
        2. Give one specific tip for each of the four criteria.
        3. Judge pronunciation on clarity only. Never comment on accent.
        4. Keep the feedback concise, around 4-6 sentences.
        """

        try:
            response = self.model.generate_content(prompt)
            return response.text
        except Exception as e:
            logging.error(f"Error generating feedback with Gemini API: {e}. Band: {evaluation.estimated_band}")
            return FALLBACK_FEEDBACK

    def _format_ratio(self, score: float) -> str:
        return f"{score * 100:.0f}%"
