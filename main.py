import logging
import uuid
from datetime import datetime, timezone
from fastapi import FastAPI, HTTPException

from config import Config
from models import EvaluationRequest, SpeakingEvaluation
from services.feedback_generator import FeedbackGenerator
from services.speech_metrics import SpeechMetricsAnalyzer

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

app = FastAPI(title="IELTS Speaking Evaluation Service", version="1.0.0")

# Initialize services
speech_analyzer = SpeechMetricsAnalyzer()
feedback_generator = FeedbackGenerator() if Config.GEMINI_API_KEY else None


@app.post("/evaluate", response_model=SpeakingEvaluation)
def evaluate_speaking(request: EvaluationRequest):
    """
    Scores the transcribed speaking parts and returns the evaluation.
    Incomplete or empty recordings still return a low-confidence result.
    """
    request_id = str(uuid.uuid4())[:8]
    part_numbers = [p.part for p in request.parts]
    logging.info(f"[{request_id}] Received evaluation request for parts: {part_numbers}")

    if len(set(part_numbers)) != len(part_numbers):
        raise HTTPException(status_code=400, detail="Each speaking part may only be submitted once")

    topic_keywords = list(request.topic_keywords)
    topic_keywords.extend(t for t in (request.cue_card_topic, request.part3_theme) if t)

    evaluation = speech_analyzer.evaluate_parts(
        {p.part: p.transcription for p in request.parts},
        topic_keywords=topic_keywords,
    )

    update = {"evaluated_at": datetime.now(timezone.utc)}
    if feedback_generator is not None:
        update["overall_feedback"] = feedback_generator.generate_feedback(evaluation)

    logging.info(
        f"[{request_id}] Estimated band {evaluation.estimated_band} "
        f"(confidence {evaluation.confidence}, {len(evaluation.warnings)} warnings)"
    )
    return evaluation.model_copy(update=update)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "IELTS Speaking Evaluation Service is running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
