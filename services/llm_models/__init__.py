"""
LLM Pydantic Models

Request, result, and structured LLM output models for answer evaluation:
- Request models (QuestionData, EvaluationRequest)
- LLM output model (LLMAnswerEvaluation)
- Result models (ScoreBreakdown, EvaluationFeedback, EvaluationResult)
"""

from .evaluation_models import (
    QuestionData,
    EvaluationRequest,
    ScoreBreakdown,
    EvaluationFeedback,
    LLMAnswerEvaluation,
    EvaluationResult
)

__all__ = [
    'QuestionData',
    'EvaluationRequest',
    'ScoreBreakdown',
    'EvaluationFeedback',
    'LLMAnswerEvaluation',
    'EvaluationResult'
]
