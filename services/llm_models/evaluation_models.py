"""
Evaluation Pydantic Models

Request and result models for interview answer evaluation, plus the
JSON structure the LLM is asked to return.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Union

# Scores are passed through exactly as the model returns them (no clamping),
# so fractional values survive as floats.
Score = Union[int, float]


class QuestionData(BaseModel):
    """Interview question with its expert talking points"""
    question: str = Field(description="Question text shown to the candidate")
    answer: List[str] = Field(description="Expert answer points, in order")
    category: str = Field(description="Question category, e.g. 'scenario'")


class EvaluationRequest(BaseModel):
    """
    Body of POST /api/evaluate.

    Example:
    {
        "question": {
            "question": "Multiple failed login attempts detected ...",
            "answer": ["Review SIEM logs ...", "Block or monitor the IP ..."],
            "category": "scenario"
        },
        "user_answer": "I would first check the logs ...",
        "role": "SOC Analyst",
        "experience_level": "entry_level"
    }
    """
    question: QuestionData
    user_answer: str
    role: str
    experience_level: str


class ScoreBreakdown(BaseModel):
    """Four independent sub-scores produced by the LLM"""
    coverage_score: Score = Field(description="Key expert points covered (nominal 0-30)")
    technical_accuracy: Score = Field(description="Technical correctness (nominal 0-30)")
    communication_quality: Score = Field(description="Clarity and structure (nominal 0-25)")
    additional_insights: Score = Field(description="Extra knowledge beyond the basics (nominal 0-15)")

    @property
    def total(self) -> Score:
        return (
            self.coverage_score
            + self.technical_accuracy
            + self.communication_quality
            + self.additional_insights
        )


class EvaluationFeedback(BaseModel):
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    specific_suggestions: List[str] = Field(default_factory=list)


class LLMAnswerEvaluation(ScoreBreakdown):
    """
    Answer evaluation as returned by the LLM.

    Expected JSON:
    {
        "coverage_score": 12,
        "technical_accuracy": 15,
        "communication_quality": 14,
        "additional_insights": 2,
        "strengths": ["Mentions log review"],
        "improvements": ["No correlation with successful logins"],
        "specific_suggestions": ["Study brute-force vs credential stuffing patterns"]
    }

    The four scores are required. Missing or null feedback arrays become [].
    """
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    specific_suggestions: List[str] = Field(default_factory=list)

    @field_validator('strengths', 'improvements', 'specific_suggestions', mode='before')
    @classmethod
    def default_empty(cls, value):
        return value or []

    def to_breakdown(self) -> ScoreBreakdown:
        return ScoreBreakdown(
            coverage_score=self.coverage_score,
            technical_accuracy=self.technical_accuracy,
            communication_quality=self.communication_quality,
            additional_insights=self.additional_insights,
        )

    def to_feedback(self) -> EvaluationFeedback:
        return EvaluationFeedback(
            strengths=self.strengths,
            improvements=self.improvements,
            specific_suggestions=self.specific_suggestions,
        )


class EvaluationResult(BaseModel):
    """Structured evaluation returned to the client"""
    overall_score: Score
    breakdown: ScoreBreakdown
    feedback: EvaluationFeedback
    expert_reference: List[str]
    xp_earned: int
