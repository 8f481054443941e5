"""
Interview Evaluation Service - Scores a candidate's interview answer with an LLM.

This service validates an evaluation request, builds the grading prompt,
calls the configured LLM provider, extracts the JSON assessment from the
reply, and shapes it into a score breakdown with feedback and an XP reward.

Every failure is raised as an EvaluationError carrying the error code,
message, details and HTTP status that the route returns to the client.
"""

import json
import logging
import re
from typing import Dict, Any, Optional

from flask import current_app
from pydantic import ValidationError

from services.llm_models import EvaluationRequest, LLMAnswerEvaluation, EvaluationResult
from services.llm_provider_factory import get_llm_client, LLMProviderFactory

# Configure logging
logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('question', 'user_answer', 'role', 'experience_level')

# Greedy: first '{' to last '}' in the reply
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

# (minimum overall score, XP awarded), checked top-down
XP_BANDS = [
    (90, 35),
    (80, 30),
    (70, 25),
    (60, 20),
    (50, 15),
]
BASE_XP = 10


class EvaluationError(Exception):
    """Evaluation failure that maps onto an API error response"""

    INVALID_REQUEST = 'INVALID_REQUEST'
    EVALUATION_FAILED = 'EVALUATION_FAILED'
    RATE_LIMIT_EXCEEDED = 'RATE_LIMIT_EXCEEDED'
    API_KEY_ERROR = 'API_KEY_ERROR'

    STATUS_CODES = {
        INVALID_REQUEST: 400,
        API_KEY_ERROR: 401,
        RATE_LIMIT_EXCEEDED: 429,
        EVALUATION_FAILED: 500,
    }

    def __init__(self, code: str, message: str, details: str):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    @property
    def status_code(self) -> int:
        return self.STATUS_CODES.get(self.code, 500)

    def to_response(self) -> Dict[str, Any]:
        return {
            'success': False,
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details
            }
        }


def calculate_xp(overall_score) -> int:
    """
    Map an overall score to the XP reward.

    Bands are inclusive on their lower bound:
    >=90 -> 35, >=80 -> 30, >=70 -> 25, >=60 -> 20, >=50 -> 15, else 10.

    Examples:
        >>> calculate_xp(90)
        35
        >>> calculate_xp(89.5)
        30
        >>> calculate_xp(12)
        10
    """
    for minimum, xp in XP_BANDS:
        if overall_score >= minimum:
            return xp
    return BASE_XP


class InterviewEvaluationService:
    """Service to evaluate interview answers against an expert reference"""

    @staticmethod
    def evaluate(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Evaluate a candidate's answer and return the evaluation payload.

        Workflow:
        1. Validate the request body (all four top-level fields present)
        2. Build the grading prompt
        3. Call the LLM provider (temperature 0.3, 30s timeout)
        4. Extract and parse the JSON assessment from the reply
        5. Sum the four sub-scores and look up the XP reward
        6. Assemble the evaluation with defaulted feedback arrays

        Args:
            data: Parsed JSON request body (None if the body was not JSON)

        Returns:
            dict: {overall_score, breakdown, feedback, expert_reference, xp_earned}

        Raises:
            EvaluationError: INVALID_REQUEST, EVALUATION_FAILED,
                             RATE_LIMIT_EXCEEDED or API_KEY_ERROR
        """
        evaluation_request = InterviewEvaluationService.validate_request(data)

        logger.info(
            f"Evaluating answer: role='{evaluation_request.role}', "
            f"experience_level='{evaluation_request.experience_level}', "
            f"category='{evaluation_request.question.category}'"
        )

        prompt = InterviewEvaluationService.build_evaluation_prompt(evaluation_request)
        reply = InterviewEvaluationService._request_evaluation(prompt)
        llm_evaluation = InterviewEvaluationService.parse_evaluation(reply)

        breakdown = llm_evaluation.to_breakdown()
        overall_score = breakdown.total
        xp_earned = calculate_xp(overall_score)

        result = EvaluationResult(
            overall_score=overall_score,
            breakdown=breakdown,
            feedback=llm_evaluation.to_feedback(),
            expert_reference=evaluation_request.question.answer,
            xp_earned=xp_earned
        )

        logger.info(f"Evaluation complete: overall_score={overall_score}, xp_earned={xp_earned}")

        return result.model_dump()

    @staticmethod
    def validate_request(data: Optional[Dict[str, Any]]) -> EvaluationRequest:
        """
        Check required fields and parse the body into an EvaluationRequest.

        Missing or falsy top-level fields are reported together as
        "Missing required fields". A present but malformed question object
        is reported as "Invalid request format".

        Raises:
            EvaluationError: INVALID_REQUEST
        """
        if not isinstance(data, dict) or not all(data.get(field) for field in REQUIRED_FIELDS):
            logger.warning("Rejected evaluation request with missing required fields")
            raise EvaluationError(
                EvaluationError.INVALID_REQUEST,
                "Missing required fields",
                "question, user_answer, role, and experience_level are required"
            )

        try:
            return EvaluationRequest.model_validate(data)
        except ValidationError as e:
            first_error = e.errors()[0]
            location = '.'.join(str(part) for part in first_error['loc'])
            logger.warning(f"Rejected malformed evaluation request: {location}: {first_error['msg']}")
            raise EvaluationError(
                EvaluationError.INVALID_REQUEST,
                "Invalid request format",
                f"{location}: {first_error['msg']}"
            )

    @staticmethod
    def build_evaluation_prompt(evaluation_request: EvaluationRequest) -> str:
        """
        Build the grading prompt sent to the LLM.

        The field names and score maxima in the JSON template are what
        parse_evaluation() expects back, so they must stay in sync with
        LLMAnswerEvaluation.
        """
        question = evaluation_request.question
        expert_points = "\n".join(
            f"{index}. {point}" for index, point in enumerate(question.answer, start=1)
        )

        return f"""
You are an expert cybersecurity interviewer evaluating a candidate's response for a {evaluation_request.role} position at {evaluation_request.experience_level} level.

QUESTION: {question.question}
CATEGORY: {question.category}

EXPERT ANSWER (Reference):
{expert_points}

CANDIDATE'S ANSWER:
{evaluation_request.user_answer}

Please evaluate the candidate's answer and provide a detailed assessment. Consider:

1. COVERAGE SCORE (0-30): How many key points from the expert answer were covered?
2. TECHNICAL ACCURACY (0-30): How technically correct and precise is the information?
3. COMMUNICATION QUALITY (0-25): How clear, structured, and professional is the response?
4. ADDITIONAL INSIGHTS (0-15): Any extra knowledge, best practices, or tools mentioned beyond the basic requirements?

Provide your response in the following JSON format:
{{
  "coverage_score": <number 0-30>,
  "technical_accuracy": <number 0-30>,
  "communication_quality": <number 0-25>,
  "additional_insights": <number 0-15>,
  "strengths": [<array of specific strengths found in the answer>],
  "improvements": [<array of specific areas for improvement>],
  "specific_suggestions": [<array of actionable learning suggestions>]
}}

Be specific and constructive in your feedback. Focus on cybersecurity best practices and industry standards.
"""

    @staticmethod
    def parse_evaluation(reply: str) -> LLMAnswerEvaluation:
        """
        Extract the JSON assessment from the raw LLM reply.

        Takes everything from the first '{' to the last '}' and parses it.
        Missing feedback arrays default to []; missing or non-numeric
        scores make the reply unparseable.

        Raises:
            EvaluationError: EVALUATION_FAILED if no JSON object is found or
                             it does not match the expected structure
        """
        try:
            match = JSON_OBJECT_PATTERN.search(reply or "")
            if not match:
                raise ValueError("No JSON found in AI response")
            return LLMAnswerEvaluation.model_validate(json.loads(match.group(0)))

        except (ValueError, ValidationError, RecursionError) as e:
            # json.JSONDecodeError is a ValueError subclass
            logger.error(f"Failed to parse AI response: {str(e)}")
            logger.debug(f"Unparseable AI response: {(reply or '')[:500]!r}")
            raise EvaluationError(
                EvaluationError.EVALUATION_FAILED,
                "Unable to parse evaluation results",
                "AI response format error"
            )

    @staticmethod
    def classify_llm_error(error: Exception) -> EvaluationError:
        """
        Map a provider failure onto an API error.

        Matches the message substrings "rate limit" and "API key" first,
        then the HTTP status some SDK errors carry (429, 401). Anything
        else is a generic EVALUATION_FAILED with the original message.
        """
        message = str(error)
        status_code = getattr(error, 'status_code', None)

        if "rate limit" in message or status_code == 429:
            return EvaluationError(
                EvaluationError.RATE_LIMIT_EXCEEDED,
                "LLM API rate limit exceeded",
                "Please try again in a few moments"
            )

        if "API key" in message or status_code == 401:
            return EvaluationError(
                EvaluationError.API_KEY_ERROR,
                "LLM API key configuration error",
                "Please check your API key configuration"
            )

        return EvaluationError(
            EvaluationError.EVALUATION_FAILED,
            "Unable to evaluate the answer at this time",
            message or "Internal server error"
        )

    @staticmethod
    def _request_evaluation(prompt: str) -> str:
        """
        Send the prompt to the configured provider and return the reply text.

        The provider is created per call so the API key is read from the
        environment at request time.

        Raises:
            EvaluationError: classified provider failure
        """
        config = current_app.config

        try:
            provider = get_llm_client()
            model = LLMProviderFactory.get_default_model()

            response = provider.create_chat_completion(
                messages=[{"role": "user", "content": prompt}],
                model=model,
                temperature=config['EVALUATION_TEMPERATURE'],
                max_tokens=config['EVALUATION_MAX_TOKENS'],
                timeout=config['EVALUATION_TIMEOUT']
            )

        except Exception as e:
            error = InterviewEvaluationService.classify_llm_error(e)
            logger.error(f"LLM evaluation call failed ({error.code}): {str(e)}", exc_info=True)
            raise error from e

        logger.info(
            f"LLM evaluation reply received: provider={provider.get_provider_name()}, "
            f"model={response['model']}, tokens={response['usage']['total_tokens']}"
        )

        return response["content"]
