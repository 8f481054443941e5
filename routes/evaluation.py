"""
Evaluation Routes - Endpoint for scoring interview answers.

This module provides:
- POST /api/evaluate - Evaluate a candidate's answer against the expert reference

Unsupported methods on this route (e.g. GET) are answered by the app-level
405 handler with a METHOD_NOT_ALLOWED error.
"""

import logging

from flask import Blueprint, jsonify, request

from services.interview_evaluation_service import InterviewEvaluationService, EvaluationError

logger = logging.getLogger(__name__)

bp = Blueprint('evaluation', __name__, url_prefix='/api')


@bp.route('/evaluate', methods=['POST'])
def evaluate_answer():
    """
    Evaluate an interview answer.

    Request Body:
        {
            "question": {
                "question": "Multiple failed login attempts detected ...",
                "answer": ["Review SIEM logs ...", "..."],
                "category": "scenario"
            },
            "user_answer": "I would first check the logs ...",
            "role": "SOC Analyst",
            "experience_level": "entry_level"
        }

    Returns:
        200: Evaluation result
            {
                "success": true,
                "evaluation": {
                    "overall_score": 43,
                    "breakdown": {
                        "coverage_score": 12,
                        "technical_accuracy": 15,
                        "communication_quality": 14,
                        "additional_insights": 2
                    },
                    "feedback": {
                        "strengths": [...],
                        "improvements": [...],
                        "specific_suggestions": [...]
                    },
                    "expert_reference": [...],
                    "xp_earned": 10
                }
            }
        400 INVALID_REQUEST, 401 API_KEY_ERROR, 429 RATE_LIMIT_EXCEEDED,
        500 EVALUATION_FAILED:
            {
                "success": false,
                "error": {"code": "...", "message": "...", "details": "..."}
            }
    """
    # Non-JSON bodies come back as None and fail validation
    data = request.get_json(silent=True)

    try:
        evaluation = InterviewEvaluationService.evaluate(data)

    except EvaluationError as e:
        return jsonify(e.to_response()), e.status_code

    except Exception as e:
        logger.error(f"Unexpected evaluation error: {str(e)}", exc_info=True)
        error = EvaluationError(
            EvaluationError.EVALUATION_FAILED,
            "Unable to evaluate the answer at this time",
            str(e) or "Internal server error"
        )
        return jsonify(error.to_response()), error.status_code

    return jsonify({
        'success': True,
        'evaluation': evaluation
    }), 200
