"""
Demo script that sends the sample interview answer through the evaluation API

It posts the same fixed payload the demo page uses to POST /api/evaluate
(via the Flask test client, so no server needs to be running) and prints
whichever shape comes back: the scored evaluation or the error.

Requires OPENAI_API_KEY (or LLM_PROVIDER=mistral with MISTRAL_API_KEY).

Run this with: python demo_evaluation.py
"""

import json
import sys

from app import create_app
from routes.demo import SAMPLE_EVALUATION_REQUEST


def print_evaluation(evaluation):
    """Print a successful evaluation"""
    breakdown = evaluation["breakdown"]
    feedback = evaluation["feedback"]

    print(f"\n✅ Overall score: {evaluation['overall_score']}/100  (+{evaluation['xp_earned']} XP)")
    print("\n📊 Breakdown:")
    print(f"   Coverage:            {breakdown['coverage_score']}/30")
    print(f"   Technical accuracy:  {breakdown['technical_accuracy']}/30")
    print(f"   Communication:       {breakdown['communication_quality']}/25")
    print(f"   Additional insights: {breakdown['additional_insights']}/15")

    for title, items in [
        ("💪 Strengths", feedback["strengths"]),
        ("🔧 Improvements", feedback["improvements"]),
        ("📚 Suggestions", feedback["specific_suggestions"]),
        ("📖 Expert reference", evaluation["expert_reference"]),
    ]:
        print(f"\n{title}:")
        for item in items:
            print(f"   - {item}")


def run_demo():
    """Send the sample request and print the result; returns the HTTP status"""
    print("=" * 70)
    print("INTERVIEW ANSWER EVALUATION DEMO")
    print("=" * 70)

    question = SAMPLE_EVALUATION_REQUEST["question"]
    print(f"\n📝 {SAMPLE_EVALUATION_REQUEST['role']} ({SAMPLE_EVALUATION_REQUEST['experience_level']})")
    print(f"   Q: {question['question']}")
    print(f"   A: {SAMPLE_EVALUATION_REQUEST['user_answer']}")

    app = create_app()
    with app.test_client() as client:
        response = client.post("/api/evaluate", json=SAMPLE_EVALUATION_REQUEST)

    data = response.get_json()

    if data.get("success"):
        print_evaluation(data["evaluation"])
    else:
        error = data["error"]
        print(f"\n❌ HTTP {response.status_code} {error['code']}: {error['message']}")
        print(f"   {error['details']}")

    print("\n" + "-" * 70)
    print("Raw response:")
    print(json.dumps(data, indent=2, ensure_ascii=False))

    return response.status_code


if __name__ == "__main__":
    status = run_demo()
    sys.exit(0 if status == 200 else 1)
