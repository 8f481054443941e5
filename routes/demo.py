"""
Demo page that exercises POST /api/evaluate with a fixed sample answer.
"""

from flask import Blueprint, current_app, render_template

bp = Blueprint('demo', __name__)

SAMPLE_EVALUATION_REQUEST = {
    "question": {
        "question": "Multiple failed login attempts detected from the same IP address. What steps do you take?",
        "answer": [
            "Review SIEM logs for frequency, source IP, and targeted accounts",
            "Check for correlation with successful logins that follow failed attempts",
            "Determine if attempts follow a brute-force pattern or credential stuffing",
            "Investigate whether it's isolated or widespread across the network",
            "Block or monitor the IP address if determined to be malicious",
            "Notify affected users and enforce password resets if necessary",
            "Implement or tune detection rules for future monitoring",
        ],
        "category": "scenario",
    },
    "user_answer": (
        "I would first check the logs to see how many failed attempts there were. "
        "Then I would block the IP address if it looks suspicious and maybe reset "
        "passwords for affected users."
    ),
    "role": "SOC Analyst",
    "experience_level": "entry_level",
}


@bp.route('/')
def index():
    return render_template(
        'index.html',
        sample_request=SAMPLE_EVALUATION_REQUEST,
        service_name=current_app.config['SERVICE_NAME'],
        version=current_app.config['SERVICE_VERSION']
    )
