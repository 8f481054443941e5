from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

bp = Blueprint('health', __name__, url_prefix='/api')


@bp.route('/health', methods=['GET'])
def health_check():
    """
    Liveness check.

    Returns:
        200: {"status": "healthy", "timestamp": "2024-05-01T12:00:00.000Z",
              "service": "Cybersecurity Interview API", "version": "1.0.0"}
    """
    timestamp = datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')

    return jsonify({
        'status': 'healthy',
        'timestamp': timestamp,
        'service': current_app.config['SERVICE_NAME'],
        'version': current_app.config['SERVICE_VERSION']
    }), 200
