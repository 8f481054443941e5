import logging
import os

from config import config
from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import MethodNotAllowed


def create_app(config_name=None):
    """Application factory pattern"""
    if config_name is None:
        config_name = os.getenv("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.json.sort_keys = False

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize CORS for browser clients

    # Get allowed origins from environment variable
    ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")

    CORS(app, resources={r"/api/*": {"origins": ALLOWED_ORIGINS}})

    # Register blueprints
    from routes.demo import bp as demo_bp
    from routes.evaluation import bp as evaluation_bp
    from routes.health import bp as health_bp

    app.register_blueprint(evaluation_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(demo_bp)

    @app.errorhandler(MethodNotAllowed)
    def method_not_allowed(e):
        if request.path == "/api/evaluate":
            details = "Use POST to submit evaluation requests"
        else:
            details = f"Allowed methods: {', '.join(sorted(e.valid_methods or []))}"

        return jsonify({
            "success": False,
            "error": {
                "code": "METHOD_NOT_ALLOWED",
                "message": f"{request.method} method not supported",
                "details": details,
            },
        }), 405

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=app.config["DEBUG"], port=int(os.getenv("PORT", "5001")))
