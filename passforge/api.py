from flask import Flask, jsonify, request

from .errors import ExhaustedRetries, InvalidConfig
from .evaluator import score_password
from .generator import GenerationConfig, generate_rated


def create_app(config=None) -> Flask:
    app = Flask(__name__)
    if config:
        app.config.update(config)

    @app.errorhandler(InvalidConfig)
    def invalid_config(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(ExhaustedRetries)
    def exhausted(e):
        return jsonify({"error": str(e), "attempts": e.attempts}), 409

    def _json_object():
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise InvalidConfig("request body must be a JSON object")
        return data

    @app.route("/")
    def home():
        return jsonify({"message": "PassForge API is running"})

    @app.route("/generate", methods=["POST"])
    def generate_route():
        data = _json_object()
        options = GenerationConfig.from_dict(data)

        is_unique = None
        history = data.get("history")
        if history is not None and (
            not isinstance(history, list) or not all(isinstance(h, str) for h in history)
        ):
            raise InvalidConfig("history must be a list of strings")
        if history:
            seen = set(history)
            is_unique = lambda candidate: candidate not in seen  # noqa: E731

        password, rating = generate_rated(options, is_unique)
        return jsonify({"password": password, "strength": rating.as_dict()})

    @app.route("/score", methods=["POST"])
    def score_route():
        data = _json_object()
        password = data.get("password", "")
        if not isinstance(password, str):
            raise InvalidConfig("password must be a string")
        return jsonify(score_password(password).as_dict())

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
