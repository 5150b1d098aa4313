from flask import jsonify, current_app
from sqlalchemy import text

from atelier.extensions import db
from . import api_bp


@api_bp.route("/health", methods=["GET"])
def health_check():
    db.session.execute(text("SELECT 1"))
    return jsonify({
        "status": "ok",
        "service": "atelier-api",
        "environment": current_app.config["NODE_ENV"],
    })
