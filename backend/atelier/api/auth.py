from flask import jsonify
from flask_jwt_extended import current_user, jwt_required

from atelier.application import auth as auth_service
from atelier.extensions import jwt
from atelier.schemas.auth import LoginDto, UpdateCredentialsDto
from atelier.utils.decorators import validate_body
from . import api_bp


@jwt.user_lookup_loader
def load_current_user(jwt_header, jwt_data):
    return auth_service.validate_token_payload(jwt_data)


@api_bp.route("/auth/login", methods=["POST"])
@validate_body(LoginDto)
def login(body: LoginDto):
    return jsonify(
        auth_service.login(username=body.username, password=body.password)
    ), 200


@api_bp.route("/auth/profile", methods=["GET"])
@jwt_required()
def profile():
    return jsonify(auth_service.get_profile(current_user["id"])), 200


@api_bp.route("/auth/credentials", methods=["PATCH"])
@jwt_required()
@validate_body(UpdateCredentialsDto)
def update_credentials(body: UpdateCredentialsDto):
    user = auth_service.update_credentials(
        user_id=current_user["id"],
        current_password=body.current_password,
        username=body.username,
        new_password=body.new_password,
    )
    return jsonify({
        "message": "Credentials updated successfully",
        "user": user,
    }), 200
