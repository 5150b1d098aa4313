from flask import jsonify
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import NotFound

from atelier.application import contact_links as contact_service
from atelier.models.contact_link import CONTACT_PLATFORMS
from atelier.normalizers.contact_link import normalize_contact_link
from atelier.schemas.contact_links import CreateContactLinkDto, UpdateContactLinkDto
from atelier.utils.decorators import validate_body
from . import api_bp


@api_bp.route("/contact-links", methods=["GET"])
def list_active_links():
    links = contact_service.list_active_contact_links()
    return jsonify([normalize_contact_link(l) for l in links]), 200


@api_bp.route("/contact-links/all", methods=["GET"])
@jwt_required()
def list_all_links():
    links = contact_service.list_contact_links()
    return jsonify([normalize_contact_link(l) for l in links]), 200


@api_bp.route("/contact-links/platform/<platform>", methods=["GET"])
def list_links_by_platform(platform):
    if platform not in CONTACT_PLATFORMS:
        raise NotFound(f'Unknown platform "{platform}"')

    links = contact_service.find_contact_links_by_platform(platform)
    return jsonify([normalize_contact_link(l) for l in links]), 200


@api_bp.route("/contact-links/<link_id>", methods=["GET"])
def get_link(link_id):
    return jsonify(normalize_contact_link(contact_service.find_contact_link(link_id))), 200


@api_bp.route("/contact-links", methods=["POST"])
@jwt_required()
@validate_body(CreateContactLinkDto)
def create_link(body: CreateContactLinkDto):
    link = contact_service.create_contact_link(data=body.model_dump())
    return jsonify(normalize_contact_link(link)), 201


@api_bp.route("/contact-links/<link_id>", methods=["PATCH"])
@jwt_required()
@validate_body(UpdateContactLinkDto)
def update_link(link_id, body: UpdateContactLinkDto):
    link = contact_service.update_contact_link(link_id=link_id, data=body.changes())
    return jsonify(normalize_contact_link(link)), 200


@api_bp.route("/contact-links/<link_id>", methods=["DELETE"])
@jwt_required()
def delete_link(link_id):
    contact_service.remove_contact_link(link_id=link_id)
    return "", 204
