from flask import jsonify, request
from flask_jwt_extended import jwt_required

from atelier.application import blog as blog_service
from atelier.config import MAX_IMAGES_PER_REQUEST
from atelier.normalizers.blog import normalize_article_image, normalize_tag
from atelier.schemas.blog import (
    AddBlogArticleImagesDto,
    CreateBlogArticleDto,
    CreateBlogTagDto,
    UpdateBlogArticleDto,
    UpdateBlogArticleImageDto,
    UpdateBlogTagDto,
)
from atelier.utils.decorators import validate_body
from atelier.utils.media import accept_images
from . import api_bp

MAX_ARTICLE_IMAGES = MAX_IMAGES_PER_REQUEST


# ------------------------
# Articles
# ------------------------

@api_bp.route("/blog-articles", methods=["GET"])
def list_published_articles():
    articles = blog_service.list_published_articles()
    return jsonify(blog_service.present_articles(articles)), 200


@api_bp.route("/blog-articles/all", methods=["GET"])
@jwt_required()
def list_all_articles():
    articles = blog_service.list_articles()
    return jsonify(blog_service.present_articles(articles, admin=True)), 200


@api_bp.route("/blog-articles/<article_id>", methods=["GET"])
def get_article(article_id):
    article = blog_service.find_article(article_id, published_only=True)
    return jsonify(blog_service.present_article(article)), 200


@api_bp.route("/blog-articles", methods=["POST"])
@jwt_required()
@validate_body(CreateBlogArticleDto)
def create_article(body: CreateBlogArticleDto):
    # multipart requests may carry images, JSON requests never do
    files = accept_images(
        request.files.getlist("images"),
        max_count=MAX_ARTICLE_IMAGES,
        required=False,
    )
    article = blog_service.create_article(data=body.model_dump(), files=files)
    return jsonify(blog_service.present_article(article, admin=True)), 201


@api_bp.route("/blog-articles/<article_id>", methods=["PATCH"])
@jwt_required()
@validate_body(UpdateBlogArticleDto)
def update_article(article_id, body: UpdateBlogArticleDto):
    article = blog_service.update_article(article_id=article_id, data=body.changes())
    return jsonify(blog_service.present_article(article, admin=True)), 200


@api_bp.route("/blog-articles/<article_id>", methods=["DELETE"])
@jwt_required()
def delete_article(article_id):
    blog_service.remove_article(article_id=article_id)
    return "", 204


# ------------------------
# Article images
# ------------------------

@api_bp.route("/blog-articles/<article_id>/images", methods=["POST"])
@jwt_required()
@validate_body(AddBlogArticleImagesDto)
def add_article_images(article_id, body: AddBlogArticleImagesDto):
    files = accept_images(request.files.getlist("images"), max_count=MAX_ARTICLE_IMAGES)

    images = blog_service.add_article_images(
        article_id=article_id,
        files=files,
        alt_texts=body.alt_texts,
    )
    return jsonify([normalize_article_image(i) for i in images]), 201


@api_bp.route("/blog-articles/<article_id>/images/<image_id>", methods=["PATCH"])
@jwt_required()
@validate_body(UpdateBlogArticleImageDto)
def update_article_image(article_id, image_id, body: UpdateBlogArticleImageDto):
    image = blog_service.update_article_image(
        article_id=article_id,
        image_id=image_id,
        data=body.changes(),
    )
    return jsonify(normalize_article_image(image)), 200


@api_bp.route("/blog-articles/<article_id>/images/<image_id>", methods=["DELETE"])
@jwt_required()
def delete_article_image(article_id, image_id):
    blog_service.remove_article_image(article_id=article_id, image_id=image_id)
    return "", 204


# ------------------------
# Tags
# ------------------------

@api_bp.route("/blog-tags", methods=["GET"])
def list_tags():
    return jsonify([normalize_tag(t) for t in blog_service.list_tags()]), 200


@api_bp.route("/blog-tags", methods=["POST"])
@jwt_required()
@validate_body(CreateBlogTagDto)
def create_tag(body: CreateBlogTagDto):
    tag = blog_service.create_tag(data=body.model_dump())
    return jsonify(normalize_tag(tag)), 201


@api_bp.route("/blog-tags/<tag_id>", methods=["PATCH"])
@jwt_required()
@validate_body(UpdateBlogTagDto)
def update_tag(tag_id, body: UpdateBlogTagDto):
    tag = blog_service.update_tag(tag_id=tag_id, data=body.changes())
    return jsonify(normalize_tag(tag)), 200


@api_bp.route("/blog-tags/<tag_id>", methods=["DELETE"])
@jwt_required()
def delete_tag(tag_id):
    blog_service.remove_tag(tag_id=tag_id)
    return "", 204
