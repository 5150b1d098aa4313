from atelier.extensions import db
from .base import BaseModel

# Tag links are written and read with plain inserts and joins on this table
blog_articles_tags = db.Table(
    "blog_articles_tags",
    db.Column(
        "article_id",
        db.String(36),
        db.ForeignKey("blog_articles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    db.Column(
        "tag_id",
        db.String(36),
        db.ForeignKey("blog_tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class BlogArticle(BaseModel):
    __tablename__ = "blog_articles"

    title = db.Column(db.String(255), nullable=False)
    subtitle = db.Column(db.String(500))
    content = db.Column(db.Text, nullable=False)
    slug = db.Column(db.String(255), nullable=False, unique=True)
    published_at = db.Column(db.DateTime(timezone=True))
    is_published = db.Column(db.Boolean, nullable=False, default=False, index=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    images = db.relationship(
        "BlogArticleImage",
        back_populates="article",
        order_by="BlogArticleImage.sort_order",
        cascade="all, delete-orphan",
    )


class BlogArticleImage(BaseModel):
    __tablename__ = "blog_article_images"

    url = db.Column(db.String(500), nullable=False)
    alt_text = db.Column(db.String(255))
    is_cover = db.Column(db.Boolean, nullable=False, default=False)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    article_id = db.Column(
        db.String(36),
        db.ForeignKey("blog_articles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    article = db.relationship("BlogArticle", back_populates="images")


class BlogTag(BaseModel):
    __tablename__ = "blog_tags"

    name = db.Column(db.String(100), nullable=False, unique=True)
    slug = db.Column(db.String(100), nullable=False, unique=True)
