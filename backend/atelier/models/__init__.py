from .product import Product
from .product_image import ProductImage
from .blog import BlogArticle, BlogArticleImage, BlogTag, blog_articles_tags
from .about_section import AboutSection
from .contact_link import ContactLink
from .page_content import PageContent
from .user import User

__all__ = [
    "Product",
    "ProductImage",
    "BlogArticle",
    "BlogArticleImage",
    "BlogTag",
    "blog_articles_tags",
    "AboutSection",
    "ContactLink",
    "PageContent",
    "User",
]
