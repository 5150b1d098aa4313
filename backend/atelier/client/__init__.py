from .backoffice import AdminApi, AuthSession, normalize_error_message
from .composables import AboutSections, ContactLinks, HomeGrid, PageContent, PageSectionDefault, Products
from .config import ClientConfig, resolve_api_base
from .resources import (
    AboutSectionsAdmin,
    BlogArticlesAdmin,
    BlogTagsAdmin,
    ContactLinksAdmin,
    PageContentAdmin,
    ProductsAdmin,
)

__all__ = [
    "AboutSections",
    "AboutSectionsAdmin",
    "AdminApi",
    "AuthSession",
    "BlogArticlesAdmin",
    "BlogTagsAdmin",
    "ClientConfig",
    "ContactLinks",
    "ContactLinksAdmin",
    "HomeGrid",
    "PageContent",
    "PageContentAdmin",
    "PageSectionDefault",
    "Products",
    "ProductsAdmin",
    "normalize_error_message",
    "resolve_api_base",
]
