import bleach
from bleach.css_sanitizer import CSSSanitizer

BASIC_TAGS = frozenset({"p", "br", "strong", "em", "ul", "ol", "li", "h2", "h3", "hr"})

ARTICLE_TAGS = BASIC_TAGS | {"a", "span"}
ARTICLE_ATTRIBUTES = {
    "a": ["href", "target", "rel"],
    "span": ["style"],
}
LINK_PROTOCOLS = frozenset({"http", "https", "mailto"})

_article_css = CSSSanitizer(allowed_css_properties=["color"])


def sanitize_article_html(html):
    """Rich text for blog articles: basic formatting, links and coloured spans."""
    if html is None:
        return None
    return bleach.clean(
        html,
        tags=ARTICLE_TAGS,
        attributes=ARTICLE_ATTRIBUTES,
        protocols=LINK_PROTOCOLS,
        css_sanitizer=_article_css,
        strip=True,
    )


def sanitize_basic_html(html):
    if html is None:
        return None
    return bleach.clean(html, tags=BASIC_TAGS, attributes={}, strip=True)
