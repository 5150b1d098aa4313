"""
Per-resource backoffice clients.

Each class wraps one admin screen's API: it keeps its own list (and,
where the screen needs it, the current item) next to the ``loading`` /
``error`` state inherited from ``AdminApi``. Instances built with the
same ``AuthSession`` share the signed-in token.
"""
import json
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .backoffice import AdminApi

# (filename, content, content type), as accepted by httpx ``files=``
ImageFile = Tuple[str, bytes, str]


def form_fields(payload: Mapping[str, Any]) -> Dict[str, str]:
    """
    Flatten a DTO into multipart text fields.

    Strings go as-is, everything else (numbers, booleans, lists, dicts)
    as JSON text; ``None`` values are left out.
    """
    return {
        key: value if isinstance(value, str) else json.dumps(value)
        for key, value in payload.items()
        if value is not None
    }


def image_parts(field: str, images: Sequence[ImageFile]) -> List[Tuple[str, ImageFile]]:
    return [(field, image) for image in images]


def _replace(items: List[dict], updated: dict) -> None:
    for index, item in enumerate(items):
        if item.get("id") == updated.get("id"):
            items[index] = updated
            return


class ProductsAdmin(AdminApi):
    def __init__(self, config=None, *, session=None, http=None):
        super().__init__(config, session=session, http=http, name="useProducts")
        self.products: List[dict] = []
        self.current_product: Optional[dict] = None
        self.statistics: Optional[dict] = None

    @property
    def has_products(self) -> bool:
        return bool(self.products)

    def fetch_products(self, **params: Any) -> List[dict]:
        """Filters: category, status, search, page, limit."""
        query = {key: value for key, value in params.items() if value not in (None, "")}
        result = self.request("GET", "/products", params=query or None)
        if result is None:
            return []
        self.products = result.get("data") or []
        return self.products

    def fetch_product_by_id(self, product_id: str) -> Optional[dict]:
        product = self.get(f"/products/{product_id}")
        if product:
            self.current_product = product
        return product

    def fetch_by_category(self, category: str) -> List[dict]:
        result = self.get(f"/products/category/{category}")
        if result is None:
            return []
        self.products = result
        return result

    def create_product(self, dto: Mapping[str, Any]) -> Optional[dict]:
        product = self.post("/products", dict(dto))
        if product:
            self.fetch_products()
        return product

    def create_product_with_images(
        self,
        dto: Mapping[str, Any],
        images: Sequence[ImageFile],
        *,
        show_on_home: Optional[Sequence[bool]] = None,
    ) -> Optional[dict]:
        """
        Create a product and upload its images in one multipart request.

        ``show_on_home`` lines up with ``images`` and flags which of them
        appear on the storefront home grid.
        """
        fields = {key: value for key, value in dto.items() if key != "images"}
        if show_on_home is not None:
            fields["showOnHome"] = list(show_on_home)

        product = self.upload(
            "POST",
            "/products/with-upload",
            fields=form_fields(fields),
            files=image_parts("images", images),
        )
        if product:
            self.fetch_products()
        return product

    def update_product(self, product_id: str, dto: Mapping[str, Any]) -> Optional[dict]:
        product = self.patch(f"/products/{product_id}", dict(dto))
        if product:
            _replace(self.products, product)
            if self.current_product and self.current_product["id"] == product_id:
                self.current_product = product
        return product

    def delete_product(self, product_id: str) -> bool:
        if not self.delete(f"/products/{product_id}"):
            return False
        self.products = [p for p in self.products if p["id"] != product_id]
        if self.current_product and self.current_product["id"] == product_id:
            self.current_product = None
        return True

    def fetch_statistics(self) -> Optional[dict]:
        statistics = self.get("/products/statistics")
        if statistics:
            self.statistics = statistics
        return statistics

    def add_images(
        self,
        product_id: str,
        images: Sequence[ImageFile],
        *,
        show_on_home: Optional[Sequence[bool]] = None,
    ) -> Optional[dict]:
        fields = {"showOnHome": list(show_on_home)} if show_on_home is not None else {}
        product = self.upload(
            "POST",
            f"/products/{product_id}/images",
            fields=form_fields(fields),
            files=image_parts("images", images),
        )
        if product:
            _replace(self.products, product)
        return product

    def update_image(self, image_id: str, changes: Mapping[str, Any]) -> Optional[dict]:
        return self.patch(f"/products/images/{image_id}", dict(changes))

    def remove_image(self, image_id: str) -> bool:
        return bool(self.delete(f"/products/images/{image_id}"))

    def clear_current_product(self) -> None:
        self.current_product = None

    def reset(self) -> None:
        self.products = []
        self.current_product = None
        self.statistics = None
        self.loading = False
        self.error = None


class BlogArticlesAdmin(AdminApi):
    def __init__(self, config=None, *, session=None, http=None):
        super().__init__(config, session=session, http=http, name="useBlogArticles")
        self.articles: List[dict] = []

    @property
    def has_articles(self) -> bool:
        return bool(self.articles)

    def fetch_all_articles(self) -> List[dict]:
        result = self.get("/blog-articles/all")
        if result is None:
            return []
        self.articles = result
        return result

    def create_article_with_images(
        self,
        dto: Mapping[str, Any],
        images: Sequence[ImageFile] = (),
    ) -> Optional[dict]:
        """The first uploaded image becomes the cover."""
        if images:
            article = self.upload(
                "POST",
                "/blog-articles",
                fields=form_fields(dto),
                files=image_parts("images", images),
            )
        else:
            article = self.post("/blog-articles", dict(dto))
        if article:
            self.fetch_all_articles()
        return article

    def update_article(self, article_id: str, dto: Mapping[str, Any]) -> Optional[dict]:
        article = self.patch(f"/blog-articles/{article_id}", dict(dto))
        if article:
            _replace(self.articles, article)
        return article

    def delete_article(self, article_id: str) -> bool:
        if not self.delete(f"/blog-articles/{article_id}"):
            return False
        self.articles = [a for a in self.articles if a["id"] != article_id]
        return True

    def add_images(
        self,
        article_id: str,
        images: Sequence[ImageFile],
        *,
        alt_texts: Optional[Sequence[str]] = None,
    ) -> Optional[List[dict]]:
        fields = {"altTexts": list(alt_texts)} if alt_texts is not None else {}
        return self.upload(
            "POST",
            f"/blog-articles/{article_id}/images",
            fields=form_fields(fields),
            files=image_parts("images", images),
        )

    def update_image(self, article_id: str, image_id: str, changes: Mapping[str, Any]) -> Optional[dict]:
        return self.patch(f"/blog-articles/{article_id}/images/{image_id}", dict(changes))

    def remove_image(self, article_id: str, image_id: str) -> bool:
        return bool(self.delete(f"/blog-articles/{article_id}/images/{image_id}"))

    def reset(self) -> None:
        self.articles = []
        self.loading = False
        self.error = None


class BlogTagsAdmin(AdminApi):
    def __init__(self, config=None, *, session=None, http=None):
        super().__init__(config, session=session, http=http, name="useBlogTags")
        self.tags: List[dict] = []

    @property
    def has_tags(self) -> bool:
        return bool(self.tags)

    def fetch_all_tags(self) -> List[dict]:
        result = self.get("/blog-tags")
        if result is None:
            return []
        self.tags = result
        return result

    def create_tag(self, name: str) -> Optional[dict]:
        tag = self.post("/blog-tags", {"name": name})
        if tag:
            self.tags.append(tag)
        return tag

    def update_tag(self, tag_id: str, name: str) -> Optional[dict]:
        tag = self.patch(f"/blog-tags/{tag_id}", {"name": name})
        if tag:
            _replace(self.tags, tag)
        return tag

    def delete_tag(self, tag_id: str) -> bool:
        if not self.delete(f"/blog-tags/{tag_id}"):
            return False
        self.tags = [t for t in self.tags if t["id"] != tag_id]
        return True

    def reset(self) -> None:
        self.tags = []
        self.loading = False
        self.error = None


class AboutSectionsAdmin(AdminApi):
    def __init__(self, config=None, *, session=None, http=None):
        super().__init__(config, session=session, http=http, name="useAboutSections")
        self.sections: List[dict] = []

    @property
    def has_sections(self) -> bool:
        return bool(self.sections)

    def fetch_all_sections(self) -> List[dict]:
        result = self.get("/about-sections/all")
        if result is None:
            return []
        self.sections = result
        return result

    def create_section_with_image(self, dto: Mapping[str, Any], image: ImageFile) -> Optional[dict]:
        section = self.upload(
            "POST",
            "/about-sections",
            fields=form_fields(dto),
            files=image_parts("image", [image]),
        )
        if section:
            self.fetch_all_sections()
        return section

    def update_section(self, section_id: str, dto: Mapping[str, Any]) -> Optional[dict]:
        section = self.patch(f"/about-sections/{section_id}", dict(dto))
        if section:
            _replace(self.sections, section)
        return section

    def update_section_image(
        self,
        section_id: str,
        image: ImageFile,
        *,
        image_alt: Optional[str] = None,
    ) -> Optional[dict]:
        section = self.upload(
            "PATCH",
            f"/about-sections/{section_id}/image",
            fields=form_fields({"imageAlt": image_alt}),
            files=image_parts("image", [image]),
        )
        if section:
            _replace(self.sections, section)
        return section

    def delete_section(self, section_id: str) -> bool:
        if not self.delete(f"/about-sections/{section_id}"):
            return False
        self.sections = [s for s in self.sections if s["id"] != section_id]
        return True

    def reset(self) -> None:
        self.sections = []
        self.loading = False
        self.error = None


class ContactLinksAdmin(AdminApi):
    def __init__(self, config=None, *, session=None, http=None):
        super().__init__(config, session=session, http=http, name="useContactLinks")
        self.contact_links: List[dict] = []

    @property
    def has_contact_links(self) -> bool:
        return bool(self.contact_links)

    def fetch_all_contact_links(self) -> List[dict]:
        result = self.get("/contact-links/all")
        if result is None:
            return []
        self.contact_links = result
        return result

    def create_contact_link(self, dto: Mapping[str, Any]) -> Optional[dict]:
        link = self.post("/contact-links", dict(dto))
        if link:
            self.contact_links.append(link)
        return link

    def update_contact_link(self, link_id: str, dto: Mapping[str, Any]) -> Optional[dict]:
        link = self.patch(f"/contact-links/{link_id}", dict(dto))
        if link:
            _replace(self.contact_links, link)
        return link

    def delete_contact_link(self, link_id: str) -> bool:
        if not self.delete(f"/contact-links/{link_id}"):
            return False
        self.contact_links = [c for c in self.contact_links if c["id"] != link_id]
        return True

    def reset(self) -> None:
        self.contact_links = []
        self.loading = False
        self.error = None


class PageContentAdmin(AdminApi):
    def __init__(self, config=None, *, session=None, http=None):
        super().__init__(config, session=session, http=http, name="usePageContent")
        self.contents: List[dict] = []

    @property
    def has_contents(self) -> bool:
        return bool(self.contents)

    def fetch_all(self) -> List[dict]:
        result = self.get("/page-content/all")
        if result is None:
            return []
        self.contents = result
        return result

    def get_by_page(self, page: str) -> List[dict]:
        return [c for c in self.contents if c.get("page") == page]

    def create_content(self, dto: Mapping[str, Any]) -> Optional[dict]:
        content = self.post("/page-content", dict(dto))
        if content:
            self.contents.append(content)
        return content

    def create_content_with_image(self, dto: Mapping[str, Any], image: ImageFile) -> Optional[dict]:
        content = self.upload(
            "POST",
            "/page-content",
            fields=form_fields(dto),
            files=image_parts("image", [image]),
        )
        if content:
            self.contents.append(content)
        return content

    def update_content(self, content_id: str, dto: Mapping[str, Any]) -> Optional[dict]:
        content = self.patch(f"/page-content/id/{content_id}", dict(dto))
        if content:
            _replace(self.contents, content)
        return content

    def update_content_image(
        self,
        content_id: str,
        image: ImageFile,
        *,
        image_alt: Optional[str] = None,
    ) -> Optional[dict]:
        content = self.upload(
            "PATCH",
            f"/page-content/id/{content_id}/image",
            fields=form_fields({"imageAlt": image_alt}),
            files=image_parts("image", [image]),
        )
        if content:
            _replace(self.contents, content)
        return content

    def delete_content(self, content_id: str) -> bool:
        if not self.delete(f"/page-content/id/{content_id}"):
            return False
        self.contents = [c for c in self.contents if c["id"] != content_id]
        return True

    def reset(self) -> None:
        self.contents = []
        self.loading = False
        self.error = None
