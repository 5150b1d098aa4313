"""
Storefront data composables.

Each composable wraps one API resource: it fetches over HTTP, adapts
the payload to view models and keeps ``data`` / ``loading`` / ``error``
state. Failures end up in ``error`` with ``data`` reset to its empty
value; nothing raises to the caller.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

import httpx

from .adapters import (
    SOCIAL_PLATFORMS,
    Artwork,
    ContactInfo,
    GalleryImage,
    SocialLink,
    Story,
    adapt_about_section_to_story,
    adapt_contact_link_to_social_link,
    adapt_email_to_contact_info,
    adapt_home_grid_image,
    adapt_product_to_artwork,
    is_safe_url,
)
from .config import ClientConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Everything that can go wrong between the request and the adapter
FETCH_ERRORS = (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError)


@dataclass
class FetchState(Generic[T]):
    data: T
    loading: bool = False
    error: Optional[Exception] = None


class Composable:
    name = "composable"

    def __init__(self, config: Optional[ClientConfig] = None, *, http: Optional[httpx.Client] = None):
        self.config = config or ClientConfig.from_env()
        self.http = http or httpx.Client(timeout=self.config.timeout)

    def url(self, path: str) -> str:
        return f"{self.config.api_base}{path}"

    def get_json(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        url = self.url(path)
        context = "server" if self.config.server_side else "client"
        logger.debug("[%s] Fetching from: %s (%s)", self.name, url, context)

        response = self.http.get(url, params=params, timeout=self.config.timeout)
        response.raise_for_status()
        return response.json()

    def run(self, state: FetchState, empty: Callable[[], Any], load: Callable[[], Any]) -> Any:
        state.loading = True
        state.error = None
        try:
            state.data = load()
        except FETCH_ERRORS as exc:
            logger.error("[%s] Error fetching data: %s", self.name, exc)
            state.error = exc
            state.data = empty()
        finally:
            state.loading = False
        return state.data


def _expect_list(payload: Any) -> list:
    if not isinstance(payload, list):
        logger.warning("No data received or invalid format: %r", type(payload).__name__)
        return []

    items = [item for item in payload if isinstance(item, Mapping)]
    if len(items) != len(payload):
        logger.warning("Dropped %d malformed items", len(payload) - len(items))
    return items


class Products(Composable):
    name = "useProducts"

    def __init__(self, config: Optional[ClientConfig] = None, *, http: Optional[httpx.Client] = None):
        super().__init__(config, http=http)
        self.state: FetchState[list[Artwork]] = FetchState(data=[])
        self.products: list[dict] = []

    @property
    def artworks(self) -> list[Artwork]:
        return self.state.data

    def _load(self, payload: Any) -> list[Artwork]:
        self.products = _expect_list(payload)
        return [adapt_product_to_artwork(p) for p in self.products]

    def _reset(self) -> list[Artwork]:
        self.products = []
        return []

    def fetch_by_category(self, category: str) -> list[Artwork]:
        return self.run(
            self.state,
            self._reset,
            lambda: self._load(self.get_json(f"/products/category/{category}")),
        )

    def fetch_all(self, **filters: Any) -> list[Artwork]:
        """Filters: category, status, search, page, limit."""
        params = {key: value for key, value in filters.items() if value}
        return self.run(
            self.state,
            self._reset,
            lambda: self._load((self.get_json("/products", params=params) or {}).get("data")),
        )

    def fetch_by_id(self, product_id: str) -> Optional[Artwork]:
        single: FetchState[Optional[Artwork]] = FetchState(data=None)
        result = self.run(
            single,
            lambda: None,
            lambda: adapt_product_to_artwork(self.get_json(f"/products/{product_id}")),
        )
        self.state.error = single.error
        return result

    def refresh(self, category: Optional[str] = None) -> list[Artwork]:
        if category:
            return self.fetch_by_category(category)
        return self.fetch_all()


class HomeGrid(Composable):
    name = "useHomeGrid"

    def __init__(self, config: Optional[ClientConfig] = None, *, http: Optional[httpx.Client] = None):
        super().__init__(config, http=http)
        self.state: FetchState[list[GalleryImage]] = FetchState(data=[])

    @property
    def images(self) -> list[GalleryImage]:
        return self.state.data

    def fetch_home_grid(self) -> list[GalleryImage]:
        return self.run(
            self.state,
            list,
            lambda: [
                adapt_home_grid_image(image, index)
                for index, image in enumerate(_expect_list(self.get_json("/products/home-grid")))
            ],
        )


class ContactLinks(Composable):
    name = "useContactLinks"

    def __init__(self, config: Optional[ClientConfig] = None, *, http: Optional[httpx.Client] = None):
        super().__init__(config, http=http)
        self.state: FetchState[list[dict]] = FetchState(data=[])
        self.has_fetched = False

    @property
    def contact_links(self) -> list[dict]:
        return self.state.data

    def fetch_contact_links(self) -> list[dict]:
        try:
            return self.run(
                self.state,
                list,
                # links with javascript:, data: and similar URLs never reach an href
                lambda: [
                    link for link in _expect_list(self.get_json("/contact-links"))
                    if is_safe_url(link.get("url"))
                ],
            )
        finally:
            self.has_fetched = True

    @property
    def social_links(self) -> list[SocialLink]:
        return [
            adapt_contact_link_to_social_link(link)
            for link in self.contact_links
            if link.get("platform") in SOCIAL_PLATFORMS
        ]

    @property
    def email_link(self) -> Optional[dict]:
        return self.get_link_by_platform("email")

    @property
    def email_contact_info(self) -> Optional[ContactInfo]:
        link = self.email_link
        return adapt_email_to_contact_info(link) if link else None

    def get_link_by_platform(self, platform: str) -> Optional[dict]:
        return next((link for link in self.contact_links if link.get("platform") == platform), None)


class AboutSections(Composable):
    name = "useAboutSections"

    def __init__(self, config: Optional[ClientConfig] = None, *, http: Optional[httpx.Client] = None):
        super().__init__(config, http=http)
        self.state: FetchState[list[Story]] = FetchState(data=[])

    @property
    def stories(self) -> list[Story]:
        return self.state.data

    def fetch_about_sections(self) -> list[Story]:
        return self.run(
            self.state,
            list,
            lambda: [
                adapt_about_section_to_story(section, index)
                for index, section in enumerate(_expect_list(self.get_json("/about-sections")))
            ],
        )


@dataclass(frozen=True)
class PageSectionDefault:
    title: Optional[str] = None
    content: Optional[str] = None
    image: Optional[str] = None
    image_alt: Optional[str] = None
    metadata: dict = field(default_factory=dict)

    def as_payload(self) -> dict:
        return {
            "title": self.title,
            "content": self.content,
            "image": self.image,
            "imageAlt": self.image_alt,
            "metadata": dict(self.metadata),
        }


class PageContent(Composable):
    """
    One named content block, e.g. ``PageContent("home", "hero")``.

    ``resolved`` falls back to the hardcoded default whenever the block
    is missing or could not be fetched.
    """

    name = "usePageContent"

    def __init__(
        self,
        page: str,
        section: str,
        *,
        default: Optional[PageSectionDefault] = None,
        config: Optional[ClientConfig] = None,
        http: Optional[httpx.Client] = None,
    ):
        super().__init__(config, http=http)
        self.page = page
        self.section = section
        self.default = default or PageSectionDefault()
        self.state: FetchState[Optional[dict]] = FetchState(data=None)

    @property
    def content(self) -> Optional[dict]:
        return self.state.data

    @property
    def resolved(self) -> dict:
        return self.content or self.default.as_payload()

    def fetch_section(self) -> Optional[dict]:
        def load():
            payload = self.get_json(f"/page-content/{self.page}/{self.section}")
            return payload if isinstance(payload, dict) and payload else None

        return self.run(self.state, lambda: None, load)
