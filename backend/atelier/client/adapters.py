"""
Pure functions turning API payloads into storefront view models.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

SAFE_URL_SCHEMES = frozenset({"http", "https", "mailto"})

PLATFORM_NAMES = {
    "email": "Email",
    "facebook": "Facebook",
    "instagram": "Instagram",
    "tiktok": "TikTok",
    "linkedin": "LinkedIn",
    "pinterest": "Pinterest",
    "youtube": "YouTube",
    "twitter": "Twitter",
    "website": "Website",
    "other": "Link",
}

SOCIAL_PLATFORMS = frozenset(
    {"facebook", "instagram", "tiktok", "linkedin", "pinterest", "youtube", "twitter"}
)

DEFAULT_EMAIL_LABEL = "For ordering a unique Kaisla rug:"
BRAND_NAME = "Atelier Kaisla"


@dataclass(frozen=True)
class Dimensions:
    width: float
    height: float
    unit: str


@dataclass(frozen=True)
class Artwork:
    id: str
    title: str
    image_src: str
    image_alt: str
    dimensions: Dimensions
    material: str
    description: str
    price: float
    available: bool
    category: str
    detail_url: str


@dataclass(frozen=True)
class SocialLink:
    platform: str
    name: str
    url: str
    aria_label: str
    order: int
    is_active: bool


@dataclass(frozen=True)
class ContactInfo:
    label: str
    email: str
    aria_label: str


@dataclass(frozen=True)
class StoryImage:
    src: str
    alt: str


@dataclass(frozen=True)
class Story:
    id: str
    title: str
    image: StoryImage
    content: str
    image_position: str


@dataclass(frozen=True)
class GalleryImage:
    id: str
    src: str
    alt: str
    title: Optional[str]
    description: Optional[str]
    width: int = 800
    height: int = 800


def is_safe_url(url: Any) -> bool:
    """Only http, https and mailto links may end up in an href."""
    if not isinstance(url, str) or not url.strip():
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    if parsed.scheme.lower() not in SAFE_URL_SCHEMES:
        return False
    if parsed.scheme.lower() == "mailto":
        return bool(parsed.path)
    return bool(parsed.netloc)


def adapt_product_to_artwork(product: Mapping[str, Any]) -> Artwork:
    images = product.get("images") or []
    category = product["category"]
    dimensions = product.get("dimensions")

    return Artwork(
        id=product["id"],
        title=product["name"],
        image_src=images[0] if images else f"/placeholder-{category}.jpg",
        image_alt=f"{product['name']} - Handcrafted {category}",
        dimensions=Dimensions(
            width=dimensions["width"],
            height=dimensions["height"],
            unit="in" if dimensions.get("unit") == "inch" else "cm",
        ) if dimensions else Dimensions(width=0, height=0, unit="cm"),
        material=product.get("materials") or "Natural materials",
        description=product.get("description") or "",
        price=float(product["price"]),
        available=product.get("status") == "available" and (product.get("stockQuantity") or 0) > 0,
        category=category,
        detail_url=f"/{category}/{product['id']}",
    )


def adapt_contact_link_to_social_link(link: Mapping[str, Any]) -> SocialLink:
    name = PLATFORM_NAMES.get(link["platform"], link["platform"])
    return SocialLink(
        platform=link["platform"],
        name=name,
        url=link["url"],
        aria_label=f"Visit {BRAND_NAME} on {name}",
        order=link.get("sortOrder", 0),
        is_active=link.get("isActive", True),
    )


def adapt_email_to_contact_info(link: Mapping[str, Any]) -> ContactInfo:
    url = link["url"]
    email = url[len("mailto:"):] if url.startswith("mailto:") else url
    return ContactInfo(
        label=link.get("label") or DEFAULT_EMAIL_LABEL,
        email=email,
        aria_label=f"Send an email to {email}",
    )


def adapt_about_section_to_story(section: Mapping[str, Any], index: int) -> Story:
    return Story(
        id=section["id"],
        title=section["title"],
        image=StoryImage(src=section["image"], alt=section["imageAlt"]),
        content="\n\n".join(section.get("paragraphs") or []),
        image_position="left" if index % 2 == 0 else "right",
    )


def adapt_home_grid_image(image: Mapping[str, Any], index: int) -> GalleryImage:
    product_name = (image.get("product") or {}).get("name")
    return GalleryImage(
        id=image["id"],
        src=image["url"],
        alt=product_name or f"Product image {index + 1}",
        title=product_name,
        description=f"{product_name} - Handcrafted piece" if product_name else None,
    )
