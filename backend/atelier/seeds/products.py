import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from flask import current_app

from atelier.extensions import db
from atelier.models import Product, ProductImage
from atelier.utils.transaction import transactional
from .fixtures import all_products

PRODUCTION_CONFIRMATION = "DELETE ALL PRODUCTION DATA"

SCALAR_FIELDS = ("description", "price", "status", "stock_quantity", "materials")
STRUCTURED_FIELDS = ("images", "dimensions")


class CleanRefused(RuntimeError):
    pass


@dataclass
class SeedReport:
    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    deleted: int = 0

    def counts(self) -> dict[str, int]:
        return {
            "created": len(self.created),
            "updated": len(self.updated),
            "skipped": len(self.skipped),
            "deleted": self.deleted,
        }


def _canonical(value: Any) -> str:
    return json.dumps(value, sort_keys=True, default=str)


def _money(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value)).quantize(Decimal("0.01"))


def changed_fields(product: Product, fixture: Mapping[str, Any]) -> list[str]:
    """Fields whose stored value differs from the fixture."""
    changed = []

    for name in SCALAR_FIELDS:
        current, wanted = getattr(product, name), fixture.get(name)
        if name == "price":
            current, wanted = _money(current), _money(wanted)
        if current != wanted:
            changed.append(name)

    for name in STRUCTURED_FIELDS:
        if _canonical(getattr(product, name)) != _canonical(fixture.get(name)):
            changed.append(name)

    return changed


def assert_clean_allowed(environment: str, confirmation: Optional[str]) -> None:
    if environment == "production" and confirmation != PRODUCTION_CONFIRMATION:
        raise CleanRefused(
            "Refusing to delete products in production without the confirmation "
            f'phrase "{PRODUCTION_CONFIRMATION}"'
        )


def _new_product(fixture: Mapping[str, Any]) -> Product:
    product = Product()
    for name, value in fixture.items():
        setattr(product, name, value)
    return product


def seed_products(
    fixtures: Optional[Iterable[Mapping[str, Any]]] = None,
    *,
    clean: bool = False,
    check_duplicates: bool = True,
    environment: str = "development",
    confirmation: Optional[str] = None,
) -> SeedReport:
    """
    Insert or refresh the fixture catalog.

    Products are matched by exact name. A match is only written when
    one of the compared fields differs, so running the seeder twice
    leaves the second run with nothing to create or update.
    """
    fixtures = list(fixtures if fixtures is not None else all_products())
    report = SeedReport()

    if clean:
        assert_clean_allowed(environment, confirmation)

    with transactional():
        if clean:
            ProductImage.query.delete()
            report.deleted = Product.query.delete()
            current_app.logger.warning("Deleted %d existing products", report.deleted)

        for fixture in fixtures:
            name = fixture["name"]
            existing = Product.query.filter_by(name=name).first() if check_duplicates else None

            if existing is None:
                db.session.add(_new_product(fixture))
                report.created.append(name)
                current_app.logger.info("Created: %s", name)
                continue

            changed = changed_fields(existing, fixture)
            if not changed:
                report.skipped.append(name)
                current_app.logger.debug("Unchanged: %s", name)
                continue

            for attr in changed:
                setattr(existing, attr, fixture.get(attr))
            report.updated.append(name)
            current_app.logger.info("Updated: %s (%s)", name, ", ".join(changed))

    counts = report.counts()
    current_app.logger.info(
        "Seeding finished: %d created, %d updated, %d skipped",
        counts["created"], counts["updated"], counts["skipped"],
    )
    return report
