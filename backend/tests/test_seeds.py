import pytest

from atelier.extensions import db
from atelier.models import Product, User
from atelier.seeds.fixtures import RUGS, WALL_HANGINGS, all_products
from atelier.seeds.products import PRODUCTION_CONFIRMATION, CleanRefused, seed_products
from atelier.seeds.users import seed_users


def test_fixture_catalog_size():
    assert len(WALL_HANGINGS) == 8
    assert len(RUGS) == 10
    assert len(all_products()) == 18


def test_first_run_creates_every_fixture(app):
    report = seed_products()

    assert report.counts()["created"] == 18
    assert Product.query.count() == 18


def test_second_run_changes_nothing(app):
    seed_products()
    db.session.expire_all()

    report = seed_products()
    counts = report.counts()

    assert counts["created"] == 0
    assert counts["updated"] == 0
    assert counts["skipped"] == 18
    assert Product.query.count() == 18


def test_changed_fixture_is_updated(app):
    seed_products()

    fixtures = all_products()
    fixtures[0] = dict(fixtures[0], price=999.0)
    report = seed_products(fixtures)

    assert report.updated == [fixtures[0]["name"]]
    product = Product.query.filter_by(name=fixtures[0]["name"]).one()
    assert float(product.price) == 999.0


def test_without_duplicate_check_everything_is_inserted(app):
    seed_products()
    report = seed_products(check_duplicates=False)

    assert report.counts()["created"] == 18
    assert Product.query.count() == 36


def test_clean_deletes_before_seeding(app):
    seed_products()
    report = seed_products(clean=True)

    assert report.deleted == 18
    assert report.counts()["created"] == 18
    assert Product.query.count() == 18


def test_clean_refused_in_production_without_confirmation(app):
    seed_products()

    with pytest.raises(CleanRefused):
        seed_products(clean=True, environment="production")
    with pytest.raises(CleanRefused):
        seed_products(clean=True, environment="production", confirmation="yes")

    assert Product.query.count() == 18


def test_clean_allowed_in_production_with_phrase(app):
    seed_products()
    report = seed_products(clean=True, environment="production", confirmation=PRODUCTION_CONFIRMATION)
    assert report.deleted == 18


def test_seed_users_is_idempotent(app):
    assert seed_users() is True
    assert seed_users() is False
    assert User.query.count() == 1


def test_seed_command_prints_report(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed"])
    assert result.exit_code == 0
    assert "created:  18" in result.output

    result = runner.invoke(args=["seed"])
    assert "created:  0" in result.output
    assert "updated:  0" in result.output
