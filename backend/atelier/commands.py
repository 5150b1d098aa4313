import sys

import click
from flask import current_app
from flask.cli import FlaskGroup, with_appcontext

from atelier.application.products import get_product_statistics
from atelier.extensions import db
from atelier.seeds.products import PRODUCTION_CONFIRMATION, CleanRefused, seed_products
from atelier.seeds.users import seed_users


@click.command("init-db")
@with_appcontext
def init_db():
    """Create any missing tables."""
    db.create_all()
    click.echo(click.style("Database tables are in place.", fg="green"))


@click.command("seed")
@click.option("--clean", is_flag=True, help="Delete every product before seeding.")
@click.option("--no-check", is_flag=True, help="Insert fixtures without looking for existing products.")
@click.option("--confirm", default=None, help=f'Production only: "{PRODUCTION_CONFIRMATION}".')
@with_appcontext
def seed(clean, no_check, confirm):
    """
    Seed the product catalog and the default admin user.

    Exits non-zero with the traceback logged when anything fails.
    """
    environment = current_app.config["NODE_ENV"]

    if clean and environment == "production" and confirm is None:
        click.echo(click.style("You are about to delete ALL products in production.", fg="red", bold=True))
        confirm = click.prompt(f'Type "{PRODUCTION_CONFIRMATION}" to continue', default="", show_default=False)

    try:
        db.create_all()
        seed_users()
        report = seed_products(
            clean=clean,
            check_duplicates=not no_check,
            environment=environment,
            confirmation=confirm,
        )
    except CleanRefused as exc:
        current_app.logger.error(str(exc))
        sys.exit(1)
    except Exception:
        current_app.logger.exception("Seeding failed")
        sys.exit(1)

    counts = report.counts()
    stats = get_product_statistics()

    click.echo(click.style("Seeding complete", fg="green", bold=True))
    if clean:
        click.echo(f" - deleted:  {counts['deleted']}")
    click.echo(f" - created:  {counts['created']}")
    click.echo(f" - updated:  {counts['updated']}")
    click.echo(f" - skipped:  {counts['skipped']}")
    click.echo(
        f" - catalog:  {stats['total']} products "
        f"({stats['byCategory']['wall-hanging']} wall hangings, {stats['byCategory']['rug']} rugs)"
    )
    click.echo(
        f" - status:   {stats['byStatus']['available']} available, "
        f"{stats['byStatus']['sold']} sold, {stats['byStatus']['draft']} draft"
    )


@click.command("seed-users")
@with_appcontext
def seed_users_command():
    """Create the default admin user when missing."""
    db.create_all()
    created = seed_users()
    click.echo("Admin user created." if created else "Admin user already exists.")


def _create_app():
    from atelier import create_app
    return create_app()


cli = FlaskGroup(create_app=_create_app, help="Atelier Kaisla management commands.")
