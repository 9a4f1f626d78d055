"""Seed the catalog with sample products."""
from datetime import datetime, timezone

import click
from flask.cli import with_appcontext
from loguru import logger

from .services import get_catalog
from .services.catalog import Product

PRODUCTS = [
    {"name": "Wireless Headphones", "description": "Noise-cancelling over-ear headphones with 30hr battery life."},
    {"name": "Mechanical Keyboard", "description": "RGB mechanical keyboard with Cherry MX switches."},
    {"name": "USB-C Hub", "description": "7-in-1 USB-C hub with HDMI, USB 3.0, and SD card reader."},
    {"name": "Laptop Stand", "description": "Adjustable aluminum laptop stand for ergonomic viewing."},
    {"name": "Webcam HD", "description": "1080p webcam with built-in microphone and auto-focus."},
]


def seed(repository):
    """Insert PRODUCTS unless the catalog already has data. Returns the number inserted."""
    if repository.count():
        logger.info("Catalog already has data. Skipping seed.")
        return 0

    for p in PRODUCTS:
        repository.insert(Product(**p, image=None, created_at=datetime.now(timezone.utc)))

    logger.info("Seeded {} products.", len(PRODUCTS))
    return len(PRODUCTS)


@click.command("seed")
@with_appcontext
def seed_command():
    """Populate an empty catalog with sample products."""
    seed(get_catalog().repository)


if __name__ == "__main__":
    from .app import create_app

    app = create_app()
    with app.app_context():
        seed(get_catalog().repository)
