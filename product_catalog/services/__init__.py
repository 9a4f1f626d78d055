from flask import current_app


def get_catalog():
    """The ProductService built for the running app by ``create_app``."""
    return current_app.extensions["catalog"]
