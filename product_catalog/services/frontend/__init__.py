"""Server-rendered pages: the product list, the create/edit forms and the static pages."""
from flask import Blueprint

frontend_bp = Blueprint("frontend", __name__, template_folder="templates")

from . import routes  # noqa: E402, F401
