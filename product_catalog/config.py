import os

from dotenv import load_dotenv

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

load_dotenv()

MAX_IMAGE_SIZE = 5 * 1024 * 1024

# Table name, read once at import. Not overridable through create_app.
COLLECTION_NAME = os.environ.get("COLLECTION_NAME", "products")


def get_database_url():
    """Return DATABASE_URL, or a SQLite file named after DB_NAME.

    Environment variables:
        DATABASE_URL  - full connection string (takes priority)
        DB_NAME       - database name for the default SQLite file (default: catalog)
    """
    url = os.environ.get("DATABASE_URL")
    if url:
        return url
    db_name = os.environ.get("DB_NAME", "catalog")
    return f"sqlite:///{os.path.join(BASE_DIR, db_name + '.db')}"


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret")
    PORT = int(os.environ.get("PORT", 3000))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    SQLALCHEMY_DATABASE_URI = get_database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    UPLOAD_FOLDER = os.environ.get(
        "UPLOAD_FOLDER", os.path.join(BASE_DIR, "static", "uploads")
    )
    MAX_IMAGE_SIZE = MAX_IMAGE_SIZE
    # Leave room for the text fields sent alongside the image
    MAX_CONTENT_LENGTH = MAX_IMAGE_SIZE + 1024 * 1024
