from flask import Flask, render_template
from loguru import logger
from werkzeug.exceptions import HTTPException

from .config import Config
from .log import configure_logging
from .services.catalog import (
    LocalStorage,
    NotFound,
    ProductRepository,
    ProductService,
    StorageUnavailable,
    db,
)


def create_app(overrides=None):
    app = Flask(__name__, static_folder="static")
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    configure_logging(app.config["LOG_LEVEL"])
    db.init_app(app)

    storage = LocalStorage(app.config["UPLOAD_FOLDER"], max_size=app.config["MAX_IMAGE_SIZE"])
    app.extensions["catalog"] = ProductService(ProductRepository(db), storage)

    from .services.frontend import frontend_bp

    app.register_blueprint(frontend_bp)
    register_error_handlers(app)

    from .seed import seed_command

    app.cli.add_command(seed_command)

    with app.app_context():
        db.create_all()
        logger.info(
            "Connected to database {}",
            db.engine.url.render_as_string(hide_password=True),
        )

    return app


def register_error_handlers(app):
    def error_page(message, status):
        return render_template("error.html", title="Error", error=message, status=status), status

    @app.errorhandler(NotFound)
    def product_not_found(exc):
        return error_page(exc.message, 404)

    @app.errorhandler(StorageUnavailable)
    def storage_unavailable(exc):
        logger.opt(exception=exc).error("Database unavailable")
        return error_page(exc.message, 500)

    @app.errorhandler(404)
    def page_not_found(exc):
        return error_page("Page not found", 404)

    @app.errorhandler(413)
    def request_too_large(exc):
        return error_page("The upload is too large (limit 5 MB).", 413)

    @app.errorhandler(HTTPException)
    def http_error(exc):
        return error_page(exc.description, exc.code)

    @app.errorhandler(Exception)
    def unexpected_error(exc):
        logger.opt(exception=exc).error("Unhandled error")
        return error_page("Something went wrong", 500)


def main():
    app = create_app()
    port = app.config["PORT"]
    logger.info("Server is running on http://localhost:{}", port)
    try:
        app.run(host="0.0.0.0", port=port)
    finally:
        with app.app_context():
            db.engine.dispose()
        logger.info("Database connection closed")


if __name__ == "__main__":
    main()
