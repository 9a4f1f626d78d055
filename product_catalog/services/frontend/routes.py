from flask import abort, flash, redirect, render_template, request, send_from_directory, url_for

from . import frontend_bp
from .. import get_catalog
from ..catalog.errors import FileTooLarge, UnsupportedFileType, ValidationError

# Errors the user can fix by resubmitting the form
FORM_ERRORS = (ValidationError, UnsupportedFileType, FileTooLarge)


def _uploaded_image():
    image = request.files.get("image")
    if image and image.filename:
        return image
    return None


@frontend_bp.route("/")
def index():
    products = get_catalog().list_products()
    return render_template("home.html", title="Products", products=products)


@frontend_bp.route("/create", methods=["GET"])
def create_form():
    return render_template("create.html", title="Add product", product={})


@frontend_bp.route("/create", methods=["POST"])
def create_product():
    name = request.form.get("name")
    description = request.form.get("description")

    try:
        get_catalog().create_product(name, description, image=_uploaded_image())
    except FORM_ERRORS as exc:
        return render_template(
            "create.html",
            title="Add product",
            product={"name": name, "description": description},
            error=exc.message,
        ), 400

    flash("Product created", "success")
    return redirect(url_for("frontend.index"))


@frontend_bp.route("/edit/<product_id>", methods=["GET"])
def edit_form(product_id):
    product = get_catalog().get_product(product_id)
    return render_template("edit.html", title="Edit product", product=product.to_dict())


@frontend_bp.route("/edit/<product_id>", methods=["POST"])
def edit_product(product_id):
    name = request.form.get("name")
    description = request.form.get("description")
    old_image = request.form.get("oldImage")

    try:
        get_catalog().update_product(
            product_id, name, description, image=_uploaded_image(), old_image=old_image
        )
    except FORM_ERRORS as exc:
        product = {
            "id": product_id,
            "name": name,
            "description": description,
            "image": old_image or None,
        }
        return render_template(
            "edit.html", title="Edit product", product=product, error=exc.message
        ), 400

    flash("Product updated", "success")
    return redirect(url_for("frontend.index"))


@frontend_bp.route("/delete/<product_id>")
def delete_product(product_id):
    get_catalog().delete_product(product_id)
    flash("Product deleted", "success")
    return redirect(url_for("frontend.index"))


@frontend_bp.route("/uploads/<path:filename>")
def uploaded_file(filename):
    storage = get_catalog().storage
    if not storage.exists(filename):
        abort(404)
    return send_from_directory(storage.root, filename)


@frontend_bp.route("/about")
def about():
    return render_template("about.html", title="About us")


@frontend_bp.route("/contact")
def contact():
    return render_template("contact.html", title="Contact us")
