from flask import current_app, g, render_template, request

from affiliate.domain.validation import ValidationError, validate_contact
from . import site_bp


@site_bp.route("/<site>/contact", methods=["GET", "POST"])
def contact():
    if request.method == "GET":
        return render_template("pages/contact.html", form={}, errors={}, sent=False)

    form = request.form.to_dict()
    try:
        message = validate_contact(form)
    except ValidationError as e:
        return render_template("pages/contact.html", form=form, errors=e.fields, sent=False), 400

    # No mail transport is configured; messages are recorded in the log
    current_app.logger.info(
        "Contact message for site %s from %s <%s>: %s",
        g.current_site.slug,
        message["name"],
        message["email"],
        message.get("subject") or "(no subject)",
    )
    return render_template("pages/contact.html", form={}, errors={}, sent=True)
