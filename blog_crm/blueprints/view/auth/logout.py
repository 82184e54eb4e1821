from __future__ import annotations

from flask import jsonify, session, url_for
from flask_login import logout_user

from blog_crm.services import auth as auth_svc
from blog_crm.services.admin import AdminPanel

from blog_crm.blueprints.auth import bp


@bp.post("/logout")
def logout():
    admin_session = auth_svc.current_admin_session()
    if admin_session is None:
        logout_user()
        session.clear()
        return jsonify({"success": True, "redirect": url_for("home.index")})

    result = AdminPanel(admin_session).sign_out()
    return jsonify(
        {
            "success": True,
            "toast": result.toast.as_dict(),
            "redirect": url_for("home.index"),
        }
    )
