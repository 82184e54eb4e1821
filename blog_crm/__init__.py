from __future__ import annotations

import os
from datetime import timedelta, datetime, timezone
from typing import Any, Dict

import click
from flask import Flask, jsonify, g, request, session
from flask_login import current_user

from blog_crm.config import Config
from blog_crm.extensions import (
    db,
    migrate,
    login_manager,
    csrf,
    limiter,
)
from blog_crm.logging_config import configure_logging
from blog_crm.security import apply_security_headers
from blog_crm.models.user import User  # ensure models imported for migrations
from blog_crm.models.blog import Category, BlogPost  # noqa: F401
from blog_crm.utils.crypto import hash_password


def create_app(config_overrides: Dict[str, Any] | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=False)

    # Load config
    app.config.from_object(Config())
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    app.permanent_session_lifetime = timedelta(minutes=int(app.config.get("SESSION_LIFETIME_MINUTES", 30)))

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    # Warn at startup when nobody can sign in yet
    with app.app_context():
        from blog_crm.utils.admin_setup import ensure_admin_user
        ensure_admin_user()

    @login_manager.user_loader
    def load_user(user_id: str) -> User | None:
        try:
            return db.session.get(User, int(user_id))
        except ValueError:
            return None

    login_manager.login_view = "auth.login_form"
    login_manager.login_message = "Sign in to access the admin panel"

    # Request context enrichment for logging and absolute session timeout enforcement
    @app.before_request
    def add_request_context() -> None:
        g.request_id = request.headers.get("X-Request-ID") or os.urandom(8).hex()
        abs_max = app.config.get("ABSOLUTE_SESSION_MAX_AGE_SECONDS")
        if abs_max:
            now = int(datetime.now(timezone.utc).timestamp())
            start = session.get("_login_time")
            # If login time isn't set but user is authenticated, set it now
            if start is None and current_user.is_authenticated:
                session["_login_time"] = now
            elif isinstance(start, int) and now - start > int(abs_max):
                session.clear()

    # Security headers
    @app.after_request
    def set_headers(resp):
        return apply_security_headers(resp)

    # Blueprints
    from blog_crm.blueprints.home import bp as home_bp
    from blog_crm.blueprints.auth import bp as auth_bp
    from blog_crm.blueprints.admin import bp as admin_bp

    app.register_blueprint(home_bp)
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(admin_bp, url_prefix="/admin")

    # Health route
    @app.get("/health")
    def health():
        try:
            db.session.execute(db.text("SELECT 1"))
            db_ok = "connected"
        except Exception:
            db.session.rollback()
            db_ok = "error"
        return jsonify({"status": "ok", "db": db_ok}), 200

    # Error handlers (JSON)
    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({"error": "bad_request", "message": str(e)}), 400

    @app.errorhandler(401)
    def unauthorized(e):
        return jsonify({"error": "unauthorized", "message": str(e)}), 401

    @app.errorhandler(403)
    def forbidden(e):
        return jsonify({"error": "forbidden", "message": str(e)}), 403

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "not_found", "message": "resource not found"}), 404

    @app.errorhandler(429)
    def rate_limited(e):
        return jsonify({"error": "rate_limited", "message": "too many requests"}), 429

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "server_error", "message": "internal server error"}), 500

    # CLI: create admin user
    @app.cli.command("create-admin")
    @click.option("--email", prompt=True)
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    def create_admin(email: str, password: str) -> None:
        from blog_crm.repositories.user import create_user, get_user_by_email

        with app.app_context():
            if get_user_by_email(email):
                click.echo("User already exists")
                return
            create_user(email=email, password_hash=hash_password(password), is_admin=True)
            click.echo("Admin user created")

    return app
