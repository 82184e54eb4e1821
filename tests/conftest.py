"""Test configuration and fixtures for the Blog CRM admin panel."""

from datetime import datetime, timezone, timedelta
from typing import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy.pool import StaticPool

from blog_crm import create_app
from blog_crm.extensions import db
from blog_crm.models import User, Category, BlogPost
from blog_crm.services.auth import AdminSession
from blog_crm.utils.crypto import hash_password


@pytest.fixture
def app() -> Generator[Flask, None, None]:
    """Create and configure a test Flask application."""
    # Use in-memory SQLite for each test
    test_config = {
        'TESTING': True,
        'WTF_CSRF_ENABLED': False,  # Disable CSRF for testing
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'SQLALCHEMY_ENGINE_OPTIONS': {
            'poolclass': StaticPool,
            'connect_args': {'check_same_thread': False}
        },
        'SECRET_KEY': 'test-secret-key',
        'SESSION_COOKIE_SECURE': False,
        'RATELIMIT_ENABLED': False,  # Disable rate limiting for tests
        'DEFAULT_POST_AUTHOR': 'Test Author',
        'SITE_NAME': 'Blog CRM',
    }

    app = create_app(test_config)

    with app.app_context():
        db.create_all()
        yield app

        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a test client."""
    return app.test_client()


@pytest.fixture
def runner(app: Flask):
    """Create a test CLI runner."""
    return app.test_cli_runner()


@pytest.fixture
def test_admin_user(app: Flask) -> User:
    """Create the admin user."""
    admin_user = User(
        email='admin@example.com',
        password_hash=hash_password('adminpassword'),
        is_admin=True,
        created_at=datetime.now(timezone.utc)
    )
    db.session.add(admin_user)
    db.session.commit()
    db.session.refresh(admin_user)
    return admin_user


@pytest.fixture
def test_regular_user(app: Flask) -> User:
    """A signed-up user without admin rights."""
    user = User(
        email='reader@example.com',
        password_hash=hash_password('readerpassword'),
        is_admin=False,
    )
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def admin_session(test_admin_user: User) -> AdminSession:
    return AdminSession(principal=test_admin_user)


@pytest.fixture
def test_category(app: Flask) -> Category:
    """Create a test category."""
    category = Category(
        name='Test Category',
        slug='test-category',
        description='A test category',
    )
    db.session.add(category)
    db.session.commit()
    db.session.refresh(category)
    return category


def make_post(title: str, *, created_at: datetime | None = None, **fields) -> BlogPost:
    """Insert a post directly, bypassing the repositories."""
    post = BlogPost(
        title=title,
        slug=fields.pop('slug', title.lower().replace(' ', '-')),
        content=fields.pop('content', f'Content of {title}'),
        created_at=created_at or datetime.now(timezone.utc),
        **fields,
    )
    db.session.add(post)
    db.session.commit()
    db.session.refresh(post)
    return post


@pytest.fixture
def test_post(app: Flask, test_category: Category) -> BlogPost:
    """Create a test blog post."""
    return make_post(
        'Test Post',
        slug='test-post',
        content='This is a test post content.',
        excerpt='Test post excerpt',
        author='Test Author',
        category_id=test_category.hex_id,
    )


@pytest.fixture
def dated_posts(app: Flask) -> list[BlogPost]:
    """Three posts created a day apart, oldest first."""
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return [
        make_post(f'Post {i}', created_at=base + timedelta(days=i))
        for i in range(3)
    ]


@pytest.fixture
def authenticated_client(client: FlaskClient, test_admin_user: User) -> FlaskClient:
    """Create a client with an authenticated admin session."""
    with client.session_transaction() as sess:
        sess['_user_id'] = str(test_admin_user.id)
        sess['_fresh'] = True
    return client


class AuthActions:
    """Helper class for authentication actions in tests."""

    def __init__(self, client: FlaskClient):
        self._client = client

    def login(self, email: str = 'admin@example.com', password: str = 'adminpassword'):
        return self._client.post('/auth/login', json={'email': email, 'password': password})

    def logout(self):
        return self._client.post('/auth/logout')


@pytest.fixture
def auth(client: FlaskClient) -> AuthActions:
    """Authentication helper fixture."""
    return AuthActions(client)


@pytest.fixture
def post_factory(app: Flask):
    """Factory for posts inserted straight into the database."""
    return make_post
