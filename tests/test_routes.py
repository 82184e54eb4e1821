"""Tests for route handlers and blueprints."""

import pytest

from blog_crm.repositories.blog import get_post


class TestHomeRoutes:

    def test_index(self, client):
        response = client.get('/')
        assert response.status_code == 200
        data = response.get_json()
        assert data['name'] == 'Blog CRM'
        assert data['links'] == {'auth': '/auth/login', 'admin': '/admin/'}

    def test_health(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        assert response.get_json() == {'status': 'ok', 'db': 'connected'}

    def test_security_headers(self, client):
        response = client.get('/')
        assert response.headers['X-Frame-Options'] == 'DENY'
        assert response.headers['X-Content-Type-Options'] == 'nosniff'

    def test_unknown_route(self, client):
        response = client.get('/nope')
        assert response.status_code == 404
        assert response.get_json()['error'] == 'not_found'


class TestAuthRoutes:
    """Test cases for authentication routes."""

    def test_login_form(self, client):
        response = client.get('/auth/login')
        assert response.status_code == 200
        data = response.get_json()
        assert data['authenticated'] is False
        assert data['login_url'] == '/auth/login'
        assert data['csrf_token']
        assert 'no-store' in response.headers['Cache-Control']

    def test_login_success(self, client, test_admin_user):
        response = client.post('/auth/login', json={'email': 'admin@example.com', 'password': 'adminpassword'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['email'] == 'admin@example.com'
        assert data['redirect'] == '/admin/'

        with client.session_transaction() as sess:
            assert sess['_user_id'] == str(test_admin_user.id)
            assert '_login_time' in sess

    def test_login_with_form_data(self, client, test_admin_user):
        response = client.post('/auth/login', data={'email': 'admin@example.com', 'password': 'adminpassword'})
        assert response.status_code == 200

    def test_login_invalid_credentials(self, client, test_admin_user):
        response = client.post('/auth/login', json={'email': 'admin@example.com', 'password': 'wrongpassword'})
        assert response.status_code == 401
        assert response.get_json()['message'] == 'Invalid email or password'

        with client.session_transaction() as sess:
            assert '_user_id' not in sess

    def test_login_non_admin(self, client, test_regular_user):
        response = client.post('/auth/login', json={'email': 'reader@example.com', 'password': 'readerpassword'})
        assert response.status_code == 401
        assert response.get_json()['message'] == 'This account cannot access the admin panel'

    @pytest.mark.parametrize('body', [{}, {'email': 'admin@example.com'}, {'password': 'x'}])
    def test_login_missing_fields(self, client, body):
        response = client.post('/auth/login', json=body)
        assert response.status_code == 400
        assert response.get_json()['message'] == 'Email and password are required'

    def test_logout(self, client, auth, test_admin_user):
        auth.login()
        response = auth.logout()
        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['toast']['title'] == 'Signed out'
        assert data['redirect'] == '/'

        with client.session_transaction() as sess:
            assert '_user_id' not in sess

    def test_logout_anonymous(self, client):
        response = client.post('/auth/logout')
        assert response.status_code == 200
        assert 'toast' not in response.get_json()


class TestAdminAccess:

    @pytest.mark.parametrize('path', ['/admin/', '/admin/api/posts', '/admin/api/categories'])
    def test_anonymous_redirected_to_login(self, client, path):
        response = client.get(path)
        assert response.status_code == 302
        assert '/auth/login' in response.headers['Location']

    def test_non_admin_forbidden(self, client, test_regular_user):
        with client.session_transaction() as sess:
            sess['_user_id'] = str(test_regular_user.id)
            sess['_fresh'] = True
        response = client.get('/admin/')
        assert response.status_code == 403

    def test_expired_session_cleared(self, app, client, test_admin_user):
        app.config['ABSOLUTE_SESSION_MAX_AGE_SECONDS'] = 60
        with client.session_transaction() as sess:
            sess['_user_id'] = str(test_admin_user.id)
            sess['_login_time'] = 0
        response = client.get('/admin/')
        assert response.status_code == 302


class TestAdminPanelRoutes:
    """Panel navigation endpoints."""

    def test_dashboard_defaults_to_blogs(self, authenticated_client, test_post):
        response = authenticated_client.get('/admin/')
        assert response.status_code == 200
        data = response.get_json()
        assert data['header'] == {'title': 'Blog CRM', 'email': 'admin@example.com'}
        assert data['state']['active_tab'] == 'blogs'
        assert data['state']['editing'] is None
        rows = data['data']['posts']
        assert len(rows) == 1
        assert rows[0]['title'] == 'Test Post'
        assert rows[0]['category_name'] == 'Test Category'
        assert 'no-store' in response.headers['Cache-Control']

    def test_select_categories_tab(self, authenticated_client, test_category):
        response = authenticated_client.post('/admin/tab', json={'tab': 'categories'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['state']['active_tab'] == 'categories'
        assert data['data']['categories'][0]['name'] == 'Test Category'

        # Tab choice survives to the next request
        response = authenticated_client.get('/admin/')
        assert response.get_json()['state']['active_tab'] == 'categories'

    def test_select_unknown_tab(self, authenticated_client):
        response = authenticated_client.post('/admin/tab', json={'tab': 'settings'})
        assert response.status_code == 400

    def test_select_tab_with_non_object_body(self, authenticated_client):
        response = authenticated_client.post('/admin/tab', json=['categories'])
        assert response.status_code == 400
        assert response.get_json()['message'] == 'unknown tab'

    def test_editor_save_with_non_object_body(self, authenticated_client):
        authenticated_client.post('/admin/blogs/new')
        response = authenticated_client.post('/admin/editor/save', json=['x'])
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Request body must be a JSON object'

    def test_new_blog_opens_blank_editor(self, authenticated_client, test_category):
        response = authenticated_client.post('/admin/blogs/new')
        data = response.get_json()
        assert data['state']['active_tab'] == 'editor'
        assert data['state']['editing'] == 'new'
        assert data['state']['editor_title'] == 'Create New Blog'
        assert data['data']['post'] is None
        assert data['data']['draft']['author'] == 'Test Author'
        assert data['data']['draft']['published'] is False
        assert data['data']['categories'] == [{'id': test_category.hex_id, 'name': 'Test Category'}]

    def test_edit_blog_loads_post(self, authenticated_client, test_post):
        response = authenticated_client.post(f'/admin/blogs/{test_post.hex_id}/edit')
        data = response.get_json()
        assert data['state']['editor_title'] == 'Edit Blog'
        assert data['data']['post']['id'] == test_post.hex_id
        assert data['data']['post']['content'] == 'This is a test post content.'

    def test_edit_missing_blog_shows_error_toast(self, authenticated_client):
        response = authenticated_client.post('/admin/blogs/missing/edit')
        assert response.status_code == 200
        data = response.get_json()
        assert data['toast']['variant'] == 'destructive'
        assert data['toast']['description'] == 'Blog not found'

    def test_save_new_blog_from_editor(self, authenticated_client):
        authenticated_client.post('/admin/blogs/new')
        response = authenticated_client.post('/admin/editor/save', json={'title': 'Hello World', 'content': 'Body'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['toast']['description'] == 'Blog created successfully'
        assert data['record']['slug'] == 'hello-world'
        assert data['state']['active_tab'] == 'blogs'
        assert data['state']['editing'] is None

    def test_save_invalid_blog_keeps_editor(self, authenticated_client):
        authenticated_client.post('/admin/blogs/new')
        response = authenticated_client.post('/admin/editor/save', json={'title': 'Only title'})
        assert response.status_code == 400
        data = response.get_json()
        assert data['error'] == 'Title and content are required'
        assert data['state']['active_tab'] == 'editor'

    def test_cancel_editor(self, authenticated_client):
        authenticated_client.post('/admin/blogs/new')
        response = authenticated_client.post('/admin/editor/cancel')
        data = response.get_json()
        assert data['state']['active_tab'] == 'blogs'
        assert data['state']['editing'] is None


class TestBlogApiRoutes:
    """JSON endpoints for blog posts."""

    def test_list_posts(self, authenticated_client, dated_posts):
        response = authenticated_client.get('/admin/api/posts')
        assert response.status_code == 200
        titles = [p['title'] for p in response.get_json()['posts']]
        assert titles == ['Post 2', 'Post 1', 'Post 0']

    def test_get_post(self, authenticated_client, test_post):
        response = authenticated_client.get(f'/admin/api/posts/{test_post.hex_id}')
        assert response.status_code == 200
        assert response.get_json()['post']['title'] == 'Test Post'

    def test_get_missing_post(self, authenticated_client):
        response = authenticated_client.get('/admin/api/posts/missing')
        assert response.status_code == 404
        assert response.get_json()['error'] == 'Blog not found'

    def test_create_post(self, authenticated_client, test_category):
        response = authenticated_client.post('/admin/api/posts', json={
            'title': 'Hello World',
            'content': 'Body',
            'category_id': test_category.hex_id,
        })
        assert response.status_code == 201
        data = response.get_json()
        assert data['toast']['description'] == 'Blog created successfully'
        assert data['record']['slug'] == 'hello-world'
        assert data['record']['published'] is False
        assert data['record']['category_name'] == 'Test Category'

    @pytest.mark.parametrize('body', [['x'], 'title', 42])
    def test_create_post_with_non_object_body(self, authenticated_client, body):
        response = authenticated_client.post('/admin/api/posts', json=body)
        assert response.status_code == 400
        data = response.get_json()
        assert data['success'] is False
        assert data['toast']['description'] == 'Request body must be a JSON object'

    def test_update_post_with_non_object_body(self, authenticated_client, test_post):
        response = authenticated_client.patch(f'/admin/api/posts/{test_post.hex_id}', json=['x'])
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Request body must be a JSON object'

    @pytest.mark.parametrize('body', [['published'], 42])
    def test_publish_with_non_object_body(self, authenticated_client, test_post, body):
        response = authenticated_client.post(f'/admin/api/posts/{test_post.hex_id}/published', json=body)
        assert response.status_code == 400
        assert get_post(test_post.hex_id).published is False

    def test_create_post_missing_content(self, authenticated_client):
        response = authenticated_client.post('/admin/api/posts', json={'title': 'Hello'})
        assert response.status_code == 400
        data = response.get_json()
        assert data['success'] is False
        assert data['toast']['description'] == 'Title and content are required'

    def test_create_post_unknown_category(self, authenticated_client):
        response = authenticated_client.post('/admin/api/posts', json={
            'title': 'Hello', 'content': 'Body', 'category_id': 'missing',
        })
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Selected category does not exist'

    def test_update_post(self, authenticated_client, test_post):
        response = authenticated_client.patch(f'/admin/api/posts/{test_post.hex_id}', json={'excerpt': 'Changed'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['toast']['description'] == 'Blog updated successfully'
        assert data['record']['excerpt'] == 'Changed'
        assert data['record']['title'] == 'Test Post'

    def test_update_missing_post(self, authenticated_client):
        response = authenticated_client.put('/admin/api/posts/missing', json={'title': 'x'})
        assert response.status_code == 404

    def test_publish_post(self, authenticated_client, test_post):
        response = authenticated_client.post(f'/admin/api/posts/{test_post.hex_id}/published', json={'published': True})
        assert response.status_code == 200
        data = response.get_json()
        assert data['toast']['description'] == 'Blog published successfully'
        assert data['record']['published'] is True

    def test_toggle_post(self, authenticated_client, test_post):
        response = authenticated_client.post(f'/admin/api/posts/{test_post.hex_id}/published')
        assert response.get_json()['record']['published'] is True
        response = authenticated_client.post(f'/admin/api/posts/{test_post.hex_id}/published')
        assert response.get_json()['record']['published'] is False

    def test_publish_with_bad_value(self, authenticated_client, test_post):
        response = authenticated_client.post(
            f'/admin/api/posts/{test_post.hex_id}/published', json={'published': 'sometimes'}
        )
        assert response.status_code == 400

    def test_publish_missing_post(self, authenticated_client):
        response = authenticated_client.post('/admin/api/posts/missing/published', json={'published': True})
        assert response.status_code == 404

    def test_delete_post(self, app, authenticated_client, test_post):
        post_id = test_post.hex_id
        response = authenticated_client.delete(f'/admin/api/posts/{post_id}')
        assert response.status_code == 200
        assert response.get_json()['toast']['description'] == 'Blog deleted successfully'

        response = authenticated_client.get(f'/admin/api/posts/{post_id}')
        assert response.status_code == 404


class TestCategoryApiRoutes:
    """JSON endpoints for categories."""

    def test_list_categories(self, authenticated_client, test_category):
        response = authenticated_client.get('/admin/api/categories')
        assert response.status_code == 200
        assert [c['name'] for c in response.get_json()['categories']] == ['Test Category']

    def test_get_category(self, authenticated_client, test_category):
        response = authenticated_client.get(f'/admin/api/categories/{test_category.hex_id}')
        assert response.get_json()['category']['slug'] == 'test-category'

    def test_get_missing_category(self, authenticated_client):
        response = authenticated_client.get('/admin/api/categories/missing')
        assert response.status_code == 404

    def test_create_category(self, authenticated_client):
        response = authenticated_client.post('/admin/api/categories', json={'name': 'News'})
        assert response.status_code == 201
        data = response.get_json()
        assert data['toast']['description'] == 'Category created successfully'
        assert data['record']['slug'] == 'news'

    def test_create_category_without_name(self, authenticated_client):
        response = authenticated_client.post('/admin/api/categories', json={'description': 'No name'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Category name is required'

    def test_create_category_with_non_object_body(self, authenticated_client):
        response = authenticated_client.post('/admin/api/categories', json=['x'])
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Request body must be a JSON object'

    def test_create_category_with_messy_slug(self, authenticated_client):
        response = authenticated_client.post('/admin/api/categories', json={'name': 'News', 'slug': 'Hot News!'})
        assert response.status_code == 201
        assert response.get_json()['record']['slug'] == 'hot-news'

    def test_create_duplicate_category_slug(self, authenticated_client, test_category):
        response = authenticated_client.post('/admin/api/categories', json={'name': 'Test Category'})
        assert response.status_code == 400
        assert response.get_json()['toast']['variant'] == 'destructive'

    def test_update_category(self, authenticated_client, test_category):
        response = authenticated_client.patch(
            f'/admin/api/categories/{test_category.hex_id}', json={'description': 'Updated'}
        )
        assert response.status_code == 200
        assert response.get_json()['record']['description'] == 'Updated'

    def test_delete_category_keeps_post_reference(self, authenticated_client, test_post, test_category):
        category_id = test_category.hex_id
        post_id = test_post.hex_id
        response = authenticated_client.delete(f'/admin/api/categories/{category_id}')
        assert response.status_code == 200
        assert response.get_json()['toast']['description'] == 'Category deleted successfully'

        response = authenticated_client.get(f'/admin/api/posts/{post_id}')
        post = response.get_json()['post']
        assert post['category_id'] == category_id
        assert post['category_name'] is None
