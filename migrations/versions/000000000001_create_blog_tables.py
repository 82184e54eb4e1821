"""Create users, blog categories and blogs

Revision ID: 000000000001
Revises:
Create Date: 2025-09-01 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '000000000001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('hex_id', sa.String(length=32), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_hex_id', 'users', ['hex_id'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'blog_categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('hex_id', sa.String(length=32), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_blog_categories_hex_id', 'blog_categories', ['hex_id'], unique=True)
    op.create_index('ix_blog_categories_slug', 'blog_categories', ['slug'], unique=True)

    # category_id carries blog_categories.hex_id without a foreign key so
    # category deletes never touch posts
    op.create_table(
        'blogs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('hex_id', sa.String(length=32), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('slug', sa.String(length=220), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('excerpt', sa.String(length=500), nullable=True),
        sa.Column('author', sa.String(length=120), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('category_id', sa.String(length=32), nullable=True),
        sa.Column('meta_description', sa.String(length=300), nullable=True),
        sa.Column('meta_keywords', sa.String(length=300), nullable=True),
        sa.Column('featured_image_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_blogs_hex_id', 'blogs', ['hex_id'], unique=True)
    op.create_index('ix_blogs_slug', 'blogs', ['slug'], unique=True)
    op.create_index('ix_blogs_category_id', 'blogs', ['category_id'], unique=False)


def downgrade():
    op.drop_index('ix_blogs_category_id', table_name='blogs')
    op.drop_index('ix_blogs_slug', table_name='blogs')
    op.drop_index('ix_blogs_hex_id', table_name='blogs')
    op.drop_table('blogs')
    op.drop_index('ix_blog_categories_slug', table_name='blog_categories')
    op.drop_index('ix_blog_categories_hex_id', table_name='blog_categories')
    op.drop_table('blog_categories')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_hex_id', table_name='users')
    op.drop_table('users')
