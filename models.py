from extensions import db, login_manager
from datetime import datetime
from flask_login import UserMixin
from sqlalchemy import JSON
import uuid


SKILL_CATEGORIES = (
    'Frontend Development',
    'Backend Development',
    'Mobile Development',
    'Database & Cloud',
    'Tools & DevOps',
)


# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text on SQLite
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


def _uuid():
    return str(uuid.uuid4())


class User(UserMixin, db.Model):
    __tablename__ = 'users'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class Profile(db.Model):
    __tablename__ = 'profiles'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, unique=True)
    name = db.Column(db.String(255), nullable=False, default='')
    title = db.Column(db.String(255))
    short_bio_en = db.Column(db.Text)
    short_bio_fr = db.Column(db.Text)
    description = db.Column(db.Text, nullable=False, default='')
    description_en = db.Column(db.Text)
    description_fr = db.Column(db.Text)
    about = db.Column(db.Text)
    years_experience = db.Column(db.Integer, nullable=False, default=0)
    projects_count = db.Column(db.Integer, nullable=False, default=0)
    profile_image = db.Column(db.String(500))
    cv_en = db.Column(db.String(500))
    cv_fr = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Project(db.Model):
    __tablename__ = 'projects'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    description_en = db.Column(db.Text)
    description_fr = db.Column(db.Text)
    about_project = db.Column(db.Text)
    about_project_en = db.Column(db.Text)
    about_project_fr = db.Column(db.Text)
    images = db.Column(SafeJSON, default=list)  # index 0 is the cover image
    live_demo_link = db.Column(db.String(500))
    github_link = db.Column(db.String(500))
    technologies = db.Column(SafeJSON, default=list)
    key_features = db.Column(SafeJSON, default=list)
    is_visible = db.Column(db.Boolean, default=True)
    is_under_development = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.Index('idx_projects_visible_created', 'is_visible', 'created_at'),
    )


class Skill(db.Model):
    __tablename__ = 'skills'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    category = db.Column(db.String(100), nullable=False)
    logo_url = db.Column(db.String(500))
    is_visible = db.Column(db.Boolean, default=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('user_id', 'category', 'sort_order', name='uq_skills_category_order'),
    )


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, user_id)
