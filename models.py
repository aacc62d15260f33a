from extensions import db, login_manager
from datetime import datetime
from flask_login import UserMixin
from sqlalchemy import JSON
import uuid

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


class AdminUser(UserMixin, db.Model):
    __tablename__ = 'admin_users'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    username = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    is_active_account = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def is_active(self):
        return bool(self.is_active_account)


@login_manager.user_loader
def load_admin_user(user_id):
    return db.session.get(AdminUser, user_id)


class AboutContent(db.Model):
    __tablename__ = 'about_content'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    name = db.Column(db.String(255), nullable=False)
    title = db.Column(db.String(255), nullable=False, default='')
    bio = db.Column(db.Text)
    image_url = db.Column(db.String(500))
    github_url = db.Column(db.String(500))
    linkedin_url = db.Column(db.String(500))
    email = db.Column(db.String(255))
    resume_url = db.Column(db.String(500))
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class SkillCategory(db.Model):
    __tablename__ = 'skills'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    category = db.Column(db.String(100), nullable=False)
    skills = db.Column(SafeJSON, default=list)  # ["Python", "Flask", ...]
    display_order = db.Column(db.Integer, default=0)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Project(db.Model):
    __tablename__ = 'projects'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    slug = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    short_description = db.Column(db.Text)
    images = db.Column(SafeJSON, default=list)
    tech = db.Column(SafeJSON, default=list)
    tags = db.Column(SafeJSON, default=list)
    github_url = db.Column(db.String(500))
    live_url = db.Column(db.String(500))
    status = db.Column(db.String(20), default='public')  # public, private, beta
    display_order = db.Column(db.Integer, default=0)
    featured = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Experience(db.Model):
    __tablename__ = 'experience'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    company = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(255), nullable=False)
    from_date = db.Column(db.String(50), nullable=False)
    to_date = db.Column(db.String(50))  # empty means "Present"
    details = db.Column(SafeJSON, default=list)
    display_order = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class ContactInfo(db.Model):
    __tablename__ = 'contact_info'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(50))
    location = db.Column(db.String(255))
    availability = db.Column(db.String(255))
    social = db.Column(SafeJSON, default=list)  # [{platform, url, icon}]
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class ContactMessage(db.Model):
    __tablename__ = 'contact_messages'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    is_read = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
