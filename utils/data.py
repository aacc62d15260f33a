"""
Data Management Module - Builds the JSON content payloads served by the API
The same shapes are used by the bundled static JSON files, so a section
renders the same whichever source the loader is switched to.
"""

from flask import current_app
from models import (
    AboutContent, SkillCategory, Project, Experience, ContactInfo, ContactMessage
)
from utils.content_config import ContentType


def _timestamp(value):
    return value.strftime('%Y-%m-%d %H:%M:%S') if value else None


def about_to_dict(about):
    """Convert about model to dictionary"""
    return {
        'id': about.id,
        'name': about.name,
        'title': about.title or '',
        'bio': about.bio or '',
        'image_url': about.image_url or '',
        'github_url': about.github_url or '',
        'linkedin_url': about.linkedin_url or '',
        'email': about.email or '',
        'resume_url': about.resume_url or '',
        'updated_at': _timestamp(about.updated_at)
    }


def skill_to_dict(skill):
    """Convert skill category model to dictionary"""
    return {
        'id': skill.id,
        'category': skill.category,
        'skills': skill.skills or [],
        'display_order': skill.display_order or 0
    }


def project_to_dict(project):
    """Convert project model to dictionary"""
    return {
        'id': project.id,
        'slug': project.slug,
        'name': project.name,
        'description': project.description or '',
        'short_description': project.short_description or '',
        'images': project.images or [],
        'tech': project.tech or [],
        'tags': project.tags or [],
        'github_url': project.github_url or '',
        'live_url': project.live_url or '',
        'status': project.status or 'public',
        'featured': bool(project.featured),
        'display_order': project.display_order or 0,
        'created_at': _timestamp(project.created_at)
    }


def experience_to_dict(experience):
    """Convert experience model to dictionary"""
    return {
        'id': experience.id,
        'company': experience.company,
        'role': experience.role,
        'from_date': experience.from_date,
        'to_date': experience.to_date or None,
        'details': experience.details or [],
        'display_order': experience.display_order or 0
    }


def contact_to_dict(contact):
    """Convert contact info model to dictionary"""
    return {
        'id': contact.id,
        'email': contact.email or '',
        'phone': contact.phone or '',
        'location': contact.location or '',
        'availability': contact.availability or '',
        'social': contact.social or []
    }


def message_to_dict(message):
    """Convert contact message model to dictionary"""
    return {
        'id': message.id,
        'name': message.name,
        'email': message.email,
        'message': message.message,
        'is_read': bool(message.is_read),
        'created_at': _timestamp(message.created_at)
    }


def get_about():
    return AboutContent.query.first()


def get_contact_info():
    return ContactInfo.query.first()


def load_content(content_type):
    """
    Build the payload for one content type from the database

    Args:
        content_type (ContentType | str): Content type key

    Returns:
        dict | list | None: about/contact as a single object (None when not
        set up yet), skills/projects/experience as ordered lists
    """
    content_type = ContentType(content_type)

    if content_type is ContentType.ABOUT:
        about = get_about()
        return about_to_dict(about) if about else None

    if content_type is ContentType.CONTACT:
        contact = get_contact_info()
        return contact_to_dict(contact) if contact else None

    if content_type is ContentType.SKILLS:
        rows = SkillCategory.query.order_by(SkillCategory.display_order).all()
        return [skill_to_dict(s) for s in rows]

    if content_type is ContentType.PROJECTS:
        rows = Project.query.order_by(Project.display_order).all()
        return [project_to_dict(p) for p in rows]

    rows = Experience.query.order_by(Experience.display_order).all()
    current_app.logger.debug(f"Loaded {len(rows)} experience entries from database")
    return [experience_to_dict(e) for e in rows]


def get_admin_recipient():
    """
    Address that receives contact notifications
    Contact info email first, then the about email.
    """
    contact = get_contact_info()
    if contact and contact.email:
        return contact.email
    about = get_about()
    if about and about.email:
        return about.email
    return None


def get_content_counts():
    """Row counts shown on the admin dashboard"""
    return {
        'about': AboutContent.query.count(),
        'skills': SkillCategory.query.count(),
        'projects': Project.query.count(),
        'experience': Experience.query.count(),
        'contact': ContactInfo.query.count(),
        'messages': ContactMessage.query.count(),
        'unread_messages': ContactMessage.query.filter_by(is_read=False).count()
    }
