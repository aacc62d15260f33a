"""
Admin Routes - Portfolio content management
Handles: Dashboard, about, contact info, skills, projects, experience and messages.
These screens read and write the database directly.
"""

from flask import render_template, redirect, url_for, request, flash, current_app, abort
from extensions import db
from models import AboutContent, SkillCategory, Project, Experience, ContactInfo, ContactMessage
from utils.data import get_about, get_contact_info, get_content_counts
from utils.decorators import admin_required
from utils.helpers import save_upload, parse_list_field, parse_lines_field, slugify, parse_int
from . import admin_bp

PROJECT_STATUSES = ('public', 'private', 'beta')


def _get_or_404(model, object_id):
    obj = db.session.get(model, object_id)
    if obj is None:
        abort(404)
    return obj


def _commit(success_message, error_prefix):
    """Commit the session, flash the outcome; returns True on success"""
    try:
        db.session.commit()
        flash(success_message, 'success')
        return True
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"{error_prefix}: {str(e)}")
        flash(f'{error_prefix}: {str(e)}', 'error')
        return False


@admin_bp.route('/')
@admin_required
def index():
    """Admin dashboard"""
    counts = get_content_counts()
    recent_messages = ContactMessage.query.order_by(ContactMessage.created_at.desc()).limit(5).all()
    content_source = 'remote' if current_app.config.get('CONTENT_USE_REMOTE') else 'static'
    return render_template('admin/dashboard.html',
                           counts=counts,
                           recent_messages=recent_messages,
                           content_source=content_source)


# ---------------------------------------------------------------------------
# About / Contact info (single row)
# ---------------------------------------------------------------------------

@admin_bp.route('/about', methods=['GET', 'POST'])
@admin_required
def about():
    """Edit about content"""
    about = get_about()
    if request.method == 'POST':
        name = request.form.get('name', '').strip()
        if not name:
            flash('Name is required.', 'error')
            return render_template('admin/about.html', about=about)

        if about is None:
            about = AboutContent(name=name)
            db.session.add(about)

        about.name = name[:255]
        about.title = request.form.get('title', '').strip()[:255]
        about.bio = request.form.get('bio', '').strip()
        about.github_url = request.form.get('github_url', '').strip()[:500] or None
        about.linkedin_url = request.form.get('linkedin_url', '').strip()[:500] or None
        about.email = request.form.get('email', '').strip()[:255] or None
        about.resume_url = request.form.get('resume_url', '').strip()[:500] or None

        uploaded = save_upload(request.files.get('image'), 'about')
        if uploaded:
            about.image_url = uploaded
        elif request.form.get('image_url', '').strip():
            about.image_url = request.form.get('image_url').strip()[:500]

        if _commit('About content updated successfully', 'Failed to update about'):
            return redirect(url_for('admin.about'))

    return render_template('admin/about.html', about=about)


@admin_bp.route('/contact', methods=['GET', 'POST'])
@admin_required
def contact():
    """Edit contact info and social links"""
    contact = get_contact_info()
    if request.method == 'POST':
        if contact is None:
            contact = ContactInfo()
            db.session.add(contact)

        contact.email = request.form.get('email', '').strip()[:255] or None
        contact.phone = request.form.get('phone', '').strip()[:50] or None
        contact.location = request.form.get('location', '').strip()[:255] or None
        contact.availability = request.form.get('availability', '').strip()[:255] or None

        social = []
        platforms = request.form.getlist('social_platform[]')
        urls = request.form.getlist('social_url[]')
        icons = request.form.getlist('social_icon[]')
        for idx, platform in enumerate(platforms):
            url = urls[idx].strip() if idx < len(urls) else ''
            if not platform.strip() or not url:
                continue
            icon = icons[idx].strip() if idx < len(icons) else ''
            social.append({'platform': platform.strip(), 'url': url, 'icon': icon or platform.strip()})
        contact.social = social

        if _commit('Contact info updated successfully', 'Failed to update contact'):
            return redirect(url_for('admin.contact'))

    return render_template('admin/contact.html', contact=contact)


# ---------------------------------------------------------------------------
# Skills
# ---------------------------------------------------------------------------

def _apply_skill_form(skill):
    skill.category = request.form.get('category', '').strip()[:100]
    skill.skills = parse_list_field(request.form.get('skills', ''))
    skill.display_order = parse_int(request.form.get('display_order'), skill.display_order or 0)


@admin_bp.route('/skills')
@admin_required
def skills():
    """List skill categories"""
    rows = SkillCategory.query.order_by(SkillCategory.display_order).all()
    return render_template('admin/skills.html', skills=rows)


@admin_bp.route('/skills/add', methods=['GET', 'POST'])
@admin_required
def add_skill():
    """Add skill category"""
    skill = SkillCategory(display_order=SkillCategory.query.count())
    if request.method == 'POST':
        _apply_skill_form(skill)
        if not skill.category:
            flash('Category is required.', 'error')
            return render_template('admin/skill_form.html', skill=skill)
        db.session.add(skill)
        if _commit('Skill category created successfully', 'Failed to create skill'):
            return redirect(url_for('admin.skills'))
    return render_template('admin/skill_form.html', skill=skill)


@admin_bp.route('/skills/edit/<skill_id>', methods=['GET', 'POST'])
@admin_required
def edit_skill(skill_id):
    """Edit skill category"""
    skill = _get_or_404(SkillCategory, skill_id)
    if request.method == 'POST':
        _apply_skill_form(skill)
        if not skill.category:
            db.session.rollback()
            flash('Category is required.', 'error')
            return redirect(url_for('admin.edit_skill', skill_id=skill_id))
        if _commit('Skill updated successfully', 'Failed to update skill'):
            return redirect(url_for('admin.skills'))
    return render_template('admin/skill_form.html', skill=skill)


@admin_bp.route('/skills/delete/<skill_id>', methods=['POST'])
@admin_required
def delete_skill(skill_id):
    """Delete skill category"""
    db.session.delete(_get_or_404(SkillCategory, skill_id))
    _commit('Skill category deleted successfully', 'Failed to delete skill')
    return redirect(url_for('admin.skills'))


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

def _unique_slug(base, project_id=None):
    slug = base
    suffix = 2
    while True:
        existing = Project.query.filter_by(slug=slug).first()
        if not existing or existing.id == project_id:
            return slug
        slug = f"{base}-{suffix}"
        suffix += 1


def _apply_project_form(project):
    project.name = request.form.get('name', '').strip()[:255]
    requested_slug = slugify(request.form.get('slug', '').strip() or project.name)
    project.slug = _unique_slug(requested_slug, project.id)
    project.short_description = request.form.get('short_description', '').strip()[:500]
    project.description = request.form.get('description', '').strip()
    project.tech = parse_list_field(request.form.get('tech', ''))
    project.tags = parse_list_field(request.form.get('tags', ''))
    project.github_url = request.form.get('github_url', '').strip()[:500] or None
    project.live_url = request.form.get('live_url', '').strip()[:500] or None
    status = request.form.get('status', 'public')
    project.status = status if status in PROJECT_STATUSES else 'public'
    project.featured = bool(request.form.get('featured'))
    project.display_order = parse_int(request.form.get('display_order'), project.display_order or 0)

    # Keep the images the form still lists, then append new uploads (up to 8 total)
    images = parse_lines_field(request.form.get('images', ''))
    for file in request.files.getlist('image_files[]'):
        if len(images) >= 8:
            break
        uploaded = save_upload(file, 'projects')
        if uploaded:
            images.append(uploaded)
    project.images = images


@admin_bp.route('/projects')
@admin_required
def projects():
    """List projects"""
    rows = Project.query.order_by(Project.display_order).all()
    return render_template('admin/projects.html', projects=rows)


@admin_bp.route('/projects/add', methods=['GET', 'POST'])
@admin_required
def add_project():
    """Add new project"""
    project = Project(display_order=Project.query.count(), status='public', images=[], tech=[], tags=[])
    if request.method == 'POST':
        if not request.form.get('name', '').strip():
            flash('Project name is required.', 'error')
            return render_template('admin/project_form.html', project=project, statuses=PROJECT_STATUSES)
        _apply_project_form(project)
        db.session.add(project)
        if _commit('Project created successfully', 'Failed to create project'):
            return redirect(url_for('admin.projects'))
    return render_template('admin/project_form.html', project=project, statuses=PROJECT_STATUSES)


@admin_bp.route('/projects/edit/<project_id>', methods=['GET', 'POST'])
@admin_required
def edit_project(project_id):
    """Edit project"""
    project = _get_or_404(Project, project_id)
    if request.method == 'POST':
        if not request.form.get('name', '').strip():
            flash('Project name is required.', 'error')
            return redirect(url_for('admin.edit_project', project_id=project_id))
        _apply_project_form(project)
        if _commit('Project updated successfully', 'Failed to update project'):
            return redirect(url_for('admin.projects'))
    return render_template('admin/project_form.html', project=project, statuses=PROJECT_STATUSES)


@admin_bp.route('/projects/delete/<project_id>', methods=['POST'])
@admin_required
def delete_project(project_id):
    """Delete project"""
    db.session.delete(_get_or_404(Project, project_id))
    _commit('Project deleted successfully', 'Failed to delete project')
    return redirect(url_for('admin.projects'))


@admin_bp.route('/projects/reorder', methods=['POST'])
@admin_required
def reorder_projects():
    """Apply display order from the submitted id list"""
    for position, project_id in enumerate(request.form.getlist('order[]')):
        project = db.session.get(Project, project_id)
        if project:
            project.display_order = position
    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to reorder projects: {str(e)}")
        flash(f'Failed to reorder projects: {str(e)}', 'error')
    return redirect(url_for('admin.projects'))


# ---------------------------------------------------------------------------
# Experience
# ---------------------------------------------------------------------------

def _apply_experience_form(experience):
    experience.company = request.form.get('company', '').strip()[:255]
    experience.role = request.form.get('role', '').strip()[:255]
    experience.from_date = request.form.get('from_date', '').strip()[:50]
    experience.to_date = request.form.get('to_date', '').strip()[:50] or None
    experience.details = parse_lines_field(request.form.get('details', ''))
    experience.display_order = parse_int(request.form.get('display_order'), experience.display_order or 0)


@admin_bp.route('/experience')
@admin_required
def experience():
    """List experience entries"""
    rows = Experience.query.order_by(Experience.display_order).all()
    return render_template('admin/experience.html', entries=rows)


@admin_bp.route('/experience/add', methods=['GET', 'POST'])
@admin_required
def add_experience():
    """Add experience entry"""
    entry = Experience(display_order=Experience.query.count(), details=[])
    if request.method == 'POST':
        _apply_experience_form(entry)
        if not all([entry.company, entry.role, entry.from_date]):
            flash('Company, role and start date are required.', 'error')
            return render_template('admin/experience_form.html', entry=entry)
        db.session.add(entry)
        if _commit('Experience created successfully', 'Failed to create experience'):
            return redirect(url_for('admin.experience'))
    return render_template('admin/experience_form.html', entry=entry)


@admin_bp.route('/experience/edit/<entry_id>', methods=['GET', 'POST'])
@admin_required
def edit_experience(entry_id):
    """Edit experience entry"""
    entry = _get_or_404(Experience, entry_id)
    if request.method == 'POST':
        _apply_experience_form(entry)
        if not all([entry.company, entry.role, entry.from_date]):
            db.session.rollback()
            flash('Company, role and start date are required.', 'error')
            return redirect(url_for('admin.edit_experience', entry_id=entry_id))
        if _commit('Experience updated successfully', 'Failed to update experience'):
            return redirect(url_for('admin.experience'))
    return render_template('admin/experience_form.html', entry=entry)


@admin_bp.route('/experience/delete/<entry_id>', methods=['POST'])
@admin_required
def delete_experience(entry_id):
    """Delete experience entry"""
    db.session.delete(_get_or_404(Experience, entry_id))
    _commit('Experience deleted successfully', 'Failed to delete experience')
    return redirect(url_for('admin.experience'))


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

@admin_bp.route('/messages')
@admin_required
def messages():
    """Contact messages, newest first"""
    rows = ContactMessage.query.order_by(ContactMessage.created_at.desc()).all()
    return render_template('admin/messages.html', messages=rows)


@admin_bp.route('/messages/read/<message_id>', methods=['POST'])
@admin_required
def mark_message(message_id):
    """Mark a message read or unread"""
    message = _get_or_404(ContactMessage, message_id)
    message.is_read = request.form.get('read', '1') not in ('0', 'false', 'False')
    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to update message {message_id}: {str(e)}")
        flash('Failed to update message.', 'error')
    return redirect(url_for('admin.messages'))


@admin_bp.route('/messages/delete/<message_id>', methods=['POST'])
@admin_required
def delete_message(message_id):
    """Delete a contact message"""
    db.session.delete(_get_or_404(ContactMessage, message_id))
    _commit('Message deleted', 'Failed to delete message')
    return redirect(url_for('admin.messages'))
