"""
Portfolio Routes - Public portfolio views
Handles: Portfolio sections, section fragments, project details, contact form
"""

from flask import render_template, redirect, url_for, request, flash, jsonify, abort, current_app
from extensions import db, get_content_loader
from models import ContactMessage
from utils.content_config import ContentType
from utils.content_loader import LoadFailure
from utils.data import get_admin_recipient
from utils.icons import get_skill_icon, get_social_icon
from utils.notifications import send_contact_notification
from utils.security import check_rate_limit
from . import portfolio_bp

SECTION_TEMPLATES = {
    ContentType.ABOUT: 'sections/about.html',
    ContentType.SKILLS: 'sections/skills.html',
    ContentType.PROJECTS: 'sections/projects.html',
    ContentType.EXPERIENCE: 'sections/experience.html',
    ContentType.CONTACT: 'sections/contact.html',
}

# Payloads rendered as lists; anything else counts as no data
LIST_SECTIONS = {ContentType.SKILLS, ContentType.PROJECTS, ContentType.EXPERIENCE}


def _parse_content_type(name):
    try:
        return ContentType(name)
    except ValueError:
        abort(404)


def normalize_payload(content_type, payload):
    """Coerce an opaque payload into what the section template iterates over"""
    if content_type in LIST_SECTIONS:
        return payload if isinstance(payload, list) else []
    return payload if isinstance(payload, dict) else None


def filter_projects(projects, mode):
    if mode == 'featured':
        return [p for p in projects if isinstance(p, dict) and p.get('featured')]
    return projects


def section_context(content):
    """
    Template context for the sections

    Args:
        content (dict): ContentType -> payload, missing types render empty
    """
    sections = {t.value: normalize_payload(t, content.get(t)) for t in ContentType}
    project_filter = 'featured' if request.args.get('filter') == 'featured' else 'all'
    sections['projects'] = filter_projects(sections['projects'], project_filter)
    return {
        'sections': sections,
        'project_filter': project_filter,
        'get_skill_icon': get_skill_icon,
        'get_social_icon': get_social_icon,
    }


@portfolio_bp.route('/')
async def index():
    """Portfolio page with every section"""
    loader = get_content_loader()
    content = await loader.load_multiple(list(ContentType))
    missing = [t.value for t in ContentType if t not in content]
    if missing:
        current_app.logger.warning(f"Rendering portfolio without: {', '.join(missing)}")
    return render_template('index.html', **section_context(content))


@portfolio_bp.route('/sections/<name>')
async def section(name):
    """Single section fragment, loaded on its own"""
    content_type = _parse_content_type(name)
    try:
        payload = await get_content_loader().load(content_type)
    except LoadFailure as failure:
        current_app.logger.warning(f"Section {content_type} rendered empty: {failure}")
        payload = None

    context = section_context({content_type: payload})
    return render_template(SECTION_TEMPLATES[content_type], **context)


@portfolio_bp.route('/projects/<slug>')
async def project_detail(slug):
    """Project detail page"""
    try:
        projects = await get_content_loader().load(ContentType.PROJECTS)
    except LoadFailure as failure:
        current_app.logger.warning(f"Project detail unavailable: {failure}")
        abort(404)

    project = next(
        (p for p in normalize_payload(ContentType.PROJECTS, projects)
         if isinstance(p, dict) and (p.get('slug') == slug or str(p.get('id')) == slug)),
        None)
    if not project:
        abort(404)

    return render_template('project_detail.html', project=project)


def _contact_response(payload, status):
    """JSON for API clients, flash + redirect for the HTML form"""
    if request.is_json:
        return jsonify(payload), status
    if status < 300:
        flash("Message sent successfully! I'll get back to you soon.", 'success')
    else:
        flash(payload.get('error', 'Error sending message. Please try again.'), 'danger')
    return redirect(url_for('portfolio.index') + '#contact')


@portfolio_bp.route('/contact', methods=['POST'])
def contact():
    """Contact form processing - saves the message and notifies the owner"""
    form = request.get_json(silent=True) if request.is_json else request.form
    form = form or {}

    # Honeypot spam protection
    if form.get('website'):
        return _contact_response({'success': True}, 200)

    if not check_rate_limit('portfolio_contact'):
        return _contact_response({'error': 'Too many requests. Please try again later.'}, 429)

    name = str(form.get('name', '')).strip()
    email = str(form.get('email', '')).strip()
    message_content = str(form.get('message', '')).strip()

    if not all([name, email, message_content]):
        return _contact_response({'error': 'Name, email, and message are required'}, 400)

    try:
        new_message = ContactMessage(
            name=name[:255],
            email=email[:255],
            message=message_content[:5000],
            is_read=False
        )
        db.session.add(new_message)
        db.session.commit()
    except Exception as e:
        current_app.logger.error(f"Contact form error: {str(e)}")
        db.session.rollback()
        return _contact_response({'error': 'Failed to save message'}, 500)

    current_app.logger.info(f"Contact message saved to DB, message_id: {new_message.id}")

    send_contact_notification(get_admin_recipient(), name, email, message_content)

    return _contact_response({'success': True, 'messageId': new_message.id}, 200)
