"""
Helpers Module - Utility functions for admin form handling and uploads
"""

import os
import re
import uuid
from flask import current_app
from werkzeug.utils import secure_filename


def allowed_file(filename):
    """Check if file extension is allowed"""
    allowed_extensions = current_app.config.get('ALLOWED_EXTENSIONS', {'png', 'jpg', 'jpeg', 'gif', 'webp'})
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed_extensions


def save_upload(file_storage, subfolder=''):
    """
    Save an uploaded image under UPLOAD_FOLDER with a unique name

    Args:
        file_storage (FileStorage): Uploaded file from request.files
        subfolder (str): Folder inside UPLOAD_FOLDER (e.g. 'projects')

    Returns:
        str | None: Public URL path of the saved file, None when nothing
        valid was uploaded
    """
    if not file_storage or not file_storage.filename:
        return None
    if not allowed_file(file_storage.filename):
        current_app.logger.warning(f"Rejected upload with disallowed extension: {file_storage.filename}")
        return None

    # secure_filename drops non-ASCII characters and can take the dot with
    # them; the extension comes from the name allowed_file already checked
    filename = secure_filename(file_storage.filename) or 'upload'
    ext = file_storage.filename.rsplit('.', 1)[1].lower()
    unique_name = f"{uuid.uuid4().hex}.{ext}"

    upload_folder = current_app.config['UPLOAD_FOLDER']
    target_dir = os.path.join(current_app.root_path, upload_folder, subfolder)
    os.makedirs(target_dir, exist_ok=True)
    file_storage.save(os.path.join(target_dir, unique_name))

    url_path = current_app.config.get('UPLOAD_URL_PATH', '/static/uploads')
    public_path = '/'.join(p.strip('/') for p in (url_path, subfolder, unique_name) if p)
    current_app.logger.info(f"Saved upload {filename} as /{public_path}")
    return '/' + public_path


def parse_list_field(value):
    """Split comma or newline separated form text into a clean list"""
    if not value:
        return []
    return [item.strip() for item in re.split(r'[,\n]', value) if item.strip()]


def parse_lines_field(value):
    """Split newline separated form text, keeping commas inside items"""
    if not value:
        return []
    return [line.strip() for line in value.splitlines() if line.strip()]


def slugify(text):
    """Lowercase, hyphen-separated slug"""
    slug = re.sub(r'[^a-z0-9]+', '-', (text or '').lower()).strip('-')
    return slug or uuid.uuid4().hex[:8]


def parse_int(value, default=0):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
