"""
API Routes - Content JSON endpoints
"""

import os
from flask import jsonify, send_from_directory, current_app, abort
from utils.content_config import ContentType
from utils.data import load_content
from . import api_bp


@api_bp.after_request
def add_cors_headers(response):
    """Allow the content to be read from other origins"""
    response.headers['Access-Control-Allow-Origin'] = '*'
    response.headers['Access-Control-Allow-Headers'] = 'content-type, accept'
    return response


@api_bp.route('/api/<name>')
def content(name):
    """Remote content endpoint backed by the database"""
    try:
        content_type = ContentType(name)
    except ValueError:
        return jsonify({'error': f'Unknown content type: {name}'}), 404

    try:
        payload = load_content(content_type)
    except Exception as e:
        current_app.logger.error(f"Error loading {content_type} from database: {str(e)}")
        return jsonify({'error': 'Failed to load content'}), 500

    return jsonify(payload)


@api_bp.route('/data/<name>.json')
def static_content(name):
    """Bundled static JSON file for a content type"""
    try:
        content_type = ContentType(name)
    except ValueError:
        abort(404)

    data_dir = os.path.join(current_app.static_folder, 'data')
    return send_from_directory(data_dir, f'{content_type.value}.json', mimetype='application/json')
