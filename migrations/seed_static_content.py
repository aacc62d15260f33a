"""
Seed Script: static JSON to database
Imports the bundled static/data/*.json files into the content tables so the
site can be switched to the remote API without re-entering content.

Usage:
    python migrations/seed_static_content.py [--data-dir static/data] [--replace]
"""

import os
import sys
import json
import argparse

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from extensions import db
from models import AboutContent, SkillCategory, Project, Experience, ContactInfo
from utils.content_config import ContentType
from utils.helpers import slugify

DEFAULT_DATA_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'static', 'data')

MODELS = {
    ContentType.ABOUT: AboutContent,
    ContentType.SKILLS: SkillCategory,
    ContentType.PROJECTS: Project,
    ContentType.EXPERIENCE: Experience,
    ContentType.CONTACT: ContactInfo,
}


def read_static_file(data_dir, content_type):
    """Read one static JSON file, None when it does not exist"""
    path = os.path.join(data_dir, f'{content_type.value}.json')
    if not os.path.exists(path):
        print(f"  {path} not found, skipping...")
        return None
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def seed_about(data):
    about = AboutContent(
        name=data.get('name', ''),
        title=data.get('title', ''),
        bio=data.get('bio', ''),
        image_url=data.get('image_url') or None,
        github_url=data.get('github_url') or None,
        linkedin_url=data.get('linkedin_url') or None,
        email=data.get('email') or None,
        resume_url=data.get('resume_url') or None
    )
    db.session.add(about)
    return 1


def seed_contact(data):
    contact = ContactInfo(
        email=data.get('email') or None,
        phone=data.get('phone') or None,
        location=data.get('location') or None,
        availability=data.get('availability') or None,
        social=data.get('social', [])
    )
    db.session.add(contact)
    return 1


def seed_skills(items):
    for idx, skill_json in enumerate(items):
        db.session.add(SkillCategory(
            category=skill_json.get('category', ''),
            skills=skill_json.get('skills', []),
            display_order=skill_json.get('display_order', idx)
        ))
    return len(items)


def seed_projects(items):
    seen = set()
    for idx, project_json in enumerate(items):
        name = project_json.get('name', '')
        slug = project_json.get('slug') or slugify(name)
        if slug in seen:
            slug = f"{slug}-{idx + 1}"
        seen.add(slug)
        db.session.add(Project(
            slug=slug,
            name=name,
            description=project_json.get('description', ''),
            short_description=project_json.get('short_description', ''),
            images=project_json.get('images', []),
            tech=project_json.get('tech', []),
            tags=project_json.get('tags', []),
            github_url=project_json.get('github_url') or project_json.get('github') or None,
            live_url=project_json.get('live_url') or project_json.get('liveUrl') or None,
            status=project_json.get('status', 'public'),
            featured=bool(project_json.get('featured', False)),
            display_order=project_json.get('display_order', idx)
        ))
    return len(items)


def seed_experience(items):
    for idx, exp_json in enumerate(items):
        db.session.add(Experience(
            company=exp_json.get('company', ''),
            role=exp_json.get('role', ''),
            from_date=str(exp_json.get('from_date') or exp_json.get('from') or ''),
            to_date=exp_json.get('to_date') or exp_json.get('to') or None,
            details=exp_json.get('details', []),
            display_order=exp_json.get('display_order', idx)
        ))
    return len(items)


SEEDERS = {
    ContentType.ABOUT: seed_about,
    ContentType.SKILLS: seed_skills,
    ContentType.PROJECTS: seed_projects,
    ContentType.EXPERIENCE: seed_experience,
    ContentType.CONTACT: seed_contact,
}


def seed_all(data_dir=DEFAULT_DATA_DIR, replace=False):
    """
    Seed every content table from the static files

    Args:
        data_dir (str): Folder holding <type>.json files
        replace (bool): Delete existing rows first; otherwise tables that
            already have rows are left untouched

    Returns:
        dict: content type value -> number of rows inserted
    """
    results = {}
    for content_type in ContentType:
        model = MODELS[content_type]
        if model.query.count() and not replace:
            print(f"  {content_type.value}: table already has rows, skipping...")
            results[content_type.value] = 0
            continue

        data = read_static_file(data_dir, content_type)
        if data is None:
            results[content_type.value] = 0
            continue

        if replace:
            model.query.delete()
        results[content_type.value] = SEEDERS[content_type](data)
        print(f"  [OK] {content_type.value}: {results[content_type.value]} row(s)")

    db.session.commit()
    return results


def main():
    """Main seed function"""
    from app import create_app

    parser = argparse.ArgumentParser(description='Seed content tables from static JSON files')
    parser.add_argument('--data-dir', default=DEFAULT_DATA_DIR, help='Folder holding <type>.json files')
    parser.add_argument('--replace', action='store_true', help='Replace rows that already exist')
    args = parser.parse_args()

    print("=" * 60)
    print("Static JSON to Database Seed")
    print("=" * 60)

    app = create_app()
    with app.app_context():
        results = seed_all(args.data_dir, replace=args.replace)

    print("\nSeed completed: " + ', '.join(f"{k}={v}" for k, v in results.items()))


if __name__ == '__main__':
    main()
