import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from io import StringIO

from extensions import db
from migrations.seed_static_content import seed_all
from models import AboutContent, ContactInfo, Experience, Project, SkillCategory
from tests.support import AppTestCase


class SeedStaticContentTests(AppTestCase):
    def seed(self, *args, **kwargs):
        with redirect_stdout(StringIO()):
            return seed_all(*args, **kwargs)

    def test_seeds_bundled_files(self) -> None:
        results = self.seed()

        self.assertEqual(results, {
            'about': 1,
            'skills': SkillCategory.query.count(),
            'projects': Project.query.count(),
            'experience': Experience.query.count(),
            'contact': 1,
        })
        self.assertGreater(results['projects'], 0)
        self.assertEqual(AboutContent.query.count(), 1)
        self.assertEqual(ContactInfo.query.count(), 1)

    def test_api_serves_what_the_static_files_hold(self) -> None:
        self.seed()

        with open(os.path.join(self.app.static_folder, 'data', 'projects.json'), encoding='utf-8') as f:
            static_projects = json.load(f)
        api_projects = self.client.get('/api/projects').get_json()

        self.assertEqual([p['slug'] for p in api_projects], [p['slug'] for p in static_projects])
        self.assertEqual([p['featured'] for p in api_projects], [p['featured'] for p in static_projects])

    def test_populated_tables_are_skipped(self) -> None:
        db.session.add(SkillCategory(category='Existing', skills=[]))
        db.session.commit()

        results = self.seed()

        self.assertEqual(results['skills'], 0)
        self.assertEqual([s.category for s in SkillCategory.query.all()], ['Existing'])

    def test_replace(self) -> None:
        db.session.add(SkillCategory(category='Existing', skills=[]))
        db.session.commit()

        self.seed(replace=True)

        categories = [s.category for s in SkillCategory.query.all()]
        self.assertNotIn('Existing', categories)
        self.assertTrue(categories)

    def test_custom_data_dir(self) -> None:
        with tempfile.TemporaryDirectory() as data_dir:
            with open(os.path.join(data_dir, 'projects.json'), 'w', encoding='utf-8') as f:
                json.dump([{'name': 'Same'}, {'name': 'Same'}, {'name': 'Other', 'liveUrl': 'https://x'}], f)

            results = self.seed(data_dir)

        self.assertEqual(results, {'about': 0, 'skills': 0, 'projects': 3, 'experience': 0, 'contact': 0})
        projects = Project.query.order_by(Project.display_order).all()
        self.assertEqual([p.slug for p in projects], ['same', 'same-2', 'other'])
        self.assertEqual(projects[2].live_url, 'https://x')


if __name__ == "__main__":
    unittest.main()
