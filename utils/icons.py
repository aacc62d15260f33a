"""
Icons Module - Fixed icon lookup for skill categories and social links
Unknown keys resolve to a fallback icon.
"""

SKILL_CATEGORY_ICONS = {
    'frontend': 'fa-code',
    'backend': 'fa-server',
    'databases': 'fa-database',
    'tools': 'fa-wrench',
    'devops': 'fa-cloud',
    'other': 'fa-lightbulb',
}
SKILL_FALLBACK_ICON = 'fa-code'

SOCIAL_ICONS = {
    'github': 'fa-brands fa-github',
    'linkedin': 'fa-brands fa-linkedin',
    'twitter': 'fa-brands fa-x-twitter',
    'x': 'fa-brands fa-x-twitter',
    'mail': 'fa-envelope',
    'email': 'fa-envelope',
    'website': 'fa-globe',
}
SOCIAL_FALLBACK_ICON = 'fa-link'


def _normalize(key):
    return (key or '').strip().lower()


def get_skill_icon(category):
    """
    Get icon class for a skill category

    Args:
        category (str): Category name as stored, any case

    Returns:
        str: Icon class, fallback when the category is unknown
    """
    return SKILL_CATEGORY_ICONS.get(_normalize(category), SKILL_FALLBACK_ICON)


def get_social_icon(platform):
    """Get icon class for a social platform or icon key"""
    return SOCIAL_ICONS.get(_normalize(platform), SOCIAL_FALLBACK_ICON)


__all__ = [
    'SKILL_CATEGORY_ICONS',
    'SKILL_FALLBACK_ICON',
    'SOCIAL_ICONS',
    'SOCIAL_FALLBACK_ICON',
    'get_skill_icon',
    'get_social_icon'
]
