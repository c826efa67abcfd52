"""
Forms Module - Admin form drafts

A draft is the operator's in-progress edit of one record. It is rebuilt from
each POST (hidden inputs carry already-uploaded URLs), validated locally
before anything is written, and turned into a payload for the data layer
only on save.
"""

from models import SKILL_CATEGORIES


def _optional(value):
    value = (value or '').strip()
    return value or None


def _flag(form, key):
    return form.get(key) in ('on', 'true', '1', 'yes')


def _items(form, key):
    """Non-blank list entries in submitted order; duplicates are kept"""
    return [item.strip() for item in form.getlist(key) if item and item.strip()]


def parse_remove_action(action):
    """Return the image index from a 'remove-image-<n>' action, else None"""
    prefix = 'remove-image-'
    if action and action.startswith(prefix):
        try:
            return int(action[len(prefix):])
        except ValueError:
            return None
    return None


class ProjectDraft:
    TEXT_FIELDS = (
        'title', 'description', 'description_en', 'description_fr',
        'about_project', 'about_project_en', 'about_project_fr',
        'live_demo_link', 'github_link',
    )

    def __init__(self, **values):
        for field in self.TEXT_FIELDS:
            setattr(self, field, values.get(field) or '')
        self.images = list(values.get('images') or [])
        self.technologies = list(values.get('technologies') or [])
        self.key_features = list(values.get('key_features') or [])
        self.is_visible = values.get('is_visible', True)
        self.is_under_development = values.get('is_under_development', False)

    @classmethod
    def from_form(cls, form):
        values = {field: form.get(field, '') for field in cls.TEXT_FIELDS}
        values.update(
            images=_items(form, 'images[]'),
            technologies=_items(form, 'technologies[]'),
            key_features=_items(form, 'key_features[]'),
            is_visible=_flag(form, 'is_visible'),
            is_under_development=_flag(form, 'is_under_development'),
        )
        return cls(**values)

    @classmethod
    def from_record(cls, project):
        values = {field: getattr(project, field) or '' for field in cls.TEXT_FIELDS}
        values.update(
            images=project.images or [],
            technologies=project.technologies or [],
            key_features=project.key_features or [],
            is_visible=True if project.is_visible is None else project.is_visible,
            is_under_development=bool(project.is_under_development),
        )
        return cls(**values)

    def add_images(self, urls):
        self.images = self.images + list(urls)

    def remove_image(self, index):
        if 0 <= index < len(self.images):
            self.images = self.images[:index] + self.images[index + 1:]

    def validate(self):
        if not self.title.strip() or not self.description.strip():
            return ['Title and description are required']
        return []

    def to_payload(self):
        return {
            'title': self.title.strip(),
            'description': self.description.strip(),
            'description_en': self.description_en.strip(),
            'description_fr': self.description_fr.strip(),
            'about_project': self.about_project.strip(),
            'about_project_en': self.about_project_en.strip(),
            'about_project_fr': self.about_project_fr.strip(),
            'images': list(self.images),
            'live_demo_link': _optional(self.live_demo_link),
            'github_link': _optional(self.github_link),
            'technologies': list(self.technologies),
            'key_features': list(self.key_features),
            'is_visible': bool(self.is_visible),
            'is_under_development': bool(self.is_under_development),
        }


class ProfileDraft:
    TEXT_FIELDS = (
        'name', 'title', 'short_bio_en', 'short_bio_fr',
        'description', 'description_en', 'description_fr', 'about',
    )
    URL_FIELDS = ('profile_image', 'cv_en', 'cv_fr')

    def __init__(self, **values):
        for field in self.TEXT_FIELDS:
            setattr(self, field, values.get(field) or '')
        for field in self.URL_FIELDS:
            setattr(self, field, values.get(field) or None)
        self.years_experience = values.get('years_experience', 0)
        self.projects_count = values.get('projects_count', 0)

    @classmethod
    def from_form(cls, form):
        values = {field: form.get(field, '') for field in cls.TEXT_FIELDS}
        values.update({field: _optional(form.get(field)) for field in cls.URL_FIELDS})
        values['years_experience'] = form.get('years_experience', '0').strip() or '0'
        values['projects_count'] = form.get('projects_count', '0').strip() or '0'
        return cls(**values)

    @classmethod
    def from_record(cls, profile):
        if profile is None:
            return cls()
        values = {field: getattr(profile, field) for field in cls.TEXT_FIELDS + cls.URL_FIELDS}
        values['years_experience'] = profile.years_experience or 0
        values['projects_count'] = profile.projects_count or 0
        return cls(**values)

    def attach(self, field, url):
        if field in self.URL_FIELDS:
            setattr(self, field, url)

    @staticmethod
    def _count(value):
        try:
            number = int(value)
        except (TypeError, ValueError):
            return None
        return number if number >= 0 else None

    def validate(self):
        errors = []
        if not self.name.strip() or not self.short_bio_en.strip():
            errors.append('Name and short bio (English) are required')
        if self._count(self.years_experience) is None or self._count(self.projects_count) is None:
            errors.append('Years of experience and project count must be whole numbers')
        return errors

    def to_payload(self):
        payload = {field: getattr(self, field).strip() for field in self.TEXT_FIELDS}
        payload.update({field: getattr(self, field) for field in self.URL_FIELDS})
        payload['years_experience'] = self._count(self.years_experience) or 0
        payload['projects_count'] = self._count(self.projects_count) or 0
        return payload


class SkillDraft:
    def __init__(self, name='', category='', logo_url=None, is_visible=True):
        self.name = name or ''
        self.category = category or ''
        self.logo_url = logo_url
        self.is_visible = is_visible

    @classmethod
    def from_form(cls, form, logo_url=None):
        return cls(
            name=form.get('name', ''),
            category=form.get('category', ''),
            logo_url=_optional(form.get('logo_url')) or logo_url,
            is_visible=_flag(form, 'is_visible'),
        )

    @classmethod
    def from_record(cls, skill):
        return cls(skill.name, skill.category, skill.logo_url,
                   True if skill.is_visible is None else skill.is_visible)

    def validate(self):
        errors = []
        if not self.name.strip():
            errors.append('Skill name is required')
        if self.category not in SKILL_CATEGORIES:
            errors.append('Please choose a valid category')
        return errors

    def to_payload(self):
        return {
            'name': self.name.strip(),
            'category': self.category,
            'logo_url': self.logo_url,
            'is_visible': bool(self.is_visible),
        }


__all__ = ['ProjectDraft', 'ProfileDraft', 'SkillDraft', 'parse_remove_action']
