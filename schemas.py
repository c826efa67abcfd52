"""
Record shapes handed from the database layer to the views.

Each model validates and defaults a row at the point it leaves the store, so
templates never see a ``None`` list or a missing secondary-language column.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from utils.i18n import resolve_localized_field, translate


class RecordView(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ProfileView(RecordView):
    name: str = ''
    title: Optional[str] = None
    short_bio_en: Optional[str] = None
    short_bio_fr: Optional[str] = None
    description: Optional[str] = None
    description_en: Optional[str] = None
    description_fr: Optional[str] = None
    about: Optional[str] = None
    years_experience: int = 0
    projects_count: int = 0
    profile_image: Optional[str] = None
    cv_en: Optional[str] = None
    cv_fr: Optional[str] = None

    @field_validator('name', mode='before')
    @classmethod
    def _name(cls, v):
        return v or ''

    @field_validator('years_experience', 'projects_count', mode='before')
    @classmethod
    def _count(cls, v):
        return v or 0

    def short_bio(self, language):
        return resolve_localized_field(None, self.short_bio_en, self.short_bio_fr,
                                       language, translate(language, 'hero.description'))

    def localized_description(self, language):
        return resolve_localized_field(self.description, self.description_en, self.description_fr,
                                       language, translate(language, 'about.description'))

    def cv_url(self, language):
        return self.cv_fr if language == 'fr' else self.cv_en


class ProjectView(RecordView):
    id: str
    title: str
    description: Optional[str] = None
    description_en: Optional[str] = None
    description_fr: Optional[str] = None
    about_project: Optional[str] = None
    about_project_en: Optional[str] = None
    about_project_fr: Optional[str] = None
    images: List[str] = []
    live_demo_link: Optional[str] = None
    github_link: Optional[str] = None
    technologies: List[str] = []
    key_features: List[str] = []
    is_visible: bool = True
    is_under_development: bool = False
    created_at: Optional[datetime] = None

    @field_validator('images', 'technologies', 'key_features', mode='before')
    @classmethod
    def _list(cls, v):
        return list(v) if v else []

    @field_validator('is_visible', mode='before')
    @classmethod
    def _visible(cls, v):
        return True if v is None else v

    @field_validator('is_under_development', mode='before')
    @classmethod
    def _under_development(cls, v):
        return bool(v)

    @property
    def cover_image(self):
        return self.images[0] if self.images else None

    def localized_description(self, language):
        return resolve_localized_field(self.description, self.description_en, self.description_fr,
                                       language, translate(language, 'projects.defaultDescription'))

    def localized_about(self, language):
        return resolve_localized_field(self.about_project, self.about_project_en, self.about_project_fr,
                                       language, self.localized_description(language))


class SkillView(RecordView):
    id: str
    name: str
    category: str
    logo_url: Optional[str] = None
    is_visible: bool = True
    sort_order: int = 0

    @field_validator('is_visible', mode='before')
    @classmethod
    def _visible(cls, v):
        return True if v is None else v

    @field_validator('sort_order', mode='before')
    @classmethod
    def _order(cls, v):
        return v or 0

    def category_label(self, language):
        return translate(language, f'skills.category.{self.category}')
