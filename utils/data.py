"""
Data Management Module - Reads and writes of portfolio records

Public reads never raise: a database failure is logged and the caller gets
the empty/default value so the public site keeps rendering. Admin
operations are always scoped by the owning user's id and let
SQLAlchemyError propagate so the view can roll back and report it.
"""

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from models import Profile, Project, Skill
from schemas import ProfileView, ProjectView, SkillView


# ---------------------------------------------------------------------------
# Public reads
# ---------------------------------------------------------------------------

def fetch_profile():
    """Return the single portfolio profile, or None if there is none"""
    try:
        profile = Profile.query.order_by(Profile.created_at.asc()).first()
        return ProfileView.model_validate(profile) if profile else None
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error fetching profile: {str(e)}")
        db.session.rollback()
        return None


def fetch_visible_projects():
    """Visible projects, newest first"""
    try:
        rows = (Project.query
                .filter_by(is_visible=True)
                .order_by(Project.created_at.desc())
                .all())
        return [ProjectView.model_validate(p) for p in rows]
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error fetching projects: {str(e)}")
        db.session.rollback()
        return []


def fetch_visible_project(project_id):
    """Single visible project by primary key, or None when missing or on failure"""
    try:
        project = Project.query.filter_by(id=str(project_id), is_visible=True).first()
        return ProjectView.model_validate(project) if project else None
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error fetching project {project_id}: {str(e)}")
        db.session.rollback()
        return None


def fetch_visible_skills():
    """Visible skills ordered by category, then sort order"""
    try:
        rows = (Skill.query
                .filter_by(is_visible=True)
                .order_by(Skill.category.asc(), Skill.sort_order.asc())
                .all())
        return [SkillView.model_validate(s) for s in rows]
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error fetching skills: {str(e)}")
        db.session.rollback()
        return []


def group_skills(skills):
    """Group an already ordered skill list by category, keeping order"""
    grouped = {}
    for skill in skills:
        grouped.setdefault(skill.category, []).append(skill)
    return grouped


# ---------------------------------------------------------------------------
# Admin operations (owner scoped)
# ---------------------------------------------------------------------------

def get_owner_profile(user_id):
    return Profile.query.filter_by(user_id=user_id).first()


def upsert_profile(user_id, payload):
    """Insert or update the owner's profile row"""
    profile = get_owner_profile(user_id)
    if not profile:
        profile = Profile(user_id=user_id)
        db.session.add(profile)
    for key, value in payload.items():
        setattr(profile, key, value)
    db.session.commit()
    current_app.logger.info(f"Profile saved for user {user_id}")
    return profile


def list_owner_projects(user_id):
    return (Project.query
            .filter_by(user_id=user_id)
            .order_by(Project.created_at.desc())
            .all())


def get_owner_project(user_id, project_id):
    return Project.query.filter_by(id=str(project_id), user_id=user_id).first()


def insert_project(user_id, payload):
    project = Project(user_id=user_id, **payload)
    db.session.add(project)
    db.session.commit()
    current_app.logger.info(f"Project {project.id} created for user {user_id}")
    return project


def update_project(user_id, project_id, payload):
    """Update a project scoped by id and owner; returns the number of rows touched"""
    updated = (Project.query
               .filter_by(id=str(project_id), user_id=user_id)
               .update(payload, synchronize_session='fetch'))
    db.session.commit()
    current_app.logger.info(f"Project {project_id} updated for user {user_id} ({updated} row)")
    return updated


def delete_project(user_id, project_id):
    deleted = Project.query.filter_by(id=str(project_id), user_id=user_id).delete()
    db.session.commit()
    current_app.logger.info(f"Project {project_id} deleted for user {user_id} ({deleted} row)")
    return deleted


def list_owner_skills(user_id):
    return (Skill.query
            .filter_by(user_id=user_id)
            .order_by(Skill.category.asc(), Skill.sort_order.asc())
            .all())


def get_owner_skill(user_id, skill_id):
    return Skill.query.filter_by(id=str(skill_id), user_id=user_id).first()


def next_sort_order(user_id, category):
    """First free sort order at the end of a category"""
    current_max = (db.session.query(func.max(Skill.sort_order))
                   .filter(Skill.user_id == user_id, Skill.category == category)
                   .scalar())
    return 0 if current_max is None else current_max + 1


def insert_skill(user_id, payload):
    skill = Skill(user_id=user_id, sort_order=next_sort_order(user_id, payload['category']), **payload)
    db.session.add(skill)
    db.session.commit()
    current_app.logger.info(f"Skill {skill.id} created for user {user_id}")
    return skill


def update_skill(user_id, skill_id, payload):
    """Update a skill; moving it to another category appends it there"""
    skill = get_owner_skill(user_id, skill_id)
    if not skill:
        return 0
    if payload.get('category') and payload['category'] != skill.category:
        payload = dict(payload, sort_order=next_sort_order(user_id, payload['category']))
    updated = (Skill.query
               .filter_by(id=str(skill_id), user_id=user_id)
               .update(payload, synchronize_session='fetch'))
    db.session.commit()
    current_app.logger.info(f"Skill {skill_id} updated for user {user_id}")
    return updated


def delete_skill(user_id, skill_id):
    deleted = Skill.query.filter_by(id=str(skill_id), user_id=user_id).delete()
    db.session.commit()
    current_app.logger.info(f"Skill {skill_id} deleted for user {user_id} ({deleted} row)")
    return deleted


def set_visibility(model, user_id, record_id, is_visible):
    """Single-field visibility update scoped by id and owner"""
    updated = (model.query
               .filter_by(id=str(record_id), user_id=user_id)
               .update({'is_visible': bool(is_visible)}, synchronize_session='fetch'))
    db.session.commit()
    current_app.logger.info(f"{model.__tablename__} {record_id} visibility set to {bool(is_visible)}")
    return updated


__all__ = [
    'fetch_profile',
    'fetch_visible_projects',
    'fetch_visible_project',
    'fetch_visible_skills',
    'group_skills',
    'get_owner_profile',
    'upsert_profile',
    'list_owner_projects',
    'get_owner_project',
    'insert_project',
    'update_project',
    'delete_project',
    'list_owner_skills',
    'get_owner_skill',
    'next_sort_order',
    'insert_skill',
    'update_skill',
    'delete_skill',
    'set_visibility',
]
