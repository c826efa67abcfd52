"""
Dashboard Routes - Operator content management
Handles: Profile, projects and skills CRUD, uploads, visibility toggles

Every read and write here is scoped by the signed-in operator's id.
"""

from flask import render_template, redirect, url_for, request, flash, current_app, jsonify
from flask_login import current_user
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from models import Project, Skill, SKILL_CATEGORIES
from utils.data import (
    get_owner_profile, upsert_profile,
    list_owner_projects, get_owner_project, insert_project, update_project, delete_project,
    list_owner_skills, get_owner_skill, insert_skill, update_skill, delete_skill,
    set_visibility, group_skills
)
from utils.decorators import login_required
from utils.errors import StorageError
from utils.forms import ProjectDraft, ProfileDraft, SkillDraft, parse_remove_action
from utils.helpers import wants_json
from utils.storage import get_storage, has_file, PROFILE_IMAGES, CVS, PROJECT_IMAGES, SKILL_LOGOS
from . import dashboard_bp


PROFILE_UPLOADS = (
    ('profile_image', 'profile_image_file', PROFILE_IMAGES),
    ('cv_en', 'cv_en_file', CVS),
    ('cv_fr', 'cv_fr_file', CVS),
)


def _write_failed(what, e):
    db.session.rollback()
    current_app.logger.error(f"Error saving {what}: {str(e)}")


def _fetch_owned(loader, record_id, label):
    """Owner-scoped lookup. Returns (record, failed); a store failure is logged and rolled back"""
    try:
        return loader(current_user.id, record_id), False
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error fetching {label.lower()} {record_id}: {str(e)}")
        return None, True


def _load_owned(loader, record_id, label):
    """Owner-scoped lookup that flashes why nothing came back"""
    record, failed = _fetch_owned(loader, record_id, label)
    if failed:
        flash(f'Failed to load {label.lower()}', 'error')
    elif not record:
        flash(f'{label} not found', 'error')
    return record


@dashboard_bp.route('/dashboard')
@login_required
def index():
    """Operator overview"""
    user_id = current_user.id
    try:
        profile = get_owner_profile(user_id)
        projects = list_owner_projects(user_id)
        skills = list_owner_skills(user_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Dashboard load failed for {user_id}: {str(e)}")
        flash('Failed to load your content', 'error')
        profile, projects, skills = None, [], []

    stats = {
        'projects': len(projects),
        'visible_projects': len([p for p in projects if p.is_visible]),
        'skills': len(skills),
    }
    return render_template('admin/dashboard.html', profile=profile, projects=projects[:5], stats=stats)


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

def _upload_profile_files(draft, user_id):
    storage = get_storage()
    uploaded = []
    for field, input_name, bucket in PROFILE_UPLOADS:
        file = request.files.get(input_name)
        if has_file(file):
            draft.attach(field, storage.upload(bucket, user_id, file))
            uploaded.append(field)
    return uploaded


@dashboard_bp.route('/profile', methods=['GET', 'POST'])
@login_required
def profile():
    """Edit the single portfolio profile"""
    user_id = current_user.id

    if request.method == 'GET':
        try:
            draft = ProfileDraft.from_record(get_owner_profile(user_id))
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Error fetching profile for {user_id}: {str(e)}")
            draft = ProfileDraft()
        return render_template('admin/profile.html', draft=draft)

    draft = ProfileDraft.from_form(request.form)
    action = request.form.get('action', 'save')

    if action == 'upload':
        try:
            uploaded = _upload_profile_files(draft, user_id)
        except StorageError as e:
            current_app.logger.error(f"Profile upload failed: {e.message}")
            flash('Failed to upload file', 'error')
            return render_template('admin/profile.html', draft=draft), 400
        if uploaded:
            flash(f"{len(uploaded)} file(s) uploaded successfully", 'success')
        return render_template('admin/profile.html', draft=draft)

    errors = draft.validate()
    if errors:
        return render_template('admin/profile.html', draft=draft, error=errors[0]), 400

    try:
        _upload_profile_files(draft, user_id)
    except StorageError as e:
        current_app.logger.error(f"Profile upload failed: {e.message}")
        flash('Failed to upload file', 'error')
        return render_template('admin/profile.html', draft=draft), 400

    try:
        upsert_profile(user_id, draft.to_payload())
    except SQLAlchemyError as e:
        _write_failed('profile', e)
        flash('Failed to save profile', 'error')
        return render_template('admin/profile.html', draft=draft,
                               error='Failed to save profile. Please try again.'), 500

    flash('Profile updated successfully', 'success')
    return redirect(url_for('dashboard.index'))


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

@dashboard_bp.route('/projects')
@login_required
def projects():
    """List the operator's projects, newest first"""
    try:
        rows = list_owner_projects(current_user.id)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error fetching projects: {str(e)}")
        flash('Failed to fetch projects', 'error')
        rows = []
    return render_template('admin/projects.html', projects=rows)


def _render_project_form(draft, project_id=None, error=None, status=200):
    return render_template('admin/project_form.html',
                           draft=draft,
                           project_id=project_id,
                           is_edit=project_id is not None,
                           error=error), status


def _handle_project_form(project_id=None):
    user_id = current_user.id

    if project_id is not None:
        existing = _load_owned(get_owner_project, project_id, 'Project')
        if not existing:
            return redirect(url_for('dashboard.projects'))
        if request.method == 'GET':
            return _render_project_form(ProjectDraft.from_record(existing), project_id)
    elif request.method == 'GET':
        return _render_project_form(ProjectDraft(), project_id)

    draft = ProjectDraft.from_form(request.form)
    action = request.form.get('action', 'save')
    files = request.files.getlist('image_files[]')

    remove_index = parse_remove_action(action)
    if remove_index is not None:
        draft.remove_image(remove_index)
        return _render_project_form(draft, project_id)

    if action == 'upload':
        try:
            urls = get_storage().upload_many(PROJECT_IMAGES, user_id, files)
        except StorageError as e:
            current_app.logger.error(f"Error uploading images: {e.message}")
            flash('Failed to upload images', 'error')
            return _render_project_form(draft, project_id, status=400)
        draft.add_images(urls)
        if urls:
            flash(f"{len(urls)} image(s) uploaded successfully", 'success')
        return _render_project_form(draft, project_id)

    errors = draft.validate()
    if errors:
        return _render_project_form(draft, project_id, error=errors[0], status=400)

    try:
        draft.add_images(get_storage().upload_many(PROJECT_IMAGES, user_id, files))
    except StorageError as e:
        current_app.logger.error(f"Error uploading images: {e.message}")
        flash('Failed to upload images', 'error')
        return _render_project_form(draft, project_id, status=400)

    try:
        if project_id is not None:
            update_project(user_id, project_id, draft.to_payload())
        else:
            insert_project(user_id, draft.to_payload())
    except SQLAlchemyError as e:
        _write_failed('project', e)
        flash('Failed to save project', 'error')
        return _render_project_form(draft, project_id,
                                    error='Failed to save project. Please try again.', status=500)

    flash('Project updated successfully' if project_id is not None else 'Project created successfully', 'success')
    return redirect(url_for('dashboard.projects'))


@dashboard_bp.route('/projects/new', methods=['GET', 'POST'])
@login_required
def add_project():
    """Create a project"""
    return _handle_project_form()


@dashboard_bp.route('/projects/<project_id>/edit', methods=['GET', 'POST'])
@login_required
def edit_project(project_id):
    """Edit an existing project"""
    return _handle_project_form(project_id)


@dashboard_bp.route('/projects/<project_id>/delete', methods=['GET', 'POST'])
@login_required
def remove_project(project_id):
    """Delete a project after explicit confirmation"""
    user_id = current_user.id
    project = _load_owned(get_owner_project, project_id, 'Project')
    if not project:
        return redirect(url_for('dashboard.projects'))

    if request.method == 'GET' or request.form.get('confirm') != 'yes':
        return render_template('admin/confirm_delete.html',
                               label=project.title,
                               action_url=url_for('dashboard.remove_project', project_id=project_id),
                               cancel_url=url_for('dashboard.projects'))

    try:
        delete_project(user_id, project_id)
    except SQLAlchemyError as e:
        _write_failed('project deletion', e)
        flash('Failed to delete project', 'error')
        return redirect(url_for('dashboard.projects'))

    flash('Project deleted successfully', 'success')
    return redirect(url_for('dashboard.projects'))


def _toggle_visibility(model, loader, record_id, list_endpoint, label):
    user_id = current_user.id
    record, failed = _fetch_owned(loader, record_id, label)
    if failed:
        if wants_json():
            return jsonify({'success': False, 'error': f'Failed to load {label.lower()}'}), 500
        flash(f'Failed to load {label.lower()}', 'error')
        return redirect(url_for(list_endpoint))
    if not record:
        if wants_json():
            return jsonify({'success': False, 'error': f'{label} not found'}), 404
        flash(f'{label} not found', 'error')
        return redirect(url_for(list_endpoint))

    new_value = not bool(record.is_visible)
    try:
        set_visibility(model, user_id, record_id, new_value)
    except SQLAlchemyError as e:
        _write_failed(f'{label.lower()} visibility', e)
        if wants_json():
            return jsonify({'success': False, 'error': f'Failed to update {label.lower()} visibility'}), 500
        flash(f'Failed to update {label.lower()} visibility', 'error')
        return redirect(url_for(list_endpoint))

    if wants_json():
        return jsonify({'success': True, 'id': str(record_id), 'is_visible': new_value})
    flash(f"{label} {'shown' if new_value else 'hidden'}", 'success')
    return redirect(url_for(list_endpoint))


@dashboard_bp.route('/projects/<project_id>/visibility', methods=['POST'])
@login_required
def toggle_project_visibility(project_id):
    return _toggle_visibility(Project, get_owner_project, project_id, 'dashboard.projects', 'Project')


# ---------------------------------------------------------------------------
# Skills
# ---------------------------------------------------------------------------

def _render_skills(draft, error=None, status=200):
    try:
        grouped = group_skills(list_owner_skills(current_user.id))
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error fetching skills: {str(e)}")
        flash('Failed to fetch skills', 'error')
        grouped = {}
    return render_template('admin/skills.html',
                           skills_by_category=grouped,
                           categories=SKILL_CATEGORIES,
                           draft=draft,
                           error=error), status


def _save_skill(draft, skill_id=None):
    """Validate, upload the logo, then write. Returns an error message or None"""
    user_id = current_user.id
    errors = draft.validate()
    if errors:
        return errors[0], 400

    logo = request.files.get('logo_file')
    if has_file(logo):
        try:
            draft.logo_url = get_storage().upload(SKILL_LOGOS, user_id, logo)
        except StorageError as e:
            current_app.logger.error(f"Error uploading logo: {e.message}")
            return 'Failed to upload logo', 400

    try:
        if skill_id is not None:
            update_skill(user_id, skill_id, draft.to_payload())
        else:
            insert_skill(user_id, draft.to_payload())
    except SQLAlchemyError as e:
        _write_failed('skill', e)
        return 'Failed to save skill', 500
    return None, 200


@dashboard_bp.route('/skills', methods=['GET', 'POST'])
@login_required
def skills():
    """List skills grouped by category and add new ones"""
    if request.method == 'GET':
        return _render_skills(SkillDraft())

    draft = SkillDraft.from_form(request.form)
    error, status = _save_skill(draft)
    if error:
        return _render_skills(draft, error=error, status=status)

    flash('Skill added successfully', 'success')
    return redirect(url_for('dashboard.skills'))


@dashboard_bp.route('/skills/<skill_id>/edit', methods=['GET', 'POST'])
@login_required
def edit_skill(skill_id):
    skill = _load_owned(get_owner_skill, skill_id, 'Skill')
    if not skill:
        return redirect(url_for('dashboard.skills'))

    if request.method == 'GET':
        return render_template('admin/skill_form.html', draft=SkillDraft.from_record(skill),
                               skill_id=skill_id, categories=SKILL_CATEGORIES)

    draft = SkillDraft.from_form(request.form, logo_url=skill.logo_url)
    error, status = _save_skill(draft, skill_id)
    if error:
        return render_template('admin/skill_form.html', draft=draft, skill_id=skill_id,
                               categories=SKILL_CATEGORIES, error=error), status

    flash('Skill updated successfully', 'success')
    return redirect(url_for('dashboard.skills'))


@dashboard_bp.route('/skills/<skill_id>/delete', methods=['GET', 'POST'])
@login_required
def remove_skill(skill_id):
    """Delete a skill after explicit confirmation"""
    user_id = current_user.id
    skill = _load_owned(get_owner_skill, skill_id, 'Skill')
    if not skill:
        return redirect(url_for('dashboard.skills'))

    if request.method == 'GET' or request.form.get('confirm') != 'yes':
        return render_template('admin/confirm_delete.html',
                               label=skill.name,
                               action_url=url_for('dashboard.remove_skill', skill_id=skill_id),
                               cancel_url=url_for('dashboard.skills'))

    try:
        delete_skill(user_id, skill_id)
    except SQLAlchemyError as e:
        _write_failed('skill deletion', e)
        flash('Failed to delete skill', 'error')
        return redirect(url_for('dashboard.skills'))

    flash('Skill deleted successfully', 'success')
    return redirect(url_for('dashboard.skills'))


@dashboard_bp.route('/skills/<skill_id>/visibility', methods=['POST'])
@login_required
def toggle_skill_visibility(skill_id):
    return _toggle_visibility(Skill, get_owner_skill, skill_id, 'dashboard.skills', 'Skill')
