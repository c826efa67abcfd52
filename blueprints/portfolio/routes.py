"""
Portfolio Routes - Public portfolio views
Handles: Home sections, project details, CV download, contact form, visitor preferences
"""

import os
from flask import render_template, redirect, url_for, request, flash, current_app, send_from_directory, abort
from utils.data import (
    fetch_profile, fetch_visible_projects, fetch_visible_project,
    fetch_visible_skills, group_skills
)
from utils.errors import StorageError
from utils.helpers import safe_redirect_target
from utils.i18n import get_preferences, LANGUAGES
from utils.notifications import send_contact_message
from utils.security import check_rate_limit
from utils.storage import get_storage
from . import portfolio_bp


DEFAULT_YEARS_EXPERIENCE = 3
DEFAULT_PROJECTS_COUNT = 12


@portfolio_bp.route('/')
def index():
    """Public home page: hero, about, projects, skills, contact"""
    profile = fetch_profile()
    projects = fetch_visible_projects()
    skills = fetch_visible_skills()

    return render_template('index.html',
                           profile=profile,
                           projects=projects,
                           skills_by_category=group_skills(skills),
                           years_experience=(profile.years_experience if profile and profile.years_experience
                                             else DEFAULT_YEARS_EXPERIENCE),
                           projects_count=(profile.projects_count if profile and profile.projects_count
                                           else DEFAULT_PROJECTS_COUNT))


@portfolio_bp.route('/project/<project_id>')
def project_detail(project_id):
    """Project detail page; a missing project is a terminal not-found page"""
    project = fetch_visible_project(project_id)
    if not project:
        return render_template('project_not_found.html'), 404

    return render_template('project_detail.html', project=project)


@portfolio_bp.route('/cv/<language>')
def download_cv(language):
    """Redirect to the stored CV for the requested language"""
    prefs = get_preferences()
    if language not in LANGUAGES:
        abort(404)

    profile = fetch_profile()
    cv_url = profile.cv_url(language) if profile else None
    if not cv_url:
        current_app.logger.info(f"CV not available for language {language}")
        flash(prefs.t('hero.cvUnavailable'), 'warning')
        return redirect(url_for('portfolio.index'))

    return redirect(cv_url)


@portfolio_bp.route('/contact', methods=['POST'])
def contact():
    """Portfolio contact form: forwards the message to the site owner"""
    prefs = get_preferences()
    back = url_for('portfolio.index') + '#contact'

    # Honeypot spam protection
    if request.form.get('website'):
        flash(prefs.t('contact.form.success'), 'success')
        return redirect(back)

    name = request.form.get('name', '').strip()
    email = request.form.get('email', '').strip()
    message = request.form.get('message', '').strip()

    if not all([name, email, message]):
        flash(prefs.t('contact.form.missing'), 'error')
        return redirect(back)

    if not check_rate_limit('portfolio_contact'):
        flash(prefs.t('contact.form.rateLimited'), 'error')
        return redirect(back)

    if send_contact_message(current_app.config.get('CONTACT_RECIPIENT'), name[:200], email[:200], message[:5000]):
        current_app.logger.info(f"Contact message delivered from {email}")
        flash(prefs.t('contact.form.success'), 'success')
    else:
        current_app.logger.error(f"Contact message from {email} could not be delivered")
        flash(prefs.t('contact.form.error'), 'error')
    return redirect(back)


@portfolio_bp.route('/preferences/language', methods=['POST'])
def toggle_language():
    language = get_preferences().toggle_language()
    current_app.logger.debug(f"Language switched to {language}")
    return redirect(safe_redirect_target(request.form.get('next'), url_for('portfolio.index')))


@portfolio_bp.route('/preferences/theme', methods=['POST'])
def toggle_theme():
    theme = get_preferences().toggle_theme()
    current_app.logger.debug(f"Theme switched to {theme}")
    return redirect(safe_redirect_target(request.form.get('next'), url_for('portfolio.index')))


@portfolio_bp.route('/storage/<bucket>/<path:object_path>')
def stored_object(bucket, object_path):
    """Serve a stored object publicly"""
    try:
        directory = get_storage().bucket_path(bucket)
    except StorageError:
        abort(404)
    if not os.path.isdir(directory):
        abort(404)
    return send_from_directory(directory, object_path)
