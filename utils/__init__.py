"""
Utils Package - Centralized utility modules initialization
"""

from .errors import PortfolioError, StorageError, NotificationError
from .i18n import (
    LANGUAGES,
    THEMES,
    translate,
    toggle_language,
    toggle_theme,
    resolve_localized_field,
    Preferences,
    get_preferences,
    init_preferences
)
from .decorators import login_required
from .storage import ObjectStorage, init_storage, get_storage
from .notifications import send_email, send_telegram_notification, send_contact_message
from .security import get_client_ip, check_rate_limit, get_admin_credentials, verify_password
from .helpers import format_paragraphs, wants_json, safe_redirect_target

__all__ = [
    # Errors
    'PortfolioError',
    'StorageError',
    'NotificationError',

    # Localization
    'LANGUAGES',
    'THEMES',
    'translate',
    'toggle_language',
    'toggle_theme',
    'resolve_localized_field',
    'Preferences',
    'get_preferences',
    'init_preferences',

    # Decorators
    'login_required',

    # Storage
    'ObjectStorage',
    'init_storage',
    'get_storage',

    # Notifications
    'send_email',
    'send_telegram_notification',
    'send_contact_message',

    # Security
    'get_client_ip',
    'check_rate_limit',
    'get_admin_credentials',
    'verify_password',

    # Helpers
    'format_paragraphs',
    'wants_json',
    'safe_redirect_target'
]
