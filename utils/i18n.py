"""
Localization Module - UI string lookup and bilingual content fallback

Two separate mechanisms live here:

* ``translate`` maps a UI string key to display text for a language. A miss
  echoes the key back so an untranslated string is visible on the page.
* ``resolve_localized_field`` picks which column of a bilingual content
  record to display. It is applied per field, per record.
"""

from typing import MutableMapping, Optional

from flask import current_app, g, session


LANGUAGES = ('en', 'fr')
THEMES = ('light', 'dark')

LANGUAGE_SESSION_KEY = 'language'
THEME_SESSION_KEY = 'theme'


TRANSLATIONS = {
    'en': {
        # Navigation
        'nav.home': 'Home',
        'nav.about': 'About',
        'nav.projects': 'Projects',
        'nav.skills': 'Skills',
        'nav.contact': 'Contact',
        'nav.toggleTheme': 'Toggle theme',

        # Hero Section
        'hero.name': 'Tony Larren',
        'hero.tagline': 'Software developer - Ai/Data Enthusiast',
        'hero.description': 'Software developer specializing in creating applications and exploring AI/data solutions.',
        'hero.cta': 'View Projects',
        'hero.downloadCV': 'Download CV',
        'hero.cvUnavailable': 'CV not available for the selected language.',

        # About Section
        'about.title': 'About Me',
        'about.description': "I'm a developer specializing in modern web and mobile applications, with a passion for leveraging artificial intelligence to create better user experiences. I'm always eager to learn new tools and technologies to expand my skill set.",
        'about.experience': 'Years of Experience',
        'about.projects': 'Projects Completed',
        'about.clients': 'Happy Clients',

        # Projects Section
        'projects.title': 'Featured Projects',
        'projects.description': 'Here are some of my recent projects that showcase my skills and experience.',
        'projects.defaultDescription': 'Project details coming soon.',
        'projects.empty': 'No projects to show yet.',
        'projects.notFound': 'Project not found',
        'projects.viewLive': 'View Live',
        'projects.viewCode': 'View Code',
        'projects.about': 'About This Project',
        'projects.keyFeatures': 'Key Features',
        'projects.technologies': 'Technologies Used',
        'projects.noTechnologies': 'No technologies listed',
        'projects.techStack': 'Technical Stack',
        'projects.underDevelopment': 'Under Development',

        # Common
        'common.backToHome': 'Back to Home',

        # Skills Section
        'skills.title': 'Skills & Technologies',
        'skills.description': 'Technologies I work with to bring your ideas to life.',
        'skills.empty': 'No skills to show yet.',
        'skills.category.Frontend Development': 'Frontend Development',
        'skills.category.Backend Development': 'Backend Development',
        'skills.category.Mobile Development': 'Mobile Development',
        'skills.category.Database & Cloud': 'Database & Cloud',
        'skills.category.Tools & DevOps': 'Tools & DevOps',

        # Contact Section
        'contact.title': 'Get In Touch',
        'contact.description': "Let's discuss your next project. I'm always interested in new opportunities.",
        'contact.info.title': 'Contact Information',
        'contact.info.email': 'Email',
        'contact.info.phone': 'Phone',
        'contact.info.location': 'Location',
        'contact.social.title': 'Follow Me',
        'contact.form.name': 'Your Name',
        'contact.form.email': 'Your Email',
        'contact.form.message': 'Your Message',
        'contact.form.send': 'Send Message',
        'contact.form.success': 'Message sent successfully!',
        'contact.form.error': 'Error sending message. Please try again.',
        'contact.form.missing': 'Please fill in your name, email and message.',
        'contact.form.rateLimited': 'Too many messages. Please try again later.',

        # Footer
        'footer.rights': 'All rights reserved.',
        'footer.builtWith': 'Built with Flask & Jinja',
    },
    'fr': {
        # Navigation
        'nav.home': 'Accueil',
        'nav.about': 'À Propos',
        'nav.projects': 'Projets',
        'nav.skills': 'Compétences',
        'nav.contact': 'Contact',
        'nav.toggleTheme': 'Changer de thème',

        # Hero Section
        'hero.name': 'Tony Larren',
        'hero.tagline': 'Software developer - Ai/Data Enthusiast',
        'hero.description': "Développeur logiciel spécialisé dans la création d'applications et l'exploration de solutions IA/data.",
        'hero.cta': 'Voir les Projets',
        'hero.downloadCV': 'Télécharger CV',
        'hero.cvUnavailable': 'CV non disponible pour la langue sélectionnée.',

        # About Section
        'about.title': 'À Propos de Moi',
        'about.description': "Je suis développeur spécialisé dans les applications web et mobiles modernes, passionné par l'intelligence artificielle pour créer de meilleures expériences utilisateur. Je suis toujours avide d'apprendre de nouveaux outils et technologies pour approfondir mes compétences.",
        'about.experience': "Années d'Expérience",
        'about.projects': 'Projets Réalisés',
        'about.clients': 'Clients Satisfaits',

        # Projects Section
        'projects.title': 'Projets Sélectionnés',
        'projects.description': 'Voici quelques-uns de mes projets récents qui mettent en valeur mes compétences et mon expérience.',
        'projects.defaultDescription': 'Détails du projet à venir.',
        'projects.empty': 'Aucun projet à afficher pour le moment.',
        'projects.notFound': 'Projet introuvable',
        'projects.viewLive': 'Voir Démo',
        'projects.viewCode': 'Voir Code',
        'projects.about': 'À Propos de Ce Projet',
        'projects.keyFeatures': 'Fonctionnalités Clés',
        'projects.technologies': 'Technologies Utilisées',
        'projects.noTechnologies': 'Aucune technologie listée',
        'projects.techStack': 'Stack Technique',
        'projects.underDevelopment': 'En Développement',

        # Common
        'common.backToHome': "Retour à l'Accueil",

        # Skills Section
        'skills.title': 'Compétences & Technologies',
        'skills.description': 'Technologies avec lesquelles je travaille pour donner vie à vos idées.',
        'skills.empty': 'Aucune compétence à afficher pour le moment.',
        'skills.category.Frontend Development': 'Développement Frontend',
        'skills.category.Backend Development': 'Développement Backend',
        'skills.category.Mobile Development': 'Développement Mobile',
        'skills.category.Database & Cloud': 'Base de Données & Cloud',
        'skills.category.Tools & DevOps': 'Outils & DevOps',

        # Contact Section
        'contact.title': 'Prenons Contact',
        'contact.description': 'Discutons de votre prochain projet. Je suis toujours intéressé par de nouvelles opportunités.',
        'contact.info.title': 'Informations de Contact',
        'contact.info.email': 'Email',
        'contact.info.phone': 'Téléphone',
        'contact.info.location': 'Localisation',
        'contact.social.title': 'Suivez-moi',
        'contact.form.name': 'Votre Nom',
        'contact.form.email': 'Votre Email',
        'contact.form.message': 'Votre Message',
        'contact.form.send': 'Envoyer le Message',
        'contact.form.success': 'Message envoyé avec succès !',
        'contact.form.error': "Erreur lors de l'envoi. Veuillez réessayer.",
        'contact.form.missing': 'Veuillez renseigner votre nom, votre email et votre message.',
        'contact.form.rateLimited': 'Trop de messages. Veuillez réessayer plus tard.',

        # Footer
        'footer.rights': 'Tous droits réservés.',
        'footer.builtWith': 'Créé avec Flask & Jinja',
    },
}


def translate(language: str, key: str) -> str:
    """Return the UI string for ``key`` in ``language``, or ``key`` itself on a miss."""
    value = TRANSLATIONS.get(language, {}).get(key)
    return value or key


def toggle_language(language: str) -> str:
    return 'fr' if language == 'en' else 'en'


def toggle_theme(theme: str) -> str:
    return 'dark' if theme == 'light' else 'light'


def _has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def resolve_localized_field(generic: Optional[str], en: Optional[str], fr: Optional[str],
                            language: str, default: str) -> str:
    """
    Pick the display value of one bilingual content field.

    French reads fr -> en -> generic, any other language reads en -> generic.
    When every member is empty the caller's default is returned.

    Args:
        generic (str, optional): language-neutral column, None when the field has none
        en (str, optional): English column
        fr (str, optional): French column
        language (str): active language
        default (str): text shown when the record has nothing to offer

    Returns:
        str: the chosen value
    """
    if language == 'fr':
        candidates = (fr, en, generic)
    else:
        candidates = (en, generic)

    for candidate in candidates:
        if _has_text(candidate):
            return candidate
    return default


class Preferences:
    """
    Visitor language and theme selection.

    Backed by any mutable mapping; the app stores it in the Flask session so
    the selection follows the visitor across requests.
    """

    def __init__(self, store: MutableMapping, default_language: str = 'en', default_theme: str = 'light'):
        self._store = store
        self._default_language = default_language if default_language in LANGUAGES else LANGUAGES[0]
        self._default_theme = default_theme if default_theme in THEMES else THEMES[0]

    @property
    def language(self) -> str:
        value = self._store.get(LANGUAGE_SESSION_KEY)
        return value if value in LANGUAGES else self._default_language

    @property
    def theme(self) -> str:
        value = self._store.get(THEME_SESSION_KEY)
        return value if value in THEMES else self._default_theme

    def toggle_language(self) -> str:
        self._store[LANGUAGE_SESSION_KEY] = toggle_language(self.language)
        return self.language

    def toggle_theme(self) -> str:
        self._store[THEME_SESSION_KEY] = toggle_theme(self.theme)
        return self.theme

    def t(self, key: str) -> str:
        return translate(self.language, key)

    def localized(self, generic, en, fr, default_key: str) -> str:
        return resolve_localized_field(generic, en, fr, self.language, self.t(default_key))


def get_preferences() -> Preferences:
    """Return the preferences object for the current request"""
    prefs = g.get('preferences')
    if prefs is None:
        prefs = Preferences(
            session,
            current_app.config.get('DEFAULT_LANGUAGE', 'en'),
            current_app.config.get('DEFAULT_THEME', 'light'),
        )
        g.preferences = prefs
    return prefs


def init_preferences(app):
    """Attach the preferences object to every request and expose it to templates"""

    @app.before_request
    def load_preferences():
        get_preferences()

    @app.context_processor
    def inject_preferences():
        prefs = get_preferences()
        return {
            'language': prefs.language,
            'theme': prefs.theme,
            't': prefs.t,
        }


__all__ = [
    'LANGUAGES',
    'THEMES',
    'TRANSLATIONS',
    'translate',
    'toggle_language',
    'toggle_theme',
    'resolve_localized_field',
    'Preferences',
    'get_preferences',
    'init_preferences',
]
