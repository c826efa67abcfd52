"""
Helpers Module - Template filters and small request helpers
"""

import re
from flask import request
from markupsafe import Markup, escape


def format_paragraphs(text):
    """Render plain text as escaped paragraphs.

    - Blank lines split paragraphs
    - Single newlines become <br>
    """
    if not text:
        return Markup('')

    txt = text.replace('\r\n', '\n').replace('\r', '\n').strip()
    paragraphs = [p.strip() for p in re.split(r'\n\s*\n', txt) if p.strip()]
    html = ''.join(
        '<p>' + '<br>\n'.join(str(escape(line)) for line in p.split('\n')) + '</p>'
        for p in paragraphs
    )
    return Markup(html)


def wants_json():
    """True for XHR callers that update their list in place"""
    return (request.headers.get('X-Requested-With') == 'XMLHttpRequest'
            or request.accept_mimetypes.best == 'application/json')


def safe_redirect_target(target, fallback):
    """Only allow same-site relative redirects"""
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return fallback


__all__ = ['format_paragraphs', 'wants_json', 'safe_redirect_target']
