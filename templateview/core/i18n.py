# templateview/core/i18n.py
"""
Translation extension for the Jinja2 engine.

Builds on Jinja's i18n extension, which provides the block construct::

    {% trans %}Hello {{ user }}{% endtrans %}
    {% trans count=n %}One file{% pluralize %}{{ count }} files{% endtrans %}

and adds a ``trans`` filter for inline lookups: ``{{ "Save"|trans }}``.
"""
import gettext
from pathlib import Path
from typing import Any, Optional, Sequence
from jinja2 import pass_context
from jinja2.ext import InternationalizationExtension
from jinja2.runtime import Context
import structlog

log = structlog.get_logger(__name__)

@pass_context
def trans_filter(context: Context, message: Any) -> str:
    """Looks message up through the gettext callable installed on the environment."""
    return context.call(context.environment.globals["gettext"], str(message))

class I18nExtension(InternationalizationExtension):
    """Jinja's trans block plus the ``trans`` filter."""

    def __init__(self, environment):
        super().__init__(environment)
        environment.filters["trans"] = trans_filter


def load_translations(
    domain: str, locale_dir: Optional[Path], languages: Sequence[str] = ()
) -> gettext.NullTranslations:
    """Loads a message catalog, falling back to identity translation when none is found."""
    translations = gettext.translation(
        domain,
        localedir=str(locale_dir) if locale_dir else None,
        languages=list(languages) or None,
        fallback=True,
    )
    log.debug(
        "translations_loaded",
        domain=domain,
        locale_dir=str(locale_dir) if locale_dir else None,
        languages=list(languages),
        catalog=type(translations).__name__,
    )
    return translations
