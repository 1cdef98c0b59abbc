# templateview/core/__init__.py
"""
Core of templateview: the TemplateView façade, its helper registry, and the
two renderers it dispatches to.
"""
from .view import TemplateView
from .helpers import HelperRegistry, HelperProxy
from .engine import TemplateEngineAdapter
from .raw_script import RawScriptRenderer, ScriptContext
from .resolution import TemplateKind, Resolution, resolve_template
from .i18n import I18nExtension

__all__ = [
    "TemplateView",
    "HelperRegistry",
    "HelperProxy",
    "TemplateEngineAdapter",
    "RawScriptRenderer",
    "ScriptContext",
    "TemplateKind",
    "Resolution",
    "resolve_template",
    "I18nExtension",
]
