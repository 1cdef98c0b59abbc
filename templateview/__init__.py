"""templateview: render named templates through Jinja2 or legacy raw-script files."""

__version__ = "0.3.0"

from templateview.core import TemplateView, HelperRegistry, TemplateEngineAdapter, I18nExtension
from templateview.config import ViewConfig, load_config
from templateview.exceptions import (
    TemplateViewError,
    TemplateNotFoundError,
    DuplicateHelperError,
    UnknownHelperError,
    TemplateRenderError,
)

__all__ = [
    "__version__",
    "TemplateView",
    "HelperRegistry",
    "TemplateEngineAdapter",
    "I18nExtension",
    "ViewConfig",
    "load_config",
    "TemplateViewError",
    "TemplateNotFoundError",
    "DuplicateHelperError",
    "UnknownHelperError",
    "TemplateRenderError",
]
