# templateview/core/engine.py
"""
Contains the TemplateEngineAdapter, which owns the Jinja2 environment for a
template root: its loader, bytecode cache directory, and extensions.
"""
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union
import gettext
import jinja2
import structlog

from templateview.config.settings import ViewConfig
from templateview.exceptions import TemplateNotFoundError, TemplateRenderError

from .i18n import I18nExtension, load_translations
from .resolution import candidate_paths

log = structlog.get_logger(__name__)

ExtensionSpec = Union[str, type]

class TemplateEngineAdapter:
    """Compiles templates under a root directory and renders them against a data mapping."""

    def __init__(
        self,
        config: ViewConfig,
        extensions: Optional[Sequence[ExtensionSpec]] = None,
        translations: Optional[gettext.NullTranslations] = None,
    ):
        self.config = config
        self.root = config.template_root

        if extensions is None:
            extensions = [I18nExtension] if config.enable_i18n else []

        self.environment = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.root)),
            autoescape=True,
            undefined=jinja2.StrictUndefined if config.strict_undefined else jinja2.Undefined,
            bytecode_cache=self._bytecode_cache(),
            extensions=list(extensions),
            auto_reload=True,
        )

        # the i18n extension adds install_gettext_translations to the environment.
        if hasattr(self.environment, "install_gettext_translations"):
            if translations is None:
                translations = load_translations(
                    config.translation_domain, config.locale_dir, config.languages
                )
            self.environment.install_gettext_translations(translations, newstyle=False)

        log.debug(
            "template_engine_ready",
            root=str(self.root),
            bytecode_cache=self.environment.bytecode_cache is not None,
            extensions=self.extension_names(),
        )

    @classmethod
    def from_config(cls, config: ViewConfig) -> "TemplateEngineAdapter":
        return cls(config)

    def _bytecode_cache(self) -> Optional[jinja2.FileSystemBytecodeCache]:
        # the cache lives under the root; a missing root means there is nothing to cache yet.
        if not self.root.is_dir():
            log.debug("bytecode_cache_disabled_missing_root", root=str(self.root))
            return None
        cache_dir = self.config.cache_dir
        try:
            cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            log.warning("bytecode_cache_dir_unwritable", cache_dir=str(cache_dir), error=str(e))
            return None
        return jinja2.FileSystemBytecodeCache(str(cache_dir))

    def extension_names(self) -> List[str]:
        return sorted(self.environment.extensions)

    def template_path(self, name: str) -> Path:
        return candidate_paths(
            self.root, name, self.config.compiled_extension, self.config.raw_extension
        )[0][1]

    def clear_cache(self) -> None:
        """Drops in-memory compiled templates and any bytecode written to the cache dir."""
        if self.environment.cache is not None:
            self.environment.cache.clear()
        if self.environment.bytecode_cache is not None:
            self.environment.bytecode_cache.clear()
        log.debug("compiled_template_cache_cleared", root=str(self.root))

    def load(self, name: str) -> jinja2.Template:
        """Returns the compiled template for name; Jinja recompiles it when the source changed."""
        path = self.template_path(name)
        try:
            return self.environment.get_template(path.relative_to(self.root).as_posix())
        except jinja2.TemplateNotFound as e:
            raise TemplateNotFoundError(f'The template "{path}" not found.') from e
        except jinja2.TemplateSyntaxError as e:
            log.error("template_compilation_failed", name=name, line=e.lineno, error=e.message)
            raise TemplateRenderError(str(e)) from e

    def render(self, name: str, data: Dict[str, Any]) -> str:
        template = self.load(name)
        log.info("rendering_compiled_template", name=name, context_keys=list(data.keys()))
        try:
            return template.render(data)
        except Exception as e:
            log.error("template_rendering_error_occurred", name=name, error_message=str(e), exc_info=True)
            raise TemplateRenderError(str(e)) from e
