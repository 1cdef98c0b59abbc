# templateview/core/view.py
"""
TemplateView: one named template, its data bindings and helper table, and
the dispatch that hands a render to the Jinja2 engine or to the
raw-script renderer.
"""
from typing import Any, Callable, Dict, Mapping, Optional
import structlog

from templateview.config.settings import ViewConfig

from .engine import TemplateEngineAdapter
from .helpers import HelperProxy, HelperRegistry
from .raw_script import RawScriptRenderer
from .resolution import Resolution, TemplateKind, resolve_template

log = structlog.get_logger(__name__)

_UNSET = object()

class TemplateView:
    """
    Façade over the two template engines for a single template name.

    Build instances with ``TemplateView.get(name, data, helpers)``. Data set
    on a view persists across renders of that view; call-scoped data passed
    to ``render`` is merged into it and persists as well.
    """

    def __init__(
        self,
        name: str,
        data: Optional[Mapping[str, Any]] = None,
        helpers: Optional[Mapping[str, Callable[..., Any]]] = None,
        *,
        config: ViewConfig,
        engine: TemplateEngineAdapter,
    ):
        self._name = name
        self.data: Dict[str, Any] = dict(data or {})
        self.helpers = HelperRegistry(helpers)
        self.config = config
        self.engine = engine
        self.raw_renderer = RawScriptRenderer()
        self.call = HelperProxy(self.helpers)

    @classmethod
    def get(
        cls,
        name: str,
        data: Optional[Mapping[str, Any]] = None,
        helpers: Optional[Mapping[str, Callable[..., Any]]] = None,
        config: Optional[ViewConfig] = None,
        engine: Optional[TemplateEngineAdapter] = None,
    ) -> "TemplateView":
        """
        Returns a fresh view bound to name. Pass an engine to share its
        compiled-template cache; the view then resolves names under the
        engine's own config.
        """
        if engine is not None:
            if config is not None and config != engine.config:
                raise ValueError(
                    "config does not match the engine's config; pass one or the other"
                )
            config = engine.config
        elif config is None:
            config = ViewConfig()
        if engine is None:
            engine = TemplateEngineAdapter.from_config(config)
        log.debug("template_view_created", name=name, data_keys=sorted(data or {}), helpers=sorted(helpers or {}))
        return cls(name, data, helpers, config=config, engine=engine)

    @property
    def name(self) -> str:
        return self._name

    def set_all(self, data: Mapping[str, Any]) -> None:
        if not data:
            return
        self.data.update(data)

    def set_one(self, key: str, value: Any) -> None:
        self.data[key] = value

    def set(self, data: Any, value: Any = _UNSET) -> None:
        """
        Legacy entry point: ``set(mapping)`` merges, ``set(key, value)``
        assigns one key. Any other first argument is ignored.
        """
        if isinstance(data, Mapping):
            if value is not _UNSET:
                raise TypeError("set() takes no value when the first argument is a mapping")
            self.set_all(data)
        elif isinstance(data, str):
            self.set_one(data, None if value is _UNSET else value)
        else:
            log.debug("template_view_set_ignored", name=self._name, arg_type=type(data).__name__)

    def set_helper(self, name: str, fn: Callable[..., Any]) -> None:
        self.helpers.add(name, fn)

    def remove_helper(self, name: str) -> None:
        self.helpers.remove(name)

    def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
        return self.helpers.invoke(name, *args, **kwargs)

    def resolve(self) -> Resolution:
        return resolve_template(
            self.config.template_root,
            self._name,
            self.config.compiled_extension,
            self.config.raw_extension,
        )

    def render(
        self,
        data: Optional[Mapping[str, Any]] = None,
        helper_functions: Optional[Mapping[str, Callable[..., Any]]] = None,
    ) -> str:
        resolution = self.resolve()
        self.set_all(data or {})

        if resolution.kind is TemplateKind.COMPILED:
            if helper_functions:
                log.debug("call_scoped_helpers_ignored_for_compiled_template",
                          name=self._name, helpers=sorted(helper_functions))
            return self.engine.render(self._name, self.data)

        self.helpers.merge_defaults(helper_functions or {})
        return self.raw_renderer.render(resolution.path, self.data, self.helpers)

    def __repr__(self) -> str:
        return f"TemplateView(name={self._name!r}, data_keys={sorted(self.data)!r}, helpers={self.helpers.names()!r})"
