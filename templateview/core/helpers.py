# templateview/core/helpers.py
"""
The helper registry scoped to a single view, and the attribute proxy that
lets calling code and raw-script bodies invoke helpers by name.
"""
from typing import Any, Callable, Dict, List, Mapping, Optional
import structlog

from templateview.exceptions import DuplicateHelperError, UnknownHelperError

log = structlog.get_logger(__name__)

def _not_associated(name: str) -> str:
    return f'The function "{name}" is not associated with the template.'

def _check_name(name: str) -> None:
    if not name:
        raise ValueError("helper names must be non-empty")

class HelperRegistry:
    """A mutable table of named callables. Names are bound at most once via add()."""

    def __init__(self, initial: Optional[Mapping[str, Callable[..., Any]]] = None):
        self._helpers: Dict[str, Callable[..., Any]] = {}
        if initial:
            self.merge_defaults(initial)

    def add(self, name: str, fn: Callable[..., Any]) -> None:
        _check_name(name)
        if name in self._helpers:
            log.warning("helper_already_registered", helper=name)
            raise DuplicateHelperError(
                f'The function "{name}" is already associated with the template.'
            )
        self._helpers[name] = fn
        log.debug("helper_registered", helper=name)

    def remove(self, name: str) -> None:
        if name not in self._helpers:
            log.warning("helper_remove_unknown", helper=name)
            raise UnknownHelperError(_not_associated(name))
        del self._helpers[name]
        log.debug("helper_removed", helper=name)

    def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
        fn = self._helpers.get(name)
        if fn is None:
            log.warning("helper_invoke_unknown", helper=name)
            raise UnknownHelperError(_not_associated(name))
        return fn(*args, **kwargs)

    def merge_defaults(self, extra: Mapping[str, Callable[..., Any]]) -> None:
        # overlay: existing names are replaced without complaint.
        for name, fn in extra.items():
            _check_name(name)
            self._helpers[name] = fn
        if extra:
            log.debug("helpers_merged", helpers=sorted(extra))

    def get(self, name: str) -> Optional[Callable[..., Any]]:
        return self._helpers.get(name)

    def names(self) -> List[str]:
        return sorted(self._helpers)

    def __contains__(self, name: object) -> bool:
        return name in self._helpers

    def __len__(self) -> int:
        return len(self._helpers)

    def __repr__(self) -> str:
        return f"HelperRegistry({self.names()!r})"


class HelperProxy:
    """
    Attribute access forwarded to a registry: ``proxy.greet("ada")`` is
    ``registry.invoke("greet", "ada")``. Unbound names raise
    UnknownHelperError, which is also an AttributeError.
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: HelperRegistry):
        self._registry = registry

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_") or name not in self._registry:
            raise UnknownHelperError(_not_associated(name))
        registry = self._registry

        def bound_helper(*args: Any, **kwargs: Any) -> Any:
            return registry.invoke(name, *args, **kwargs)

        bound_helper.__name__ = name
        return bound_helper

    def __dir__(self) -> List[str]:
        return self._registry.names()
