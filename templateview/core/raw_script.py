# templateview/core/raw_script.py
"""
Renders legacy raw-script templates: Python source files executed with an
explicit ScriptContext, whose output is captured into a string.

A script body sees four names:

    ctx    -- the ScriptContext (``ctx.get("year")``, ``ctx["year"]``)
    write  -- appends text to the captured output
    call   -- helper proxy (``call.copyrightLine()``)
    print  -- the builtin, writing to the captured output by default

Each render owns its buffer, so renders on separate threads or nested
renders started from inside a body never see each other's output, and
nothing a body writes reaches the surrounding stdout.
"""
import contextlib
import functools
import io
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping
import structlog

from templateview.exceptions import TemplateNotFoundError, TemplateRenderError

from .helpers import HelperProxy, HelperRegistry

log = structlog.get_logger(__name__)

class ScriptContext:
    """Data bindings and helpers visible to a raw-script body, plus its output writer."""

    def __init__(self, data: Mapping[str, Any], registry: HelperRegistry, writer: io.StringIO):
        self._data = dict(data)
        self._writer = writer
        self.helpers = registry
        self.call = HelperProxy(registry)
        self.print = functools.partial(print, file=writer)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def keys(self):
        return self._data.keys()

    def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
        return self.helpers.invoke(name, *args, **kwargs)

    def write(self, value: Any = "", *more: Any) -> None:
        self._writer.write(str(value))
        for item in more:
            self._writer.write(str(item))


@contextlib.contextmanager
def captured_output() -> Iterator[io.StringIO]:
    """
    Opens a capture buffer owned by one render. The buffer is closed on
    every exit path, so partial output from a failed body is dropped.
    sys.stdout is never touched; bodies reach the buffer through the
    ``write`` and ``print`` names bound in their globals.
    """
    buffer = io.StringIO()
    try:
        yield buffer
    finally:
        buffer.close()


class RawScriptRenderer:
    """Executes one raw-script file per render call."""

    def compile_script(self, path: Path):
        try:
            source = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise TemplateNotFoundError(f'The template "{path}" not found.') from e
        try:
            return compile(source, str(path), "exec")
        except SyntaxError as e:
            log.error("raw_script_syntax_error", path=str(path), error=str(e))
            raise TemplateRenderError(f"Syntax error in template {path}: {e}") from e

    def render(self, path: Path, data: Mapping[str, Any], registry: HelperRegistry) -> str:
        if not path.is_file():
            log.warning("raw_script_missing", path=str(path))
            raise TemplateNotFoundError(f'The template "{path}" not found.')

        code = self.compile_script(path)
        log.info("rendering_raw_script", path=str(path), context_keys=list(data.keys()))

        try:
            with captured_output() as buffer:
                ctx = ScriptContext(data, registry, buffer)
                script_globals: Dict[str, Any] = {
                    "__name__": "__template__",
                    "__file__": str(path),
                    "ctx": ctx,
                    "write": ctx.write,
                    "call": ctx.call,
                    "print": ctx.print,
                }
                exec(code, script_globals)
                content = buffer.getvalue()
        except Exception as e:
            # the capture buffer is already closed here; its partial output is gone.
            log.error("raw_script_execution_failed", path=str(path), error=str(e),
                      error_type=type(e).__name__)
            raise

        log.debug("raw_script_rendered", path=str(path), length=len(content))
        return content
