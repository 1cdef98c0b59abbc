# templateview/core/resolution.py
"""
Decides which engine owns a template name by probing the template root
for a compiled-engine file first and a raw-script file second.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import List, Tuple
import structlog

from templateview.exceptions import TemplateNotFoundError

log = structlog.get_logger(__name__)

class TemplateKind(Enum):
    # which renderer owns a resolved template.
    COMPILED = "compiled"
    RAW_SCRIPT = "raw_script"

@dataclass(frozen=True)
class Resolution:
    kind: TemplateKind
    path: Path

def _validated_name(name: str) -> str:
    if not name or not name.strip():
        raise TemplateNotFoundError("The template name must not be empty.")
    posix = PurePosixPath(name.replace("\\", "/"))
    if posix.is_absolute() or ".." in posix.parts:
        raise TemplateNotFoundError(
            f'The template "{name}" must be a relative name under the template root.'
        )
    return str(posix)

def candidate_paths(
    root: Path, name: str, compiled_ext: str, raw_ext: str
) -> List[Tuple[TemplateKind, Path]]:
    """Returns both candidate files for a name, in probe order."""
    clean_name = _validated_name(name)
    base = Path(root) / clean_name
    return [
        (TemplateKind.COMPILED, base.with_name(base.name + compiled_ext)),
        (TemplateKind.RAW_SCRIPT, base.with_name(base.name + raw_ext)),
    ]

def resolve_template(root: Path, name: str, compiled_ext: str, raw_ext: str) -> Resolution:
    candidates = candidate_paths(root, name, compiled_ext, raw_ext)
    for kind, path in candidates:
        if path.is_file():
            log.debug("template_resolved", name=name, kind=kind.value, path=str(path))
            return Resolution(kind, path)
    raw_path = candidates[-1][1]
    log.warning("template_not_found", name=name, checked=[str(p) for _, p in candidates])
    raise TemplateNotFoundError(f'The template "{raw_path}" not found.')
