from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

DEFAULT_TEMPLATE_ROOT = Path("templates")
DEFAULT_CACHE_DIR_NAME = "cache"
DEFAULT_COMPILED_EXTENSION = ".j2"
DEFAULT_RAW_EXTENSION = ".pyt"
DEFAULT_TRANSLATION_DOMAIN = "messages"

def normalize_extension(ext: str) -> str:
    # ensures an extension carries exactly one leading dot.
    ext = ext.strip()
    if not ext:
        raise ValueError("template extension must not be empty")
    return "." + ext.lstrip(".")

@dataclass
class ViewConfig:
    # holds the template root layout and engine options shared by views.
    template_root: Path = DEFAULT_TEMPLATE_ROOT
    cache_dir: Optional[Path] = None
    compiled_extension: str = DEFAULT_COMPILED_EXTENSION
    raw_extension: str = DEFAULT_RAW_EXTENSION
    translation_domain: str = DEFAULT_TRANSLATION_DOMAIN
    locale_dir: Optional[Path] = None
    languages: List[str] = field(default_factory=list)
    enable_i18n: bool = True
    strict_undefined: bool = True

    def __post_init__(self):
        # coerces values that may arrive as strings from TOML or the CLI.
        self.template_root = Path(self.template_root)
        if self.cache_dir is None:
            self.cache_dir = self.template_root / DEFAULT_CACHE_DIR_NAME
        else:
            self.cache_dir = Path(self.cache_dir)
        if self.locale_dir is not None:
            self.locale_dir = Path(self.locale_dir)
        self.compiled_extension = normalize_extension(self.compiled_extension)
        self.raw_extension = normalize_extension(self.raw_extension)
        if self.compiled_extension == self.raw_extension:
            raise ValueError(
                f"compiled and raw-script templates cannot share the extension '{self.raw_extension}'"
            )
        if isinstance(self.languages, str):
            self.languages = [self.languages]
