# templateview/config/__init__.py
"""
Configuration for templateview: the ViewConfig dataclass and the TOML
loader that builds one from user and project config files.
"""
from .settings import ViewConfig
from .loader import load_config

__all__ = ["ViewConfig", "load_config"]
