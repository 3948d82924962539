"""Configuration module — exports Settings and the YAML/env loader."""

from lyrlib.config.loader import build_client_options, load_config
from lyrlib.config.settings import Settings

__all__ = ["Settings", "build_client_options", "load_config"]
