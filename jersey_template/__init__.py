from .config import TemplateConfig
from .exceptions import (
    TemplateError,
    DecodeError,
    UnsupportedContentError,
    CollarUnavailableError,
    EncodeError,
)
from .pipeline.template_builder import build_template, build_template_file

__version__ = "1.0.0"
