class TemplateError(Exception):
    """Base error for everything the template pipeline can fail on."""


class DecodeError(TemplateError):
    """Input bytes could not be decoded into an image."""


class UnsupportedContentError(TemplateError):
    """The image has no usable content to stack (e.g. fully transparent)."""


class CollarUnavailableError(TemplateError):
    """Collar overlay missing or unreadable. Recovered inside CollarService."""


class EncodeError(TemplateError):
    """The composed canvas could not be serialized."""
