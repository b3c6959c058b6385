"""Exceptions raised while loading and rendering Doxygen XML."""


class DoxygenError(Exception):
    pass


class UnsupportedValue(DoxygenError, ValueError):
    """An attribute value outside the closed set of a taxonomy table."""

    def __init__(self, value, enum):
        self.value = value
        self.enum = enum
        super().__init__(f"unsupported {enum} value: {value!r}")


class UnsupportedMarkup(DoxygenError):
    """An inline markup node the transcoder refuses to render."""

    def __init__(self, tag, reason="unsupported"):
        self.tag = tag
        super().__init__(f"{reason} node type: {tag!r}")


class LoadError(DoxygenError):
    def __init__(self, path, message):
        self.path = path
        super().__init__(f"{path}: {message}")


class RenderError(DoxygenError):
    pass
