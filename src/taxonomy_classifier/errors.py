"""Exceptions raised while loading taxonomies and documents."""


class ClassifierError(Exception):
    """Base class for taxonomy classifier errors."""


class LoadError(ClassifierError):
    """A taxonomy or document could not be read."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class UnsupportedFormatError(LoadError):
    """The file extension is not one we know how to read."""
