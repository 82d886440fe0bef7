"""Custom exceptions for the intake context."""


class InvalidYAMLStructureError(ValueError):
    """
    Exception raised when a YAML CV source is missing required structure.

    Raised when the file has no 'sections' list, or a section is not a mapping
    with a 'title'.
    """

    pass
