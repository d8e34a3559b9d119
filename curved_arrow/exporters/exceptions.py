"""
Exceptions raised while exporting a connector's drawable state
"""


class ExporterError(Exception):
    """Base class for SVG and JSON export failures"""


class InvalidStateError(ExporterError):
    """The drawable state is missing, or its layers are out of stacking order"""


class FileExportError(ExporterError):
    """The template could not be rendered, or the output could not be written"""


class PathValidationError(ExporterError):
    """The output path is empty, too long, reserved or cannot be resolved"""
