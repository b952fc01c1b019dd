"""sparkmd - an embedded command protocol for plain-text documents."""

from .parser import FileParser
from .results import ErrorWriter, ResultWriter

__version__ = "0.1.0"

__all__ = ["ErrorWriter", "FileParser", "ResultWriter"]
