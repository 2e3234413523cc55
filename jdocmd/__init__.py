"""Generate Markdown documentation from Javadoc-commented source files."""

from .models import ClassRecord, Method, Param
from .parsing import parse, parse_file

__all__ = ["ClassRecord", "Method", "Param", "parse", "parse_file"]

__version__ = "1.0.0"
