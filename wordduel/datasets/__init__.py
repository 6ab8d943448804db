from .validator import validate_dictionary, pretty_summary
from .io import read_lines, read_words

__all__ = ["validate_dictionary", "pretty_summary", "read_lines", "read_words"]
