"""
Tree construction and value normalization helpers.

- Element paths: slash-delimited construction/lookup against lxml trees
- Dates: normalization to the fixed YYYY-MM-DD / HH:MM:SS+00:00 wire formats
"""

from .element_path import ElementPath, add_element, has_node
from .dates import format_date, format_time, parse_datetime

__all__ = [
    'ElementPath',
    'add_element',
    'has_node',
    'format_date',
    'format_time',
    'parse_datetime',
]
