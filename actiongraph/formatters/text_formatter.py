"""
Line templates for tree, top and types listings.

Templates are str.format strings evaluated against each row's to_dict().
"""

from typing import Iterable, Iterator

from ..core.errors import TemplateError

TREE_TEMPLATE = "{cumulative_seconds:8.3f}{own_seconds:>9} {indent}{package}"
TOP_TEMPLATE = "{seconds:8.3f}{cumulative_percent_int:7d}%  {mode}\t{package}"
TYPES_TEMPLATE = "{seconds:8.3f}{percent:7.0f}%  {mode}"


def render_rows(rows: Iterable, template: str) -> Iterator[str]:
    """
    Render rows one line at a time.

    Args:
        rows: Row objects with a to_dict() method (TreeRow, TopRow, TypeRow)
        template: str.format template over the row fields

    Yields:
        One formatted line per row

    Raises:
        TemplateError: If the template is malformed or uses an unknown field
    """
    for row in rows:
        try:
            yield template.format_map(row.to_dict())
        except KeyError as e:
            raise TemplateError(f"unknown template field {e}") from e
        except (ValueError, IndexError, AttributeError) as e:
            raise TemplateError(f"parsing template: {e}") from e
