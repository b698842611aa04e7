"""Module for rendering the elements of a problem/solution space mapping as a
table."""
import typing as tp
from enum import Enum

import pandas as pd
from tabulate import tabulate

from pssmap.mapping.mapping_element import MappingElement

VARIABLE_NAME_COLUMN = "Variable Name"
VARIABLE_STATE_COLUMN = "Variable State"
SOURCE_FILES_COLUMN = "Controlled Source Files"
CODE_ELEMENTS_COLUMN = "Controlled Code Elements"

MAPPING_COLUMNS = [
    VARIABLE_NAME_COLUMN, VARIABLE_STATE_COLUMN, SOURCE_FILES_COLUMN,
    CODE_ELEMENTS_COLUMN
]


class TableFormat(Enum):
    """List of supported TableFormats."""
    value: str  # pylint: disable=invalid-name

    PLAIN = "plain"
    SIMPLE = "simple"
    GITHUB = "github"
    GRID = "grid"
    FANCY_GRID = "fancy_grid"
    PIPE = "pipe"
    ORGTBL = "orgtbl"
    PSQL = "psql"
    RST = "rst"
    LATEX = "latex"
    LATEX_BOOKTABS = "latex_booktabs"
    HTML = "html"
    CSV = "csv"

    def is_html(self) -> bool:
        return self == TableFormat.HTML

    def is_csv(self) -> bool:
        return self == TableFormat.CSV


def create_mapping_dataframe(
    mapping_elements: tp.Iterable[MappingElement]
) -> pd.DataFrame:
    """
    Convert mapping elements into a ``DataFrame`` with one row per variable,
    sorted by variable name.

    Args:
        mapping_elements: the elements of a mapping

    Returns:
        a ``DataFrame`` with the columns in ``MAPPING_COLUMNS``
    """
    rows = [{
        VARIABLE_NAME_COLUMN: element.variable_name,
        VARIABLE_STATE_COLUMN: str(element.state),
        SOURCE_FILES_COLUMN: element.controlled_files_str(),
        CODE_ELEMENTS_COLUMN: element.controlled_elements_str()
    } for element in mapping_elements]

    data = pd.DataFrame(rows, columns=MAPPING_COLUMNS)
    return data.sort_values(by=VARIABLE_NAME_COLUMN).reset_index(drop=True)


def dataframe_to_table(
    data: pd.DataFrame, table_format: TableFormat, **kwargs: tp.Any
) -> str:
    """
    Convert a pandas ``DataFrame`` to a table.

    Args:
        data: the ``DataFrame`` to convert
        table_format: the table format used for conversion
        **kwargs: kwargs that get passed to pandas' conversion functions
                  (``DataFrame.to_html`` or ``DataFrame.to_csv``)

    Returns:
        the table as a string
    """
    if table_format.is_html():
        return str(data.to_html(index=False, **kwargs))
    if table_format.is_csv():
        return str(data.to_csv(index=False, **kwargs))

    return str(
        tabulate(data, data.columns, table_format.value, showindex=False)
    )


def mapping_to_table(
    mapping_elements: tp.Iterable[MappingElement],
    table_format: TableFormat = TableFormat.SIMPLE
) -> str:
    """
    Render mapping elements as a table.

    Args:
        mapping_elements: the elements of a mapping
        table_format: the table format used for rendering

    Returns:
        the table as a string
    """
    return dataframe_to_table(
        create_mapping_dataframe(mapping_elements), table_format
    )
