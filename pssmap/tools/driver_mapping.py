"""
Driver module for `pss-map`.

This module handles command-line parsing and maps the commands to the
problem/solution space mapping.
"""
import logging
import typing as tp
from pathlib import Path

import click

from pssmap.mapping.mapper import ProblemSolutionSpaceMapper
from pssmap.model.build_model import load_build_model
from pssmap.model.code_model import load_code_model
from pssmap.model.variability_model import load_variability_model
from pssmap.table.mapping_table import TableFormat, mapping_to_table
from pssmap.tools.tool_util import input_error_handler
from pssmap.utils.cli_util import initialize_cli_tool
from pssmap.utils.settings import get_value_or_default, pss_cfg

LOG = logging.getLogger(__name__)


def __lookup_table_format(table_format: tp.Optional[str]) -> TableFormat:
    if table_format:
        return TableFormat(table_format.lower())

    configured_format = str(
        get_value_or_default(pss_cfg()["tables"], "table_format", "simple")
    )
    try:
        return TableFormat(configured_format.lower())
    except ValueError:
        LOG.warning(
            f"Unknown table format '{configured_format}' in config, "
            "falling back to simple"
        )
        return TableFormat.SIMPLE


@click.command("pss-map")
@click.option(
    "-v",
    "--variability-model",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Variability model document. Without it, all found variables are "
    "reported as UNDEFINED."
)
@click.option(
    "-c",
    "--code-model",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Code model document with the parsed source files."
)
@click.option(
    "-b",
    "--build-model",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Build model document with the presence conditions of files."
)
@click.option(
    "-r",
    "--variable-regex",
    default=None,
    help="Regular expression identifying variability variables, overrides "
    "the mapper/variable_regex setting."
)
@click.option(
    "-f",
    "--table-format",
    type=click.Choice([fmt.value for fmt in TableFormat],
                      case_sensitive=False),
    default=None,
    help="Format of the printed mapping table."
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write the mapping table to this file instead of stdout."
)
@input_error_handler
def main(
    variability_model: tp.Optional[Path], code_model: Path,
    build_model: tp.Optional[Path], variable_regex: tp.Optional[str],
    table_format: tp.Optional[str], output: tp.Optional[Path]
) -> None:
    """
    Map the configuration variables of a variability model to the source files
    and code elements they control.

    `pss-map`
    """
    initialize_cli_tool()

    mapper = ProblemSolutionSpaceMapper(variable_regex)
    mapping_elements = mapper.execute(
        load_variability_model(variability_model)
        if variability_model else None, load_code_model(code_model),
        load_build_model(build_model) if build_model else None
    )

    table = mapping_to_table(
        mapping_elements, __lookup_table_format(table_format)
    )
    if output:
        output.write_text(table + "\n")
        LOG.info(f"Wrote {mapper.RESULT_NAME} table to {output}")
    else:
        click.echo(table)


if __name__ == '__main__':
    main()
