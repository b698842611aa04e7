"""
Analysis component creating a :class:`ProblemSolutionSpaceMapping` from a
variability model, an optional build model, and the parsed source files.
"""
import logging
import re
import typing as tp

from pssmap.mapping.mapping_element import MappingElement
from pssmap.mapping.problem_solution_space_mapping import (
    ProblemSolutionSpaceMapping,
)
from pssmap.model.build_model import BuildModel
from pssmap.model.code_model import SourceFile
from pssmap.model.variability_model import VariabilityModel
from pssmap.utils.exceptions import InvalidVariableRegex
from pssmap.utils.settings import pss_cfg

LOG = logging.getLogger(__name__)


def compile_variable_regex(
    variable_regex: tp.Optional[str]
) -> tp.Optional[tp.Pattern[str]]:
    """
    Compile the regular expression identifying variability variables.

    Args:
        variable_regex: the user supplied expression, ``None`` or empty to
                        accept all variables

    Returns:
        the compiled pattern, or ``None`` if all variables are accepted
    """
    if not variable_regex:
        return None

    try:
        return re.compile(variable_regex)
    except re.error as err:
        raise InvalidVariableRegex(variable_regex, str(err)) from err


class ProblemSolutionSpaceMapper():
    """
    Creates the mapping between problem and solution space artifacts.

    The variable reference regex is taken from the ``mapper/variable_regex``
    setting unless it is passed explicitly.
    """

    RESULT_NAME = "PSS_Mapping"

    def __init__(self, variable_regex: tp.Optional[str] = None) -> None:
        if variable_regex is None:
            configured_regex = pss_cfg()["mapper"]["variable_regex"].value
            variable_regex = str(configured_regex) \
                if configured_regex is not None else None

        self.__variable_regex = compile_variable_regex(variable_regex)

    @property
    def variable_regex(self) -> tp.Optional[tp.Pattern[str]]:
        """Pattern used to identify variability variables, ``None`` accepts
        all variables."""
        return self.__variable_regex

    def execute(
        self,
        variability_model: tp.Optional[VariabilityModel],
        code_model: tp.Iterable[SourceFile],
        build_model: tp.Optional[BuildModel] = None
    ) -> tp.List[MappingElement]:
        """
        Run the complete mapping: add all source files, resolve unused
        variables, and collect the resulting elements.

        Args:
            variability_model: declared variables; without it, every found
                               variable becomes ``UNDEFINED``
            code_model: the parsed source files
            build_model: presence conditions of the source files, if available

        Returns:
            the elements of the final mapping
        """
        LOG.info(
            "Using "
            f"{self.__variable_regex.pattern if self.__variable_regex else None}"
            " to identify variability model variables in build and code "
            "artifacts"
        )

        if variability_model is None:
            LOG.error(
                "Creating a mapping without a variability model is only "
                "useful in a very few special cases. You may want to supply "
                "a variability model."
            )
            mapping = ProblemSolutionSpaceMapping \
                .create_without_variability_model()
        else:
            mapping = ProblemSolutionSpaceMapping(variability_model)

        if build_model is not None:
            for source_file in code_model:
                mapping.add_artifact(
                    source_file, build_model.get_pc(source_file.path),
                    self.__variable_regex
                )
        else:
            LOG.warning(
                "Build model is missing, which may lead to incomplete mapping"
            )
            for source_file in code_model:
                mapping.add_artifact(
                    source_file, name_filter=self.__variable_regex
                )

        # separates variables only used in the variability model (UNMAPPED)
        # from really unused ones
        mapping.resolve_unused()
        mapping.show()

        mapping_elements = mapping.get_elements()
        LOG.info(f"Mapping with {len(mapping_elements)} elements created")
        return mapping_elements
