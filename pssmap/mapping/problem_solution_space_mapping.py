"""
Module for the :class:`ProblemSolutionSpaceMapping`.

The mapping relates the configuration variables of a variability model
(problem space) to the source files and code elements (solution space) whose
presence they control. Using the mapping follows three stages:

1. add every available source file via
   :meth:`ProblemSolutionSpaceMapping.add_artifact`,
2. resolve declared variables that are only used inside the variability model
   via :meth:`ProblemSolutionSpaceMapping.resolve_unused`,
3. read the result via :meth:`ProblemSolutionSpaceMapping.get_elements`.
"""
import logging
import re
import typing as tp

from pyeda.inter import Expression  # type: ignore

from pssmap.base.presence_condition import get_variable_names
from pssmap.mapping.mapping_element import MappingElement, MappingState
from pssmap.model.code_model import CodeElement, SourceFile
from pssmap.model.variability_model import VariabilityModel

LOG = logging.getLogger(__name__)

NameFilterTy = tp.Optional[tp.Union[str, tp.Pattern[str]]]


def filter_variable_names(
    variable_names: tp.Iterable[str], name_filter: NameFilterTy
) -> tp.Set[str]:
    """
    Reduce a set of variable names to those fully matching the name filter.

    Args:
        variable_names: the names to filter
        name_filter: regular expression every kept name has to match
                     completely; ``None`` or an empty pattern keeps all names

    Returns:
        the subset of names matching the filter
    """
    if name_filter is None:
        return set(variable_names)

    pattern = name_filter if isinstance(name_filter, re.Pattern) \
        else re.compile(name_filter)
    if not pattern.pattern:
        return set(variable_names)

    return {name for name in variable_names if pattern.fullmatch(name)}


class ProblemSolutionSpaceMapping():
    """Owns one :class:`MappingElement` per configuration variable, keyed by
    the variable name."""

    def __init__(self, variability_model: VariabilityModel) -> None:
        if variability_model is None:
            raise ValueError(
                "A variability model is required to create the mapping, use "
                "create_without_variability_model() instead"
            )

        self.__mapping_elements: tp.Dict[str, MappingElement] = {}
        self.__constraint_usage_available = \
            variability_model.descriptor.has_constraint_usage
        self.__resolved = False
        self.__stale = False

        # every declared variable starts UNUSED until an artifact references it
        for variable in variability_model.variables:
            self.__mapping_elements[variable.name] = MappingElement(variable)

    @classmethod
    def create_without_variability_model(
        cls
    ) -> 'ProblemSolutionSpaceMapping':
        """
        Create an empty mapping for callers that can not provide a variability
        model.

        All variables found in artifacts will be ``UNDEFINED``.
        """
        return cls(VariabilityModel([]))

    @property
    def constraint_usage_available(self) -> bool:
        """Whether the declared variables provide information about their
        usage in other variables' constraints."""
        return self.__constraint_usage_available

    def add_artifact(
        self,
        source_file: SourceFile,
        build_condition: tp.Optional[Expression] = None,
        name_filter: NameFilterTy = None
    ) -> None:
        """
        Extend the mapping by the relations between configuration variables
        and the given source file.

        If a build condition is given, every variable it references is related
        to the file itself (build mapping). Independent of that, the presence
        conditions of all (nested) code elements of the file are scanned and
        every referenced variable is related to the respective element (code
        mapping). Variables not declared in the variability model are added
        as ``UNDEFINED``.

        Args:
            source_file: the file to add
            build_condition: presence condition of the file, ``None`` if no
                             build model is available
            name_filter: regular expression identifying variability variables;
                         ``None`` or empty includes all variables
        """
        if self.__resolved:
            self.__stale = True

        if build_condition is not None:
            for variable_name in self.__variables_of(
                build_condition, name_filter
            ):
                self.__get_or_create(variable_name
                                    ).add_file_association(source_file)

        for code_element in source_file:
            self.__add_code_element(code_element, name_filter)

    def __add_code_element(
        self, root: CodeElement, name_filter: NameFilterTy
    ) -> None:
        # depth-first, pre-order; unconditional elements only contribute
        # their children
        worklist: tp.List[CodeElement] = [root]
        while worklist:
            code_element = worklist.pop()
            condition = code_element.presence_condition
            if condition is not None:
                for variable_name in self.__variables_of(
                    condition, name_filter
                ):
                    self.__get_or_create(variable_name
                                        ).add_element_association(code_element)

            worklist.extend(reversed(list(code_element.iter_nested_elements())))

    @staticmethod
    def __variables_of(condition: Expression,
                       name_filter: NameFilterTy) -> tp.List[str]:
        return sorted(
            filter_variable_names(get_variable_names(condition), name_filter)
        )

    def __get_or_create(self, variable_name: str) -> MappingElement:
        mapping_element = self.__mapping_elements.get(variable_name, None)
        if mapping_element is None:
            mapping_element = MappingElement.create_undefined(variable_name)
            self.__mapping_elements[variable_name] = mapping_element
        return mapping_element

    def resolve_unused(self) -> bool:
        """
        Mark declared variables that are not referenced by any artifact, but
        used in the constraints of other declared variables, as
        ``UNMAPPED``.

        Without constraint usage information this is a no-op. Only elements in
        state ``UNUSED`` are considered, so calling this again is safe.

        Returns:
            ``True`` if at least one element changed its state, otherwise,
            ``False``
        """
        self.__resolved = True
        self.__stale = False
        if not self.__constraint_usage_available:
            return False

        resolved_variables = 0
        for mapping_element in self.__mapping_elements.values():
            if mapping_element.state != MappingState.UNUSED or \
                    mapping_element.variable is None:
                continue

            referencing_variables = mapping_element.variable \
                .used_in_constraints_of_other_variables
            if referencing_variables:
                mapping_element.set_state(MappingState.UNMAPPED)
                resolved_variables += 1

        if resolved_variables:
            LOG.info(
                f"Resolved {resolved_variables} unused variables as "
                f"{MappingState.UNMAPPED}"
            )
        return resolved_variables > 0

    def get_element(self, variable_name: str) -> tp.Optional[MappingElement]:
        """
        Look up the element of a variable.

        Args:
            variable_name: name of the configuration variable

        Returns: the element if the variable is part of the mapping, otherwise,
                 ``None``
        """
        return self.__mapping_elements.get(variable_name, None)

    def get_elements(self) -> tp.List[MappingElement]:
        """
        All elements of this mapping.

        If artifacts were added after unused variables had been resolved, the
        resolution is repeated first.

        Returns:
            the list of elements; empty if the mapping knows no variable
        """
        if self.__stale:
            self.resolve_unused()
        return list(self.__mapping_elements.values())

    def show(self) -> None:
        """Log the string representation of every element on debug level."""
        for mapping_element in self.__mapping_elements.values():
            LOG.debug(str(mapping_element))

    def __len__(self) -> int:
        return len(self.__mapping_elements)

    def __contains__(self, variable_name: object) -> bool:
        return variable_name in self.__mapping_elements

    def __iter__(self) -> tp.Iterator[MappingElement]:
        return iter(self.get_elements())
