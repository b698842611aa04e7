"""
Module for :class:`MappingElement`, the relation between one configuration
variable and the source files and code elements it controls.
"""
import logging
import typing as tp
from enum import Enum

from pssmap.model.code_model import CodeElement, SourceFile
from pssmap.model.variability_model import VariabilityVariable

LOG = logging.getLogger(__name__)


class MappingState(Enum):
    """
    State of a configuration variable within the mapping between problem and
    solution space artifacts.

    A variable starts as ``UNUSED`` (declared) or ``UNDEFINED`` (undeclared)
    and may only move forward from ``UNUSED`` to ``USED`` or ``UNMAPPED``.
    """
    value: str  # pylint: disable=invalid-name

    #: declared in the variability model and referenced in at least one build
    #: or code artifact
    USED = "USED"
    #: declared and used in other variables' constraints, but not referenced
    #: in any build or code artifact
    UNMAPPED = "UNMAPPED"
    #: declared, but neither used in constraints nor referenced in any build
    #: or code artifact
    UNUSED = "UNUSED"
    #: not declared in the variability model, but referenced in at least one
    #: build or code artifact
    UNDEFINED = "UNDEFINED"

    def __str__(self) -> str:
        return self.value


class MappingElement():
    """
    Relates a configuration variable with the set of source files and code
    elements whose presence it controls.

    The variable is either declared in the variability model, in which case the
    element starts in state ``UNUSED``, or only referenced by an artifact, in
    which case the element has no declared variable and the state
    ``UNDEFINED``.
    """

    def __init__(
        self, variable: tp.Union[VariabilityVariable, str]
    ) -> None:
        self.__variable: tp.Optional[VariabilityVariable]
        if isinstance(variable, VariabilityVariable):
            self.__variable = variable
            self.__variable_name = variable.name
            self.__state = MappingState.UNUSED
        else:
            self.__variable = None
            self.__variable_name = str(variable)
            self.__state = MappingState.UNDEFINED

        self.__controlled_files: tp.Set[SourceFile] = set()
        self.__controlled_elements: tp.Set[CodeElement] = set()

    @staticmethod
    def create_undefined(variable_name: str) -> 'MappingElement':
        """
        Create an element for a variable that is not declared in the
        variability model.

        Args:
            variable_name: name of the referenced variable

        Returns: a new element in state ``UNDEFINED``
        """
        return MappingElement(variable_name)

    @property
    def variable(self) -> tp.Optional[VariabilityVariable]:
        """The declared variable, ``None`` if the state is ``UNDEFINED``."""
        return self.__variable

    @property
    def variable_name(self) -> str:
        """Name of the configuration variable of this element."""
        return self.__variable_name

    @property
    def state(self) -> MappingState:
        """Current :class:`MappingState` of the variable."""
        return self.__state

    def set_state(self, state: MappingState) -> None:
        """
        Overwrite the state of this element.

        Only intended for resolving unused variables after all artifacts have
        been added.
        """
        self.__state = state

    @property
    def controlled_files(self) -> tp.FrozenSet[SourceFile]:
        """Source files the variable controls during the build process."""
        return frozenset(self.__controlled_files)

    @property
    def controlled_elements(self) -> tp.FrozenSet[CodeElement]:
        """Code elements the variable controls within source files."""
        return frozenset(self.__controlled_elements)

    def add_file_association(self, source_file: SourceFile) -> None:
        """
        Record that the variable controls the presence of the given file, which
        marks a declared, unused variable as used.

        Args:
            source_file: controlled by the variable of this element
        """
        self.__controlled_files.add(source_file)
        self.__mark_used()

    def add_element_association(self, code_element: CodeElement) -> None:
        """
        Record that the variable controls the presence of the given code
        element, which marks a declared, unused variable as used.

        Args:
            code_element: controlled by the variable of this element
        """
        self.__controlled_elements.add(code_element)
        self.__mark_used()

    def __mark_used(self) -> None:
        # UNDEFINED already implies a reference from an artifact
        if self.__state == MappingState.UNUSED:
            self.__state = MappingState.USED
        elif self.__state == MappingState.UNMAPPED:
            LOG.warning(
                f"Variable {self.variable_name} was already resolved as "
                f"{MappingState.UNMAPPED} but is referenced by an artifact"
            )
            self.__state = MappingState.USED

    def controlled_files_str(self) -> str:
        """The controlled source files as a single, space separated string of
        file names."""
        return " ".join(
            sorted(
                source_file.path.name
                for source_file in self.__controlled_files
            )
        )

    def controlled_elements_str(self) -> str:
        """The controlled code elements as a single, space separated string,
        each rendered as ``<file name>[<start>:<end>]``."""
        return " ".join(
            str(code_element) for code_element in sorted(
                self.__controlled_elements,
                key=lambda elem:
                (elem.source_file.name, elem.line_start, elem.line_end)
            )
        )

    def __str__(self) -> str:
        return "\t".join([
            self.variable_name,
            str(self.state),
            self.controlled_files_str(),
            self.controlled_elements_str()
        ])

    def __repr__(self) -> str:
        return f"MappingElement({self.variable_name!r}, {self.state})"
