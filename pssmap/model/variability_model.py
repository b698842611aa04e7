"""Module for the variability model, i.e., the problem space of a product
line."""
import logging
import typing as tp
from pathlib import Path

from pyeda.inter import Expression  # type: ignore

from pssmap.base.presence_condition import (
    get_variable_names,
    parse_optional_condition,
)
from pssmap.utils.yaml_util import get_required, load_yaml_document

LOG = logging.getLogger(__name__)


class VariabilityVariable():
    """A configuration variable declared in a :class:`VariabilityModel`."""

    def __init__(
        self,
        name: str,
        var_type: str = "bool",
        constraint: tp.Optional[Expression] = None
    ) -> None:
        self.__name = name
        self.__type = var_type
        self.__constraint = constraint
        self.__used_in_constraints_of_other_variables: tp.Optional[
            tp.Set['VariabilityVariable']] = None

    @property
    def name(self) -> str:
        """Unique name of the variable."""
        return self.__name

    @property
    def type(self) -> str:
        """Type of the variable, e.g., ``bool`` or ``tristate``."""
        return self.__type

    @property
    def constraint(self) -> tp.Optional[Expression]:
        """Constraint expression of this variable, if any."""
        return self.__constraint

    @property
    def used_in_constraints_of_other_variables(
        self
    ) -> tp.Optional[tp.Set['VariabilityVariable']]:
        """
        Other declared variables whose constraint references this variable.

        ``None`` if the variability model does not provide this information.
        """
        return self.__used_in_constraints_of_other_variables

    def set_used_in_constraints_of_other_variables(
        self, variables: tp.Optional[tp.Iterable['VariabilityVariable']]
    ) -> None:
        if variables is None:
            self.__used_in_constraints_of_other_variables = None
        else:
            self.__used_in_constraints_of_other_variables = set(variables)

    def __eq__(self, other: tp.Any) -> bool:
        if isinstance(other, VariabilityVariable):
            return self.name == other.name
        return False

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"VariabilityVariable({self.name!r}, {self.type!r})"


class VariabilityModelDescriptor():
    """Describes which optional information a :class:`VariabilityModel`
    provides."""

    def __init__(self, has_constraint_usage: bool = False) -> None:
        self.__has_constraint_usage = has_constraint_usage

    @property
    def has_constraint_usage(self) -> bool:
        """Whether the variables know in which other variables' constraints
        they are used."""
        return self.__has_constraint_usage

    def set_constraint_usage(self, available: bool) -> None:
        self.__has_constraint_usage = available


class VariabilityModel():
    """The set of declared configuration variables of a product line."""

    def __init__(
        self,
        variables: tp.Iterable[VariabilityVariable],
        descriptor: tp.Optional[VariabilityModelDescriptor] = None
    ) -> None:
        self.__variables: tp.Dict[str, VariabilityVariable] = {}
        for variable in variables:
            if variable.name in self.__variables:
                LOG.warning(
                    f"Variable {variable.name} is declared more than once, "
                    "keeping the first declaration"
                )
                continue
            self.__variables[variable.name] = variable

        self.__descriptor = descriptor if descriptor is not None \
            else VariabilityModelDescriptor()

    @property
    def variables(self) -> tp.Set[VariabilityVariable]:
        """All declared variables."""
        return set(self.__variables.values())

    @property
    def descriptor(self) -> VariabilityModelDescriptor:
        """Description of the optional information this model provides."""
        return self.__descriptor

    def get_variable(self, name: str) -> tp.Optional[VariabilityVariable]:
        """
        Look up a declared variable.

        Args:
            name: of the variable

        Returns: the variable if declared, otherwise, ``None``
        """
        return self.__variables.get(name, None)

    def compute_constraint_usage(self) -> None:
        """Derive for every variable the set of other declared variables that
        reference it in their constraint and mark the constraint usage as
        available."""
        usage: tp.Dict[str, tp.Set[VariabilityVariable]] = {
            name: set() for name in self.__variables
        }
        for variable in self.__variables.values():
            if variable.constraint is None:
                continue
            for referenced in get_variable_names(variable.constraint):
                if referenced != variable.name and referenced in usage:
                    usage[referenced].add(variable)

        for name, referencing_variables in usage.items():
            self.__variables[name].set_used_in_constraints_of_other_variables(
                referencing_variables
            )
        self.__descriptor.set_constraint_usage(True)

    def __len__(self) -> int:
        return len(self.__variables)

    def __iter__(self) -> tp.Iterator[VariabilityVariable]:
        return iter(self.__variables.values())

    def __contains__(self, name: object) -> bool:
        return name in self.__variables


def create_variability_model_from_yaml_doc(
    yaml_doc: tp.Dict[str, tp.Any]
) -> VariabilityModel:
    """
    Create a variability model from a yaml document.

    Args:
        yaml_doc: containing the variable declarations

    Returns: a new `VariabilityModel` based on the parsed doc
    """
    raw_variables = yaml_doc.get('variables', None) or []
    variables: tp.List[VariabilityVariable] = []
    has_constraints = False
    for raw_variable in raw_variables:
        if isinstance(raw_variable, str):
            variables.append(VariabilityVariable(raw_variable))
            continue

        name = str(get_required(raw_variable, "name", "variable"))
        constraint = parse_optional_condition(raw_variable.get('constraint'))
        has_constraints = has_constraints or constraint is not None
        variables.append(
            VariabilityVariable(
                name,
                str(raw_variable.get('type', "bool")), constraint
            )
        )

    variability_model = VariabilityModel(variables)
    if bool(yaml_doc.get('constraint-usage', has_constraints)):
        variability_model.compute_constraint_usage()

    return variability_model


def load_variability_model(file_path: Path) -> VariabilityModel:
    """
    Load a variability model from a file.

    Args:
        file_path: to the variability model file

    Returns: a new `VariabilityModel` based on the parsed file
    """
    return create_variability_model_from_yaml_doc(
        load_yaml_document(file_path, "VariabilityModel")
    )
