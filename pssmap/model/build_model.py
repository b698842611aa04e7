"""Module for the build model, i.e., the presence conditions of source files
derived from the build system."""
import typing as tp
from pathlib import Path

from pyeda.inter import Expression  # type: ignore

from pssmap.base.presence_condition import parse_optional_condition
from pssmap.utils.exceptions import MalformedEntryError
from pssmap.utils.yaml_util import load_yaml_document


class BuildModel():
    """Maps source file paths to the presence condition under which the build
    system includes them."""

    def __init__(
        self,
        presence_conditions: tp.Optional[tp.Dict[Path, Expression]] = None
    ) -> None:
        self.__presence_conditions: tp.Dict[Path, Expression] = {}
        for path, condition in (presence_conditions or {}).items():
            self.add(Path(path), condition)

    def add(self, path: Path, presence_condition: Expression) -> None:
        self.__presence_conditions[Path(path)] = presence_condition

    def get_pc(self, path: Path) -> tp.Optional[Expression]:
        """
        Look up the presence condition of a file.

        Args:
            path: of the source file

        Returns: the presence condition, or ``None`` if the build model does
                 not know the file
        """
        return self.__presence_conditions.get(Path(path), None)

    def __len__(self) -> int:
        return len(self.__presence_conditions)

    def __contains__(self, path: object) -> bool:
        if isinstance(path, (str, Path)):
            return Path(path) in self.__presence_conditions
        return False


def create_build_model_from_yaml_doc(
    yaml_doc: tp.Dict[str, tp.Any]
) -> BuildModel:
    """
    Create a build model from a yaml document.

    Args:
        yaml_doc: mapping file paths to their presence condition

    Returns: a new `BuildModel` based on the parsed doc
    """
    raw_files = yaml_doc.get('files', None) or {}
    if not isinstance(raw_files, dict):
        raise MalformedEntryError(
            f"Expected a mapping from file paths to conditions, got: {raw_files}"
        )

    build_model = BuildModel()
    for raw_path, raw_condition in raw_files.items():
        condition = parse_optional_condition(raw_condition)
        if condition is not None:
            build_model.add(Path(str(raw_path)), condition)
    return build_model


def load_build_model(file_path: Path) -> BuildModel:
    """
    Load a build model from a file.

    Args:
        file_path: to the build model file

    Returns: a new `BuildModel` based on the parsed file
    """
    return create_build_model_from_yaml_doc(
        load_yaml_document(file_path, "BuildModel")
    )
