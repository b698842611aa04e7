"""Module for the code model, i.e., source files and their nested, possibly
conditional, code elements."""
import re
import typing as tp
from pathlib import Path

from pyeda.inter import Expression  # type: ignore

from pssmap.base.presence_condition import parse_optional_condition
from pssmap.utils.exceptions import MalformedEntryError
from pssmap.utils.yaml_util import get_required, load_yaml_document


class CodeElement():
    """
    A region of code inside a :class:`SourceFile`, e.g., an ``#ifdef`` block.

    Code elements are compared by identity, two distinct elements covering the
    same lines are still different elements.
    """

    def __init__(
        self,
        line_start: int,
        line_end: int,
        presence_condition: tp.Optional[Expression] = None,
        nested_elements: tp.Iterable['CodeElement'] = ()
    ) -> None:
        self.__line_start = line_start
        self.__line_end = line_end
        self.__presence_condition = presence_condition
        self.__nested_elements: tp.List[CodeElement] = []
        self.__source_file = Path()
        for nested_element in nested_elements:
            self.add_nested_element(nested_element)

    @property
    def line_start(self) -> int:
        return self.__line_start

    @property
    def line_end(self) -> int:
        return self.__line_end

    @property
    def presence_condition(self) -> tp.Optional[Expression]:
        """Condition controlling this element, ``None`` if unconditional."""
        return self.__presence_condition

    @property
    def source_file(self) -> Path:
        """Path of the file this element belongs to."""
        return self.__source_file

    def set_source_file(self, source_file: Path) -> None:
        """Attach this element, and all nested elements, to a file."""
        self.__source_file = source_file
        for nested_element in self.__nested_elements:
            nested_element.set_source_file(source_file)

    def add_nested_element(self, element: 'CodeElement') -> None:
        element.set_source_file(self.__source_file)
        self.__nested_elements.append(element)

    def iter_nested_elements(self) -> tp.Iterator['CodeElement']:
        """Iterate over the direct children of this element in order."""
        return iter(self.__nested_elements)

    @property
    def nested_element_count(self) -> int:
        return len(self.__nested_elements)

    def __str__(self) -> str:
        return f"{self.source_file.name}[{self.line_start}:{self.line_end}]"

    def __repr__(self) -> str:
        return (
            f"CodeElement({self.source_file}, {self.line_start}, "
            f"{self.line_end}, {self.presence_condition})"
        )


class SourceFile():
    """A source file with its top level code elements, identified by its
    path."""

    def __init__(
        self, path: Path, elements: tp.Iterable[CodeElement] = ()
    ) -> None:
        self.__path = Path(path)
        self.__elements: tp.List[CodeElement] = []
        for element in elements:
            self.add_element(element)

    @property
    def path(self) -> Path:
        return self.__path

    def add_element(self, element: CodeElement) -> None:
        element.set_source_file(self.__path)
        self.__elements.append(element)

    @property
    def top_element_count(self) -> int:
        return len(self.__elements)

    def __iter__(self) -> tp.Iterator[CodeElement]:
        return iter(self.__elements)

    def __eq__(self, other: tp.Any) -> bool:
        if isinstance(other, SourceFile):
            return self.path == other.path
        return False

    def __hash__(self) -> int:
        return hash(self.path)

    def __str__(self) -> str:
        return str(self.path)

    def __repr__(self) -> str:
        return f"SourceFile({self.path})"


LINE_RANGE_FORMAT = re.compile(r"(?P<start>\d+)\s*:\s*(?P<end>\d+)")


def __parse_line_range(raw_element: tp.Dict[str, tp.Any]) -> tp.Tuple[int, int]:
    if 'lines' in raw_element:
        match = LINE_RANGE_FORMAT.fullmatch(str(raw_element['lines']).strip())
        if match is None:
            raise MalformedEntryError(
                f"Could not parse line range: {raw_element['lines']}. "
                "Line ranges have the format '<start>:<end>'"
            )
        return int(match.group("start")), int(match.group("end"))

    try:
        line_start = int(raw_element.get('start', -1))
        return line_start, int(raw_element.get('end', line_start))
    except (TypeError, ValueError) as err:
        raise MalformedEntryError(
            f"Could not parse line numbers of code element: {raw_element}"
        ) from err


def create_code_element_from_yaml_doc(
    raw_element: tp.Dict[str, tp.Any]
) -> CodeElement:
    """
    Creates a `CodeElement`, including all nested elements, from the
    corresponding yaml document section.

    Args:
        raw_element: the yaml section describing the element
    """
    if not isinstance(raw_element, dict):
        raise MalformedEntryError(f"Expected a code element, got: {raw_element}")

    line_start, line_end = __parse_line_range(raw_element)
    return CodeElement(
        line_start, line_end,
        parse_optional_condition(raw_element.get('condition')), [
            create_code_element_from_yaml_doc(raw_nested)
            for raw_nested in raw_element.get('nested', None) or []
        ]
    )


def create_code_model_from_yaml_doc(
    yaml_doc: tp.Dict[str, tp.Any]
) -> tp.List[SourceFile]:
    """
    Create the list of source files from a yaml document.

    Args:
        yaml_doc: containing the parsed code files

    Returns: the source files in document order
    """
    source_files: tp.List[SourceFile] = []
    for raw_file in yaml_doc.get('files', None) or []:
        source_files.append(
            SourceFile(
                Path(str(get_required(raw_file, "path", "file"))), [
                    create_code_element_from_yaml_doc(raw_element)
                    for raw_element in raw_file.get('elements', None) or []
                ]
            )
        )
    return source_files


def load_code_model(file_path: Path) -> tp.List[SourceFile]:
    """
    Load a code model from a file.

    Args:
        file_path: to the code model file

    Returns: the source files described by the file
    """
    return create_code_model_from_yaml_doc(
        load_yaml_document(file_path, "CodeModel")
    )
