"""
Module for loading the yaml input documents of pssmap.

Every input file consists of two yaml documents: a header naming the document
type and its version, followed by the payload, e.g.::

    ---
    DocType: CodeModel
    Version: 1
    ...
    ---
    files: ...
"""
import typing as tp
from pathlib import Path

import yaml

from pssmap.utils.exceptions import (
    MalformedEntryError,
    MissingDocumentHeader,
    UnsupportedDocumentVersion,
    WrongDocumentType,
)


def load_yaml_document(
    file_path: Path, doc_type: str, min_version: int = 1
) -> tp.Dict[str, tp.Any]:
    """
    Load the payload of an input file after checking its header.

    Args:
        file_path: the file to load
        doc_type: expected ``DocType`` of the header
        min_version: oldest supported ``Version``

    Returns: the payload document, empty if the file only holds the header
    """
    with open(file_path, 'r') as yaml_file:
        documents = yaml.load_all(yaml_file, Loader=yaml.SafeLoader)

        header = next(documents, None)
        if not isinstance(header, dict) or 'DocType' not in header or \
                'Version' not in header:
            raise MissingDocumentHeader(str(file_path))
        if str(header['DocType']) != doc_type:
            raise WrongDocumentType(doc_type, str(header['DocType']))
        if int(header['Version']) < min_version:
            raise UnsupportedDocumentVersion(
                min_version, int(header['Version'])
            )

        payload = next(documents, None)

    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise MalformedEntryError(
            f"Expected a mapping after the header of {file_path}, got "
            f"{type(payload).__name__}"
        )
    return payload


def get_required(
    yaml_section: tp.Dict[str, tp.Any], key: str, section_name: str
) -> tp.Any:
    """
    Look up a mandatory key of a yaml section.

    Args:
        yaml_section: the parsed section
        key: the mandatory key
        section_name: name of the section, used in the error message

    Returns: the value stored under ``key``
    """
    if not isinstance(yaml_section, dict) or key not in yaml_section:
        raise MalformedEntryError(
            f"Missing '{key}' in {section_name} entry: {yaml_section}"
        )
    return yaml_section[key]
