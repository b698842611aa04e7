"""Utilities for tool handling."""

import typing as tp
from functools import wraps

import click
import yaml

from pssmap.utils.exceptions import InputDocumentError, InvalidVariableRegex

INPUT_ERRORS = (InputDocumentError, InvalidVariableRegex, yaml.YAMLError)


def input_error_handler(
    func: tp.Callable[..., None]
) -> tp.Callable[..., None]:
    """Wrapper for drivers to catch errors caused by malformed input documents
    and provide a helpful message to the user."""

    @wraps(func)
    def wrapper_input_error_handler(*args: tp.Any, **kwargs: tp.Any) -> None:
        try:
            func(*args, **kwargs)
        except INPUT_ERRORS as err:
            raise click.ClickException(str(err)) from err

    return wrapper_input_error_handler
