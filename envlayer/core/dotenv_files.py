"""
Dotenv Files
============

Strict reading of ``KEY=VALUE`` files on top of python-dotenv.

``dotenv_values`` on its own only warns about lines it cannot parse; here
any such line is an error so that a broken file never half-applies.
"""

import io
import logging
import os
from typing import Dict, Union

from dotenv import dotenv_values
from dotenv.parser import parse_stream

from .errors import EnvFileError

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def read_dotenv(filename: PathLike) -> Dict[str, str]:
    """
    Parse one dotenv file.

    Args:
        filename: Path of the file

    Returns:
        Mapping of keys to values in file order; ``KEY`` lines without ``=``
        map to an empty string

    Raises:
        FileNotFoundError: the file does not exist
        EnvFileError: the file cannot be read or contains an unparseable line
    """
    path = os.fspath(filename)
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise EnvFileError(path, f"cannot read file: {e}") from e

    for binding in parse_stream(io.StringIO(text)):
        if binding.error:
            raise EnvFileError(
                path,
                f"cannot parse statement {binding.original.string.strip()!r}",
                line=binding.original.line,
            )

    values = dotenv_values(stream=io.StringIO(text), interpolate=True)
    logger.debug(f"Parsed {len(values)} entries from {path}")
    return {key: value if value is not None else "" for key, value in values.items()}


def read_dotenv_files(*filenames: PathLike) -> Dict[str, str]:
    """Parse several files in order; later files override earlier ones."""
    result: Dict[str, str] = {}
    for filename in filenames:
        result.update(read_dotenv(filename))
    return result


__all__ = ["read_dotenv", "read_dotenv_files"]
