"""Custom types."""
from typing import Union
import os

Strings = Union[str, bytes]
Paths = Union[str, bytes, 'os.PathLike[str]', 'os.PathLike[bytes]']
