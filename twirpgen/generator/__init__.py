"""Twirp service code generator."""

from .loader import load_file as load_file
from .loader import load_files as load_files
from .namespace import namespace_segments as namespace_segments
from .plugin import GeneratorError as GeneratorError
from .plugin import GeneratorOptions as GeneratorOptions
from .plugin import InputError as InputError
from .plugin import OutputError as OutputError
from .plugin import generate as generate
from .registry import Registry as Registry
from .registry import UnresolvedTypeError as UnresolvedTypeError
from .resolver import TypeResolver as TypeResolver
from .selector import select_files as select_files
from .types import *
from .util import to_camel_case as to_camel_case
from .util import to_snake_case as to_snake_case
