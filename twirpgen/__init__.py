"""twirpgen - Twirp service code generator for Ruby."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("twirpgen")
except PackageNotFoundError:
    __version__ = "(local)"
