"""Course manager: a small CLI for keeping a list of courses in a JSON file."""

from .version import __version__
