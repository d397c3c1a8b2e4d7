"""Multi-keyword exact string matching with an Aho–Corasick automaton."""

from .ac import Automaton, Hit, build_delta, build_failure_and_merge_output, build_goto
from .errors import InvalidInput
from .locations import KeywordLocations, aggregate

__all__ = [
    "Automaton",
    "Hit",
    "InvalidInput",
    "KeywordLocations",
    "aggregate",
    "build_delta",
    "build_failure_and_merge_output",
    "build_goto",
]
