"""Format parsers: YAML and Python modules."""

from mlekit.io.formats.python_module import load_python_problem
from mlekit.io.formats.yaml_format import load_yaml, parse_problem_dict, yaml_to_problem

__all__ = [
    "load_python_problem",
    "load_yaml",
    "parse_problem_dict",
    "yaml_to_problem",
]
