"""Unified problem loading interface.

Provides a single entry point for loading estimation problems from any
supported format.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mlekit.io.problem import EstimationProblem

logger = logging.getLogger(__name__)


def load_problem(
    source: str | Path | dict,
    format: str | None = None,
) -> EstimationProblem:
    """Load an estimation problem from file or dict.

    Automatically detects format based on file extension:
    - .yaml, .yml: YAML format
    - .py: Python module defining ``log_likelihood`` and ``initial_theta``
    - dict: Python dictionary (YAML-like structure)

    Args:
        source: File path or dictionary
        format: Override format detection ('yaml', 'python', 'dict')

    Returns:
        EstimationProblem

    Raises:
        ValueError: If format cannot be determined
        FileNotFoundError: If file does not exist
        ParseError: If parsing fails

    Examples:
        problem = load_problem("sample.yaml")

        problem = load_problem({
            "name": "location",
            "family": "mvnormal",
            "mean": [1.0, 2.0],
            "cov": 9.0,
            "parameters": {"x": 0.0, "y": 0.0},
        })
    """
    if isinstance(source, dict):
        if format and format != "dict":
            raise ValueError(f"Dict input but format='{format}' specified")
        from mlekit.io.formats.yaml_format import parse_problem_dict

        return parse_problem_dict(source)

    path = Path(source)

    if not path.exists():
        raise FileNotFoundError(f"Problem file not found: {path}")

    if format is None:
        suffix = path.suffix.lower()
        if suffix in (".yaml", ".yml"):
            format = "yaml"
        elif suffix == ".py":
            format = "python"
        else:
            raise ValueError(
                f"Cannot determine format from extension '{suffix}'. "
                "Use format='yaml' or format='python' explicitly."
            )

    logger.debug("loading %s problem from %s", format, path)

    if format == "yaml":
        from mlekit.io.formats.yaml_format import load_yaml

        return load_yaml(path)

    elif format == "python":
        from mlekit.io.formats.python_module import load_python_problem

        return load_python_problem(path)

    else:
        raise ValueError(f"Unknown format: '{format}'. Supported: 'yaml', 'python'")
