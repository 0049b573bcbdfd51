"""Loading of estimation problems from YAML files, dicts and Python modules."""

from mlekit.io.load import load_problem
from mlekit.io.problem import EstimationProblem

__all__ = [
    "EstimationProblem",
    "load_problem",
]
