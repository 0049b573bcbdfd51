"""YAML format for estimation problems.

A problem names a likelihood family, its data and the starting point:

```yaml
name: sample_mean

family: normal

data_file: sample.csv   # or inline: data: [1.2, 0.7, ...]
column: x

parameters:
  mu: 0.0
  sigma: 1.0

scale: default
method: BFGS
options:
  maxiter: 200
```

For ``family: mvnormal`` the ``mean`` and ``cov`` keys define the density and
the parameters are the point at which it is evaluated.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd
import yaml

from mlekit.exceptions import MLEKitError, ParseError
from mlekit.io.problem import EstimationProblem
from mlekit.likelihoods import FAMILIES


def _parse_parameters(data: dict[str, Any]) -> tuple[list[str] | None, list[float]]:
    parameters = data.get("parameters")
    initial = data.get("initial")

    if isinstance(parameters, dict):
        if initial is not None:
            raise ParseError("Give initial values either in 'parameters' or 'initial', not both")
        names = [str(k) for k in parameters]
        values = list(parameters.values())
    elif isinstance(parameters, list):
        names = []
        values = []
        for item in parameters:
            if isinstance(item, str):
                names.append(item)
            elif isinstance(item, dict) and len(item) == 1:
                (pname, value), = item.items()
                names.append(str(pname))
                values.append(value)
            else:
                raise ParseError(f"Invalid parameter specification: {item!r}")
        if values and len(values) != len(names):
            raise ParseError("Either all or none of the parameters need inline initial values")
        if not values:
            if initial is None:
                raise ParseError("Parameters listed without initial values; add 'initial'")
            values = list(initial)
    elif parameters is None:
        if initial is None:
            raise ParseError("Problem needs 'parameters' or 'initial'")
        names = None
        values = list(initial)
    else:
        raise ParseError(f"Invalid 'parameters' block: {parameters!r}")

    try:
        floats = [float(v) for v in values]
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Initial values must be numbers, got {values!r}") from exc
    if not floats:
        raise ParseError("Problem has no parameters")
    if names is not None and len(names) != len(floats):
        raise ParseError(f"Got {len(names)} parameter names for {len(floats)} initial values")
    return names, floats


def _read_data(data: dict[str, Any], base_dir: Path | None) -> list[float]:
    if "data" in data:
        values = data["data"]
        if not isinstance(values, list):
            raise ParseError(f"'data' must be a list of numbers, got {values!r}")
        return values

    data_file = data.get("data_file")
    if data_file is None:
        raise ParseError(f"Family '{data.get('family')}' needs 'data' or 'data_file'")

    path = Path(data_file)
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    if not path.exists():
        raise ParseError(f"Data file not found: {path}")

    frame = pd.read_csv(path)
    column = data.get("column")
    if column is None:
        if frame.shape[1] != 1:
            raise ParseError(
                f"Data file {path.name} has {frame.shape[1]} columns; choose one with 'column'"
            )
        column = frame.columns[0]
    if column not in frame.columns:
        raise ParseError(f"Column '{column}' not found in {path.name}")
    return frame[column].dropna().tolist()


def parse_problem_dict(
    data: dict[str, Any], base_dir: Path | None = None
) -> EstimationProblem:
    """Parse YAML dict into an EstimationProblem.

    Relative ``data_file`` paths are resolved against ``base_dir``.
    """
    if not isinstance(data, dict):
        raise ParseError(f"Problem definition must be a mapping, got {type(data).__name__}")

    name = str(data.get("name", "problem"))
    family = data.get("family")
    if family is None:
        raise ParseError("Problem needs a 'family' (or use a Python problem file)")
    family = str(family).strip().lower()
    if family not in FAMILIES:
        supported = ", ".join(sorted(FAMILIES))
        raise ParseError(f"Unknown likelihood family '{family}'. Supported: {supported}")

    builder, family_params = FAMILIES[family]
    names, initial = _parse_parameters(data)

    n_obs: int | None = None
    try:
        if family == "mvnormal":
            if "mean" not in data or "cov" not in data:
                raise ParseError("Family 'mvnormal' needs 'mean' and 'cov'")
            log_likelihood = builder(data["mean"], data["cov"])
        else:
            if len(initial) != len(family_params):
                raise ParseError(
                    f"Family '{family}' has parameters {list(family_params)}, "
                    f"got {len(initial)} initial values"
                )
            values = _read_data(data, base_dir)
            log_likelihood = builder(values)
            n_obs = len(values)
            if names is None:
                names = list(family_params)
    except ParseError:
        raise
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Invalid '{family}' problem '{name}': {exc}") from exc

    options = data.get("options") or {}
    if not isinstance(options, dict):
        raise ParseError(f"'options' must be a mapping, got {options!r}")

    try:
        return EstimationProblem(
            name=name,
            log_likelihood=log_likelihood,
            initial_theta=initial,
            varnames=names,
            scale=data.get("scale", "default"),
            method=str(data.get("method", "BFGS")),
            options=dict(options),
            family=family,
            n_obs=n_obs,
        )
    except MLEKitError as exc:
        raise ParseError(f"Invalid problem '{name}': {exc}") from exc


def load_yaml(path: str | Path) -> EstimationProblem:
    """Load an estimation problem from a YAML file.

    Args:
        path: Path to YAML file

    Returns:
        EstimationProblem
    """
    path = Path(path)
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ParseError(f"Invalid YAML in {path}: {exc}") from exc

    if isinstance(data, dict) and "name" not in data:
        data["name"] = path.stem

    return parse_problem_dict(data, base_dir=path.parent)


def yaml_to_problem(content: str, name: str = "problem") -> EstimationProblem:
    """Parse YAML string into an EstimationProblem.

    Args:
        content: YAML content as string
        name: Default problem name if not in YAML

    Returns:
        EstimationProblem
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ParseError(f"Invalid YAML: {exc}") from exc
    if isinstance(data, dict) and "name" not in data:
        data["name"] = name

    return parse_problem_dict(data)
