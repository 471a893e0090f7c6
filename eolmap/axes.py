from typing import Any, Dict, List, Mapping, Sequence

from eolmap.model import AXIS_VALUES, ConfigurationTuple


DEFAULT_AXES: Dict[str, List[str]] = {name: list(values) for name, values in AXIS_VALUES.items()}


def cartesian_product(axes: Mapping[str, Sequence[Any]]) -> List[Dict[str, Any]]:
    """
    Every combination of axis values, one dict per combination. The first axis
    varies fastest. No axes gives a single empty combination; an axis without
    values gives no combinations at all.
    """
    results: List[Dict[str, Any]] = [{}]
    for key, values in axes.items():
        results = [{**r, key: value} for value in values for r in results]
    return results


def enumerate_configurations(axes: Mapping[str, Sequence[str]] | None = None) -> List[ConfigurationTuple]:
    if axes is None:
        axes = DEFAULT_AXES
    return [ConfigurationTuple(**combination) for combination in cartesian_product(axes)]
