"""Primitive helpers shared by all entity types.

Contains the type guards used throughout the package, number clamping,
the positional merge of band arrays and the statistics / no-data resolution
shared by Assets and Bands.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Protocol, TypedDict


class MetadataSource(Protocol):
    """Anything that resolves metadata fields, i.e. Bands and Assets."""

    def get_metadata(self, field: str) -> Any: ...


class Statistics(TypedDict):
    """Minimum and maximum value of a band or asset, each possibly unknown."""

    minimum: float | None
    maximum: float | None


# Fixed value ranges of the integer data types
DATA_TYPE_RANGES: dict[str, tuple[int, int]] = {
    "int8": (-128, 127),
    "uint8": (0, 255),
    "int16": (-32768, 32767),
    "uint16": (0, 65535),
    "int32": (-2147483648, 2147483647),
    "uint32": (0, 4294967295),
}

# String encodings of special no-data values
SPECIAL_NODATA_VALUES: dict[str, float] = {
    "nan": math.nan,
    "+inf": math.inf,
    "-inf": -math.inf,
}


def has_text(value: Any) -> bool:
    """Check whether a value is a string with at least one character."""
    return isinstance(value, str) and len(value) > 0


def is_object(value: Any) -> bool:
    """Check whether a value is a keyed mapping.

    Lists, ``None`` and scalars are not objects. Entities are mappings of their
    JSON fields, so they count as objects too.
    """
    return isinstance(value, Mapping)


def is_number(value: Any) -> bool:
    """Check whether a value is an int or float (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def ensure_number(
    value: Any,
    minimum: float,
    maximum: float,
    epsilon: float = 0,
) -> float | None:
    """Return a number limited to the given range, or None.

    Values that exceed the range by at most ``epsilon`` are snapped to the
    boundary, which absorbs floating point noise such as ``90.0000000001``.

    Args:
        value: The potential number.
        minimum: Lower bound (inclusive).
        maximum: Upper bound (inclusive).
        epsilon: Tolerance outside of the range.

    Returns:
        The (snapped) number, or None if not a finite number or out of range.
    """
    if not is_number(value) or not math.isfinite(value):
        return None
    if minimum - epsilon <= value < minimum:
        return minimum
    if maximum < value <= maximum + epsilon:
        return maximum
    if value < minimum or value > maximum:
        return None
    return value


def merge_arrays_of_objects(*arrays: Any) -> list[Any]:
    """Merge any number of arrays of objects by their position.

    The n-th elements of all arrays are merged into one object, later arrays
    overriding earlier ones. Arguments that are not lists are ignored.

    Example:
        >>> merge_arrays_of_objects([{"a": 1}, {"b": 1}], [{"a": 2}, {"c": 3}])
        [{'a': 2}, {'b': 1, 'c': 3}]
    """
    lists = [arr for arr in arrays if isinstance(arr, list)]
    if len(lists) == 1:
        return lists[0]
    if not lists:
        return []

    length = max(len(arr) for arr in lists)
    merged: list[Any] = []
    for i in range(length):
        obj: dict[str, Any] = {}
        for arr in lists:
            if i < len(arr) and is_object(arr[i]):
                obj.update(arr[i])
        merged.append(obj)
    return merged


def get_min_for_data_type(data_type: str) -> int | None:
    """Minimum value of a STAC data type, only known for integer types."""
    if data_type in DATA_TYPE_RANGES:
        return DATA_TYPE_RANGES[data_type][0]
    if data_type.startswith("u"):
        return 0
    return None


def get_max_for_data_type(data_type: str) -> int | None:
    """Maximum value of a STAC data type, only known for integer types."""
    if data_type in DATA_TYPE_RANGES:
        return DATA_TYPE_RANGES[data_type][1]
    return None


def _complete(minimum: Any, maximum: Any) -> Statistics | None:
    if is_number(minimum) and is_number(maximum):
        return {"minimum": minimum, "maximum": maximum}
    return None


def _fold(values: list[Any]) -> Statistics | None:
    numbers = [v for v in values if is_number(v)]
    if not numbers:
        return None
    return {"minimum": min(numbers), "maximum": max(numbers)}


def get_min_max_values(source: MetadataSource) -> Statistics:
    """Get the reported minimum and maximum values of a band or asset.

    Looks through the raster, classification and file extension fields and
    stops at the first one that provides both bounds:

    1. ``statistics.minimum`` / ``statistics.maximum``
    2. ``histogram.min`` / ``histogram.max``
    3. ``classification:classes`` (values of all classes)
    4. ``file:values`` (all nested values)
    5. the value range of ``data_type`` (or ``file:data_type``)

    Args:
        source: A Band or Asset, metadata is resolved through ``get_metadata()``.

    Returns:
        Dict with ``minimum`` and ``maximum``, each None if unknown.
    """
    stats = source.get_metadata("statistics")
    if is_object(stats):
        result = _complete(stats.get("minimum"), stats.get("maximum"))
        if result is not None:
            return result

    histogram = source.get_metadata("histogram")
    if is_object(histogram):
        result = _complete(histogram.get("min"), histogram.get("max"))
        if result is not None:
            return result

    classes = source.get_metadata("classification:classes")
    if isinstance(classes, list):
        result = _fold([c.get("value") for c in classes if is_object(c)])
        if result is not None:
            return result

    file_values = source.get_metadata("file:values")
    if isinstance(file_values, list):
        values: list[Any] = []
        for entry in file_values:
            if is_object(entry) and isinstance(entry.get("values"), list):
                values.extend(entry["values"])
        result = _fold(values)
        if result is not None:
            return result

    data_type = source.get_metadata("data_type")
    if not has_text(data_type):
        data_type = source.get_metadata("file:data_type")
    if has_text(data_type):
        return {
            "minimum": get_min_for_data_type(data_type),
            "maximum": get_max_for_data_type(data_type),
        }

    return {"minimum": None, "maximum": None}


def _decode_nodata(value: Any) -> Any:
    if isinstance(value, str) and value in SPECIAL_NODATA_VALUES:
        return SPECIAL_NODATA_VALUES[value]
    return value


def get_no_data_values(source: MetadataSource) -> list[Any]:
    """Get the reported no-data values of a band or asset.

    Prefers ``nodata``, then ``file:nodata``, then the values of all
    ``classification:classes`` flagged with ``nodata: true``. The strings
    ``"nan"``, ``"+inf"`` and ``"-inf"`` are converted into floats.

    Args:
        source: A Band or Asset, metadata is resolved through ``get_metadata()``.

    Returns:
        List of no-data values, empty if none are reported.
    """
    values: list[Any] = []
    nodata = source.get_metadata("nodata")
    file_nodata = source.get_metadata("file:nodata")
    classes = source.get_metadata("classification:classes")
    if nodata is not None:
        values = nodata if isinstance(nodata, list) else [nodata]
    elif file_nodata is not None:
        values = file_nodata if isinstance(file_nodata, list) else [file_nodata]
    elif isinstance(classes, list):
        values = [
            c.get("value") for c in classes if is_object(c) and c.get("nodata") is True
        ]
    return [_decode_nodata(value) for value in values]
