import math
import numbers
from typing import Any, Dict, Iterable, List, Mapping, Set, Union

from .model import Area, SetId, ValidationError

AreaLike = Union[Area, Mapping[str, Any]]


def _coerce_area(raw: AreaLike, index: int) -> Area:
    if isinstance(raw, Area):
        sets, size, weight, label = raw.sets, raw.size, raw.weight, raw.label
    elif isinstance(raw, Mapping):
        if 'sets' not in raw or 'size' not in raw:
            raise ValidationError(f'[area {index}] expected "sets" and "size" keys')
        sets = raw['sets']
        size = raw['size']
        weight = raw.get('weight')
        label = raw.get('label')
    else:
        raise ValidationError(f'[area {index}] expected a mapping or Area, got {type(raw).__name__}')

    if isinstance(sets, (str, bytes)) or not isinstance(sets, Iterable):
        raise ValidationError(f'[area {index}] "sets" must be a list of set ids')
    sets = tuple(sets)
    if not sets:
        raise ValidationError(f'[area {index}] "sets" must not be empty')
    for setid in sets:
        if isinstance(setid, bool) or not isinstance(setid, (str, numbers.Integral)):
            raise ValidationError(f'[area {index}] set id {setid!r} must be a string or integer')
    if len(set(sets)) != len(sets) or len({str(s) for s in sets}) != len(sets):
        raise ValidationError(f'[area {index}] set ids must be distinct (got {list(sets)})')

    if isinstance(size, bool) or not isinstance(size, numbers.Real):
        raise ValidationError(f'[area {index}] size must be a number')
    size = float(size)
    if not math.isfinite(size) or size < 0:
        raise ValidationError(f'[area {index}] size must be finite and non-negative (got {size})')

    if weight is None:
        weight = 1.0
    if isinstance(weight, bool) or not isinstance(weight, numbers.Real) or not float(weight) > 0:
        raise ValidationError(f'[area {index}] weight must be a positive number (got {weight!r})')

    if label is not None and not isinstance(label, str):
        label = str(label)

    return Area(sets=sets, size=size, weight=float(weight), label=label)


def normalize_areas(areas: Iterable[AreaLike]) -> List[Area]:
    """Return fully-defaulted ``Area`` copies of ``areas``, rejecting malformed input."""

    result = [_coerce_area(raw, idx) for idx, raw in enumerate(areas)]

    declared: Set[SetId] = set()
    names: Dict[str, SetId] = {}
    for idx, area in enumerate(result):
        if len(area.sets) != 1:
            continue
        setid = area.sets[0]
        if setid in declared:
            raise ValidationError(f'[area {idx}] set {setid!r} declared more than once')
        if str(setid) in names:
            raise ValidationError(
                f'[area {idx}] set id {setid!r} collides with {names[str(setid)]!r} once converted to text'
            )
        declared.add(setid)
        names[str(setid)] = setid

    for idx, area in enumerate(result):
        if len(area.sets) < 2:
            continue
        missing = [s for s in area.sets if s not in declared]
        if missing:
            raise ValidationError(
                f'[area {idx}] combination {area.key} references undeclared set(s) {missing}'
            )
    return result
