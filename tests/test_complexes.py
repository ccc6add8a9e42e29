import pytest

from subpar.complexes import ComplexMeta, ComplexStates
from subpar.ids import Route, StopId
from subpar.shortstr import ShortStringOverflow


def _info(complex_id=1, stops=("L01",), routes=("L",)):
    return {
        "complex_id": complex_id,
        "stop_name": "First Av",
        "ada": 1,
        "ada_notes": None,
        "latitude": 40.7,
        "longitude": -73.9,
        "routes": list(routes),
        "stop_ids": list(stops),
    }


def test_from_info_copies_fields():
    meta = ComplexMeta.from_info(_info())
    assert meta.name == "First Av"
    assert meta.coord == (40.7, -73.9)
    assert meta.routes == [Route("L")]
    assert meta.stops == [StopId("L01")]
    assert meta.entrances == []


def test_from_info_rejects_long_stop_id():
    with pytest.raises(ShortStringOverflow):
        ComplexMeta.from_info(_info(stops=("TOOLONG",)))


def test_to_json_shape():
    data = ComplexMeta.from_info(_info()).to_json()
    assert data["coord"] == [40.7, -73.9]
    assert data["routes"] == ["L"]
    assert data["stops"] == ["L01"]
    assert data["ada_notes"] is None


def test_entrances_attached_to_their_complex():
    entrance = {"complex_id": 1, "entrance_type": "Stair"}
    states = ComplexStates([_info(1), _info(2, stops=("L02",))], [entrance])
    assert states.get(1).entrances == [entrance]
    assert states.get(2).entrances == []


def test_entrance_with_unknown_complex_ignored():
    states = ComplexStates([_info(1)], [{"complex_id": 99}])
    assert states.get(1).entrances == []
    assert states.get(99) is None


def test_get_returns_copy():
    states = ComplexStates([_info(1)], [])
    first = states.get(1)
    first.entrances.append({"complex_id": 1})
    assert states.get(1).entrances == []