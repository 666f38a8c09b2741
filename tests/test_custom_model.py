import json

import pytest

from ghroute.core.exceptions import FormatError
from ghroute.models.custom_model import CustomModel, Op, Polygon, Statement
from ghroute.services.custom_model import CustomModelCodec

AREA_1 = [
    [48.019324184801185, 11.28021240234375],
    [48.019324184801185, 11.53564453125],
    [48.11843396091691, 11.53564453125],
    [48.11843396091691, 11.28021240234375],
    [48.019324184801185, 11.28021240234375],
]
AREA_2 = [
    [48.15509285476017, 11.53289794921875],
    [48.15509285476017, 11.8212890625],
    [48.281365151571755, 11.8212890625],
    [48.281365151571755, 11.53289794921875],
    [48.15509285476017, 11.53289794921875],
]


@pytest.fixture
def custom_model():
    return (
        CustomModel()
        .add_to_speed(Statement.if_("road_class == MOTORWAY", Op.LIMIT, "80"))
        .add_to_priority(Statement.if_("surface == DIRT", Op.MULTIPLY, "0.7"))
        .add_to_priority(Statement.if_("surface == SAND", Op.MULTIPLY, "0.6"))
        .set_distance_influence(69)
        .set_heading_penalty(22)
        .add_area("area_1", AREA_1)
        .add_area("area_2", AREA_2)
    )


def test_serialize_full_model(custom_model):
    expected = {
        "distance_influence": 69.0,
        "heading_penalty": 22.0,
        "areas": {
            "type": "FeatureCollection",
            "features": [
                {"id": "area_1", "type": "Feature",
                 "geometry": {"type": "Polygon", "coordinates": [AREA_1]}, "properties": {}},
                {"id": "area_2", "type": "Feature",
                 "geometry": {"type": "Polygon", "coordinates": [AREA_2]}, "properties": {}},
            ],
        },
        "priority": [
            {"if": "surface == DIRT", "multiply_by": "0.7"},
            {"if": "surface == SAND", "multiply_by": "0.6"},
        ],
        "speed": [{"if": "road_class == MOTORWAY", "limit_to": "80"}],
    }
    assert CustomModelCodec.to_json(custom_model) == expected


def test_statement_order_survives_text_round_trip(custom_model):
    model = CustomModelCodec.loads(CustomModelCodec.dumps(custom_model))
    assert [s.condition for s in model.priority] == ["surface == DIRT", "surface == SAND"]
    assert [f.id for f in model.areas.features] == ["area_1", "area_2"]
    assert model.speed[0].op == Op.LIMIT


def test_null_distance_influence_is_kept():
    model = CustomModelCodec.from_json(json.loads('{"distance_influence": null}'))
    assert model.distance_influence is None
    assert model.is_set("distance_influence")
    assert not model.is_set("heading_penalty")
    assert CustomModelCodec.to_json(model) == {"distance_influence": None}


def test_unset_fields_are_omitted():
    assert CustomModelCodec.to_json(CustomModel()) == {}
    assert CustomModelCodec.from_json({}).distance_influence is None


def test_explicit_none_is_serialized():
    model = CustomModel().set_heading_penalty(None)
    assert CustomModelCodec.to_json(model) == {"heading_penalty": None}


def test_numeric_statement_values_become_strings():
    model = CustomModelCodec.from_json({"priority": [{"if": "road_class == PRIMARY", "multiply_by": 0.5}]})
    assert model.priority[0].value == "0.5"


def test_add_operation():
    model = CustomModelCodec.from_json({"speed": [{"if": "true", "add": "-10"}]})
    assert model.speed[0].op == Op.ADD
    assert CustomModelCodec.to_json(model)["speed"] == [{"if": "true", "add": "-10"}]


def test_polygon_ring_is_closed():
    polygon = Polygon(coordinates=[[[1.0, 1.0], [1.0, 2.0], [2.0, 2.0]]])
    assert polygon.coordinates[0][-1] == [1.0, 1.0]
    assert len(polygon.coordinates[0]) == 4


@pytest.mark.parametrize("statement", [
    {"limit_to": "80"},
    {"if": "true"},
    {"if": "true", "limit_to": "80", "multiply_by": "0.5"},
    "road_class == MOTORWAY",
])
def test_invalid_statements(statement):
    with pytest.raises(FormatError):
        CustomModelCodec.from_json({"speed": [statement]})


def test_invalid_json_text():
    with pytest.raises(FormatError):
        CustomModelCodec.loads("{not json")


def test_non_object_model():
    with pytest.raises(FormatError):
        CustomModelCodec.from_json([1, 2])


def test_duplicate_area_id():
    with pytest.raises(ValueError):
        CustomModel().add_area("a", AREA_1).add_area("a", AREA_2)
