import polyline
import pytest

from ghroute.models.custom_model import CustomModel
from ghroute.models.route import RouteRequest, TransportMode
from ghroute.repositories.routing.graphhopper_web import GraphHopperWebRepository


@pytest.fixture
def request_with_points():
    return RouteRequest(profile="car").add_point(42.509225, 1.534728).add_point(42.512602, 1.551558)


@pytest.mark.parametrize("post_request", [True, False])
def test_connect_timeout_from_hint(request_with_points, post_request):
    repository = GraphHopperWebRepository("http://localhost:8989/route", post_request=post_request)
    request_with_points.put_hint("timeout", 5)
    assert repository.connect_timeout_for(request_with_points) == 5


def test_connect_timeout_default(request_with_points):
    repository = GraphHopperWebRepository("http://localhost:8989/route", connect_timeout_ms=1500)
    assert repository.connect_timeout_for(request_with_points) == 1500


def test_prepare_uses_post_when_configured(request_with_points):
    repository = GraphHopperWebRepository("http://localhost:8989/route", post_request=True)
    encoded = repository.prepare(request_with_points)
    assert encoded.method == TransportMode.POST
    assert encoded.body["points"][0] == [1.534728, 42.509225]


def test_prepare_get_respects_request_mode(request_with_points):
    repository = GraphHopperWebRepository("http://localhost:8989/route", post_request=False)
    assert repository.prepare(request_with_points).method == TransportMode.GET

    request_with_points.custom_model = CustomModel()
    request_with_points.transport_mode = TransportMode.POST
    assert repository.prepare(request_with_points).method == TransportMode.POST


def test_parse_encoded_points():
    coordinates = [(42.509225, 1.534728), (42.512602, 1.551558)]
    data = {
        "paths": [{
            "distance": 1234.5,
            "time": 98000,
            "points": polyline.encode(coordinates, 6),
            "points_encoded": True,
            "points_encoded_multiplier": 1000000,
            "instructions": [{"text": "Continue", "distance": 1234.5, "time": 98000, "sign": 0, "interval": [0, 1]}],
        }],
        "info": {"copyrights": ["GraphHopper", "OpenStreetMap contributors"]},
        "hints": {"visited_nodes.sum": 42},
    }
    response = GraphHopperWebRepository.parse_response(data)
    path = response.best
    assert path.distance == 1234.5
    assert path.time == 98000
    assert path.points[0] == pytest.approx([42.509225, 1.534728])
    assert path.points[1] == pytest.approx([42.512602, 1.551558])
    assert path.instructions[0].text == "Continue"
    assert response.hints["visited_nodes.sum"] == 42


def test_parse_geojson_points():
    data = {"paths": [{"distance": 10.0, "points": {"type": "LineString", "coordinates": [[1.5, 42.5], [1.6, 42.6]]}}]}
    path = GraphHopperWebRepository.parse_response(data).best
    assert path.points == [[42.5, 1.5], [42.6, 1.6]]


def test_parse_keeps_encoded_points_with_elevation():
    data = {"paths": [{"distance": 10.0, "points": "abc"}]}
    path = GraphHopperWebRepository.parse_response(data, elevation=True).best
    assert path.encoded_points == "abc"
    assert path.points == []


def test_parse_empty_response():
    assert GraphHopperWebRepository.parse_response({}).best is None


def test_error_message_includes_details():
    data = {"message": "Point 0 is out of bounds", "hints": [{"message": "x", "details": "PointOutOfBoundsException"}]}
    assert GraphHopperWebRepository.error_message(data) == "Point 0 is out of bounds (PointOutOfBoundsException)"


def test_connect_timeout_from_string_hint(request_with_points):
    repository = GraphHopperWebRepository("http://localhost:8989/route")
    request_with_points.put_hint("timeout", "5")
    assert repository.connect_timeout_for(request_with_points) == 5
