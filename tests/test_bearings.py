from ghroute.services.bearings import parse_bearings


def test_empty_string_has_no_slots():
    assert parse_bearings("") == []
    assert parse_bearings(None) == []


def test_single_bearing_drops_tolerance():
    bearings = parse_bearings("100,1")
    assert len(bearings) == 1
    assert bearings[0] == 100


def test_empty_slots_keep_their_position():
    bearings = parse_bearings(";100,1;;")
    assert len(bearings) == 4
    assert bearings == [None, 100.0, None, None]


def test_angle_without_tolerance():
    assert parse_bearings("45;270") == [45.0, 270.0]


def test_unparsable_angle_is_absent():
    assert parse_bearings("abc,10;90,5;,20") == [None, 90.0, None]
