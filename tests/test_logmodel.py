from datetime import datetime

from salessvc.logmodel import Events, Level, Record


def _fn(ctx, record):
    return None


def test_levels_in_sorted_order_map_to_events_in_severity_order():
    debug, info, warn, error = (lambda c, r: 1), (lambda c, r: 2), (lambda c, r: 3), (lambda c, r: 4)
    events = Events(debug=debug, info=info, warn=warn, error=error)
    assert [events.for_level(level) for level in sorted(Level)] == [debug, info, warn, error]


def test_for_level_returns_bound_function():
    debug, info, warn, error = (lambda c, r: 1), (lambda c, r: 2), (lambda c, r: 3), (lambda c, r: 4)
    events = Events(debug=debug, info=info, warn=warn, error=error)
    assert events.for_level(Level.DEBUG) is debug
    assert events.for_level(Level.INFO) is info
    assert events.for_level(Level.WARN) is warn
    assert events.for_level(Level.ERROR) is error


def test_for_level_accepts_plain_int():
    events = Events(error=_fn)
    assert events.for_level(int(Level.ERROR)) is _fn


def test_for_level_unassigned_and_in_between_levels():
    events = Events(info=_fn)
    assert events.for_level(Level.WARN) is None
    assert events.for_level(int(Level.INFO) + 1) is None


def test_is_empty():
    assert Events().is_empty() is True
    assert Events(warn=_fn).is_empty() is False


def test_record_attribute_dicts_are_independent():
    now = datetime.now()
    first = Record(time=now, message="a", level=Level.INFO)
    second = Record(time=now, message="b", level=Level.INFO)
    first.attributes["k"] = 1
    assert second.attributes == {}
    assert second.source is None