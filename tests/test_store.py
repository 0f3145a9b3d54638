from tagrec.data.schema import Event
from tagrec.data.store import EventStore


def _ev(u, r, tags):
    return Event(user_id=u, resource_id=r, timestamp="", rating=None, tag_ids=tuple(tags))


def _store():
    return EventStore([
        _ev(0, 0, [0, 1]),
        _ev(1, 0, [1]),
        _ev(0, 1, [2, 2, 3]),
        _ev(2, 2, [0]),
        _ev(0, 3, [1]),
    ])


def test_prefix_and_suffix():
    store = _store()
    assert [e.user_id for e in store.prefix(2)] == [0, 1]
    assert [e.user_id for e in store.suffix(2)] == [0, 2, 0]
    assert store.prefix(0) == []
    assert len(store.suffix(0)) == 5


def test_total_tag_assignments():
    store = _store()
    assert store.total_tag_assignments(0) == 8
    assert store.total_tag_assignments(2) == 3


def test_truncate_keeps_sub_range():
    store = _store()
    store.truncate(3)
    assert len(store) == 2
    assert store[0].user_id == 2


def test_test_set_queries():
    store = _store()
    assert store.unique_test_users(2) == [0, 2]
    assert store.resources_of_test_users(2) == {0: [1, 3], 2: [2]}
    assert store.unique_test_users(-1) == [0, 1, 2]
