from tagrec.data.interning import InternTable


def test_ids_follow_first_seen_order():
    t = InternTable()
    assert t.intern_and_count("b") == 0
    assert t.intern_and_count("a") == 1
    assert t.intern_and_count("b") == 0
    assert t.items == ["b", "a"]
    assert t.counts == [2, 1]
    assert len(t) == 2


def test_reinterning_never_changes_id():
    t = InternTable()
    values = ["x", "y", "x", "z", "y", "x"]
    first_ids = {}
    for v in values:
        idx = t.intern_and_count(v)
        first_ids.setdefault(v, idx)
        assert first_ids[v] == idx
    assert len(t) == len(t.items) == len(t.counts) == 3
    for i, v in enumerate(t.items):
        assert t.get_id(v) == i
        assert t.value_of(i) == v


def test_counting_disabled_keeps_ids_but_not_counts():
    t = InternTable()
    t.intern_and_count("a", counting_enabled=True)
    t.intern_and_count("a", counting_enabled=False)
    t.intern_and_count("b", counting_enabled=False)
    t.intern_and_count("b", counting_enabled=True)
    assert t.items == ["a", "b"]
    assert t.counts == [1, 1]


def test_lookup_helpers():
    t = InternTable()
    t.intern_and_count("a")
    assert "a" in t
    assert "b" not in t
    assert t.get_id("b") is None
