import pytest

from tagrec.eval.driver import TimingReport, predictions_to_tag_ids, run_language_model, split_sizes

LINES = [
    '"u1";"r1";"1";"a,b,a"',
    '"u2";"r1";"2";"b,c"',
    '"u1";"r2";"3";"a,d"',
    '"u3";"r3";"4";"e"',
    '"u1";"r1";"5";"a"',
    '"u2";"r2";"6";"c"',
]


def test_split_sizes():
    assert split_sizes(10, 3) == (7, 7)
    assert split_sizes(10, 10) == (0, 0)
    # no held-out sample: whole corpus is train and test set
    assert split_sizes(10, 0) == (10, 0)
    with pytest.raises(ValueError):
        split_sizes(10, 11)
    with pytest.raises(ValueError):
        split_sizes(10, -1)


def test_run_scores_each_test_event(read_lines):
    reader = read_lines(LINES)
    run = run_language_model(reader.store, sample_size=2, beta=0.5)
    assert run.train_size == 4
    assert len(run.test_events) == 2
    assert len(run.predictions) == 2
    assert run.timing.n_test == 2

    a = reader.tags.get_id("a")
    # u1 tagged a three times in training and r1 got a twice
    assert predictions_to_tag_ids(run)[0][0] == a


def test_run_trains_only_on_prefix(read_lines):
    reader = read_lines(LINES)
    run = run_language_model(reader.store, sample_size=2, beta=0.5)
    c = reader.tags.get_id("c")
    u2 = reader.users.get_id("u2")
    assert run.model.user_dists[u2].counts == {reader.tags.get_id("b"): 1, c: 1}
    assert reader.users.get_id("u3") in run.model.user_dists


def test_no_sample_uses_whole_corpus(read_lines):
    reader = read_lines(LINES)
    run = run_language_model(reader.store, sample_size=0, beta=0.5)
    assert run.train_size == len(LINES)
    assert len(run.test_events) == len(LINES)


def test_full_sample_has_empty_training(read_lines):
    reader = read_lines(LINES)
    run = run_language_model(reader.store, sample_size=len(LINES), beta=0.5)
    assert run.train_size == 0
    assert all(p == [] for p in run.predictions)


def test_runs_are_deterministic(read_lines):
    reader = read_lines(LINES)
    first = run_language_model(reader.store, sample_size=3, beta=0.7)
    second = run_language_model(reader.store, sample_size=3, beta=0.7)
    assert first.predictions == second.predictions


def test_disabled_branches_noted(read_lines):
    reader = read_lines(LINES)
    run = run_language_model(reader.store, sample_size=2, beta=0.5, user_based=False, res_based=False)
    assert run.predictions == [[], []]
    assert run.notes


def test_timing_report_text():
    timing = TimingReport(training_ms=10.0, test_ms=4.0, n_test=2)
    assert timing.average_test_ms == 2.0
    assert timing.total_ms == 14.0
    text = timing.to_text()
    assert text.startswith("Full training time: 10.000\n")
    assert "Total time: 14.000" in text
    assert TimingReport(1.0, 0.0, 0).average_test_ms == 0.0
