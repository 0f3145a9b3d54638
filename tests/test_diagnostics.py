import pytest

from tagrec.eval.driver import split_sizes
from tagrec.viz.diagnostics import cold_start_rates, run_diagnostics


def test_run_diagnostics(read_lines, tmp_path):
    reader = read_lines([
        '"u1";"r1";"1";"a,b"',
        '"u2";"r1";"2";"b"',
        '"u1";"r2";"3";"a,c,c"',
        '"u3";"r3";"4";"d"',
    ])
    summary = run_diagnostics(reader, train_size=2, figs_dir=tmp_path / "figs")
    assert summary.n_events == 4
    assert summary.n_users == 3
    assert summary.n_tags == 4
    assert summary.n_tag_assignments == 7
    assert summary.mean_tags_per_event == pytest.approx(7 / 4)
    assert (summary.n_train, summary.n_test) == (2, 2)
    assert summary.cold_start_user_rate == 0.5
    assert summary.cold_start_resource_rate == 1.0
    for name in ("tag_rank_frequency.png", "events_per_user.png", "tags_per_event.png"):
        assert (tmp_path / "figs" / name).exists()


def test_cold_start_rates_empty_test():
    assert cold_start_rates([], []) == (0.0, 0.0)


def test_no_held_out_sample_tests_whole_corpus(read_lines, tmp_path):
    reader = read_lines([
        '"u1";"r1";"1";"a"',
        '"u2";"r2";"2";"b"',
        '"u3";"r3";"3";"c"',
    ])
    train_size, test_start = split_sizes(len(reader.store), 0)
    summary = run_diagnostics(reader, train_size, tmp_path / "figs", test_start=test_start)
    assert (summary.n_train, summary.n_test) == (3, 3)
    assert summary.cold_start_user_rate == 0.0
    assert summary.cold_start_resource_rate == 0.0
