from tagrec.data.reader import TaggingLogReader, parse_line
from tagrec.data.simulator import format_line, simulate_log, write_log
from tagrec.eval.driver import predictions_to_tag_ids, run_language_model
from tagrec.eval.ranking_metrics import evaluate_predictions

CFG = {
    "seed": 7,
    "sim": {
        "n_users": 20,
        "n_resources": 40,
        "n_tags": 60,
        "n_topics": 4,
        "n_events": 300,
        "max_tags_per_event": 4,
        "rating_frac": 0.5,
    },
}


def test_format_line_parses_back():
    rec = parse_line(format_line("u1", "r1", "10", ["a", "b"], ["c"], 2.5))
    assert (rec.user, rec.resource, rec.timestamp) == ("u1", "r1", "10")
    assert rec.tags == ["a", "b"]
    assert rec.categories == ["c"]
    assert rec.rating == 2.5


def test_simulated_log_is_reproducible():
    assert simulate_log(CFG) == simulate_log(CFG)


def test_simulated_log_end_to_end(tmp_path):
    path = write_log(simulate_log(CFG), tmp_path / "sim.txt")
    reader = TaggingLogReader()
    assert reader.read_file(path)
    assert len(reader.store) == 300

    run = run_language_model(reader.store, sample_size=50, beta=0.5)
    metrics = evaluate_predictions(run.test_events, predictions_to_tag_ids(run), [5, 10])
    assert metrics["n_eval_events"] == 50
    for name, value in metrics.items():
        if name != "n_eval_events":
            assert 0.0 <= value <= 1.0
    assert metrics["recall@10"] >= metrics["recall@5"]
