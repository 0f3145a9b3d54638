import json
import logging
import sys
from pathlib import Path

from tagrec.config import LMConfig, load_config
from tagrec.data.reader import TaggingLogReader
from tagrec.eval.driver import predictions_to_tag_ids, run_language_model
from tagrec.eval.ranking_metrics import evaluate_predictions
from tagrec.output.writer import prediction_file_stem, write_predictions, write_timing

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)


def main():
    cfg_path = sys.argv[1] if len(sys.argv) > 1 else "configs/dev.yaml"
    cfg = load_config(cfg_path)
    lcfg = LMConfig.from_cfg(cfg, require_branch=True)

    reader = TaggingLogReader(count_limit=lcfg.count_limit, stemming=lcfg.stemming)
    if not reader.read_file(lcfg.log_path):
        sys.exit(f"could not read {lcfg.log_path}")

    run = run_language_model(
        reader.store,
        sample_size=lcfg.sample_size,
        beta=lcfg.blend,
        user_based=lcfg.user_based,
        res_based=lcfg.res_based,
        sorting=lcfg.sorting,
        top_k=lcfg.top_k,
    )
    predictions = predictions_to_tag_ids(run)

    ecfg = cfg["eval"]
    stem = prediction_file_stem(Path(lcfg.log_path).stem, lcfg.user_based, lcfg.res_based, lcfg.beta)
    pred_path = write_predictions(
        Path(ecfg["predictions_dir"]) / f"{stem}.txt",
        run.test_events,
        predictions,
        reader.users,
        reader.resources,
        reader.tags,
    )
    time_path = write_timing(Path(ecfg["metrics_dir"]) / f"{stem}_TIME.txt", run.timing)

    report = {
        "counts": {
            "n_events": len(reader.store),
            "n_users": len(reader.users),
            "n_resources": len(reader.resources),
            "n_tags": len(reader.tags),
            "n_categories": len(reader.categories),
            "n_tag_assignments": reader.tag_assignments_count(),
            "n_train": run.train_size,
            "n_test": len(run.test_events),
        },
        "lm_config": {
            "beta": lcfg.beta,
            "user_based": lcfg.user_based,
            "res_based": lcfg.res_based,
            "top_k": lcfg.top_k,
        },
        "metrics_test": evaluate_predictions(run.test_events, predictions, ecfg["k_list"]),
        "timing": run.timing.to_dict(),
        "notes": run.notes,
    }

    out_path = Path(ecfg["report_path"])
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(report, indent=2))
    print(json.dumps(report, indent=2))
    print(f"\nWrote: {pred_path.resolve()}")
    print(f"Wrote: {time_path.resolve()}")
    print(f"Wrote: {out_path.resolve()}")

if __name__ == "__main__":
    main()
