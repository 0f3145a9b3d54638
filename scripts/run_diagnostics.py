import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from tagrec.config import LMConfig, load_config
from tagrec.data.reader import TaggingLogReader
from tagrec.eval.driver import split_sizes
from tagrec.viz.diagnostics import run_diagnostics

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)


def main():
    cfg_path = sys.argv[1] if len(sys.argv) > 1 else "configs/dev.yaml"
    cfg = load_config(cfg_path)
    lcfg = LMConfig.from_cfg(cfg)

    reader = TaggingLogReader(count_limit=lcfg.count_limit, stemming=lcfg.stemming)
    if not reader.read_file(lcfg.log_path):
        sys.exit(f"could not read {lcfg.log_path}")

    # same split as the evaluation run
    train_size, test_start = split_sizes(len(reader.store), lcfg.sample_size)

    figs_dir = Path("outputs/figures")
    summary = run_diagnostics(reader=reader, train_size=train_size, figs_dir=figs_dir, test_start=test_start)

    summary_path = Path("outputs/diagnostics_summary.json")
    summary_path.parent.mkdir(parents=True, exist_ok=True)
    summary_path.write_text(json.dumps(asdict(summary), indent=2))

    print("Saved figures to:", figs_dir.resolve())
    print("Saved summary to:", summary_path.resolve())
    print(json.dumps(asdict(summary), indent=2))

if __name__ == "__main__":
    main()
