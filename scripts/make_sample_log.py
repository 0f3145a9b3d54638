import sys
import yaml

from tagrec.data.simulator import simulate_log, write_log


def main():
    cfg_path = sys.argv[1] if len(sys.argv) > 1 else "configs/dev.yaml"
    cfg = yaml.safe_load(open(cfg_path, "r"))
    lines = simulate_log(cfg)
    out_path = write_log(lines, cfg["data"]["log_path"])
    print(f"Wrote {len(lines)} lines to {out_path.resolve()}")

if __name__ == "__main__":
    main()
