import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from colorama import Fore, Style, init as colorama_init

from .config import FILTER_NAMES, OUTPUT_DIR, PRESETS, SCORER_NAMES, EvaluationConfig, get_preset, update_config
from .dataset import DatasetError
from .evaluate import run_evaluation
from .reporting import plot_confusion_matrix, print_report, render_matrix, save_metrics_json
from .sanitizer import parse_filters

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_IO_ERROR = 2


def print_params():
    print("""
	--filename:	The current .csv dataset file
	--filters:	Filters you want to apply: lowercase,replace,normalize
	""")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polarity-eval",
        description="Score labelled texts with a sentiment lexicon and report classification metrics",
    )
    parser.add_argument("--filename", default="", help="Dataset .csv file: label,text per row")
    parser.add_argument("--filters", default="", help=f"Comma-separated filters to apply in order: {','.join(FILTER_NAMES)}")
    parser.add_argument("--replace-all", action="store_true", default=None, help="Strip every punctuation mark, not only the first of each kind")
    parser.add_argument("--scorer", choices=SCORER_NAMES, default=None)
    parser.add_argument("--pos-thresh", type=float, default=None)
    parser.add_argument("--neg-thresh", type=float, default=None)
    parser.add_argument("--config", default=None, help="JSON configuration file")
    parser.add_argument("--preset", choices=sorted(PRESETS), default=None)
    parser.add_argument("--strict-labels", action="store_true", default=None, help="Fail on labels that are not integers")
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--progress", action="store_true", default=None)
    parser.add_argument("--show-matrix", action="store_true")
    parser.add_argument("--output-dir", nargs="?", const=str(OUTPUT_DIR), default=None, help="Write metrics.json and confusion_matrix.png here")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)
    return parser


def configure_logging(level: str, log_file: Optional[str] = None) -> None:
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)


def resolve_config(args: argparse.Namespace) -> EvaluationConfig:
    """Layer preset, config file and command line flags, in that order."""
    if args.config:
        config = EvaluationConfig.load_from_file(args.config)
    else:
        config = get_preset(args.preset or "default")

    updates = {
        "scorer": args.scorer,
        "max_workers": args.workers,
        "show_progress": args.progress,
        "dataset": {"strict_labels": args.strict_labels},
        "sanitizer": {"replace_all": args.replace_all},
        "classifier": {"pos_threshold": args.pos_thresh, "neg_threshold": args.neg_thresh},
    }
    if args.filters:
        updates["sanitizer"]["filters"] = parse_filters(args.filters)
    return update_config(config, updates).validate()


def _fail(message: str, code: int) -> int:
    print(f"{Fore.RED}{message}{Style.RESET_ALL}", file=sys.stderr)
    return code


def main(argv: Optional[List[str]] = None) -> int:
    colorama_init()
    args = build_parser().parse_args(argv)

    if not args.filename:
        print_params()
        return EXIT_OK

    configure_logging(args.log_level, args.log_file)

    try:
        config = resolve_config(args)
    except OSError as exc:
        logger.error("Could not read config %s: %s", args.config, exc)
        return _fail(f"Could not read config {args.config}: {exc}", EXIT_IO_ERROR)
    except (ValueError, TypeError) as exc:
        return _fail(f"Invalid configuration: {exc}", EXIT_PARSE_ERROR)

    try:
        result = run_evaluation(args.filename, config)
    except OSError as exc:
        logger.error("Could not read dataset %s: %s", args.filename, exc)
        return _fail(str(exc), EXIT_IO_ERROR)
    except (DatasetError, ValueError) as exc:
        logger.error("Malformed dataset %s: %s", args.filename, exc)
        return _fail(f"{args.filename}: {exc}", EXIT_PARSE_ERROR)

    if args.show_matrix:
        render_matrix(result.matrix)

    print_report(result.matrix)

    if args.output_dir:
        out_dir = Path(args.output_dir)
        save_metrics_json(out_dir / "metrics.json", result, config)
        if result.matrix.total:
            plot_confusion_matrix(result.matrix, out_dir / "confusion_matrix.png")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
