"""Command line entry points for Synthkit."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from synthkit.config import Settings
from synthkit.exceptions import DatasetStoreError, SynthkitError
from synthkit.exports import export_dataset_csv, export_dataset_json, export_metrics_csv
from synthkit.registry.classification import classify_business_type
from synthkit.storage.dataset_store import DatasetStore
from synthkit.synthetic.assembler import DEFAULT_SEED, GenerationConfig, assemble
from synthkit.synthetic.stage import Stage
from synthkit.synthetic.validation import validate_dataset

logger = logging.getLogger(__name__)

COUNT_KINDS = ("customers", "plans", "subscriptions", "invoices", "charges")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _add_generation_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "business_type",
        help="Business type key or alias (e.g. b2b-saas-subscriptions, saas).",
    )
    parser.add_argument(
        "--stage",
        default=Stage.GROWTH.value,
        choices=[stage.value for stage in Stage] + ["startup"],
        help="Business stage (default: growth).",
    )
    parser.add_argument(
        "--seed", type=int, default=DEFAULT_SEED, help=f"Seed (default: {DEFAULT_SEED})."
    )
    for kind in COUNT_KINDS:
        parser.add_argument(
            f"--{kind}",
            type=int,
            default=None,
            help=f"Number of {kind} (default: scaled sample size).",
        )
    parser.add_argument(
        "--no-time-series",
        action="store_true",
        help="Omit metric time series from the output.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")


def _config_from_args(args: argparse.Namespace) -> GenerationConfig:
    counts = {
        kind: getattr(args, kind) for kind in COUNT_KINDS if getattr(args, kind) is not None
    }
    return GenerationConfig(
        business_type=args.business_type,
        stage=args.stage,
        seed=args.seed,
        counts=counts or None,
        include_time_series=not args.no_time_series,
    )


def generate_cli(argv: list[str] | None = None) -> int:
    """Generate a dataset and write it as JSON to a file or stdout."""

    parser = argparse.ArgumentParser(description=generate_cli.__doc__)
    _add_generation_arguments(parser)
    parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout.")
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Run dataset checks and fail if any of them does not pass.",
    )
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        dataset = assemble(_config_from_args(args))
    except SynthkitError as e:
        logger.error(f"Generation failed: {e}")
        return 1

    if args.validate:
        failures = {
            name: result.message
            for name, result in validate_dataset(dataset).items()
            if not result.ok
        }
        if failures:
            for name, message in failures.items():
                logger.error(f"Check {name} failed: {message}")
            return 1

    if args.output:
        export_dataset_json(dataset, args.output)
    else:  # stdout for piping
        sys.stdout.write(dataset.to_json(indent=2))
        sys.stdout.write("\n")
    return 0


def publish_cli(argv: list[str] | None = None) -> int:
    """Generate a scenario dataset, save it to the dataset store and print its URL."""

    parser = argparse.ArgumentParser(description=publish_cli.__doc__)
    _add_generation_arguments(parser)
    parser.add_argument("--role", default="default", help="Persona role for the id.")
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Dataset directory (default: $SYNTHKIT_DATA_DIR or ./datasets).",
    )
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    settings = Settings.from_env()
    store = DatasetStore(args.data_dir or settings.data_dir, settings.base_url)
    try:
        result = store.publish_scenario(_config_from_args(args), role=args.role)
    except DatasetStoreError as e:
        logger.error(f"Publishing failed: {e}")
        if e.dataset is not None:
            # Unsaved dataset goes to stdout
            print(e.dataset.to_json())
        return 1
    except SynthkitError as e:
        logger.error(f"Publishing failed: {e}")
        return 1

    json.dump(
        {"id": result.id, "url": result.url, "created": result.created},
        fp=sys.stdout,
        indent=2,
    )
    print()
    return 0


def classify_cli(argv: list[str] | None = None) -> int:
    """Print the business type matching a free-text description."""

    parser = argparse.ArgumentParser(description=classify_cli.__doc__)
    parser.add_argument("description", nargs="+", help="Business description.")
    args = parser.parse_args(argv)
    print(classify_business_type(" ".join(args.description)))
    return 0


def export_cli(argv: list[str] | None = None) -> int:
    """Generate a dataset and write one CSV per entity kind plus metrics.csv."""

    parser = argparse.ArgumentParser(description=export_cli.__doc__)
    _add_generation_arguments(parser)
    parser.add_argument("output_dir", type=Path, help="Directory for the CSV files.")
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        dataset = assemble(_config_from_args(args))
        written = export_dataset_csv(dataset, args.output_dir)
        export_metrics_csv(dataset, args.output_dir / "metrics.csv")
    except SynthkitError as e:
        logger.error(f"Export failed: {e}")
        return 1
    except OSError as e:
        logger.error(f"Could not write to {args.output_dir}: {e}")
        return 1

    for kind, path in written.items():
        print(f"{kind}: {path}")
    return 0


def main() -> None:
    raise SystemExit(generate_cli())


if __name__ == "__main__":  # pragma: no cover
    main()
