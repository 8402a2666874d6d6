from __future__ import annotations

import argparse
import sys
import warnings
from dataclasses import replace
from pathlib import Path

from ggdeck.core.errors import EmptyResultWarning, InputError, VersionMismatch
from ggdeck.core.tables import SUMMARY_DESC
from ggdeck.io.config import PrepSettings
from ggdeck.io.errors import IoError
from ggdeck.io.read import load_summary_records, read_table
from ggdeck.viz.charts import difference_chart
from ggdeck.viz.save import save

from .demo import make_demo_observations
from .pipeline import prepare_file, prepare_frame


def _print_head(path: Path, n: int = 5) -> None:
    """Print the first n rows of an artifact via Polars.

    Args:
        path: Path to a parquet or csv artifact.
        n: Number of rows to print.
    """
    df = read_table(path, SUMMARY_DESC)
    print(df.head(n))


def _settings_from_args(args: argparse.Namespace) -> PrepSettings:
    """Load settings (env > TOML > defaults), then apply explicit CLI flags on top."""
    s = PrepSettings.load(args.config or None)
    overrides = {
        k: v
        for k, v in {
            "region": args.region,
            "parameter": args.parameter,
            "target_stimulus": args.target_stimulus,
        }.items()
        if v
    }
    if args.no_manifest:
        overrides["write_manifest"] = False
    return replace(s, **overrides) if overrides else s


def _cmd_prepare(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="ggdeck prepare",
        description="Prepare the example dataset and write artifact + manifest.",
    )
    p.add_argument("--input", type=str, default="", help="Observation table (csv/parquet/json).")
    p.add_argument("--demo", action="store_true", help="Use the synthetic demo table as input.")
    p.add_argument("--output", type=str, default="", help="Artifact path (.parquet or .csv).")
    p.add_argument("--region", type=str, default="", help="Region to retain.")
    p.add_argument("--parameter", type=str, default="", help="Parameter to retain.")
    p.add_argument(
        "--target-stimulus", type=str, default="", help="Stimulus marking the target group."
    )
    p.add_argument("--config", type=str, default="", help="Explicit TOML config path.")
    p.add_argument("--no-manifest", action="store_true", help="Skip <artifact>.manifest.json.")
    args = p.parse_args(argv)

    if not args.input and not args.demo:
        print("[ERROR] Provide --input PATH or --demo.", file=sys.stderr)
        return 2

    try:
        settings = _settings_from_args(args)
        output = Path(args.output) if args.output else settings.default_output_path()
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", EmptyResultWarning)
            if args.demo:
                print("[INFO] Using synthetic demo observations")
                result = prepare_frame(
                    make_demo_observations(), output, settings, source={"demo": True}
                )
            else:
                result = prepare_file(args.input, output, settings)
    except (InputError, IoError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    for w in caught:
        print(f"[WARN] {w.message}", file=sys.stderr)
    print(
        f"[INFO] region={settings.region} parameter={settings.parameter} "
        f"target_stimulus={settings.target_stimulus}"
    )
    print(
        f"[INFO] rows_in={result['rows_in']} rows_retained={result['rows_retained']} "
        f"groups={result['groups']}"
    )
    print(f"[INFO] Wrote summary to {result['output_path']}")
    if result["manifest_path"]:
        print(f"[INFO] Wrote manifest to {result['manifest_path']}")
    _print_head(Path(result["output_path"]), n=5)
    return 0


def _cmd_show(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="ggdeck show", description="Show an artifact head.")
    p.add_argument("--path", type=str, required=True, help="Path to artifact.")
    p.add_argument("--n", type=int, default=5, help="Rows to display.")
    args = p.parse_args(argv)

    try:
        _print_head(Path(args.path), n=args.n)
    except IoError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    return 0


def _cmd_plot(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="ggdeck plot", description="Render the example chart.")
    p.add_argument("--path", type=str, required=True, help="Path to summary artifact.")
    p.add_argument("--out-html", type=str, default="", help="HTML output path.")
    p.add_argument("--out-png", type=str, default="", help="PNG output path (vl-convert-python).")
    args = p.parse_args(argv)

    if not args.out_html and not args.out_png:
        print("[ERROR] Provide --out-html and/or --out-png.", file=sys.stderr)
        return 2

    try:
        records = load_summary_records(args.path)
    except (InputError, IoError, VersionMismatch) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    chart = difference_chart(records)
    try:
        written = save(chart, out_html=args.out_html or None, out_png=args.out_png or None)
    except RuntimeError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    for path in written:
        print(f"[INFO] Wrote chart to {path}")
    return 0


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ggdeck", description="Workshop example-data utilities.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("prepare")
    sub.add_parser("show")
    sub.add_parser("plot")
    return p


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        build_argparser().print_help()
        return
    cmd, rest = argv[0], argv[1:]
    if cmd == "prepare":
        code = _cmd_prepare(rest)
    elif cmd == "show":
        code = _cmd_show(rest)
    elif cmd == "plot":
        code = _cmd_plot(rest)
    else:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        code = 2
    raise SystemExit(code)


if __name__ == "__main__":
    main()
