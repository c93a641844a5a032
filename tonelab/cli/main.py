"""tonelab CLI - synthetic tone DSP pipeline."""
from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path

from tonelab.version import __version__
from tonelab.config.loader import config_from_dict, config_to_dict, load_config
from tonelab.errors import InvalidArgument
from tonelab.pipeline.run import run_pipeline
from tonelab.pipeline.sweep import expand_sweep, render_sweep_csv, run_sweep
from tonelab.reporting.exports import write_exports
from tonelab.reporting.summary import render_console_summary
from tonelab.utils.log import setup_logging

log = logging.getLogger("tonelab.cli")

EXIT_OK = 0
EXIT_BAD_ARGS = 2
EXIT_CONFIG_ERROR = 4
EXIT_INTERNAL_ERROR = 5


def _effective_config(args):
    """Load the config file (if any) and apply command-line overrides."""
    base = config_to_dict(load_config(args.config)) if args.config else {}
    overrides = {
        "seed": getattr(args, "seed", None),
        "noise_type": getattr(args, "noise_type", None),
        "noise_level": getattr(args, "noise_level", None),
    }
    base.update({k: v for k, v in overrides.items() if v is not None})
    return config_from_dict(base)


def cmd_run(args) -> int:
    """Handle run command."""
    setup_logging(args.log_level, args.log_file)
    try:
        cfg = _effective_config(args)
        result = run_pipeline(cfg, logger=log)
        print(render_console_summary(result), end="")
        if args.out_dir:
            paths = write_exports(result, args.out_dir, wav=args.wav)
            for name, path in paths.items():
                print(f"{name} exported to: {path}")
        return EXIT_OK

    except FileNotFoundError as e:
        log.error("DSP simulation failed: %s", e)
        print(f"Error: File not found - {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except json.JSONDecodeError as e:
        log.error("DSP simulation failed: %s", e)
        print(f"Error: Invalid config JSON - {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except InvalidArgument as e:
        log.error("DSP simulation failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except Exception as e:
        log.exception("DSP simulation failed")
        print(f"Internal error: {e}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR


def cmd_show_config(args) -> int:
    """Handle show-config command."""
    try:
        cfg = _effective_config(args)
        print(json.dumps(config_to_dict(cfg), indent=2))
        return EXIT_OK
    except (FileNotFoundError, json.JSONDecodeError, InvalidArgument) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR


def cmd_sweep(args) -> int:
    """Handle sweep command."""
    setup_logging(args.log_level, None)
    try:
        base = _effective_config(args)
        configs = expand_sweep(base, noise_levels=args.noise_levels, cutoffs=args.cutoffs)
        rows = run_sweep(configs, workers=args.workers)
        text = render_sweep_csv(rows)
        if args.out:
            Path(args.out).write_text(text, encoding="utf-8")
            print(f"Sweep written to: {args.out}", file=sys.stderr)
        else:
            print(text, end="")

        failures = [r for r in rows if r.error is not None]
        for r in failures:
            print(f"[ERROR] run {r.index}: {r.error}", file=sys.stderr)
        if failures:
            return EXIT_INTERNAL_ERROR
        return EXIT_OK

    except (FileNotFoundError, json.JSONDecodeError, InvalidArgument) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except Exception as e:
        print(f"Internal error: {e}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR


def _add_config_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config", "-c",
        help="Path to pipeline config JSON (defaults apply to missing keys)"
    )
    p.add_argument(
        "--seed",
        type=int,
        help="Seed for the noise generator"
    )
    p.add_argument(
        "--noise-type",
        choices=["uniform", "gaussian"],
        help="Noise distribution"
    )
    p.add_argument(
        "--noise-level",
        type=float,
        help="Uniform half-width or Gaussian standard deviation"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tonelab",
        description="tonelab - synthetic tone FIR/IIR/FFT analysis"
    )
    parser.add_argument(
        "--version", action="version",
        version=f"tonelab {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Run the pipeline once and export results"
    )
    _add_config_args(run_parser)
    run_parser.add_argument(
        "--out-dir", "-o",
        help="Directory for JSON/CSV exports"
    )
    run_parser.add_argument(
        "--wav",
        action="store_true",
        help="Also export time-domain signals as WAV (requires --out-dir)"
    )
    run_parser.add_argument(
        "--log-file",
        help="Append run log to this file"
    )
    run_parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $TONELAB_LOG_LEVEL or INFO)"
    )
    run_parser.set_defaults(func=cmd_run)

    # show-config command
    show_parser = subparsers.add_parser(
        "show-config",
        help="Print the effective configuration"
    )
    _add_config_args(show_parser)
    show_parser.set_defaults(func=cmd_show_config)

    # sweep command
    sweep_parser = subparsers.add_parser(
        "sweep",
        help="Run a grid of noise levels and IIR cutoffs"
    )
    _add_config_args(sweep_parser)
    sweep_parser.add_argument(
        "--noise-levels",
        type=float,
        nargs="+",
        help="Noise levels to sweep"
    )
    sweep_parser.add_argument(
        "--cutoffs",
        type=float,
        nargs="+",
        help="IIR cutoff frequencies (Hz) to sweep"
    )
    sweep_parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Parallel worker processes (default: 1)"
    )
    sweep_parser.add_argument(
        "--out",
        help="Output path for sweep CSV (default: stdout)"
    )
    sweep_parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)"
    )
    sweep_parser.set_defaults(func=cmd_sweep)
    return parser


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "run" and args.wav and not args.out_dir:
        print("Error: --wav requires --out-dir.", file=sys.stderr)
        sys.exit(EXIT_BAD_ARGS)

    if hasattr(args, "func"):
        sys.exit(args.func(args))
    else:
        parser.print_help()
        sys.exit(EXIT_BAD_ARGS)


if __name__ == "__main__":
    main()
