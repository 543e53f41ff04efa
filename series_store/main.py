import argparse
import logging
import sys

from .config import load_config, model_as_dict
from .errors import StoreError
from .index.records import load_series_csv
from .index.spec_index import SpecIndex
from .io.artifacts import drift_manifest, write_manifest
from .reconcile.orphans import find_orphans
from .reconcile.resume import resume_from
from .reconcile.verify import verify
from .resources.kinds import RawData, Specs, TransformedData


def setup_logging(debug: bool = False, level: str = "INFO"):
    lvl = logging.DEBUG if debug else getattr(logging, level, logging.INFO)
    logging.basicConfig(level=lvl, format="%(asctime)s %(levelname)s %(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="series-store",
        description="Check a series data directory against its series specification.",
    )
    parser.add_argument("--config", "-c", default=None)
    parser.add_argument(
        "--root", "-r", default=None, help="Data root directory, overrides config"
    )
    parser.add_argument(
        "--series-csv",
        default=None,
        help="CSV listing with data_type,country,series_id columns, overrides config",
    )
    parser.add_argument("--debug", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p_verify = sub.add_parser("verify", help="Report declared series with and without files")
    p_verify.add_argument("--transformed", action="store_true")
    p_verify.add_argument("--csv", default=None, help="Also write the report as CSV")
    p_verify.add_argument("--no-manifest", action="store_true")

    p_orphans = sub.add_parser("orphans", help="List data files no longer declared")
    p_orphans.add_argument("--transformed", action="store_true")
    p_orphans.add_argument("--no-manifest", action="store_true")

    p_resume = sub.add_parser("resume", help="List series remaining after SERIES_ID")
    p_resume.add_argument("series_id")

    sub.add_parser("specs", help="List specification files")
    return parser


def main(cli_args=None) -> int:
    parser = build_parser()
    args = parser.parse_args(cli_args)
    cfg = load_config(args.config)
    setup_logging(args.debug, cfg.logging.level)
    log = logging.getLogger(__name__)

    root = args.root or cfg.data_root
    if args.series_csv:
        index = SpecIndex.from_records(list(cfg.series) + load_series_csv(args.series_csv))
    else:
        index = cfg.spec_index()
    log.debug(f"Loaded {index!r} for data root {root}")

    try:
        if args.command == "verify":
            kind = TransformedData if args.transformed else RawData
            report = verify(index, root, kind)
            for line in report.lines():
                print(line)
            s = report.summary()
            print(f"{s['found']} of {s['declared']} found, {s['missing']} missing")
            if args.csv:
                report.to_frame().to_csv(args.csv, index=False)
                log.info(f"Wrote report to {args.csv}")
            if cfg.reports.write_manifest and not args.no_manifest:
                manifest = drift_manifest(report, root=root)
                manifest["config_snapshot"] = model_as_dict(cfg)
                mpath = write_manifest(manifest, artifact_dir=cfg.reports.artifact_dir)
                log.info(f"Wrote manifest to {mpath}")
            return 0 if report.ok else 1

        if args.command == "orphans":
            tree = "transformed_data" if args.transformed else "raw_data"
            orphans = find_orphans(index, root, tree)
            for p in orphans:
                print(p)
            if cfg.reports.write_manifest and not args.no_manifest:
                manifest = drift_manifest(None, orphans=orphans, root=root)
                manifest["config_snapshot"] = model_as_dict(cfg)
                mpath = write_manifest(
                    manifest, prefix="orphans", artifact_dir=cfg.reports.artifact_dir
                )
                log.info(f"Wrote manifest to {mpath}")
            return 0

        if args.command == "resume":
            for spec in resume_from(index, args.series_id):
                print(f"{spec.data_kind} {spec.region.as_filepath()} {spec.series_id}")
            return 0

        if args.command == "specs":
            for name in Specs().resources(root).names():
                print(name)
            return 0
    except StoreError as e:
        log.error(str(e))
        return 2

    parser.error(f"unknown command {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
