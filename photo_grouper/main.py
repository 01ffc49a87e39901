import argparse
import logging
import sys
from pathlib import Path

from . import config
from .core import PhotoGrouperApp
from .exceptions import MalformedFilenameError
from .models import MoveReport, Presence, RelocationOptions
from .sequencing.filename import neighbor


def setup_logging(folder: Path, verbose: bool):
    """Sets up logging to both console and a file in the processed folder."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if folder is not None and folder.is_dir():
        handlers.insert(0, logging.FileHandler(folder / config.LOG_FILE, encoding='utf-8', delay=True))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Photo Grouper: HDR brackets, panoramas and day folders")

    p.add_argument("--dry-run", action="store_true", help="Simulate actions without modifying disk")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--width", type=int, default=config.DIGIT_WIDTH, help="Digits of the filename counter")

    sub = p.add_subparsers(dest="command", required=True)

    n = sub.add_parser("neighbor", help="Print the file OFFSET counter steps away from PATH")
    n.add_argument("path", type=Path)
    n.add_argument("offset", type=int)

    o = sub.add_parser("organize", help="Run the full sorting pipeline on a folder")
    o.add_argument("folder", type=Path)
    o.add_argument("--by-day", action="store_true", help="Nest destinations under day folders")
    o.add_argument("--panorama-camera", action="append", default=[], metavar="MODEL",
                   help="Camera model whose shots are panoramas (repeatable)")

    h = sub.add_parser("hdr", help="Move 5-shot HDR brackets out of a folder")
    h.add_argument("folder", type=Path)
    h.add_argument("--dest", default=config.HDR_FOLDER, help="Bracket folder, relative to FOLDER")
    h.add_argument("--partner-dest", default=config.HDR_PARTNER_FOLDER, help="Partner folder, relative to FOLDER")
    h.add_argument("--partner-ext", action="append", default=None, metavar="EXT",
                   help="Partner extension moved with each frame (default: RAW types)")
    h.add_argument("--ext", action="append", default=None, metavar="EXT", help="Bracket file types (default: JPG)")

    g = sub.add_parser("panorama", help="Group numbered runs into 'Panorama NN' folders")
    g.add_argument("folder", type=Path)
    g.add_argument("--sub-path", default=None, help="Grouped folder below FOLDER (or below each day folder)")
    g.add_argument("--by-day", action="store_true", help="Group every day folder below FOLDER")
    g.add_argument("--ext", action="append", default=None, metavar="EXT", help="File types (default: JPG)")
    g.add_argument("--partner-ext", action="append", default=[], metavar="EXT",
                   help="Partner extension moved with each file")

    r = sub.add_parser("relocate", help="Move files that pass the partner/camera checks")
    r.add_argument("folder", type=Path)
    r.add_argument("sub_path", help="Destination, relative to FOLDER")
    r.add_argument("--ext", action="append", default=[], metavar="EXT", help="File types to consider")
    r.add_argument("--partner-dest", default=None, help="Move partner files here, relative to FOLDER")
    r.add_argument("--complementary", action="append", default=[], metavar="EXT",
                   help="Partner extension checked for every file")
    r.add_argument("--require", choices=[s.value for s in Presence], default=Presence.EXIST.value,
                   help="Whether partner files must exist or must not exist")
    r.add_argument("--camera", action="append", default=[], metavar="MODEL", help="Allowed camera model")
    r.add_argument("--by-day", action="store_true", help="Nest destinations under day folders")

    return p


def run(args) -> MoveReport:
    app = PhotoGrouperApp(dry_run=args.dry_run, digit_width=args.width)

    if args.command == "organize":
        return app.organize(args.folder, by_day=args.by_day, panorama_models=args.panorama_camera)

    if args.command == "hdr":
        partner_exts = args.partner_ext or sorted(config.RAW_EXTS)
        result = app.detector.detect_and_move(
            args.folder,
            primary_dest=args.folder / args.dest,
            partner_dest=args.folder / args.partner_dest,
            partner_exts=partner_exts,
            extensions=args.ext or sorted(config.JPEG_EXTS),
        )
        logging.info(f"{len(result.brackets)} bracket(s) moved, {len(result.rejected)} incomplete.")
        return result.report

    if args.command == "panorama":
        result = app.grouper.group_tree(
            args.folder,
            args.sub_path,
            args.ext or sorted(config.JPEG_EXTS),
            partner_exts=args.partner_ext,
            by_day=args.by_day,
        )
        logging.info(f"{len(result.runs)} panorama(s) grouped.")
        return result.report

    options = RelocationOptions(
        extensions=args.ext,
        partner_sub_path=args.partner_dest,
        complementary_exts=args.complementary,
        presence=Presence(args.require),
        camera_models=args.camera,
        by_day=args.by_day,
    )
    return app.relocator.relocate_folder(args.folder, args.sub_path, options)


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.command == "neighbor":
        try:
            print(neighbor(args.path, args.offset, args.width))
        except MalformedFilenameError as e:
            print(e, file=sys.stderr)
            sys.exit(1)
        return

    folder = args.folder.resolve()
    args.folder = folder
    setup_logging(folder, args.verbose)

    logging.info("=== Photo Grouper Started ===")
    logging.info(f"Folder: {folder} ({args.command})")

    try:
        report = run(args)
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(1)
    except Exception:
        logging.exception("Fatal error while sorting.")
        sys.exit(1)

    for failure in report.failures:
        logging.error(f"Not moved: {failure.source} -> {failure.destination} ({failure.error})")
    if not report.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
