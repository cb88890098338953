import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .core import SidecarOrganizerApp
from .exceptions import SidecarOrganizerError
from .models import LibraryRoots


def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to the console and, optionally, a file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Sidecar Organizer: reconcile media with sidecar descriptors")

    p.add_argument("--originals", type=Path, default=None, help="Media root (default: $ORIGINALS_PATH)")
    p.add_argument("--sidecars", type=Path, default=None, help="Sidecar root (default: $SIDECAR_PATH)")
    p.add_argument("-y", "--yes", action="store_true", help="Do not prompt before each file")
    p.add_argument("--dry-run", action="store_true", help="Log planned actions without modifying disk")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")

    sub = p.add_subparsers(dest="command", required=True)

    orphans = sub.add_parser("orphans", help="List descriptors with no media file")
    orphans.add_argument("--move-to", type=Path, default=None,
                         help="Move orphaned descriptors here, keeping their folders")

    sub.add_parser("organize", help="Move media into YYYY/MM folders by capture time")
    sub.add_parser("rename", help="Rename media to <capture time>_<checksum>")

    collect = sub.add_parser("collect", help="Gather private or archived media into one folder")
    group = collect.add_mutually_exclusive_group(required=True)
    group.add_argument("--private", action="store_true", help="Select descriptors marked Private")
    group.add_argument("--archived", action="store_true", help="Select descriptors with DeletedAt")
    collect.add_argument("--folder", required=True, help="Folder name under the originals root")

    return p.parse_args(argv)


def resolve_roots(args) -> LibraryRoots:
    roots = LibraryRoots.from_env(originals=args.originals, sidecar=args.sidecars)
    return LibraryRoots(roots.originals.resolve(), roots.sidecar.resolve())


def run(args) -> int:
    roots = resolve_roots(args)
    logging.info(f"Originals: {roots.originals}")
    logging.info(f"Sidecars:  {roots.sidecar}")

    app = SidecarOrganizerApp(roots)
    prompt = not args.yes

    if args.command == "orphans":
        if args.move_to:
            app.relocate_orphans(args.move_to.resolve(), prompt=prompt, dry_run=args.dry_run)
        else:
            orphans = app.find_orphans()
            logging.info(f"Found {len(orphans)} orphaned descriptors")
    elif args.command == "organize":
        app.organize(prompt=prompt, dry_run=args.dry_run)
    elif args.command == "rename":
        app.rename(prompt=prompt, dry_run=args.dry_run)
    elif args.command == "collect":
        if args.private:
            predicate = lambda d: d.private
        else:
            predicate = lambda d: d.archived
        app.collect_to_folder(args.folder, predicate, prompt=prompt, dry_run=args.dry_run)

    return 0


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    try:
        sys.exit(run(args))
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(1)
    except SidecarOrganizerError as e:
        logging.error(str(e))
        sys.exit(1)
    except Exception:
        logging.exception("Fatal error.")
        sys.exit(1)


if __name__ == "__main__":
    main()
