import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from tqdm import tqdm

from .. import config
from ..metadata.extract import MetadataReader
from ..models import MoveReport, Presence, RelocationOptions
from ..scanning.filesystem import FolderScanner, normalize_exts
from .mover import FileMover
from .rules import day_folder_name, find_all_complementary, resolve_destination


class PhotoRelocator:
    """
    Moves the candidates that pass every configured check:
      1. partner files (e.g. RAW next to JPG) present or absent,
      2. camera model on the allow-list,
    into base/sub_path, or base/<day>/sub_path when sorting by day.
    """

    def __init__(self,
                 reader: Optional[MetadataReader] = None,
                 mover: Optional[FileMover] = None,
                 scanner: Optional[FolderScanner] = None):
        self.reader = reader or MetadataReader()
        self.mover = mover or FileMover()
        self.scanner = scanner or FolderScanner()

    def relocate_folder(self, folder: Path, sub_path: Optional[str], options: RelocationOptions) -> MoveReport:
        files = self.scanner.list_files(Path(folder), options.extensions or None)
        if not files:
            logging.info(f"Nothing to relocate in {folder}.")
            return MoveReport()
        return self.relocate_matching(files, Path(folder), sub_path, options)

    def relocate_matching(self,
                          files: Iterable[Path],
                          base: Path,
                          sub_path: Optional[str],
                          options: RelocationOptions) -> MoveReport:
        report = MoveReport()
        files = [Path(f) for f in files]
        comp_exts = normalize_exts(options.complementary_exts)
        models = set(m.strip() for m in options.camera_models if m.strip())

        for path in tqdm(files, desc=f"Relocating to {sub_path or base}", disable=len(files) < 2):
            if not path.exists():
                continue

            partners: List[Path] = []
            if comp_exts:
                partners = find_all_complementary(path, comp_exts)
                found = bool(partners)
                if options.presence is Presence.EXIST and not found:
                    continue
                if options.presence is Presence.NOT_EXIST and found:
                    continue

            props = self._read(path, models, options.by_day)

            if models and props.get(config.CAMERA_MODEL) not in models:
                continue

            day = day_folder_name(props.get(config.DATE_TAKEN)) if options.by_day else None
            dest = resolve_destination(base, sub_path, day)

            self.mover.ensure_directory(dest)
            self.mover.move(path, dest, report)

            if options.partner_sub_path:
                partner_dest = resolve_destination(base, options.partner_sub_path, day)
                if partners:
                    self.mover.ensure_directory(partner_dest)
                for partner in partners:
                    self.mover.move(partner, partner_dest, report)

        logging.info(f"Relocated {report.moved} file(s) to {sub_path or base}"
                     + (f", {len(report.failures)} failed" if report.failures else ""))
        return report

    def _read(self, path: Path, models, by_day: bool) -> Dict[str, str]:
        names = []
        if models:
            names.append(config.CAMERA_MODEL)
        if by_day:
            names.append(config.DATE_TAKEN)
        if not names:
            return {}
        try:
            return self.reader.read_properties(path, names)
        except Exception as e:
            logging.warning(f"Could not read metadata of {path}: {e}")
            return {}
