import logging
import shutil
from pathlib import Path
from typing import Iterable

from tqdm import tqdm

from ..models import MoveReport
from .rules import same_file


class FileMover:
    """
    Moves and copies single files into a folder, overwriting what is there.

    A failing file is logged and written to the report; it never stops the
    caller's scan.
    """

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def ensure_directory(self, path: Path) -> Path:
        path = Path(path)
        if self.dry_run:
            if not path.exists():
                logging.info(f"[DRY RUN] Create folder {path}")
            return path
        path.mkdir(parents=True, exist_ok=True)
        return path

    def move(self, src: Path, dest_dir: Path, report: MoveReport) -> bool:
        return self._transfer(Path(src), Path(dest_dir), report, move_mode=True)

    def copy(self, src: Path, dest_dir: Path, report: MoveReport) -> bool:
        return self._transfer(Path(src), Path(dest_dir), report, move_mode=False)

    def move_all(self, files: Iterable[Path], dest_dir: Path, report: MoveReport, desc: str = "Moving") -> MoveReport:
        files = list(files)
        if not files:
            return report
        self.ensure_directory(dest_dir)
        for src in tqdm(files, desc=desc, disable=len(files) < 2):
            self.move(src, dest_dir, report)
        return report

    def copy_all(self, files: Iterable[Path], dest_dir: Path, report: MoveReport, desc: str = "Copying") -> MoveReport:
        files = list(files)
        if not files:
            return report
        self.ensure_directory(dest_dir)
        for src in tqdm(files, desc=desc, disable=len(files) < 2):
            self.copy(src, dest_dir, report)
        return report

    def _transfer(self, src: Path, dest_dir: Path, report: MoveReport, move_mode: bool) -> bool:
        dest = dest_dir / src.name

        # Already in place; overwriting would delete the source
        if same_file(src, dest):
            logging.debug(f"{src} is already in {dest_dir}")
            return True

        if self.dry_run:
            logging.info(f"[DRY RUN] {'Move' if move_mode else 'Copy'} {src} -> {dest}")
            report.record_success()
            return True

        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
            if move_mode:
                if dest.exists() and dest.is_file():
                    dest.unlink()
                shutil.move(str(src), str(dest))
            else:
                shutil.copy2(str(src), str(dest))
        except Exception as e:
            logging.error(f"Failed to process {src} -> {dest}: {e}")
            report.record_failure(src, dest, e)
            return False

        logging.debug(f"{'Moved' if move_mode else 'Copied'} {src} -> {dest}")
        report.record_success()
        return True
