import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from .. import config
from ..sequencing.filename import sort_key


def normalize_exts(extensions: Iterable[str]) -> List[str]:
    """'JPG', '.jpg' and '.JPG' all mean the same filter."""
    exts = []
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        exts.append(ext if ext.startswith('.') else f".{ext}")
    return exts


class FolderScanner:
    """
    Lists the candidate files of a single folder.

    Directory listings come back in no particular order, but the series walks
    need ascending counters, so the listing is sorted by counter here.
    """

    def __init__(self, digit_width: int = config.DIGIT_WIDTH):
        self.digit_width = digit_width

    def list_files(self, folder: Path, extensions: Optional[Iterable[str]] = None) -> List[Path]:
        exts = set(normalize_exts(extensions)) if extensions else None
        files = []
        try:
            with os.scandir(folder) as it:
                for e in it:
                    if not e.is_file(follow_symlinks=False):
                        continue
                    if e.name.startswith("._") or e.name == config.LOG_FILE:
                        continue
                    if exts is not None and os.path.splitext(e.name)[1].lower() not in exts:
                        continue
                    files.append(Path(e.path))
        except FileNotFoundError:
            logging.info(f"Folder not found: {folder}")
            return []
        except (OSError, PermissionError):
            logging.warning(f"Permission denied: {folder}")
            return []

        files.sort(key=lambda p: sort_key(p, self.digit_width))
        return files

    def list_day_folders(self, base: Path) -> List[Path]:
        """Day folders ("Tag 31", "Tag unbekannt") directly below base."""
        try:
            with os.scandir(base) as it:
                dirs = [Path(e.path) for e in it
                        if e.is_dir(follow_symlinks=False) and e.name.startswith(config.DAY_FOLDER_PREFIX)]
        except OSError:
            return []
        dirs.sort(key=lambda p: p.name.lower())
        return dirs
