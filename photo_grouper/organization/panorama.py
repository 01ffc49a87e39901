import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set

from .. import config
from ..exceptions import MalformedFilenameError
from ..models import PanoramaResult, PanoramaRun
from ..scanning.filesystem import FolderScanner
from ..sequencing.filename import is_first_counter, neighbor
from .mover import FileMover
from .rules import find_all_complementary, panorama_folder_name, resolve_destination


class PanoramaGrouper:
    """
    Splits a folder of panorama shots into runs of consecutive counters and
    moves each run into its own "Panorama NN" subfolder.
    """

    def __init__(self,
                 mover: Optional[FileMover] = None,
                 scanner: Optional[FolderScanner] = None,
                 digit_width: int = config.DIGIT_WIDTH,
                 skip_zero: bool = config.SKIP_ZERO):
        self.mover = mover or FileMover()
        self.digit_width = digit_width
        self.skip_zero = skip_zero
        self.scanner = scanner or FolderScanner(digit_width)

    def group_tree(self,
                   base: Path,
                   sub_path: Optional[str] = None,
                   extensions: Iterable[str] = config.JPEG_EXTS,
                   partner_exts: Iterable[str] = (),
                   by_day: bool = False) -> PanoramaResult:
        """
        Groups base/sub_path, or base/<day>/sub_path for every day folder.
        Run numbers restart in every folder.
        """
        if by_day:
            folders = [resolve_destination(base, sub_path, day.name)
                       for day in self.scanner.list_day_folders(Path(base))]
        else:
            folders = [resolve_destination(base, sub_path)]

        result = PanoramaResult()
        for folder in folders:
            part = self.group(folder, extensions, partner_exts)
            result.runs.extend(part.runs)
            result.report.merge(part.report)
        return result

    def group(self,
              folder: Path,
              extensions: Iterable[str] = config.JPEG_EXTS,
              partner_exts: Iterable[str] = ()) -> PanoramaResult:
        folder = Path(folder)
        files = self.scanner.list_files(folder, extensions)
        if not files:
            logging.info(f"No panorama files in {folder}, skipping.")
            return PanoramaResult()
        return self.group_files(files, folder, partner_exts)

    def group_files(self,
                    files: Iterable[Path],
                    folder: Path,
                    partner_exts: Iterable[str] = ()) -> PanoramaResult:
        """
        Walks the candidates in order. Every file not taken by an earlier run
        seeds a new one, which then grows along the counter while the next
        file exists.
        """
        partner_exts = list(partner_exts)
        result = PanoramaResult()
        consumed: Set[Path] = set()

        for seed in files:
            seed = Path(seed)
            # Moved away by an earlier run
            if seed in consumed or not seed.exists():
                continue

            run = PanoramaRun(
                number=len(result.runs) + 1,
                folder=Path(folder) / panorama_folder_name(len(result.runs) + 1),
                files=self._collect_run(seed, consumed),
            )
            consumed.update(run.files)
            result.runs.append(run)

            logging.info(f"{run.folder.name}: {len(run.files)} file(s), "
                         f"{run.files[0].name} .. {run.files[-1].name}")
            self._relocate(run, partner_exts, result)

        return result

    def _collect_run(self, seed: Path, consumed: Set[Path]) -> List[Path]:
        members = {seed}
        before: List[Path] = []

        # Only the first counter looks back, across the 9999 -> 0001 wrap
        if is_first_counter(seed, self.digit_width, self.skip_zero):
            before = self._walk(seed, -1, members, consumed)
            before.reverse()

        after = self._walk(seed, +1, members, consumed)
        return before + [seed] + after

    def _walk(self, start: Path, step: int, members: Set[Path], consumed: Set[Path]) -> List[Path]:
        found = []
        current = start
        while True:
            try:
                nxt = neighbor(current, step, self.digit_width, self.skip_zero)
            except MalformedFilenameError:
                break
            if nxt in members or nxt in consumed or not nxt.exists():
                break
            members.add(nxt)
            found.append(nxt)
            current = nxt
        return found

    def _relocate(self, run: PanoramaRun, partner_exts: List[str], result: PanoramaResult):
        self.mover.ensure_directory(run.folder)
        for path in run.files:
            for partner in find_all_complementary(path, partner_exts):
                self.mover.move(partner, run.folder, result.report)
            self.mover.move(path, run.folder, result.report)
