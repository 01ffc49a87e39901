import logging
from fractions import Fraction
from pathlib import Path
from typing import Iterable, List, Optional, Set

from tqdm import tqdm

from .. import config
from ..exceptions import MalformedFilenameError
from ..metadata.exposure import normalize_exposure_bias
from ..metadata.extract import MetadataReader
from ..models import BracketResult, ExposureBracket
from ..scanning.filesystem import FolderScanner
from ..sequencing.filename import neighbor
from .mover import FileMover
from .rules import find_complementary


class BracketDetector:
    """
    Finds 5-shot exposure brackets and moves them, with their RAW partners,
    out of the folder.

    Every accepted bracket ends on a +2 EV frame. Only those frames are
    looked at, and the four shots before them are checked against the
    known exposure orders.
    """

    def __init__(self,
                 reader: Optional[MetadataReader] = None,
                 mover: Optional[FileMover] = None,
                 scanner: Optional[FolderScanner] = None,
                 digit_width: int = config.DIGIT_WIDTH,
                 skip_zero: bool = config.SKIP_ZERO):
        self.reader = reader or MetadataReader()
        self.mover = mover or FileMover()
        self.digit_width = digit_width
        self.skip_zero = skip_zero
        self.scanner = scanner or FolderScanner(digit_width)

    def detect_and_move(self,
                        folder: Path,
                        primary_dest: Path,
                        partner_dest: Optional[Path] = None,
                        partner_exts: Iterable[str] = (),
                        extensions: Iterable[str] = config.JPEG_EXTS) -> BracketResult:
        files = self.scanner.list_files(Path(folder), extensions)
        if not files:
            logging.info(f"No bracket candidates in {folder}, skipping.")
            return BracketResult()
        return self.detect_and_move_files(files, primary_dest, partner_dest, partner_exts)

    def detect_and_move_files(self,
                              files: Iterable[Path],
                              primary_dest: Path,
                              partner_dest: Optional[Path] = None,
                              partner_exts: Iterable[str] = ()) -> BracketResult:
        files = [Path(f) for f in files]
        partner_exts = list(partner_exts)
        result = BracketResult()
        consumed: Set[Path] = set()

        for anchor in tqdm(files, desc="HDR brackets", disable=len(files) < 2):
            if anchor in consumed or not anchor.exists():
                continue

            if self._exposure(anchor) != config.HDR_ANCHOR:
                continue

            bracket = self.find_bracket(anchor, consumed)
            if bracket is None:
                logging.warning(f"No complete HDR bracket ends at {anchor.name}, leaving it in place.")
                result.rejected.append(anchor)
                continue

            logging.info(f"HDR bracket {bracket.files[0].name} .. {anchor.name}")
            consumed.update(bracket.files)
            result.brackets.append(bracket)
            self._relocate(bracket, Path(primary_dest), partner_dest, partner_exts, result)

        return result

    def find_bracket(self, anchor: Path, consumed: Optional[Set[Path]] = None) -> Optional[ExposureBracket]:
        """
        The bracket ending at `anchor`, or None when a frame is missing or
        the exposures do not follow one of the accepted orders.
        """
        consumed = consumed or set()
        frames: List[Path] = []
        for offset in range(1 - config.BRACKET_SIZE, 0):
            try:
                frame = neighbor(anchor, offset, self.digit_width, self.skip_zero)
            except MalformedFilenameError:
                return None
            if frame in consumed or not frame.exists():
                return None
            frames.append(frame)
        frames.append(Path(anchor))

        exposures = tuple(self._exposure(frame) for frame in frames)
        if not any(exposures == order for order in config.HDR_ORDERINGS):
            logging.debug(f"Exposure order {exposures} before {anchor.name} is not a bracket")
            return None

        return ExposureBracket(tuple(frames), exposures)

    def _exposure(self, path: Path) -> Optional[Fraction]:
        try:
            props = self.reader.read_properties(path, [config.EXPOSURE_BIAS])
        except Exception as e:
            logging.warning(f"Could not read exposure of {path}: {e}")
            return None
        return normalize_exposure_bias(props.get(config.EXPOSURE_BIAS))

    def _relocate(self,
                  bracket: ExposureBracket,
                  primary_dest: Path,
                  partner_dest: Optional[Path],
                  partner_exts: List[str],
                  result: BracketResult):
        self.mover.ensure_directory(primary_dest)
        # Partners stay with their frames unless they have a folder of their own
        partner_dest = Path(partner_dest) if partner_dest is not None else primary_dest

        if partner_exts:
            self.mover.ensure_directory(partner_dest)
            for ext in partner_exts:
                for frame in bracket.files:
                    partner = find_complementary(frame, ext)
                    if partner is not None:
                        self.mover.move(partner, Path(partner_dest), result.report)

        for frame in bracket.files:
            if self.mover.dry_run or frame.exists():
                self.mover.move(frame, primary_dest, result.report)
