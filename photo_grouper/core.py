import logging
from pathlib import Path
from typing import Iterable, Optional

from . import config
from .metadata.extract import MetadataReader
from .models import MoveReport, Presence, RelocationOptions
from .organization.hdr import BracketDetector
from .organization.mover import FileMover
from .organization.panorama import PanoramaGrouper
from .organization.relocate import PhotoRelocator
from .scanning.filesystem import FolderScanner


class PhotoGrouperApp:
    def __init__(self,
                 reader: Optional[MetadataReader] = None,
                 dry_run: bool = False,
                 digit_width: int = config.DIGIT_WIDTH):
        self.reader = reader or MetadataReader()
        self.mover = FileMover(dry_run=dry_run)
        self.scanner = FolderScanner(digit_width)
        self.detector = BracketDetector(self.reader, self.mover, self.scanner, digit_width)
        self.grouper = PanoramaGrouper(self.mover, self.scanner, digit_width)
        self.relocator = PhotoRelocator(self.reader, self.mover, self.scanner)

    def organize(self,
                 src: Path,
                 by_day: bool = False,
                 panorama_models: Iterable[str] = ()) -> MoveReport:
        """
        Sorts a flat camera folder in place.
        1. HDR brackets (JPG -> HDR, RAW -> HDR/RAW)
        2. Panoramas, if the panorama cameras are known
        3. JPGs with RAW partner (JPG -> JPG, RAW -> RAW)
        4. Remaining JPGs (-> JPG)
        5. RAWs without JPG (-> RAW)
        6. Videos (-> Videos)

        Running it again on a sorted folder moves nothing.
        """
        src = Path(src)
        report = MoveReport()
        jpegs = sorted(config.JPEG_EXTS)
        raws = sorted(config.RAW_EXTS)

        # --- Step 1: HDR Brackets ---
        logging.info(f"Looking for HDR brackets in {src}...")
        brackets = self.detector.detect_and_move(
            src,
            primary_dest=src / config.HDR_FOLDER,
            partner_dest=src / config.HDR_PARTNER_FOLDER,
            partner_exts=raws,
            extensions=jpegs,
        )
        report.merge(brackets.report)
        logging.info(f"{len(brackets.brackets)} bracket(s) found, {len(brackets.rejected)} incomplete.")

        # --- Step 2: Panoramas ---
        panorama_models = [m for m in panorama_models if m]
        if panorama_models:
            logging.info(f"Collecting panorama shots from {', '.join(panorama_models)}...")
            report.merge(self.relocator.relocate_folder(src, config.PANORAMA_FOLDER, RelocationOptions(
                extensions=jpegs,
                partner_sub_path=config.PANORAMA_PARTNER_FOLDER,
                complementary_exts=raws,
                presence=Presence.EXIST,
                camera_models=panorama_models,
                by_day=by_day,
            )))
            # Panorama JPGs shot without RAW
            report.merge(self.relocator.relocate_folder(src, config.PANORAMA_FOLDER, RelocationOptions(
                extensions=jpegs,
                camera_models=panorama_models,
                by_day=by_day,
            )))
            panoramas = self.grouper.group_tree(src, config.PANORAMA_FOLDER, jpegs, by_day=by_day)
            report.merge(panoramas.report)
            logging.info(f"{len(panoramas.runs)} panorama(s) grouped.")

        # --- Step 3: Pairs ---
        logging.info("Sorting JPG/RAW pairs...")
        report.merge(self.relocator.relocate_folder(src, config.JPEG_FOLDER, RelocationOptions(
            extensions=jpegs,
            partner_sub_path=config.RAW_FOLDER,
            complementary_exts=raws,
            presence=Presence.EXIST,
            by_day=by_day,
        )))

        # --- Step 4 & 5: Singles ---
        report.merge(self.relocator.relocate_folder(src, config.JPEG_FOLDER, RelocationOptions(
            extensions=jpegs, by_day=by_day,
        )))
        report.merge(self.relocator.relocate_folder(src, config.RAW_FOLDER, RelocationOptions(
            extensions=raws,
            complementary_exts=jpegs,
            presence=Presence.NOT_EXIST,
            by_day=by_day,
        )))

        # --- Step 6: Videos ---
        videos = self.scanner.list_files(src, config.VIDEO_EXTS)
        self.mover.move_all(videos, src / config.VIDEO_FOLDER, report, desc="Videos")

        logging.info(f"Organize complete. Moved {report.moved} file(s), {len(report.failures)} failure(s).")
        return report
