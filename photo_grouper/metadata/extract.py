import json
import logging
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import exifread

from .. import config
from ..exceptions import MetadataExtractionError


class MetadataReader:
    """
    Reads named properties of a single photo as text.

    Strategies:
      - 'exifread' (fast, Python-native).
      - falls back to 'exiftool' (robust, requires system install) when
        exifread finds no tags at all.

    Properties that the file does not carry are left out of the result.
    """

    def __init__(self, use_exiftool: bool = True):
        self.use_exiftool = use_exiftool

    def read_properties(self, path: Path, names: Iterable[str]) -> Dict[str, str]:
        names = list(names)
        tags = self._read_exif_tags(path)

        if tags:
            return self._from_exifread(tags, names)

        if self.use_exiftool:
            try:
                return self._from_exiftool(path, names)
            except MetadataExtractionError as e:
                # Only log at debug level to avoid spamming console if tool is missing
                logging.debug(f"ExifTool failed for {path}: {e}")

        return {}

    def read_property(self, path: Path, name: str) -> Optional[str]:
        return self.read_properties(path, [name]).get(name)

    # --- Internal Extraction Helpers ---

    def _read_exif_tags(self, path: Path) -> Dict[str, Any]:
        try:
            with Path(path).open('rb') as f:
                # details=False skips the maker notes
                return exifread.process_file(f, details=False)
        except Exception as e:
            logging.warning(f"ExifRead failed for {path}: {e}")
            return {}

    def _from_exifread(self, tags: Dict[str, Any], names) -> Dict[str, str]:
        props = {}
        for name in names:
            for tag in config.PROPERTY_TAGS.get(name, []):
                if tag not in tags:
                    continue
                value = self._format(name, str(tags[tag]).strip())
                if value:
                    props[name] = value
                    break
        return props

    def _from_exiftool(self, path: Path, names) -> Dict[str, str]:
        """
        Wraps the 'exiftool' command line utility.
        Must be installed and on the system PATH.
        """
        # -j = JSON output, -n = raw numbers
        cmd = ["exiftool", "-j", "-n", str(path)]
        try:
            out = subprocess.check_output(cmd, stderr=subprocess.DEVNULL, text=True)
            data_list = json.loads(out)
        except (OSError, subprocess.CalledProcessError, ValueError) as e:
            raise MetadataExtractionError(f"exiftool: {e}") from e
        if not data_list:
            return {}

        fields = data_list[0]
        props = {}
        for name in names:
            for key in config.EXIFTOOL_FIELDS.get(name, []):
                if fields.get(key) in (None, ""):
                    continue
                value = self._format(name, str(fields[key]).strip())
                if value:
                    props[name] = value
                    break
        return props

    def _format(self, name: str, raw: str) -> Optional[str]:
        if name == config.DATE_TAKEN:
            dt = self._parse_exif_date(raw)
            return dt.strftime(config.DATE_TAKEN_FORMAT) if dt else None
        return raw or None

    def _parse_exif_date(self, dt_str: str) -> Optional[datetime]:
        """EXIF format is usually "YYYY:MM:DD HH:MM:SS"."""
        clean = dt_str.replace(':', '-', 2)
        # Sub-second precision and zone suffixes trip strptime
        clean = clean.split('.')[0][:19]
        try:
            return datetime.strptime(clean, "%Y-%m-%d %H:%M:%S")
        except ValueError:
            return None
