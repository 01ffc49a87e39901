import os
from pathlib import Path
from typing import Iterable, List, Optional

from .. import config


def day_folder_name(date_text: Optional[str],
                    offset: int = config.DAY_OFFSET,
                    width: int = config.DAY_WIDTH) -> str:
    """
    Folder name for the capture day, cut from the date text at a fixed offset.

    Expects the reader's DATE_TAKEN_FORMAT, which leads with a direction
    mark ("\u200e31.12.2015 10:00" -> "Tag 31").
    Other layouts are not parsed: "31.12.2015" gives "Tag 1.".
    """
    if not date_text or len(date_text) < config.MIN_DATE_LENGTH:
        return config.DAY_FOLDER_UNKNOWN
    return config.DAY_FOLDER_PREFIX + date_text[offset:offset + width]


def panorama_folder_name(number: int) -> str:
    return config.PANORAMA_FOLDER_PATTERN.format(number=number)


def resolve_destination(base: Path, sub_path: Optional[str], day_folder: Optional[str] = None) -> Path:
    """base/sub_path, or base/day_folder/sub_path when sorting by day."""
    dest = Path(base)
    if day_folder:
        dest = dest / day_folder
    if sub_path:
        dest = dest / sub_path
    return dest


def complementary_candidates(path: Path, ext: str) -> List[Path]:
    """
    Possible names of the partner file with extension `ext`.

    The swap only looks at the name. Cameras write IMG_0001.JPG next to
    IMG_0001.CR2, so the casing of the original suffix is tried first.
    """
    path = Path(path)
    ext = ext if ext.startswith('.') else f".{ext}"
    suffix = path.suffix

    variants = []
    if suffix.isupper():
        variants.append(ext.upper())
    elif suffix.islower():
        variants.append(ext.lower())
    variants.extend([ext, ext.lower(), ext.upper()])

    seen = []
    for v in variants:
        candidate = path.with_suffix(v)
        if candidate not in seen:
            seen.append(candidate)
    return seen


def complementary_path(path: Path, ext: str) -> Path:
    return complementary_candidates(path, ext)[0]


def find_complementary(path: Path, ext: str) -> Optional[Path]:
    """The existing partner file with extension `ext`, if any."""
    for candidate in complementary_candidates(path, ext):
        if candidate.exists() and not same_file(candidate, path):
            return candidate
    return None


def same_file(a: Path, b: Path) -> bool:
    """True when both paths name one file, whatever the case rules of the disk."""
    if Path(a) == Path(b):
        return True
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def find_all_complementary(path: Path, extensions: Iterable[str]) -> List[Path]:
    found = []
    for ext in extensions:
        partner = find_complementary(path, ext)
        if partner is not None and partner not in found:
            found.append(partner)
    return found
