import re
from pathlib import Path
from typing import Tuple, Union

from .. import config
from ..exceptions import MalformedFilenameError
from ..models import NumberedFilename

PathLike = Union[str, Path]

_DIGITS = re.compile(r'[0-9]+')


def split_counter(path: PathLike, digit_width: int = config.DIGIT_WIDTH) -> NumberedFilename:
    """
    Splits a path into prefix, counter and extension.
    The counter is the last `digit_width` characters of the extension-less stem.

    Raises:
        MalformedFilenameError: stem shorter than the width, or counter not numeric.
    """
    p = Path(path)
    stem = p.stem
    if digit_width < 1 or len(stem) < digit_width:
        raise MalformedFilenameError(f"{p.name}: no {digit_width}-digit counter")

    counter = stem[-digit_width:]
    if not _DIGITS.fullmatch(counter):
        raise MalformedFilenameError(f"{p.name}: counter '{counter}' is not numeric")

    return NumberedFilename(p.parent, stem[:-digit_width], counter, p.suffix)


def counter_of(path: PathLike, digit_width: int = config.DIGIT_WIDTH) -> int:
    return split_counter(path, digit_width).value


def first_counter(skip_zero: bool = config.SKIP_ZERO) -> int:
    return 1 if skip_zero else 0


def is_first_counter(path: PathLike,
                     digit_width: int = config.DIGIT_WIDTH,
                     skip_zero: bool = config.SKIP_ZERO) -> bool:
    """True for the lowest counter of the series (0001), where numbering wraps."""
    try:
        return counter_of(path, digit_width) == first_counter(skip_zero)
    except MalformedFilenameError:
        return False


def neighbor(path: PathLike,
             offset: int,
             digit_width: int = config.DIGIT_WIDTH,
             skip_zero: bool = config.SKIP_ZERO) -> Path:
    """
    Path of the file `offset` counter steps away from `path`.

    Going below the first counter wraps to the top of the counter space
    (IMG_0001 -1 -> IMG_9999). Going above it does not wrap: IMG_9999 +1
    gives IMG_10000, which a camera never writes, so series walks end there.
    Whether the result exists is up to the caller.
    """
    parts = split_counter(path, digit_width)
    value = parts.value + offset

    if skip_zero:
        # 1..10^D-1, so stepping back from 0001 lands on 9999
        while value <= 0:
            value += 10 ** digit_width - 1
    else:
        while value < 0:
            value += 10 ** digit_width

    return parts.with_counter(str(value).zfill(digit_width))


def sort_key(path: PathLike, digit_width: int = config.DIGIT_WIDTH) -> Tuple:
    """
    Orders a series by prefix and counter; names without a counter go last.
    """
    p = Path(path)
    try:
        parts = split_counter(p, digit_width)
    except MalformedFilenameError:
        return (1, p.name.lower(), 0, p.name)
    return (0, parts.prefix.lower(), parts.value, p.name)
