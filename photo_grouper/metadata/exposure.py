"""
Turns exposure-bias text into numbers.

Readers hand out whatever text their source produces: exifread prints
ratios ("-2", "2/3"), the Windows shell prints localized text wrapped in
direction marks ("\u200e+2 Schritt(e)"). Bracket matching only sees the numbers.
"""
import re
from fractions import Fraction
from typing import Optional

# LRM/RLM, embeddings/overrides and isolates
_BIDI_MARKS = re.compile('[\u200e\u200f\u202a-\u202e\u2066-\u2069]')
_UNIT_SUFFIX = re.compile(r'\s*(schritt\(e\)|schritte|schritt|steps?|ev)\s*$', re.IGNORECASE)


def normalize_exposure_bias(text: Optional[str]) -> Optional[Fraction]:
    """
    Returns the exposure bias in EV steps, or None if the text is not a number.

    >>> normalize_exposure_bias("\u200e+2 Schritt(e)")
    Fraction(2, 1)
    """
    if text is None:
        return None

    clean = _BIDI_MARKS.sub('', str(text)).strip()
    clean = _UNIT_SUFFIX.sub('', clean)
    clean = clean.replace('\u2212', '-').replace(',', '.').replace(' ', '')
    if not clean:
        return None

    try:
        return Fraction(clean)
    except (ValueError, ZeroDivisionError):
        return None
