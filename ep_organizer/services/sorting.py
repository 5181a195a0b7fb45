"""Sort key extraction and ordering of input files.

With a digit length of 0 files sort by their raw filename. Otherwise each
filename is reduced to a fixed-width digit string built from its trailing
numbers, so `clip_9.mp4` and `clip_007.mp4` compare as `09` and `07`.
Digits in the extension are not part of the key.
"""
from __future__ import annotations

import re
from pathlib import PurePath

from ..core.errors import ConfigError, NoNumberFound
from ..core.models import InputFile


DIGIT_RUN = re.compile(r"[0-9]+")


def extract_key(filename: str, digit_length: int) -> str:
    """Derive the sort key for a filename.
    
    Args:
        filename: Base filename (no directory part).
        digit_length: Width of the numeric key, 0 for alphabetical order.
    
    Returns:
        The filename itself in alphabetical mode, otherwise a string of
        exactly `digit_length` digits.
    
    Raises:
        NoNumberFound: Numeric mode and the filename has no digits.
    """
    if digit_length < 0:
        raise ConfigError("Number length must be 0 or greater")
    
    if digit_length == 0:
        return filename
    
    numbers = DIGIT_RUN.findall(PurePath(filename).stem)
    if not numbers:
        raise NoNumberFound(filename)
    
    # Take numbers right to left until there are enough digits
    combined = ""
    for number in reversed(numbers):
        combined = number + combined
        if len(combined) >= digit_length:
            break
    
    if len(combined) < digit_length:
        return combined.zfill(digit_length)
    return combined[-digit_length:]


def sort_files(files: list[InputFile], digit_length: int) -> list[InputFile]:
    """Order files by sort key, then by filename.
    
    Every key is extracted before anything is ordered, so a single
    filename without digits aborts the whole sort.
    
    Raises:
        NoNumberFound: Numeric mode and some filename has no digits.
    """
    keyed = [
        ((extract_key(f.name, digit_length), f.name, str(f.path)), f)
        for f in files
    ]
    keyed.sort(key=lambda pair: pair[0])
    return [f for _, f in keyed]
