"""Iterator adapter that detaches Vietnamese tone marks.

Input is an iterable of characters in Normalization Form C. This is not
checked: characters the letter table does not know, including already
decomposed combining marks, are passed through unchanged. The output is not
in any Unicode Normalization Form.

Two modes:
 - MODE_TONE: tone marks are detached only from letters that have no single
   byte form in windows-1258. 'á' stays, 'ý' becomes 'y' + U+0301 and 'ấ'
   becomes 'â' + U+0301.
 - MODE_ORTHOGRAPHIC: every letter is split into the units typed on the
   (non-IME) Vietnamese keyboard layout, base letter first, then modifier,
   then tone. 'ấ' becomes 'a' + U+0302 + U+0301.
"""
from typing import Iterable

from vn_decompose import vn_tags

MODE_TONE = 'tone'
MODE_ORTHOGRAPHIC = 'orthographic'
MODES = (MODE_TONE, MODE_ORTHOGRAPHIC)


class DecomposeVietnamese(object):
    """Pull-based transducer over a character iterator.

    Holds at most two pending units between calls to __next__. Once the
    delegate runs out the adapter stays exhausted.
    """

    def __init__(self, delegate: Iterable[str], mode: str = MODE_TONE):
        if mode not in MODES:
            raise ValueError(f"Unknown mode {mode!r}, expected one of {MODES}")
        self.mode = mode
        self._delegate = iter(delegate)
        self._pending = ()
        self._exhausted = False

    @property
    def orthographic(self) -> bool:
        return self.mode == MODE_ORTHOGRAPHIC

    def __iter__(self):
        return self

    def __next__(self) -> str:
        if self._pending:
            c = self._pending[0]
            self._pending = self._pending[1:]
            return c
        if self._exhausted:
            raise StopIteration
        try:
            c = next(self._delegate)
        except StopIteration:
            self._exhausted = True
            self._delegate = None
            raise
        rec = vn_tags.lookup(c)
        if rec is None:
            return c
        units = rec.ortho_units if self.orthographic else rec.tone_units
        self._pending = units[1:]
        return units[0]

    def __repr__(self):
        return f"{type(self).__name__}(mode={self.mode!r}, pending={len(self._pending)})"


def decompose_vietnamese_tones(chars: Iterable[str], orthographic: bool = False) -> DecomposeVietnamese:
    """Wrap `chars` in a DecomposeVietnamese adapter.

    If `orthographic` is False, tone marks are detached only where windows-1258
    has no precomposed byte for the letter. If True, letters are split into
    base, modifier and tone units.
    """
    return DecomposeVietnamese(chars, MODE_ORTHOGRAPHIC if orthographic else MODE_TONE)


def decompose_str(s: str, mode: str = MODE_TONE) -> str:
    return ''.join(DecomposeVietnamese(s, mode))


__all__ = [
    'MODE_TONE', 'MODE_ORTHOGRAPHIC', 'MODES', 'DecomposeVietnamese',
    'decompose_vietnamese_tones', 'decompose_str',
]
