from vn_decompose.decomposer import (
    MODE_ORTHOGRAPHIC,
    MODE_TONE,
    MODES,
    DecomposeVietnamese,
    decompose_str,
    decompose_vietnamese_tones,
)
from vn_decompose.vn_tags import LetterRecord, is_vietnamese_letter, lookup

__version__ = '0.1.0'
