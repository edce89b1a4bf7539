"""Vietnamese letter table.

Maps every precomposed Vietnamese letter to its parts:
 - base letter (no diacritics)
 - modifier (none, breve, circ, horn, stroke)
 - tone (level, acute, grave, hook, tilde, dot)

The table is enumerated letter by letter instead of being derived from
canonical decomposition, because canonical decomposition skips the middle
letter (e.g. 'â' for 'ầ') that windows-1258 can store in one byte.
"""
import logging
from collections import namedtuple
from types import MappingProxyType
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

MODIFIERS = ["none", "breve", "circ", "horn", "stroke"]
TONES = ["level", "acute", "grave", "hook", "tilde", "dot"]

# Free-standing combining marks. The stroke of 'đ' has no combining form on
# the Vietnamese keyboard layout, so it is not listed.
MODIFIER_MARKS = {
    'breve': '\u0306',
    'circ': '\u0302',
    'horn': '\u031b',
}
TONE_MARKS = {
    'acute': '\u0301',
    'grave': '\u0300',
    'hook': '\u0309',
    'tilde': '\u0303',
    'dot': '\u0323',
}

# Toned letters that windows-1258 encodes as a single byte. Any other toned
# letter has to carry its tone as a separate combining mark there.
WINDOWS_1258_TONED = frozenset("ÀÁÈÉÍÓÙÚàáèéíóùú")

LetterRecord = namedtuple(
    'LetterRecord', ['char', 'base', 'mod', 'tone', 'middle', 'tone_units', 'ortho_units'])
LetterRecord.__doc__ = """Decomposition of one precomposed Vietnamese letter.

char: the letter itself
base: plain Latin letter
mod, tone: names from MODIFIERS / TONES
middle: base + modifier as one code point, no tone
tone_units: output in tone-splitting mode
ortho_units: output in orthographic-unit mode
"""

LOWER_MAP = {}
UPPER_MAP = {}


def _reg(base: str, mod: str, tone: str, lower: str, upper: str):
    LOWER_MAP[(base, mod, tone)] = lower
    UPPER_MAP[(base.upper(), mod, tone)] = upper


# a / ă / â
_reg('a','none','level','a','A'); _reg('a','none','acute','á','Á'); _reg('a','none','grave','à','À'); _reg('a','none','hook','ả','Ả'); _reg('a','none','tilde','ã','Ã'); _reg('a','none','dot','ạ','Ạ')
_reg('a','breve','level','ă','Ă'); _reg('a','breve','acute','ắ','Ắ'); _reg('a','breve','grave','ằ','Ằ'); _reg('a','breve','hook','ẳ','Ẳ'); _reg('a','breve','tilde','ẵ','Ẵ'); _reg('a','breve','dot','ặ','Ặ')
_reg('a','circ','level','â','Â'); _reg('a','circ','acute','ấ','Ấ'); _reg('a','circ','grave','ầ','Ầ'); _reg('a','circ','hook','ẩ','Ẩ'); _reg('a','circ','tilde','ẫ','Ẫ'); _reg('a','circ','dot','ậ','Ậ')
# e / ê
_reg('e','none','level','e','E'); _reg('e','none','acute','é','É'); _reg('e','none','grave','è','È'); _reg('e','none','hook','ẻ','Ẻ'); _reg('e','none','tilde','ẽ','Ẽ'); _reg('e','none','dot','ẹ','Ẹ')
_reg('e','circ','level','ê','Ê'); _reg('e','circ','acute','ế','Ế'); _reg('e','circ','grave','ề','Ề'); _reg('e','circ','hook','ể','Ể'); _reg('e','circ','tilde','ễ','Ễ'); _reg('e','circ','dot','ệ','Ệ')
# i
_reg('i','none','level','i','I'); _reg('i','none','acute','í','Í'); _reg('i','none','grave','ì','Ì'); _reg('i','none','hook','ỉ','Ỉ'); _reg('i','none','tilde','ĩ','Ĩ'); _reg('i','none','dot','ị','Ị')
# o / ô / ơ
_reg('o','none','level','o','O'); _reg('o','none','acute','ó','Ó'); _reg('o','none','grave','ò','Ò'); _reg('o','none','hook','ỏ','Ỏ'); _reg('o','none','tilde','õ','Õ'); _reg('o','none','dot','ọ','Ọ')
_reg('o','circ','level','ô','Ô'); _reg('o','circ','acute','ố','Ố'); _reg('o','circ','grave','ồ','Ồ'); _reg('o','circ','hook','ổ','Ổ'); _reg('o','circ','tilde','ỗ','Ỗ'); _reg('o','circ','dot','ộ','Ộ')
_reg('o','horn','level','ơ','Ơ'); _reg('o','horn','acute','ớ','Ớ'); _reg('o','horn','grave','ờ','Ờ'); _reg('o','horn','hook','ở','Ở'); _reg('o','horn','tilde','ỡ','Ỡ'); _reg('o','horn','dot','ợ','Ợ')
# u / ư
_reg('u','none','level','u','U'); _reg('u','none','acute','ú','Ú'); _reg('u','none','grave','ù','Ù'); _reg('u','none','hook','ủ','Ủ'); _reg('u','none','tilde','ũ','Ũ'); _reg('u','none','dot','ụ','Ụ')
_reg('u','horn','level','ư','Ư'); _reg('u','horn','acute','ứ','Ứ'); _reg('u','horn','grave','ừ','Ừ'); _reg('u','horn','hook','ử','Ử'); _reg('u','horn','tilde','ữ','Ữ'); _reg('u','horn','dot','ự','Ự')
# y
_reg('y','none','level','y','Y'); _reg('y','none','acute','ý','Ý'); _reg('y','none','grave','ỳ','Ỳ'); _reg('y','none','hook','ỷ','Ỷ'); _reg('y','none','tilde','ỹ','Ỹ'); _reg('y','none','dot','ỵ','Ỵ')
# đ
_reg('d','stroke','level','đ','Đ')

REV_MAP = {v: k for k, v in LOWER_MAP.items()}
REV_MAP.update({v: k for k, v in UPPER_MAP.items()})


def _middle_of(base: str, mod: str) -> str:
    table = UPPER_MAP if base.isupper() else LOWER_MAP
    return table[(base, mod, 'level')]


def _tone_units(ch: str, base: str, mod: str, tone: str) -> Tuple[str, ...]:
    if tone == 'level' or ch in WINDOWS_1258_TONED:
        return (ch,)
    return (_middle_of(base, mod), TONE_MARKS[tone])


def _ortho_units(ch: str, base: str, mod: str, tone: str) -> Tuple[str, ...]:
    if mod == 'stroke':
        # typed as its own key
        return (ch,)
    units = [base]
    if mod != 'none':
        units.append(MODIFIER_MARKS[mod])
    if tone != 'level':
        units.append(TONE_MARKS[tone])
    return tuple(units)


def _build_table():
    table = {}
    for ch, (base, mod, tone) in REV_MAP.items():
        if mod == 'none' and tone == 'level':
            # plain base letters need no processing
            continue
        table[ch] = LetterRecord(
            char=ch,
            base=base,
            mod=mod,
            tone=tone,
            middle=_middle_of(base, mod),
            tone_units=_tone_units(ch, base, mod, tone),
            ortho_units=_ortho_units(ch, base, mod, tone),
        )
    logger.debug("built Vietnamese letter table with %d entries", len(table))
    return MappingProxyType(table)


LETTER_TABLE = _build_table()


def lookup(ch: str) -> Optional[LetterRecord]:
    """Return the record for a precomposed Vietnamese letter, or None.

    None covers everything that passes through untouched: unmarked letters,
    digits, punctuation, other scripts, already decomposed marks.
    """
    return LETTER_TABLE.get(ch)


def is_vietnamese_letter(ch: str) -> bool:
    return ch in LETTER_TABLE


def needs_processing(ch: str, orthographic: bool = False) -> bool:
    """True if decomposing `ch` changes it in the given mode."""
    rec = LETTER_TABLE.get(ch)
    if rec is None:
        return False
    units = rec.ortho_units if orthographic else rec.tone_units
    return units != (ch,)


__all__ = [
    'MODIFIERS', 'TONES', 'MODIFIER_MARKS', 'TONE_MARKS',
    'WINDOWS_1258_TONED', 'LetterRecord', 'LETTER_TABLE', 'lookup',
    'is_vietnamese_letter', 'needs_processing',
]
