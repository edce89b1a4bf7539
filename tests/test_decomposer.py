import importlib.util
import random
import unicodedata
import unittest

import vn_decompose
from vn_decompose import vn_tags
from vn_decompose.decomposer import (
    MODE_ORTHOGRAPHIC,
    MODE_TONE,
    DecomposeVietnamese,
    decompose_str,
    decompose_vietnamese_tones,
)

GRAVE, ACUTE, TILDE, HOOK, DOT = '\u0300', '\u0301', '\u0303', '\u0309', '\u0323'
CIRC, BREVE, HORN = '\u0302', '\u0306', '\u031b'


def run(chars, mode):
    return list(DecomposeVietnamese(iter(chars), mode))


class TestDecomposer(unittest.TestCase):
    def check(self, nfc, expected, mode):
        decompose = DecomposeVietnamese(iter([nfc]), mode)
        for unit in expected:
            self.assertEqual(next(decompose), unit)
        self.assertIsNone(next(decompose, None))

    def test_tones(self):
        bases = [
            'A', 'a', 'Ă', 'ă', 'Â', 'â', 'E', 'e', 'Ê', 'ê', 'I', 'i', 'O', 'o', 'Ô', 'ô',
            'Ơ', 'ơ', 'U', 'u', 'Ư', 'ư', 'Y', 'y',
        ]
        tones = [GRAVE, HOOK, TILDE, ACUTE, DOT]
        for base in bases:
            for tone in tones:
                nfc = unicodedata.normalize('NFC', base + tone)
                self.assertEqual(len(nfc), 1)
                if nfc in vn_tags.WINDOWS_1258_TONED:
                    self.check(nfc, [nfc], MODE_TONE)
                else:
                    self.check(nfc, [base, tone], MODE_TONE)

    def test_orthographic_units(self):
        cases = {
            'ầ': ['a', CIRC, GRAVE],
            'Ặ': ['A', BREVE, DOT],
            'ệ': ['e', CIRC, DOT],
            'ữ': ['u', HORN, TILDE],
            'Ở': ['O', HORN, HOOK],
            'á': ['a', ACUTE],
            'ỹ': ['y', TILDE],
            'â': ['a', CIRC],
            'Ơ': ['O', HORN],
            'đ': ['đ'],
            'a': ['a'],
        }
        for nfc, expected in cases.items():
            self.check(nfc, expected, MODE_ORTHOGRAPHIC)

    def test_two_unit_tone_split(self):
        self.assertEqual(run('ầ', MODE_TONE), ['â', GRAVE])
        for ch, rec in vn_tags.LETTER_TABLE.items():
            if rec.mod not in ('none', 'stroke') and rec.tone != 'level':
                self.assertEqual(run(ch, MODE_TONE), [rec.middle, vn_tags.TONE_MARKS[rec.tone]])

    def test_three_unit_orthographic_split(self):
        self.assertEqual(run('ầ', MODE_ORTHOGRAPHIC), ['a', CIRC, GRAVE])
        for ch, rec in vn_tags.LETTER_TABLE.items():
            if rec.mod not in ('none', 'stroke') and rec.tone != 'level':
                self.assertEqual(run(ch, MODE_ORTHOGRAPHIC), [
                    rec.base, vn_tags.MODIFIER_MARKS[rec.mod], vn_tags.TONE_MARKS[rec.tone]])

    def test_pass_through(self):
        for ch in 'aAyYdD zZ09.,!?\t\n' + 'ñßäЖ中' + ACUTE + CIRC + '\U0001F600':
            for mode in (MODE_TONE, MODE_ORTHOGRAPHIC):
                self.assertEqual(run(ch, mode), [ch])

    def test_modifier_only(self):
        self.assertEqual(run('â', MODE_TONE), ['â'])
        self.assertEqual(run('â', MODE_ORTHOGRAPHIC), ['a', CIRC])
        self.assertEqual(run('Ư', MODE_ORTHOGRAPHIC), ['U', HORN])

    def test_already_decomposed_is_untouched(self):
        s = 'a' + CIRC + GRAVE
        self.assertEqual(decompose_str(s, MODE_TONE), s)
        self.assertEqual(decompose_str(s, MODE_ORTHOGRAPHIC), s)

    def test_mixed_script(self):
        self.assertEqual(decompose_str('Tiếng Việt!', MODE_TONE),
                         'Tiê' + ACUTE + 'ng Viê' + DOT + 't!')
        self.assertEqual(decompose_str('Tiếng Việt!', MODE_ORTHOGRAPHIC),
                         'Tie' + CIRC + ACUTE + 'ng Vie' + CIRC + DOT + 't!')
        self.assertEqual(decompose_str('Đà Nẵng, 2024', MODE_TONE),
                         'Đà Nă' + TILDE + 'ng, 2024')

    def test_length_bounds(self):
        rng = random.Random(0)
        pool = list(vn_tags.LETTER_TABLE) + list('abc xyz,.!') + ['中']
        for _ in range(200):
            chars = [rng.choice(pool) for _ in range(rng.randint(0, 30))]
            n = len(chars)
            tone = run(chars, MODE_TONE)
            ortho = run(chars, MODE_ORTHOGRAPHIC)
            self.assertTrue(n <= len(tone) <= 2 * n)
            self.assertTrue(n <= len(ortho) <= 3 * n)
            self.assertEqual(unicodedata.normalize('NFC', ''.join(ortho)), ''.join(chars))

    def test_concatenation(self):
        rng = random.Random(1)
        pool = list(vn_tags.LETTER_TABLE) + list('hello world')
        for _ in range(100):
            a = ''.join(rng.choice(pool) for _ in range(rng.randint(0, 10)))
            b = ''.join(rng.choice(pool) for _ in range(rng.randint(0, 10)))
            for mode in (MODE_TONE, MODE_ORTHOGRAPHIC):
                self.assertEqual(decompose_str(a + b, mode),
                                 decompose_str(a, mode) + decompose_str(b, mode))

    def test_lazy_pull(self):
        pulled = []

        def source():
            for ch in 'ầb':
                pulled.append(ch)
                yield ch

        it = DecomposeVietnamese(source(), MODE_ORTHOGRAPHIC)
        self.assertEqual(pulled, [])
        self.assertEqual(next(it), 'a')
        self.assertEqual(pulled, ['ầ'])
        self.assertEqual(next(it), CIRC)
        self.assertEqual(next(it), GRAVE)
        self.assertEqual(pulled, ['ầ'])
        self.assertEqual(next(it), 'b')
        with self.assertRaises(StopIteration):
            next(it)

    def test_stays_exhausted(self):
        class Flaky(object):
            def __init__(self):
                self.calls = 0

            def __iter__(self):
                return self

            def __next__(self):
                self.calls += 1
                if self.calls == 1:
                    raise StopIteration
                return 'x'

        it = DecomposeVietnamese(Flaky(), MODE_TONE)
        self.assertEqual(list(it), [])
        self.assertEqual(list(it), [])
        self.assertIsNone(next(it, None))

    def test_bad_mode(self):
        with self.assertRaises(ValueError):
            DecomposeVietnamese('abc', 'nfd')

    def test_functional_constructor(self):
        it = decompose_vietnamese_tones('ấ', orthographic=False)
        self.assertEqual(it.mode, MODE_TONE)
        self.assertEqual(list(it), ['â', ACUTE])
        it = decompose_vietnamese_tones('ấ', orthographic=True)
        self.assertTrue(it.orthographic)
        self.assertEqual(list(it), ['a', CIRC, ACUTE])
        self.assertEqual(list(decompose_vietnamese_tones(iter('á'))), ['á'])

    def test_library_surface_only(self):
        # constructor plus pull; no command line or config layer
        self.assertIs(vn_decompose.DecomposeVietnamese, DecomposeVietnamese)
        self.assertIs(vn_decompose.decompose_vietnamese_tones, decompose_vietnamese_tones)
        self.assertFalse(hasattr(vn_decompose, 'iter_decompose_lines'))
        self.assertIsNone(importlib.util.find_spec('vn_decompose.option'))


if __name__ == '__main__':
    unittest.main()
