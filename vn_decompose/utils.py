import logging
import os
import re
import string
import sys
import unicodedata
from typing import Iterable, List, Optional

import editdistance
import numpy as np
import torch

from vn_decompose import vn_tags
from vn_decompose.decomposer import MODE_ORTHOGRAPHIC, decompose_str

device = torch.device('cuda' if torch.cuda.is_available() else 'cpu')


def get_logger(out_dir: Optional[str] = None, name: str = 'vn_decompose', stream=None):
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    # rebuild on every call so a new stream or out_dir takes effect
    for hdlr in list(logger.handlers):
        hdlr.close()
        logger.removeHandler(hdlr)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")

    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
        file_path = os.path.join(out_dir, "run.log")
        file_hdlr = logging.FileHandler(file_path, encoding='utf-8')
        file_hdlr.setFormatter(formatter)
        logger.addHandler(file_hdlr)

    strm_hdlr = logging.StreamHandler(stream if stream is not None else sys.stdout)
    strm_hdlr.setFormatter(formatter)
    logger.addHandler(strm_hdlr)
    return logger


def default_charset() -> List[str]:
    """Every orthographic unit that decomposed Vietnamese text is made of."""
    chars = list(string.ascii_letters + string.digits + string.punctuation + ' ')
    chars += ['đ', 'Đ']
    chars += list(vn_tags.MODIFIER_MARKS.values())
    chars += list(vn_tags.TONE_MARKS.values())
    return chars


class OrthographicLabelConverter(object):
    """CTC label converter over orthographic units.

    Texts are decomposed into base letters, modifier marks and tone marks
    before indexing, so the class space stays small. Index 0 is the blank.
    """
    def __init__(self, charset: Optional[Iterable[str]] = None):
        chars = list(charset) if charset is not None else default_charset()
        self.dict = {ch: i + 1 for i, ch in enumerate(chars)}
        self.character = ['[blank]'] + chars
        self._cache = {}

    def __len__(self):
        return len(self.character)

    def units(self, text: str) -> str:
        if text in self._cache:
            return self._cache[text]
        units = decompose_str(text, MODE_ORTHOGRAPHIC)
        if len(self._cache) < 10000:
            self._cache[text] = units
        return units

    def encode(self, texts: List[str]):
        seqs = [self.units(s) for s in texts]
        length = [len(s) for s in seqs]
        flat = ''.join(seqs)
        try:
            text = [self.dict[ch] for ch in flat]
        except KeyError as e:
            raise KeyError(f"Missing unit {e} (U+{ord(e.args[0]):04X}) in charset") from None
        return (torch.IntTensor(text).to(device), torch.IntTensor(length).to(device))

    def decode(self, text_index, length, recompose: bool = True) -> List[str]:
        texts = []
        index = 0
        for l in length:
            l = int(l)
            t = text_index[index:index + l]
            char_list = []
            for i in range(l):
                if t[i] != 0 and (not (i > 0 and t[i - 1] == t[i])) and t[i] < len(self.character):
                    char_list.append(self.character[int(t[i])])
            text = ''.join(char_list)
            if recompose:
                # display only; the units themselves are the labels
                text = unicodedata.normalize('NFC', text)
            texts.append(text)
            index += l
        return texts


class Averager(object):
    def __init__(self):
        self.reset()

    def add(self, v):
        v = np.asarray(v, dtype=np.float64)
        self.n_count += v.size
        self.sum += float(v.sum())

    def reset(self):
        self.n_count = 0
        self.sum = 0.0

    def val(self):
        res = 0.0
        if self.n_count != 0:
            res = self.sum / float(self.n_count)
        return res


def format_string_for_wer(s):
    s = re.sub(r'([\[\]{}/\\()"\'&+*=<>?.;:,!\-—_€#%°])', r' \1 ', s)
    s = re.sub(r'([ \n])+', " ", s).strip()
    return s


def char_error_rate(pred: str, gt: str, mode: Optional[str] = None) -> float:
    """Edit distance over characters, normalized by the reference length.

    With a mode, both strings are decomposed first, so a wrong tone on 'ấ'
    costs one unit instead of a whole letter.
    """
    if mode is not None:
        pred = decompose_str(pred, mode)
        gt = decompose_str(gt, mode)
    if len(gt) == 0:
        return 1.0 if len(pred) > 0 else 0.0
    return editdistance.eval(pred, gt) / len(gt)


def word_error_rate(pred: str, gt: str) -> float:
    pred_words = format_string_for_wer(pred).split()
    gt_words = format_string_for_wer(gt).split()
    if len(gt_words) == 0:
        return 1.0 if len(pred_words) > 0 else 0.0
    return editdistance.eval(pred_words, gt_words) / len(gt_words)
