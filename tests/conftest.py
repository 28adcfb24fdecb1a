"""Общие фикстуры: исходный документ корзины из data/input.json."""

import copy
import json
import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.append(ROOT)

SAMPLE_PATH = os.path.join(ROOT, "data", "input.json")


@pytest.fixture
def sample_path() -> str:
    return SAMPLE_PATH


@pytest.fixture
def sample_doc() -> dict:
    with open(SAMPLE_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def make_doc(sample_doc):
    """Копия документа, изменённая функцией edit, в виде bytes"""

    def build(edit=None) -> bytes:
        doc = copy.deepcopy(sample_doc)
        if edit is not None:
            edit(doc)
        return json.dumps(doc).encode("utf-8")

    return build
