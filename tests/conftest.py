from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
DATA_DIR = Path(__file__).resolve().parent / "data"

for candidate in (PROJECT_ROOT, SRC_ROOT):
    path_str = str(candidate)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)


os.environ.setdefault("OMP_NUM_THREADS", "1")
os.environ.setdefault("OPENBLAS_NUM_THREADS", "1")
os.environ.setdefault("MKL_NUM_THREADS", "1")

for name in ("fiona", "pyogrio"):
    logging.getLogger(name).setLevel(logging.ERROR)


@pytest.fixture()
def dat1() -> Path:
    return DATA_DIR / "dat1.json"


@pytest.fixture()
def dat2() -> Path:
    return DATA_DIR / "dat2.json"


@pytest.fixture(autouse=True)
def _clear_nentries_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("UAM_NENTRIES", raising=False)
