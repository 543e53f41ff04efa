import warnings
from pathlib import Path

import pytest

# Suppress pandas futurewarnings that are benign for our tests
warnings.filterwarnings("ignore", category=FutureWarning, module="pandas.*")


def touch(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def data_root(tmp_path):
    """A small data root with the full directory layout."""
    root = tmp_path / "shared_data"
    touch(root / "raw_data" / "u" / "australia" / "AUSURAMS.csv", "date,value\n")
    touch(root / "raw_data" / "u" / "australia" / "AUSURAMS.meta", "series_meta:\n")
    touch(root / "raw_data" / "u" / "australia" / "AUSURANAA.csv", "date,value\n")
    touch(root / "raw_data" / "inf" / "belgium" / "FPCPITOTLZGBEL.csv", "date,value\n")
    touch(root / "transformed_data" / "u" / "australia" / "AUSURAMS.csv")
    touch(root / "specs" / "series_spec.keytree", "seriess:\n")
    touch(root / "specs" / "filter_spec.keytree", "selectors:\n")
    touch(root / "pid_graphics" / "css" / "style.css", "body {}\n")
    touch(root / "pid_graphics" / "js" / "test.js", "some js\n")
    favicon = root / "pid_graphics" / "favicon" / "favicon.png"
    favicon.parent.mkdir(parents=True, exist_ok=True)
    favicon.write_bytes(b"\x89PNG\r\n")
    touch(root / "ts_graphics" / "spec" / "ts_page_spec.keytree")
    touch(root / "ts_graphics" / "js" / "ts.js")
    return root
