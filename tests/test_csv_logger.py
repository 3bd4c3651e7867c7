import csv

import numpy as np
import pytest

from gridplot.logging.csv_logger import FIELDNAMES, CsvLogger, RenderRecord


def _rec(title="t"):
    return RenderRecord(title=title, mode="map", width=3, height=3, channels=1)


def test_rows_are_buffered_until_flush_every(tmp_path):
    path = tmp_path / "renders.csv"
    logger = CsvLogger(str(path), flush_every=2)
    logger.log(_rec("a"))
    assert not path.exists()
    logger.log(_rec("b"))
    assert path.exists()
    logger.log(_rec("c"))
    logger.close()

    with open(path, newline="") as f:
        reader = csv.DictReader(f)
        assert reader.fieldnames == FIELDNAMES
        assert [r["title"] for r in reader] == ["a", "b", "c"]


def test_context_manager_closes(tmp_path):
    path = tmp_path / "nested" / "renders.csv"
    with CsvLogger(str(path)) as logger:
        logger.log(_rec())
    assert path.read_text().count("\n") == 2


def test_rejects_non_records(tmp_path):
    logger = CsvLogger(str(tmp_path / "x.csv"))
    with pytest.raises(TypeError):
        logger.log({"title": "t"})
    with pytest.raises(ValueError):
        CsvLogger(str(tmp_path / "y.csv"), flush_every=0)


def test_record_from_buffer():
    buf = np.array([[0.0, 10.0], [np.inf, 255.0]])
    rec = RenderRecord.from_buffer(buf, title="t", mode="values", paths=[[(0, 0), (1, 1)]])
    assert (rec.width, rec.height, rec.channels) == (2, 2, 1)
    assert rec.n_paths == 1
    assert rec.n_vertices == 2
    assert rec.min_px == 0.0
    assert rec.max_px == 255.0

    rgb = RenderRecord.from_buffer(np.zeros((2, 5, 3), dtype=np.uint8), title="t", mode="map+path")
    assert (rgb.width, rgb.height, rgb.channels) == (5, 2, 3)


def test_record_from_bool_buffer():
    rec = RenderRecord.from_buffer(np.array([[True, False]]), title="t", mode="map")
    assert rec.min_px == 0.0
    assert rec.max_px == 1.0
