import pytest

from pdf_helpers import SAMPLE_LINES, write_pdf


@pytest.fixture
def make_pdf(tmp_path):
    def _make(name="sample.pdf", lines=None):
        return write_pdf(tmp_path / name, SAMPLE_LINES if lines is None else lines)

    return _make
