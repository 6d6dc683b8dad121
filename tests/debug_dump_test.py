import re

import pytest

from sfu_transcript.debug_dump import dump, main, parse_pages_arg
from sfu_transcript.normalize import PAGE_BREAK


def test_parse_pages_arg():
    assert parse_pages_arg(None) is None
    assert parse_pages_arg("1-3,5") == {1, 2, 3, 5}
    assert parse_pages_arg(" 2 ,, 7") == {2, 7}


@pytest.mark.parametrize("arg", ["4-2", "x", "1,x,3", "0", "1-", ","])
def test_parse_pages_arg_rejects_bad_selection(arg):
    with pytest.raises(ValueError):
        parse_pages_arg(arg)


def test_main_bad_pages_is_usage_error(make_pdf, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(make_pdf()), "--pages", "4-2"])
    assert exc.value.code == 2
    assert "bad page range" in capsys.readouterr().err


def test_dump_shows_kind_and_origin():
    out = dump(["", "CMPTMAJ", "2017 Summer", "CMPT 225 B-", "stray"])
    assert out[0].startswith("[0 raw=1] program")
    assert "term-header" in out[1]
    assert out[2].endswith("CMPT 225 B-")
    assert "other" in out[3]


def test_dump_raw_and_grep():
    out = dump(["CMPTMAJ", PAGE_BREAK, "2017 Summer"], raw=True)
    assert out == ["[raw 0] 'CMPTMAJ'", "-" * 60, "[raw 2] '2017 Summer'"]
    out = dump(["CMPTMAJ", "2017 Summer"], rx=re.compile("summer", re.I))
    assert len(out) == 1


def test_main_on_pdf(make_pdf, capsys):
    rc = main([str(make_pdf()), "--grep", "CMPT 130"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "entry" in out
    assert "University of British Columbia" in out


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.pdf")]) == 1
    assert "File not found" in capsys.readouterr().err


def test_main_unreadable_pdf(tmp_path, capsys):
    bogus = tmp_path / "bogus.pdf"
    bogus.write_bytes(b"not a pdf")
    assert main([str(bogus)]) == 1
    assert "document error" in capsys.readouterr().err
