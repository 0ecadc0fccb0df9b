import io
import os
import tempfile
import pytest
from rich.console import Console
from conftest import build_container
from cli.cli_interface import CLIInterface, format_ascii
from cli.main import main, parse_page_list
from msfstream.storage import MsfStream


@pytest.fixture
def container_path():
    with tempfile.NamedTemporaryFile(delete=False) as tf:
        tf.write(build_container(4, {5: b'ABCD', 2: b'EFGH', 9: b'IJ'}))
        path = tf.name
    yield path
    os.remove(path)


def test_parse_page_list():
    assert parse_page_list("5,2,9") == [5, 2, 9]
    assert parse_page_list("5, 2, 9-11") == [5, 2, 9, 10, 11]
    assert parse_page_list("") == []
    with pytest.raises(ValueError):
        parse_page_list("9-5")
    with pytest.raises(ValueError):
        parse_page_list("a,b")


def test_format_ascii():
    assert format_ascii(b'AB\x00\x7f z') == 'AB.. z'


def test_interface_hexdump_and_page_map(container_path):
    out = io.StringIO()
    cli = CLIInterface(MsfStream(4, 10, [5, 2, 9]), console=Console(file=out, width=200))
    cli.print_summary()
    cli.print_page_map()
    with open(container_path, 'rb') as f:
        cli.print_hexdump(f, pos=6, count=3)
    text = out.getvalue()
    assert "0x00000014" in text
    assert "47 48 49" in text
    assert "GHI" in text
    assert "(3 bytes)" in text


def test_main_dumps_raw_bytes(container_path):
    with tempfile.NamedTemporaryFile(delete=False) as tf:
        out_path = tf.name
    try:
        code = main([container_path, "--pages", "5,2,9", "--length", "10",
                     "--page-size", "4", "--out", out_path])
        assert code == 0
        with open(out_path, 'rb') as f:
            assert f.read() == b'ABCDEFGHIJ'
    finally:
        os.remove(out_path)


def test_main_prints_hexdump(container_path, capsys):
    code = main([container_path, "--pages", "5,2,9", "--length", "10",
                 "--page-size", "4", "--pos", "6", "--count", "3"])
    assert code == 0
    assert "47 48 49" in capsys.readouterr().out


def test_main_reports_bad_page_list(container_path):
    code = main([container_path, "--pages", "5,2", "--length", "10", "--page-size", "4"])
    assert code == 1


def test_main_reports_read_past_end(container_path):
    code = main([container_path, "--pages", "5,2,9", "--length", "10",
                 "--page-size", "4", "--pos", "8", "--count", "5"])
    assert code == 1


def test_main_reports_missing_container():
    code = main(["/nonexistent/container.msf", "--pages", "0", "--length", "4", "--page-size", "4"])
    assert code == 2


def test_main_verbose_emits_debug_traces(container_path, capsys):
    code = main([container_path, "--pages", "5,2,9", "--length", "10",
                 "--page-size", "4", "--verbose"])
    assert code == 0
    err = capsys.readouterr().err
    assert "DEBUG" in err
    assert "offset=20 size=4" in err


def test_main_quiet_by_default(container_path, capsys):
    code = main([container_path, "--pages", "5,2,9", "--length", "10", "--page-size", "4"])
    assert code == 0
    err = capsys.readouterr().err
    assert "DEBUG" not in err
    # 非标准页大小仍会给出警告
    assert "WARNING" in err
