"""Tests for the command-line interface."""

import gzip
import io
import logging

import pandas as pd
import pytest

from tradelog.cli import main

LOG = (
    "2021-07-29 09:00:00;TSLA;buy;600.00;USD;10;id1\n"
    "2021-07-29 09:30:00;AAPL;buy;140.00;USD;100;id2\n"
    "2021-07-29 10:00:00;V;sell;230.00;USD;50;id3\n"
    "2021-07-29 10:30:00;TSLA;sell;650.00;USD;4;id4\n"
)


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "stock.log"
    path.write_text(LOG)
    return str(path)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("TRADELOG_LABEL_WIDTH", raising=False)
    monkeypatch.delenv("TRADELOG_GRAPH_SCALE", raising=False)
    monkeypatch.setattr("tradelog.cli.load_dotenv", lambda: None)


def test_list_tick(log_file, capsys):
    """Test list-tick on a file."""
    main(["list-tick", log_file])
    assert capsys.readouterr().out == "AAPL\nTSLA\nV\n"


def test_options_after_positionals(log_file, capsys):
    """Test that filters may follow the command and the file."""
    main(["profit", log_file, "-t", "TSLA"])
    assert capsys.readouterr().out == "-3400.00\n"


def test_reads_stdin_without_files(monkeypatch, capsys):
    """Test that standard input is analyzed when no file is given."""
    monkeypatch.setattr("sys.stdin", io.StringIO(LOG))
    main(["-t", "V", "last-price"])
    assert capsys.readouterr().out == "V         : 230.00\n"


def test_empty_input_profit(monkeypatch, capsys):
    """Test profit of an empty input."""
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    main(["profit"])
    assert capsys.readouterr().out == "0.00\n"


def test_gzip_and_plain_files_are_concatenated(tmp_path, log_file, capsys):
    """Test that gzip logs are decompressed and appended to plain logs."""
    packed = tmp_path / "more.log.gz"
    with gzip.open(packed, "wt") as f:
        f.write("2021-07-29 11:00:00;KO;buy;55.00;USD;1;id5\n")
    main(["hist-ord", log_file, str(packed)])
    assert capsys.readouterr().out == (
        "AAPL      : #\n"
        "KO        : #\n"
        "TSLA      : ##\n"
        "V         : #\n"
    )


def test_no_command_prints_filtered_records(log_file, capsys):
    """Test that the filtered records are printed when no command is given."""
    main(["-a", "2021-07-29 09:00:00", "-b", "2021-07-29 10:30:00", log_file])
    assert capsys.readouterr().out == (
        "2021-07-29 09:30:00;AAPL;buy;140.00;USD;100;id2\n"
        "2021-07-29 10:00:00;V;sell;230.00;USD;50;id3\n"
    )


def test_repeated_after_uses_midpoint(log_file, capsys):
    """Test that two -a switches combine to their midpoint."""
    # midpoint of 09:00 and 10:00 is 09:30, which is itself excluded
    main(["-a", "2021-07-29 09:00:00", "-a", "2021-07-29 10:00:00", "list-tick", log_file])
    assert capsys.readouterr().out == "TSLA\nV\n"


def test_graph_pos_with_width(log_file, capsys):
    """Test graph-pos with an explicit width."""
    main(["-w", "10", "graph-pos", log_file])
    # AAPL 14000, TSLA 3900, V -11500
    assert capsys.readouterr().out == (
        "AAPL      : ##########\n"
        "TSLA      : ##\n"
        "V         : !!!!!!!!\n"
    )


def test_label_width_from_environment(monkeypatch, log_file, capsys):
    """Test that the label width can be configured from the environment."""
    monkeypatch.setenv("TRADELOG_LABEL_WIDTH", "4")
    main(["-t", "AAPL", "pos", log_file])
    assert capsys.readouterr().out == "AAPL: 14000.00\n"


def test_save_records(tmp_path, log_file, capsys):
    """Test exporting filtered records alongside the report."""
    output_file = tmp_path / "sample.csv"
    main(["-t", "TSLA", "--save-records", str(output_file), "list-tick", log_file])
    assert capsys.readouterr().out == "TSLA\n"
    assert pd.read_csv(output_file)['volume'].tolist() == [10, 4]


@pytest.mark.parametrize("argv", [
    ["-a", "yesterday", "profit"],
    ["-b", "2021-13-01 00:00:00", "profit"],
    ["-w", "5", "-w", "6", "graph-pos"],
    ["-w", "0", "graph-pos"],
    ["profit", "pos"],
    ["profit", "no-such-file.log"],
])
def test_argument_errors(argv, monkeypatch):
    """Test that invalid arguments exit with code 2."""
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    assert exc_info.value.code == 2


def test_corrupt_gzip_exits_with_error(tmp_path):
    """Test that unreadable input exits with code 1."""
    broken = tmp_path / "broken.log.gz"
    broken.write_bytes(b"not gzip data")
    with pytest.raises(SystemExit) as exc_info:
        main(["profit", str(broken)])
    assert exc_info.value.code == 1


def test_verbose_logs_configuration(log_file, caplog, capsys):
    """Test that -v logs the resolved configuration."""
    caplog.set_level(logging.INFO)
    main(["-v", "-t", "V", "-a", "2021-07-29 08:00:00", "profit", log_file])
    assert "Command : profit" in caplog.text
    assert "After   : 2021-07-29 08:00:00" in caplog.text
    assert "Tickers : V" in caplog.text
    assert capsys.readouterr().out == "11500.00\n"


def test_invalid_utf8_line_is_skipped(tmp_path, capsys):
    """Test that a line with undecodable bytes is dropped and the run continues."""
    path = tmp_path / "stock.log"
    path.write_bytes(
        b"2021-01-01 10:00:00;TICK;buy;100.0;;10\n"
        b"2021-01-01 11:00:00;TICK;sell;110.0;;4\n"
        b"2021-01-01 12:00:00;\xff\xfe;buy;1.0;;1\n"
    )
    main(["profit", str(path)])
    assert capsys.readouterr().out == "-560.00\n"


def test_truncated_gzip_exits_with_error(tmp_path):
    """Test that a gzip log cut short exits with code 1."""
    truncated = tmp_path / "truncated.log.gz"
    truncated.write_bytes(gzip.compress(LOG.encode() * 50)[:-20])
    with pytest.raises(SystemExit) as exc_info:
        main(["profit", str(truncated)])
    assert exc_info.value.code == 1


def test_verbose_keeps_debug_level(tmp_path, caplog, capsys):
    """Test that -v does not hide debug messages when a lower level is set."""
    caplog.set_level(logging.DEBUG)
    path = tmp_path / "stock.log"
    path.write_text(LOG + "not a record\n")
    main(["-v", "list-tick", str(path)])
    assert logging.getLogger().level == logging.DEBUG
    assert "Skipped 1 malformed lines" in caplog.text
    assert capsys.readouterr().out == "AAPL\nTSLA\nV\n"
