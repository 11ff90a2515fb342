import io
import json
import signal
import sys

from salessvc.logfmt import format_line, main

_DEFAULT_TRACE = "00000000-0000-0000-0000-000000000000"

_LINE = (
    '{"time":"2023-06-01T17:21:11.13704718Z","level":"INFO","msg":"startup",'
    '"service":"SALES-API","file":"main.go:42","GOMAXPROCS":1}'
)


def test_formats_known_fields_in_order():
    assert format_line(_LINE) == (
        "SALES-API: 2023-06-01T17:21:11.13704718Z: main.go:42: INFO: "
        f"{_DEFAULT_TRACE}: startup: GOMAXPROCS[1]"
    )


def test_trace_id_is_used_when_present():
    line = json.dumps({"service": "S", "msg": "m", "trace_id": "abc"})
    out = format_line(line)
    assert out.split(": ")[4] == "abc"
    assert "trace_id[" not in out


def test_extra_keys_keep_document_order():
    line = json.dumps({"service": "S", "zeta": "z", "alpha": "a"})
    out = format_line(line)
    assert out.endswith("zeta[z]: alpha[a]")


def test_non_json_passes_without_filter_and_drops_with_filter():
    assert format_line("plain text") == "plain text"
    assert format_line("[1, 2]") == "[1, 2]"
    assert format_line("plain text", "sales") is None


def test_service_filter_is_case_insensitive():
    assert format_line(_LINE, "sales-api") == format_line(_LINE)
    assert format_line(_LINE, "SALES-API") == format_line(_LINE)
    assert format_line(_LINE, "auth") is None


def test_missing_header_field_shows_nil():
    line = json.dumps({"service": "S", "time": "t", "level": "INFO", "msg": "m"})
    assert format_line(line).split(": ")[2] == "%!s(<nil>)"


def test_null_document_is_empty_entry():
    out = format_line("null")
    assert out.split(": ")[4] == _DEFAULT_TRACE
    assert format_line("null", "sales") is None


def test_numbers_and_maps_formatting():
    out = format_line(json.dumps({"service": "S", "big": 1000000, "m": {"b": 1, "a": 2}}))
    assert "big[1e+06]" in out
    assert "m[map[a:2 b:1]]" in out


def test_strings_and_lists_round_trip_in_extras():
    out = format_line(json.dumps({"service": "S", "words": ["x", "y"], "note": "hi there"}))
    assert "words[[x y]]" in out
    assert "note[hi there]" in out


def test_main_reads_stdin_and_restores_sigint(monkeypatch, capsys):
    before = signal.getsignal(signal.SIGINT)
    monkeypatch.setattr(sys, "stdin", io.StringIO(_LINE + "\nnot json\r\n"))
    assert main([]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [format_line(_LINE), "not json"]
    assert signal.getsignal(signal.SIGINT) == before


def test_main_with_service_filter(monkeypatch, capsys):
    other = json.dumps({"service": "AUTH", "msg": "x"})
    monkeypatch.setattr(sys, "stdin", io.StringIO(f"{_LINE}\n{other}\ngarbage\n"))
    assert main(["-service", "sales-api"]) == 0
    assert capsys.readouterr().out.splitlines() == [format_line(_LINE)]