import pytest

from warden.core.errors import MalformedLine
from warden.parsers.scan_dump import ParserState, ScanDumpParser, match_header


def _parse(text):
    parser = ScanDumpParser()
    return parser, list(parser.parse(text.splitlines()))


# --- match_header ---


def test_header_strips_interface_suffix():
    assert match_header("BSS aa:bb:cc:dd:ee:ff(on wlan0) -- associated") == "aa:bb:cc:dd:ee:ff"


def test_indented_bss_line_is_not_a_header():
    assert match_header("\tBSS Load:") is None


def test_header_with_invalid_address_is_malformed():
    with pytest.raises(MalformedLine):
        match_header("BSS Load:")


# --- ScanDumpParser ---


def test_two_records_with_fields(scan_dump_text):
    parser, records = _parse(scan_dump_text)

    assert [r.bssid for r in records] == ["aa:bb:cc:dd:ee:ff", "11:22:33:44:55:66"]
    assert records[0].ssid == "HomeNet"
    assert records[0].last_seen == "10 ms ago"
    assert records[1].ssid == "EvilTwin"
    assert records[1].last_seen == "1520 ms ago"
    assert parser.lines_processed == len(scan_dump_text.splitlines())
    assert parser.skipped_lines == 0
    assert parser.state is ParserState.OUTSIDE


def test_details_hold_the_verbatim_block(scan_dump_text):
    _, records = _parse(scan_dump_text)
    assert records[0].details.splitlines()[0].startswith("BSS aa:bb:cc:dd:ee:ff")
    assert "\t\t * station count: 2" in records[0].details
    assert "EvilTwin" not in records[0].details


def test_trailing_record_is_emitted_at_end_of_input():
    _, records = _parse("BSS 00:11:22:33:44:55(on wlan0)\n\tSSID: Last")
    assert len(records) == 1
    assert records[0].ssid == "Last"


def test_header_only_record_has_empty_fields():
    _, records = _parse("BSS 00:11:22:33:44:55(on wlan0)")
    assert records[0].ssid == ""
    assert records[0].last_seen == ""


def test_lines_before_first_header_are_skipped():
    parser, records = _parse(
        "Scanning wlan0...\n\n\tSSID: Stray\nBSS 00:11:22:33:44:55(on wlan0)\n\tSSID: Real"
    )
    assert parser.skipped_lines == 3
    assert parser.lines_processed == 5
    assert [r.ssid for r in records] == ["Real"]


def test_empty_input():
    parser, records = _parse("")
    assert records == []
    assert parser.lines_processed == 0
    assert parser.finish() is None


def test_malformed_header_inside_record_is_body_text():
    parser, records = _parse(
        "BSS 00:11:22:33:44:55(on wlan0)\nBSS Load:\n\tSSID: Net"
    )
    assert len(records) == 1
    assert "BSS Load:" in records[0].details
    assert records[0].ssid == "Net"
    assert parser.malformed_headers == 1


def test_later_ssid_line_wins():
    _, records = _parse(
        "BSS 00:11:22:33:44:55(on wlan0)\n\tSSID: First\n\tSSID: Second"
    )
    assert records[0].ssid == "Second"


def test_hidden_network_has_empty_ssid():
    _, records = _parse("BSS 00:11:22:33:44:55(on wlan0)\n\tSSID: ")
    assert records[0].ssid == ""


def test_ssid_keeps_inner_spaces():
    _, records = _parse("BSS 00:11:22:33:44:55(on wlan0)\n\tSSID: Coffee Shop Guest")
    assert records[0].ssid == "Coffee Shop Guest"


def test_crlf_line_endings():
    parser = ScanDumpParser()
    records = list(
        parser.parse(["BSS 00:11:22:33:44:55(on wlan0)\r\n", "\tSSID: Net\r\n"])
    )
    assert records[0].ssid == "Net"
    assert records[0].bssid == "00:11:22:33:44:55"


def test_feed_returns_previous_record_on_new_header():
    parser = ScanDumpParser()
    assert parser.feed("BSS 00:11:22:33:44:55(on wlan0)") is None
    assert parser.state is ParserState.IN_RECORD
    closed = parser.feed("BSS 00:11:22:33:44:66(on wlan0)")
    assert closed.bssid == "00:11:22:33:44:55"
    assert parser.finish().bssid == "00:11:22:33:44:66"
    assert parser.records_emitted == 2


def test_parser_is_lazy():
    """Records are yielded while the input is still being consumed."""
    consumed = []

    def lines():
        for line in ["BSS 00:11:22:33:44:55(on wlan0)", "BSS 00:11:22:33:44:66(on wlan0)", "x"]:
            consumed.append(line)
            yield line

    first = next(ScanDumpParser().parse(lines()))
    assert first.bssid == "00:11:22:33:44:55"
    assert len(consumed) == 2


def test_later_last_seen_line_wins_regardless_of_case():
    _, records = _parse(
        "BSS 00:11:22:33:44:55(on wlan0)\n\tlast seen: 10 ms ago\n\tLast Seen: 20 ms ago"
    )
    assert records[0].last_seen == "20 ms ago"
