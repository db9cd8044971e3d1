import httpx
import pytest

from shared.network import WardenHTTP
from warden.core.errors import MalformedLine, SourceUnavailable
from warden.core.models import AuthorizedEntry, AuthorizedRegistry
from warden.parsers.registry import RegistryLoader, parse_registry_line


# --- parse_registry_line ---


def test_parse_entry_trims_ssid_and_normalises_bssid():
    entry = parse_registry_line("  AA:BB:CC:DD:EE:FF ;  Home Net  ")
    assert entry == AuthorizedEntry(bssid="aa:bb:cc:dd:ee:ff", ssid="Home Net")


def test_ssid_keeps_further_separators():
    entry = parse_registry_line("aa:bb:cc:dd:ee:ff;a;b")
    assert entry.ssid == "a;b"


def test_empty_ssid_is_allowed():
    assert parse_registry_line("aa:bb:cc:dd:ee:ff;").ssid == ""


@pytest.mark.parametrize("line", ["", "   ", "# comment", "   # indented comment"])
def test_blank_and_comment_lines_are_ignored(line):
    assert parse_registry_line(line) is None


@pytest.mark.parametrize(
    "line", ["aa:bb:cc:dd:ee:ff", "not-a-mac;Home", "aa:bb:cc:dd:ee;Home"]
)
def test_malformed_lines_raise(line):
    with pytest.raises(MalformedLine) as info:
        parse_registry_line(line, line_number=7)
    assert info.value.line_number == 7


# --- RegistryLoader ---


def test_load_lines_skips_malformed_and_keeps_first_duplicate():
    loader = RegistryLoader()
    table, lines_read = loader.load_lines(
        [
            "# header",
            "aa:bb:cc:dd:ee:ff;First",
            "garbage",
            "AA-BB-CC-DD-EE-FF;Second",
            "",
            "00:11:22:33:44:55;Other",
        ]
    )
    assert lines_read == 6
    assert dict(table) == {
        "aa:bb:cc:dd:ee:ff": "First",
        "00:11:22:33:44:55": "Other",
    }
    assert loader.stats.malformed == 1
    assert loader.stats.duplicates == 1
    assert loader.stats.ignored == 2
    assert loader.stats.entries == 2


def test_lookup_is_case_and_delimiter_insensitive():
    table, _ = RegistryLoader().load_lines(["AA:BB:CC:DD:EE:FF;HomeNet"])
    assert "aa:bb:cc:dd:ee:ff" in table
    assert "aa-bb-cc-dd-ee-ff" in table
    assert table["AABB.CCDD.EEFF"] == "HomeNet"
    assert 42 not in table


def test_merging_the_same_registry_twice_changes_nothing():
    lines = ["aa:bb:cc:dd:ee:ff;HomeNet", "00:11:22:33:44:55;Lab"]
    table, _ = RegistryLoader().load_lines(lines)
    again, _ = RegistryLoader().load_lines(lines)
    before = dict(table)

    assert table.merge(again) == 0
    assert dict(table) == before


def test_merge_plain_mapping_normalises_keys():
    table = AuthorizedRegistry()
    assert table.merge({"AA-BB-CC-DD-EE-FF": "Home"}) == 1
    assert list(table) == ["aa:bb:cc:dd:ee:ff"]


def test_load_from_file(registry_file):
    loader = RegistryLoader()
    table, lines_read = loader.load(str(registry_file))
    assert lines_read == 4
    assert len(table) == 2
    assert table["aa:bb:cc:dd:ee:ff"] == "HomeNet"


def test_load_crlf_file(tmp_path):
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"aa:bb:cc:dd:ee:ff;HomeNet\r\n")
    table, _ = RegistryLoader().load(str(path))
    assert table["aa:bb:cc:dd:ee:ff"] == "HomeNet"


def test_missing_file_is_source_unavailable(tmp_path):
    with pytest.raises(SourceUnavailable) as info:
        RegistryLoader().load(str(tmp_path / "missing.txt"))
    assert info.value.source.endswith("missing.txt")


def test_empty_file_gives_empty_table(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")
    table, lines_read = RegistryLoader().load(str(path))
    assert len(table) == 0
    assert lines_read == 0


def test_load_from_url(registry_text):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/authorized.txt"
        return httpx.Response(200, text=registry_text)

    with WardenHTTP(transport=httpx.MockTransport(handler)) as http:
        table, lines_read = RegistryLoader(http=http).load(
            "http://registry.example/authorized.txt"
        )
    assert lines_read == 4
    assert set(table) == {"aa:bb:cc:dd:ee:ff", "00:00:00:00:00:01"}


def test_url_failure_is_source_unavailable():
    transport = httpx.MockTransport(lambda request: httpx.Response(404))
    with WardenHTTP(transport=transport, max_retries=0) as http:
        with pytest.raises(SourceUnavailable):
            RegistryLoader(http=http).load("https://registry.example/missing")


def test_byte_order_mark_does_not_hide_first_entry(tmp_path):
    path = tmp_path / "windows.txt"
    path.write_text("aa:bb:cc:dd:ee:ff;Home\n00:11:22:33:44:55;Lab\n", encoding="utf-8-sig")
    loader = RegistryLoader()
    table, _ = loader.load(str(path))
    assert "aa:bb:cc:dd:ee:ff" in table
    assert len(table) == 2
    assert loader.stats.malformed == 0


def test_byte_order_mark_over_url():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=b"\xef\xbb\xbfaa:bb:cc:dd:ee:ff;Home\n",
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )

    with WardenHTTP(transport=httpx.MockTransport(handler)) as http:
        table, _ = RegistryLoader(http=http).load("http://registry.example/list")
    assert table["aa:bb:cc:dd:ee:ff"] == "Home"


def test_configured_encoding_is_used(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes("aa:bb:cc:dd:ee:ff;Café\n".encode("latin-1"))
    table, _ = RegistryLoader(encoding="latin-1").load(str(path))
    assert table["aa:bb:cc:dd:ee:ff"] == "Café"
