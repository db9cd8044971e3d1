from warden.analyzers.classifier import Classifier, classify
from warden.core.models import (
    AuthorizedEntry,
    AuthorizedRegistry,
    RunAccumulator,
    ScanRecord,
    Verdict,
)


def _registry(*pairs):
    return AuthorizedRegistry([AuthorizedEntry(bssid=b, ssid=s) for b, s in pairs])


def test_known_bssid_is_authorized_regardless_of_case():
    table = _registry(("aa:bb:cc:dd:ee:ff", "HomeNet"))
    result = classify(ScanRecord(bssid="AA:BB:CC:DD:EE:FF", ssid="HomeNet"), table)
    assert result.verdict is Verdict.AUTHORIZED
    assert result.registered_ssid == "HomeNet"
    assert result.is_authorized


def test_unknown_bssid_is_unauthorized():
    result = classify(ScanRecord(bssid="11:22:33:44:55:66"), _registry())
    assert result.verdict is Verdict.UNAUTHORIZED
    assert result.registered_ssid is None


def test_ssid_mismatch_on_known_bssid_is_still_authorized():
    table = _registry(("aa:bb:cc:dd:ee:ff", "HomeNet"))
    result = classify(ScanRecord(bssid="aa:bb:cc:dd:ee:ff", ssid="Spoofed"), table)
    assert result.verdict is Verdict.AUTHORIZED


def test_plain_mapping_is_accepted():
    result = classify(ScanRecord(bssid="aa:bb:cc:dd:ee:ff"), {"AA-BB-CC-DD-EE-FF": "x"})
    assert result.is_authorized


def test_classify_is_pure():
    table = _registry(("aa:bb:cc:dd:ee:ff", "HomeNet"))
    record = ScanRecord(bssid="11:22:33:44:55:66", ssid="Rogue")
    assert classify(record, table) == classify(record, table)
    assert len(table) == 1


def test_accumulator_counts_and_keeps_scan_order():
    table = _registry(("aa:bb:cc:dd:ee:ff", "HomeNet"))
    acc = RunAccumulator()
    classifier = Classifier(table, acc)

    classifier.classify_all(
        [
            ScanRecord(bssid="11:22:33:44:55:66", ssid="B", last_seen="2 ms ago"),
            ScanRecord(bssid="aa:bb:cc:dd:ee:ff", ssid="HomeNet"),
            ScanRecord(bssid="11:22:33:44:55:01", ssid="A"),
        ]
    )

    assert acc.counters.known_count == 1
    assert acc.counters.new_count == 2
    assert acc.counters.processed_count == 3
    assert [ap.ssid for ap in acc.unauthorized] == ["B", "A"]
    assert acc.unauthorized[0].last_seen == "2 ms ago"


def test_repeated_rogue_is_reported_per_occurrence():
    classifier = Classifier(_registry())
    record = ScanRecord(bssid="11:22:33:44:55:66", ssid="Rogue")
    classifier.classify(record)
    classifier.classify(record)
    assert classifier.accumulator.counters.new_count == 2
    assert len(classifier.accumulator.unauthorized) == 2


def test_empty_registry_makes_everything_unauthorized():
    classifier = Classifier(AuthorizedRegistry())
    acc = classifier.classify_all(
        [ScanRecord(bssid="aa:bb:cc:dd:ee:ff"), ScanRecord(bssid="00:11:22:33:44:55")]
    )
    assert acc.counters.known_count == 0
    assert acc.counters.new_count == 2
