import pytest

from shared.console import WardenConsole


SCAN_DUMP = """\
BSS aa:bb:cc:dd:ee:ff(on wlan0) -- associated
\tTSF: 1146385213 usec (0d, 00:19:06)
\tfreq: 2437
\tbeacon interval: 100 TUs
\tsignal: -41.00 dBm
\tlast seen: 10 ms ago
\tSSID: HomeNet
\tBSS Load:
\t\t * station count: 2
BSS 11:22:33:44:55:66(on wlan0)
\tfreq: 2412
\tlast seen: 1520 ms ago
\tSSID: EvilTwin
"""

REGISTRY = """\
# authorized access points
AA:BB:CC:DD:EE:FF;HomeNet

00:00:00:00:00:01;Lab
"""


@pytest.fixture
def scan_dump_text():
    return SCAN_DUMP


@pytest.fixture
def registry_text():
    return REGISTRY


@pytest.fixture
def scan_file(tmp_path):
    path = tmp_path / "scan.txt"
    path.write_text(SCAN_DUMP, encoding="utf-8")
    return path


@pytest.fixture
def registry_file(tmp_path):
    path = tmp_path / "authorized.txt"
    path.write_text(REGISTRY, encoding="utf-8")
    return path


@pytest.fixture
def quiet_console():
    return WardenConsole(quiet=True)


@pytest.fixture
def recording_console():
    return WardenConsole(record=True)
