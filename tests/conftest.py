import pytest


@pytest.fixture(autouse=True)
def clean_rdns_env(monkeypatch):
    for name in ("RDNS_NAMESERVERS", "RDNS_TIMEOUT", "RDNS_PROGRESS_INTERVAL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_csv(tmp_path):
    def _write(text, name="ips.csv"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write
