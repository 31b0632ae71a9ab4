from statsdsender import __main__ as cli, __version__

import json
import pytest


@pytest.fixture(name="sent")
def fixture_sent(monkeypatch):
    """Capture datagrams instead of sending them"""
    datagrams = []

    class FakeSocket:
        def __init__(self, *args):
            pass

        def sendto(self, data, address):
            datagrams.append((data, address))
            return len(data)

        def close(self):
            pass

    monkeypatch.setattr("socket.socket", FakeSocket)
    return datagrams


def test_increment(sent) -> None:
    assert cli.main(["--host", "127.0.0.1", "increment", "foo"]) == 0
    assert sent == [(b"foo:1|c", ("127.0.0.1", 8125))]


def test_gauge_with_options(sent) -> None:
    args = ["--host", "127.0.0.1", "--port", "9125", "--prefix", "app.", "gauge", "load", "--", "-3"]
    assert cli.main(args) == 0
    assert sent == [(b"app.load:-3|g", ("127.0.0.1", 9125))]


def test_config_file(sent, tmpdir) -> None:
    config_path = str(tmpdir.join("config.json"))
    with open(config_path, "w") as fp:
        json.dump({"statsd": {"address": "127.0.0.1:8200", "prefix": "cfg."}}, fp)
    assert cli.main(["--config", config_path, "timing", "req", "12"]) == 0
    assert cli.main(["--config", config_path, "--port", "8300", "set", "users", "7"]) == 0
    assert sent == [
        (b"cfg.req:12|ms", ("127.0.0.1", 8200)),
        (b"cfg.users:7|s", ("127.0.0.1", 8300)),
    ]


@pytest.mark.parametrize(
    "args",
    [
        ["increment", "foo"],
        ["--host", "127.0.0.1", "count", "foo"],
        ["--host", "127.0.0.1", "increment", "foo", "3"],
        ["--config", "/nonexistent/statsdsender.json", "increment", "foo"],
        ["--host", "127.0.0.1", "--port", "70000", "increment", "foo"],
    ],
)
def test_errors(sent, args) -> None:
    assert cli.main(args) == 1
    assert sent == []


def test_version(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_invalid_address_in_config_file(sent, tmpdir) -> None:
    config_path = str(tmpdir.join("config.json"))
    with open(config_path, "w") as fp:
        json.dump({"statsd": {"address": 8125}}, fp)
    assert cli.main(["--config", config_path, "increment", "x"]) == 1
    assert sent == []
