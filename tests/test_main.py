import httpx
import pytest

import main
from snowizard.client import create_client
from snowizard.codecs import WireFormat, get_codec


@pytest.fixture(autouse=True)
def _configure_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SNOWIZARD_HOSTS", "id-1.local:6776")
    monkeypatch.delenv("SNOWIZARD_CONNECT_TIMEOUT", raising=False)
    monkeypatch.delenv("SNOWIZARD_FORMAT", raising=False)


def _patch_transport(monkeypatch: pytest.MonkeyPatch, handler) -> list[str]:
    content_types: list[str] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        content_types.append(request.headers["Content-Type"])
        return handler(request)

    def create_mock_client(hosts, connect_timeout, wire_format):
        return create_client(
            hosts,
            connect_timeout,
            wire_format,
            transport=httpx.MockTransport(recording_handler),
        )

    monkeypatch.setattr(main, "create_client", create_mock_client)
    return content_types


def test_main_prints_one_id_per_format(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        wire_format = WireFormat(request.headers["Content-Type"])
        return httpx.Response(200, content=get_codec(wire_format).encode(100))

    content_types = _patch_transport(monkeypatch, handler)
    main.main()

    assert capsys.readouterr().out.splitlines() == ["100", "100", "100"]
    assert content_types == [member.content_type for member in WireFormat]


def test_main_exits_non_zero_when_no_server_answers(monkeypatch: pytest.MonkeyPatch) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    _patch_transport(monkeypatch, handler)
    with pytest.raises(SystemExit) as exc:
        main.main()
    assert exc.value.code == 1
