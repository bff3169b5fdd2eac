"""Tests for the proxy process supervisor."""

import socket

import pytest
import respx
from httpx import Response

from mobproxy.client import Client
from mobproxy.exceptions import ServerStateError, StartupTimeoutError
from mobproxy.server import Server, is_listening
from mobproxy.server.process import PROBE_ATTEMPTS


class TestServerStart:
    """Test launching the proxy executable."""

    def test_start_passes_port_argument(self, spawned, probe, sleeps):
        probe([True])
        server = Server("/opt/bmp/bin/browsermob-proxy", 9090)

        server.start()

        assert spawned[0].args == ["/opt/bmp/bin/browsermob-proxy", "--port=9090"]
        assert server.process is spawned[0]

    def test_start_with_port_zero_passes_no_argument(self, spawned, probe, sleeps):
        probe([True])
        server = Server("browsermob-proxy", 0)

        server.start()

        assert spawned[0].args == ["browsermob-proxy"]

    def test_default_port_is_8080(self):
        server = Server("browsermob-proxy")
        assert server.port == 8080
        assert server.url == "http://localhost:8080"

    def test_start_waits_until_listening(self, spawned, probe, sleeps):
        probed = probe([False, False, True])
        server = Server("browsermob-proxy", 9090)

        server.start()

        assert probed == [("localhost", 9090)] * 3
        assert sleeps == [1.0, 1.0]
        assert server.is_running

    def test_start_times_out_after_thirty_attempts(self, spawned, probe, sleeps):
        probed = probe([])
        server = Server("browsermob-proxy", 9090)

        with pytest.raises(StartupTimeoutError) as exc_info:
            server.start()

        assert exc_info.value.attempts == PROBE_ATTEMPTS == 30
        assert exc_info.value.port == 9090
        assert len(probed) == 30
        assert sleeps == [1.0] * 30
        assert spawned[0].terminated
        assert server.process is None

    def test_probe_error_releases_process(self, spawned, monkeypatch, sleeps):
        def broken_probe(host, port):
            raise RuntimeError("probe exploded")

        monkeypatch.setattr("mobproxy.server.process.is_listening", broken_probe)
        server = Server("browsermob-proxy", 9090)

        with pytest.raises(RuntimeError, match="probe exploded"):
            server.start()

        assert spawned[0].terminated
        assert server.process is None

    def test_spawn_error_propagates(self, monkeypatch):
        def missing_executable(args, *_, **__):
            raise FileNotFoundError(args[0])

        monkeypatch.setattr("mobproxy.server.process.subprocess.Popen", missing_executable)
        server = Server("/nope/browsermob-proxy", 9090)

        with pytest.raises(FileNotFoundError):
            server.start()

        assert server.process is None

    def test_start_twice_is_rejected(self, spawned, probe, sleeps):
        probe([True, True])
        server = Server("browsermob-proxy", 9090)
        server.start()

        with pytest.raises(ServerStateError):
            server.start()

        assert len(spawned) == 1
        assert not spawned[0].terminated


class TestServerStop:
    """Test terminating the proxy executable."""

    def test_stop_before_start_is_noop(self):
        server = Server("browsermob-proxy", 9090)
        server.stop()
        assert server.process is None

    def test_stop_terminates_running_process(self, spawned, probe, sleeps):
        probe([True])
        server = Server("browsermob-proxy", 9090)
        server.start()

        server.stop()

        assert spawned[0].terminated
        assert not spawned[0].killed
        assert server.process is None
        assert not server.is_running

    def test_stop_is_idempotent(self, spawned, probe, sleeps):
        probe([True])
        server = Server("browsermob-proxy", 9090)
        server.start()

        server.stop()
        server.stop()

        assert server.process is None

    def test_stop_after_process_exited(self, spawned, probe, sleeps):
        probe([True])
        server = Server("browsermob-proxy", 9090)
        server.start()
        spawned[0].returncode = 1

        server.stop()

        assert not spawned[0].terminated
        assert server.process is None

    def test_stop_kills_process_that_ignores_terminate(self, spawned, probe, sleeps):
        probe([True])
        server = Server("browsermob-proxy", 9090)
        server.start()
        spawned[0].exits_on_terminate = False

        server.stop()

        assert spawned[0].terminated
        assert spawned[0].killed

    def test_restart_after_stop(self, spawned, probe, sleeps):
        probe([True, True])
        server = Server("browsermob-proxy", 9090)
        server.start()
        server.stop()

        server.start()

        assert len(spawned) == 2
        assert server.process is spawned[1]

    def test_context_manager_starts_and_stops(self, spawned, probe, sleeps):
        probe([True])

        with Server("browsermob-proxy", 9090) as server:
            assert server.is_running

        assert spawned[0].terminated
        assert server.process is None


class TestCreateProxy:
    """Test provisioning a client from the server."""

    @respx.mock
    def test_create_proxy_binds_client_to_server_url(self, spawned, probe, sleeps):
        probe([True])
        route = respx.post("http://localhost:9090/proxy").mock(
            return_value=Response(200, json={"port": 9091})
        )
        server = Server("browsermob-proxy", 9090)
        server.start()

        proxy = server.create_proxy()

        assert isinstance(proxy, Client)
        assert route.called
        assert proxy.url == server.url
        assert proxy.port == 9091
        assert proxy.selenium_proxy == "localhost:9091"

    @respx.mock
    def test_create_proxy_forwards_settings(self, spawned, probe, sleeps):
        probe([True])
        route = respx.post("http://localhost:9090/proxy").mock(
            return_value=Response(200, json={"port": 9200})
        )
        server = Server("browsermob-proxy", 9090)
        server.start()

        server.create_proxy("port=9200")

        assert route.calls.last.request.content == b"port=9200"


class TestIsListening:
    """Test the TCP readiness probe against real sockets."""

    def test_listening_socket_is_detected(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
            listener.bind(("127.0.0.1", 0))
            listener.listen(1)
            port = listener.getsockname()[1]

            assert is_listening("127.0.0.1", port, timeout=2.0)

    def test_closed_port_is_not_listening(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
            listener.bind(("127.0.0.1", 0))
            port = listener.getsockname()[1]

        assert not is_listening("127.0.0.1", port, timeout=2.0)
