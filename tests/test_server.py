# tests/test_server.py

import csv
import socket
import threading
import pytest
import requests

from webserver import config
from webserver import server as server_module
from webserver.cache import LRUCache
from webserver.metrics import MetricsLogger
from webserver.router import MissingSystemFileError, Router
from webserver.server import WebServer
from conftest import INDEX_CONTENT, NOT_FOUND_CONTENT

@pytest.fixture
def running_server(site, tmp_path):
  """
  Inicia o servidor em uma thread separada, em uma porta livre.
  """
  root, files = site
  metrics = MetricsLogger(str(tmp_path / "metrics" / "requests.csv"))
  router = Router(LRUCache(config.CACHE_CAPACITY), server_root=str(root), server_files=str(files))
  server = WebServer("127.0.0.1", 0, router, metrics)
  server.start()

  thread = threading.Thread(target=server.serve_forever, daemon=True)
  thread.start()

  host, port = server.server_address
  yield server, f"http://{host}:{port}"

  server.shutdown()
  thread.join(timeout=5)

def raw_request(base_url, payload):
  """Envia bytes crus e devolve tudo o que o servidor responder."""
  host, port = base_url.rsplit("//", 1)[1].split(":")
  with socket.create_connection((host, int(port)), timeout=5) as sock:
    sock.sendall(payload)
    chunks = []
    while True:
      chunk = sock.recv(4096)
      if not chunk:
        break
      chunks.append(chunk)
  return b"".join(chunks)

def test_d20_endpoint(running_server):
  _, base = running_server
  for _ in range(2):
    response = requests.get(f"{base}/d20", timeout=5)
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/plain"
    assert 1 <= int(response.text) <= 20

def test_static_file_is_served_and_cached(running_server):
  server, base = running_server

  r1 = requests.get(f"{base}/index.html", timeout=5)
  r2 = requests.get(f"{base}/index.html", timeout=5)

  assert r1.status_code == r2.status_code == 200
  assert r1.headers["Content-Type"] == "text/html"
  assert r1.headers["Content-Length"] == str(len(INDEX_CONTENT))
  assert r1.headers["Connection"] == "close"
  assert r1.content == r2.content == INDEX_CONTENT
  assert server.router.cache.stats()['hits'] == 1

  # O servidor só aceita a próxima conexão depois de registrar a anterior
  requests.get(f"{base}/d20", timeout=5)

  # O hit só é visível pelas métricas
  with open(server.metrics.filepath, newline='') as f:
    rows = list(csv.DictReader(f))
  assert [row['cache_status'] for row in rows[:2]] == ["MISS", "HIT"]
  assert rows[0]['status'] == "200"

def test_missing_file_returns_404_document(running_server):
  _, base = running_server
  response = requests.get(f"{base}/does-not-exist", timeout=5)
  assert response.status_code == 404
  assert response.content == NOT_FOUND_CONTENT

def test_response_framing_uses_crlf(running_server):
  _, base = running_server
  data = raw_request(base, b"GET /index.html HTTP/1.1\r\nHost: localhost\r\n\r\n")

  head, body = data.split(b"\r\n\r\n", 1)
  lines = head.split(b"\r\n")
  assert lines[0] == b"HTTP/1.1 200 OK"
  assert lines[1].startswith(b"Date: ")
  assert b"Content-Length: %d" % len(INDEX_CONTENT) in lines
  assert body == INDEX_CONTENT

def test_non_get_closes_without_response(running_server):
  _, base = running_server
  assert raw_request(base, b"POST /index.html HTTP/1.1\r\n\r\n") == b""

def test_malformed_request_is_dropped_and_server_continues(running_server):
  _, base = running_server
  assert raw_request(base, b"garbage\r\n\r\n") == b""

  response = requests.get(f"{base}/d20", timeout=5)
  assert response.status_code == 200

def test_missing_404_document_stops_server(site, tmp_path):
  root, _ = site
  router = Router(LRUCache(2), server_root=str(root), server_files=str(tmp_path / "nope"))
  server = WebServer("127.0.0.1", 0, router)
  server.start()
  errors = []

  def run():
    try:
      server.serve_forever()
    except Exception as e:
      errors.append(e)

  thread = threading.Thread(target=run, daemon=True)
  thread.start()
  host, port = server.server_address

  assert raw_request(f"http://{host}:{port}", b"GET /missing HTTP/1.1\r\n\r\n") == b""
  thread.join(timeout=5)
  server.shutdown()

  assert len(errors) == 1
  assert isinstance(errors[0], MissingSystemFileError)

def test_main_exits_with_listener_failure(monkeypatch, tmp_path):
  monkeypatch.setattr(config, "LOG_FILE", str(tmp_path / "logs" / "server.log"))
  monkeypatch.setattr(config, "METRICS_CSV_FILE", str(tmp_path / "metrics.csv"))

  # Ocupa uma porta para forçar o erro de bind
  busy = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
  busy.bind(("127.0.0.1", 0))
  busy.listen(1)
  port = busy.getsockname()[1]

  try:
    with pytest.raises(SystemExit) as exc_info:
      server_module.main(["--host", "127.0.0.1", "--port", str(port)])
  finally:
    busy.close()

  assert exc_info.value.code == config.EXIT_LISTENER_FAILURE

def test_main_rejects_zero_capacity(monkeypatch, tmp_path):
  monkeypatch.setattr(config, "LOG_FILE", str(tmp_path / "logs" / "server.log"))
  with pytest.raises(SystemExit) as exc_info:
    server_module.main(["--cache-capacity", "0"])
  assert exc_info.value.code == 2

def test_main_exits_when_404_document_is_missing(monkeypatch, site, tmp_path):
  root, _ = site
  monkeypatch.setattr(config, "LOG_FILE", str(tmp_path / "logs" / "server.log"))
  monkeypatch.setattr(config, "METRICS_CSV_FILE", str(tmp_path / "metrics.csv"))

  started = threading.Event()
  bound = {}
  real_start = WebServer.start

  def start_and_signal(self):
    real_start(self)
    bound["port"] = self.server_address[1]
    started.set()

  monkeypatch.setattr(WebServer, "start", start_and_signal)

  result = {}

  def run():
    try:
      server_module.main(["--host", "127.0.0.1", "--port", "0", "--root", str(root),
                          "--files", str(tmp_path / "nope")])
    except SystemExit as e:
      result["code"] = e.code

  thread = threading.Thread(target=run, daemon=True)
  thread.start()
  assert started.wait(timeout=5)

  raw_request(f"http://127.0.0.1:{bound['port']}", b"GET /missing HTTP/1.1\r\n\r\n")
  thread.join(timeout=5)

  assert result["code"] == config.EXIT_MISSING_404
