# tests/conftest.py

import pytest

INDEX_CONTENT = b"<html><body>Test Content</body></html>"
DOCS_CONTENT = b"<html><body>Docs</body></html>"
NOT_FOUND_CONTENT = b"<html><body>404 Not Found</body></html>"

@pytest.fixture
def site(tmp_path):
  """
  Cria um serverroot e um serverfiles temporários para os testes.
  """
  root = tmp_path / "serverroot"
  files = tmp_path / "serverfiles"
  (root / "docs").mkdir(parents=True)
  files.mkdir()

  (root / "index.html").write_bytes(INDEX_CONTENT)
  (root / "style.css").write_bytes(b"body { color: red; }")
  (root / "docs" / "index.html").write_bytes(DOCS_CONTENT)
  (files / "404.html").write_bytes(NOT_FOUND_CONTENT)
  (tmp_path / "secret.txt").write_bytes(b"top secret")

  return root, files
