# webserver/httputils.py

import time
from collections import namedtuple

"""
Análise da linha de requisição e montagem das respostas HTTP.
"""

STATUS_MESSAGES = {
  200: "OK",
  404: "NOT FOUND",
}

# Resposta produzida pelo roteador. cache_status é usado só nas métricas.
Response = namedtuple("Response", ["status", "content_type", "body", "cache_status"])


class BadRequestError(Exception):
  """A primeira linha da requisição não tem o formato 'MÉTODO URI PROTOCOLO'."""


def parse_request_line(raw_request):
  """
  Extrai método, URI e protocolo da primeira linha da requisição.
  Os cabeçalhos são ignorados.
  """
  text = raw_request.decode('iso-8859-1')
  first_line = text.split('\n', 1)[0].strip()
  parts = first_line.split()
  if len(parts) != 3:
    raise BadRequestError(f"Linha de requisição inválida: {first_line!r}")

  method, uri, protocol = parts
  return method, uri, protocol

def build_response(status_code, content_type, body):
  """
  Constrói a resposta HTTP completa (linha de status, cabeçalhos e corpo).
  """
  status_text = STATUS_MESSAGES.get(status_code, "Unknown Status")

  headers = {
    "Date": time.asctime(time.localtime()),
    "Connection": "close",
    "Content-Type": content_type,
    "Content-Length": len(body),
  }

  response_line = f"HTTP/1.1 {status_code} {status_text}\r\n"
  headers_str = "".join(f"{k}: {v}\r\n" for k, v in headers.items())
  return f"{response_line}{headers_str}\r\n".encode('iso-8859-1') + body
