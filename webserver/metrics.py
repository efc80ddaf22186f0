# webserver/metrics.py

import csv
import os
import logging
import threading
from datetime import datetime, timezone

"""
Registro das métricas de cada requisição respondida em um arquivo CSV.
É por aqui que os hits do cache ficam visíveis fora do servidor.
"""

HEADER = [
  "timestamp", "client_ip", "method", "path", "status",
  "response_time_ms", "bytes_sent", "cache_status"
]


class MetricsLogger:
  """
  Uma classe thread-safe para registrar métricas de requisições HTTP em um arquivo CSV.
  """

  def __init__(self, filepath):
    """
    Inicializa o logger de métricas.

    Args:
      filepath (str): Caminho do arquivo CSV onde as métricas serão armazenadas.
    """
    self.filepath = filepath
    self._lock = threading.Lock()
    self._initialize_file()

  def _initialize_file(self):
    """Cria o diretório e o arquivo CSV com o cabeçalho, se necessário."""
    with self._lock:
      directory = os.path.dirname(self.filepath)
      if directory:
        os.makedirs(directory, exist_ok=True)

      if not os.path.exists(self.filepath):
        with open(self.filepath, 'w', newline='') as f:
          csv.writer(f).writerow(HEADER)

  def log_request(self, client_ip, method, path, status, response_time_ms, bytes_sent, cache_status):
    """
    Registra uma requisição respondida.

    Args:
      client_ip (str): Endereço IP do cliente.
      method (str): Método HTTP.
      path (str): URI requisitada.
      status (int): Código de status HTTP da resposta.
      response_time_ms (float): Tempo de resposta em milissegundos.
      bytes_sent (int): Tamanho do corpo enviado.
      cache_status (str): "HIT", "MISS", "BYPASS" (/d20) ou "NONE" (404).
    """
    row = [
      datetime.now(timezone.utc).isoformat(), client_ip, method, path, status,
      f"{response_time_ms:.2f}", bytes_sent, cache_status
    ]

    with self._lock:
      try:
        with open(self.filepath, 'a', newline='') as f:
          csv.writer(f).writerow(row)
      except OSError as e:
        logging.error(f"Falha ao escrever no arquivo de métricas {self.filepath}: {e}")
