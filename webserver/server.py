# webserver/server.py

import socket
import os
import sys
import logging
import argparse
from time import time

# Importa as configurações
from . import config

from .cache import LRUCache
from .httputils import BadRequestError, build_response, parse_request_line
from .metrics import MetricsLogger
from .router import MissingSystemFileError, Router

# Intervalo em que o loop de accept verifica se deve parar
ACCEPT_POLL_INTERVAL = 0.5


def configure_logging(log_file=None):
  """
  Configura o logging para arquivo e console.
  """
  log_file = log_file or config.LOG_FILE
  # Garante que o diretório de logs existe
  log_dir = os.path.dirname(log_file)
  if log_dir:
    os.makedirs(log_dir, exist_ok=True)

  logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(message)s',
    handlers=[
      logging.FileHandler(log_file),
      logging.StreamHandler(sys.stdout)  # Também exibe logs no console
    ]
  )


class WebServer:
  """
  Servidor HTTP que atende uma conexão de cada vez.

  Cada conexão é lida, roteada e respondida por completo antes da próxima
  ser aceita.
  """

  def __init__(self, host, port, router, metrics=None):
    self.host = host
    self.port = port
    self.router = router
    self.metrics = metrics
    self.server_socket = None
    self._running = False

  @property
  def server_address(self):
    """Endereço (host, porta) efetivamente usado pelo socket."""
    return self.server_socket.getsockname()[:2]

  def start(self):
    """Cria o socket, faz o bind e começa a escutar. Propaga OSError."""
    # Cria um socket TCP/IP
    self.server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    # Permite reutilizar o endereço para evitar erro "Address already in use"
    self.server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
      self.server_socket.bind((self.host, self.port))
      self.server_socket.listen(config.MAX_CONNECTIONS)
    except OSError:
      self.server_socket.close()
      raise

    self.server_socket.settimeout(ACCEPT_POLL_INTERVAL)
    host, port = self.server_address
    logging.info(f"Servidor escutando em http://{host}:{port}")

  def serve_forever(self):
    """
    Loop principal: aceita conexões e responde uma por vez.
    MissingSystemFileError interrompe o loop e é propagada.
    """
    self._running = True
    try:
      while self._running:
        try:
          client_socket, client_address = self.server_socket.accept()
        except socket.timeout:
          continue
        except OSError as e:
          if not self._running:
            break
          logging.error(f"Erro no accept: {e}")
          continue

        logging.info(f"Conexão aceita de {client_address[0]}:{client_address[1]}")
        self.handle_connection(client_socket, client_address)
    finally:
      self._running = False

  def shutdown(self):
    """Para o loop de accept e fecha o socket."""
    self._running = False
    if self.server_socket is not None:
      self.server_socket.close()

  def handle_connection(self, client_socket, client_address):
    """
    Lê a requisição, gera a resposta e fecha a conexão.

    Falhas de I/O apenas abandonam a conexão.
    """
    start_time = time()
    # Limita o tempo que um cliente pode levar para enviar a requisição
    client_socket.settimeout(config.READ_TIMEOUT)

    try:
      request_data = client_socket.recv(config.RECV_BUFFER_SIZE)
      if not request_data:
        # Cliente fechou a conexão
        return

      method, uri, _ = parse_request_line(request_data)
      response = self.router.handle(method, uri)
      if response is None:
        return

      client_socket.sendall(build_response(response.status, response.content_type, response.body))

      if self.metrics is not None:
        self.metrics.log_request(
          client_ip=client_address[0],
          method=method,
          path=uri,
          status=response.status,
          response_time_ms=(time() - start_time) * 1000,
          bytes_sent=len(response.body),
          cache_status=response.cache_status
        )

    except BadRequestError as e:
      logging.info(f"Requisição inválida de {client_address[0]}: {e}")
    except socket.timeout:
      logging.info(f"Conexão com {client_address[0]} expirou (timeout).")
    except OSError as e:
      logging.error(f"Erro de I/O com o cliente {client_address[0]}: {e}")
    finally:
      client_socket.close()


def build_parser():
  parser = argparse.ArgumentParser(description="Servidor HTTP de arquivos estáticos com cache LRU")
  parser.add_argument('--host', default=config.HOST,
                      help=f"Endereço para escutar (padrão: {config.HOST})")
  parser.add_argument('--port', type=int, default=config.PORT,
                      help=f"Porta para o servidor escutar (padrão: {config.PORT})")
  parser.add_argument('--root', default=config.SERVER_ROOT,
                      help=f"Diretório dos arquivos estáticos (padrão: {config.SERVER_ROOT})")
  parser.add_argument('--files', default=config.SERVER_FILES,
                      help=f"Diretório dos arquivos do sistema (padrão: {config.SERVER_FILES})")
  parser.add_argument('--cache-capacity', type=int, default=config.CACHE_CAPACITY,
                      help=f"Número máximo de arquivos em cache (padrão: {config.CACHE_CAPACITY})")
  return parser


def main(argv=None):
  """
  Função principal que inicia o servidor.
  """
  parser = build_parser()
  args = parser.parse_args(argv)
  configure_logging()

  try:
    cache = LRUCache(args.cache_capacity)
  except ValueError as e:
    parser.error(str(e))

  router = Router(cache, server_root=args.root, server_files=args.files)
  server = WebServer(args.host, args.port, router, MetricsLogger(config.METRICS_CSV_FILE))

  try:
    server.start()
  except OSError as e:
    logging.error(f"Erro ao iniciar o servidor: {e}. A porta {args.port} já está em uso?")
    sys.exit(config.EXIT_LISTENER_FAILURE)

  logging.info("Pressione Ctrl+C para encerrar.")
  try:
    server.serve_forever()
  except MissingSystemFileError as e:
    logging.critical(str(e))
    sys.exit(config.EXIT_MISSING_404)
  except KeyboardInterrupt:
    logging.info("Servidor encerrado pelo usuário.")
  finally:
    server.shutdown()


if __name__ == "__main__":
  main()
