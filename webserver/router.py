# webserver/router.py

import os
import random
import logging

from . import config
from .files import load_file, get_mime_type
from .httputils import Response

"""
Roteamento das requisições: endpoint dinâmico /d20, arquivos estáticos
(com cache) e a página 404.
"""


class MissingSystemFileError(Exception):
  """A página 404 do sistema não pôde ser carregada. Erro fatal."""


class Router:
  """
  Decide como responder cada requisição.

  O cache é recebido no construtor; o roteador nunca cria o seu próprio.
  """

  def __init__(self, cache, server_root=None, server_files=None):
    self.cache = cache
    self.server_root = server_root or config.SERVER_ROOT
    self.server_files = server_files or config.SERVER_FILES

  def handle(self, method, uri):
    """
    Retorna a Response para a requisição, ou None se o método não é suportado
    (nesse caso nada é enviado e a conexão é fechada).
    """
    if method != 'GET':
      logging.info(f"Método não suportado ignorado: {method} {uri}")
      return None

    if uri == '/d20':
      return self.get_d20()

    return self.get_file(uri)

  def get_d20(self):
    """Sorteia um número entre 1 e 20. Nunca passa pelo cache."""
    value = random.randint(1, config.D20_SIDES)
    return Response(200, 'text/plain', str(value).encode('ascii'), "BYPASS")

  def resolve_path(self, uri):
    """
    Converte a URI no caminho do arquivo dentro de server_root.

    O caminho normalizado também é a chave do cache. Retorna None se o
    caminho sair de server_root.
    """
    filepath = os.path.normpath(os.path.join(self.server_root, uri.lstrip('/')))

    # Segurança: Garante que o arquivo está dentro do diretório permitido
    base_dir = os.path.abspath(self.server_root)
    if os.path.commonpath([base_dir, os.path.abspath(filepath)]) != base_dir:
      return None

    return filepath

  def get_file(self, uri):
    """
    Serve um arquivo estático, consultando o cache antes do disco.
    """
    filepath = self.resolve_path(uri)
    if filepath is None:
      logging.info(f"Caminho fora da raiz do servidor: {uri}")
      return self.not_found()

    # --- Etapa 1: Consultar o Cache ---
    entry = self.cache.get(filepath)
    if entry is not None:
      logging.info(f"Cache HIT para o arquivo: {filepath}")
      return Response(200, entry.content_type, entry.content, "HIT")

    # --- Etapa 2: Ler do Disco ---
    filedata = load_file(filepath)
    if filedata is None:
      # Se não encontrou, procura um index.html dentro do diretório
      filepath = os.path.join(filepath, config.INDEX_FILE)
      entry = self.cache.get(filepath)
      if entry is not None:
        logging.info(f"Cache HIT para o arquivo: {filepath}")
        return Response(200, entry.content_type, entry.content, "HIT")

      filedata = load_file(filepath)
      if filedata is None:
        return self.not_found()

    logging.info(f"Cache MISS para o arquivo: {filepath}")

    # --- Etapa 3: Armazenar no Cache ---
    mime_type = get_mime_type(filepath)
    self.cache.put(filepath, mime_type, filedata.data, filedata.size)

    return Response(200, mime_type, filedata.data, "MISS")

  def not_found(self):
    """
    Monta a resposta 404 a partir da página do sistema, lida do disco a cada uso.
    """
    filepath = os.path.join(self.server_files, config.NOT_FOUND_FILE)
    filedata = load_file(filepath)

    if filedata is None:
      raise MissingSystemFileError(f"Página 404 do sistema não encontrada: {filepath}")

    return Response(404, get_mime_type(filepath), filedata.data, "NONE")
