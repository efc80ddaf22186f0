# webserver/files.py

import os
from collections import namedtuple

"""
Leitura de arquivos do disco e resolução de tipos MIME.
"""

FileData = namedtuple("FileData", ["data", "size"])

DEFAULT_MIME_TYPE = 'application/octet-stream'

# --- Mapeamento de Tipos MIME ---
MIME_TYPES = {
  '.html': 'text/html',
  '.htm': 'text/html',
  '.css': 'text/css',
  '.js': 'application/javascript',
  '.json': 'application/json',
  '.xml': 'application/xml',
  '.txt': 'text/plain',
  '.jpg': 'image/jpeg',
  '.jpeg': 'image/jpeg',
  '.png': 'image/png',
  '.gif': 'image/gif',
  '.ico': 'image/x-icon',
  '.svg': 'image/svg+xml',
  '.webp': 'image/webp',
  '.pdf': 'application/pdf',
  '.wasm': 'application/wasm',
}

def get_mime_type(filepath):
  """
  Retorna o tipo MIME com base na extensão do arquivo.
  """
  _, ext = os.path.splitext(filepath)
  return MIME_TYPES.get(ext.lower(), DEFAULT_MIME_TYPE)

def load_file(filepath):
  """
  Lê um arquivo inteiro do disco.

  Retorna um FileData com o conteúdo e o tamanho, ou None se o arquivo não
  existir, for um diretório ou não puder ser lido.
  """
  if not os.path.isfile(filepath):
    return None

  try:
    with open(filepath, 'rb') as f:
      data = f.read()
  except OSError:
    return None

  return FileData(data, len(data))
