# webserver/cache.py

import threading
from collections import namedtuple

"""
Módulo que implementa o cache de conteúdo do servidor: um cache LRU
(Least Recently Used) em memória, thread-safe, limitado pelo número de
arquivos armazenados.
"""

# Entrada do cache. Imutável: os bytes são reutilizados como corpo da resposta.
CacheEntry = namedtuple("CacheEntry", ["key", "content_type", "content", "size"])


class _CacheNode:
  """Nó interno para a lista duplamente encadeada que gerencia a ordem LRU."""
  __slots__ = ("key", "entry", "prev", "next")

  def __init__(self, key, entry):
    self.key = key
    self.entry = entry
    self.prev = None
    self.next = None


class LRUCache:
  """
  Cache LRU de conteúdo, indexado pelo caminho do arquivo.

  Combina um dicionário para acesso O(1) e uma lista duplamente encadeada
  para manter a ordem de uso (head = mais recente, tail = menos recente).
  Quando o cache está cheio, o item menos recentemente usado é removido
  antes de inserir um novo.
  """

  def __init__(self, capacity):
    # bool é subclasse de int, mas True não é uma capacidade válida
    if not isinstance(capacity, int) or isinstance(capacity, bool):
      raise ValueError(f"Capacidade do cache deve ser um inteiro, recebido: {capacity!r}")
    if capacity < 1:
      raise ValueError(f"Capacidade do cache deve ser >= 1, recebido: {capacity}")

    self._capacity = capacity
    self._index = {}
    self._lock = threading.Lock()

    # Nós sentinela (dummy) para simplificar a lógica da lista
    self._head = _CacheNode(None, None)  # Lado do mais recentemente usado
    self._tail = _CacheNode(None, None)  # Lado do menos recentemente usado
    self._head.next = self._tail
    self._tail.prev = self._head

    # Estatísticas
    self._hits = 0
    self._misses = 0
    self._evictions = 0

  # --- Métodos Privados para Gerenciar a Lista Encadeada ---

  def _unlink(self, node):
    node.prev.next = node.next
    node.next.prev = node.prev

  def _push_front(self, node):
    """Coloca o nó logo após o head (mais recentemente usado)."""
    node.next = self._head.next
    node.prev = self._head
    self._head.next.prev = node
    self._head.next = node

  def _evict_lru(self):
    """Remove o nó menos recentemente usado (tail.prev) da lista e do índice."""
    lru_node = self._tail.prev
    self._unlink(lru_node)
    del self._index[lru_node.key]
    self._evictions += 1

  # --- Métodos Públicos do Cache ---

  @property
  def capacity(self):
    return self._capacity

  def get(self, key):
    """
    Recupera uma entrada do cache.

    Em caso de hit a entrada passa a ser a mais recentemente usada.
    Em caso de miss retorna None e a ordem do cache não muda.
    """
    with self._lock:
      node = self._index.get(key)

      if node is None:
        self._misses += 1
        return None  # Cache miss

      # Move o nó para a frente (mais recentemente usado)
      self._unlink(node)
      self._push_front(node)

      self._hits += 1
      return node.entry  # Cache hit

  def put(self, key, content_type, content, size):
    """
    Adiciona ou atualiza uma entrada no cache, aplicando a política LRU.

    Args:
      key (str): Caminho do arquivo, usado como chave.
      content_type (str): Tipo MIME do conteúdo.
      content (bytes): Conteúdo completo do arquivo.
      size (int): Tamanho do conteúdo, deve ser igual a len(content).
    """
    if size != len(content):
      raise ValueError(f"Tamanho informado ({size}) difere do conteúdo ({len(content)} bytes)")

    # Copia buffers mutáveis: o cache é dono dos bytes a partir daqui
    entry = CacheEntry(key, content_type, bytes(content), size)

    with self._lock:
      node = self._index.get(key)

      # Se a chave já existe, sobrescreve no lugar e promove
      if node is not None:
        node.entry = entry
        self._unlink(node)
        self._push_front(node)
        return

      # Cache cheio: remove o menos recentemente usado antes de inserir
      if len(self._index) >= self._capacity:
        self._evict_lru()

      new_node = _CacheNode(key, entry)
      self._index[key] = new_node
      self._push_front(new_node)

  def keys(self):
    """Retorna as chaves em ordem de uso, da mais recente para a menos recente."""
    with self._lock:
      result = []
      node = self._head.next
      while node is not self._tail:
        result.append(node.key)
        node = node.next
      return result

  def __len__(self):
    with self._lock:
      return len(self._index)

  def __contains__(self, key):
    # Não altera a ordem LRU
    with self._lock:
      return key in self._index

  def stats(self):
    """Retorna estatísticas do cache."""
    with self._lock:
      return {
        "hits": self._hits,
        "misses": self._misses,
        "evictions": self._evictions,
        "current_items": len(self._index),
        "capacity": self._capacity
      }
