# scripts/analyze_metrics.py

import argparse
import csv
from collections import Counter

METRICS_FILE = "metrics/requests.csv"

def summarize(records):
  """
  Calcula o resumo das métricas do servidor.

  Requisições ao /d20 (BYPASS) e respostas 404 (NONE) não entram na taxa de acerto.
  """
  latencies = [float(r['response_time_ms']) for r in records]
  cache_statuses = Counter(r['cache_status'] for r in records)

  hits = cache_statuses.get("HIT", 0)
  misses = cache_statuses.get("MISS", 0)
  lookups = hits + misses

  return {
    "total_requests": len(records),
    "status_counts": Counter(r['status'] for r in records),
    "avg_latency_ms": sum(latencies) / len(latencies) if latencies else 0.0,
    "max_latency_ms": max(latencies, default=0.0),
    "cache_hits": hits,
    "cache_misses": misses,
    "bypass": cache_statuses.get("BYPASS", 0),
    "hit_rate": (hits / lookups * 100) if lookups else 0.0,
    "total_bytes": sum(int(r['bytes_sent']) for r in records),
  }

def analyze_metrics(filepath):
  """
  Lê o arquivo de métricas e imprime um resumo das estatísticas.
  """
  try:
    with open(filepath, 'r', newline='') as f:
      records = list(csv.DictReader(f))
  except FileNotFoundError:
    print(f"Erro: Arquivo de métricas '{filepath}' não encontrado.")
    return

  if not records:
    print("Nenhum registro de métricas encontrado.")
    return

  summary = summarize(records)

  print("--- Análise de Métricas do Servidor ---")
  print(f"\nTotal de Requisições: {summary['total_requests']}")

  print("\nLatência (Tempo de Resposta):")
  print(f"  - Média: {summary['avg_latency_ms']:.2f} ms")
  print(f"  - Máxima: {summary['max_latency_ms']:.2f} ms")

  print("\nStatus das Respostas:")
  for status, count in summary['status_counts'].items():
    print(f"  - {status}: {count} requisições")

  print("\nDesempenho do Cache:")
  print(f"  - Hits: {summary['cache_hits']}")
  print(f"  - Misses: {summary['cache_misses']}")
  print(f"  - Sem cache (/d20): {summary['bypass']}")
  print(f"  - Taxa de Acerto (Hit Rate): {summary['hit_rate']:.2f}%")

  print(f"\nTotal de Bytes Enviados: {summary['total_bytes']}")
  print("\n------------------------------------")


if __name__ == "__main__":
  parser = argparse.ArgumentParser(description="Resumo do arquivo de métricas do servidor.")
  parser.add_argument("--file", default=METRICS_FILE, help="Arquivo CSV de métricas.")
  analyze_metrics(parser.parse_args().file)
