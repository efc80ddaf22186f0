# scripts/plot_results.py

import argparse
import csv
import os
from collections import Counter

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

RESULTS_DIR = "results"
METRICS_FILE = "metrics/requests.csv"
LOAD_TEST_FILE = "results/load_test_results.csv"

def read_rows(filepath):
  try:
    with open(filepath, 'r', newline='') as f:
      return list(csv.DictReader(f))
  except FileNotFoundError:
    print(f"Erro: Arquivo '{filepath}' não encontrado.")
    return []

def plot_latency_histogram():
  """Gera um histograma de latências a partir do resultado do teste de carga."""
  latencies = [float(r['latency_ms']) for r in read_rows(LOAD_TEST_FILE) if r['success'].lower() == 'true']
  if not latencies:
    print("Nenhum dado de latência disponível para plotar.")
    return

  avg_latency = sum(latencies) / len(latencies)

  plt.figure(figsize=(10, 6))
  plt.hist(latencies, bins=50, edgecolor='black')
  plt.axvline(avg_latency, color='r', linestyle='dashed', linewidth=2, label=f'Média: {avg_latency:.2f} ms')
  plt.title("Distribuição das Latências de Requisição")
  plt.xlabel("Latência (ms)")
  plt.ylabel("Frequência")
  plt.legend()

  save_figure("latency_histogram.png")

def plot_cache_status():
  """Gráfico de barras com a contagem de HIT, MISS, BYPASS (/d20) e NONE (404)."""
  counts = Counter(r['cache_status'] for r in read_rows(METRICS_FILE))
  if not counts:
    print("Nenhum dado de status de cache disponível para plotar.")
    return

  labels = ["HIT", "MISS", "BYPASS", "NONE"]
  values = [counts.get(label, 0) for label in labels]

  plt.figure(figsize=(8, 6))
  plt.bar(labels, values, color=["tab:green", "tab:red", "tab:blue", "tab:gray"])
  plt.title("Status do Cache por Requisição")
  plt.ylabel("Requisições")

  save_figure("cache_status.png")

def save_figure(name):
  os.makedirs(RESULTS_DIR, exist_ok=True)
  output_path = os.path.join(RESULTS_DIR, name)
  plt.savefig(output_path)
  plt.close()
  print(f"Gráfico salvo em: {output_path}")

if __name__ == "__main__":
  parser = argparse.ArgumentParser(description="Gera gráficos a partir dos resultados de benchmark.")
  parser.add_argument("plot_type", choices=['latency', 'cache'], help="O tipo de gráfico a ser gerado.")

  args = parser.parse_args()

  if args.plot_type == 'latency':
    plot_latency_histogram()
  else:
    plot_cache_status()
