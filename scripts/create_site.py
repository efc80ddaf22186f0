# scripts/create_site.py

import argparse
import os

"""
Script para criar um site de exemplo (serverroot/ e serverfiles/404.html)
para rodar o servidor localmente.
"""

PAGES = {
  "index.html": "<html><body><h1>Bem-vindo!</h1><a href=\"/d20\">Role um d20</a></body></html>\n",
  "style.css": "body { font-family: sans-serif; }\n",
  "docs/index.html": "<html><body><h1>Documentação</h1></body></html>\n",
}

NOT_FOUND_PAGE = "<html><body><h1>404 Página não encontrada</h1></body></html>\n"

def write_file(path, content):
  os.makedirs(os.path.dirname(path), exist_ok=True)
  with open(path, 'w', encoding='utf-8') as f:
    f.write(content)
  print(f"Arquivo '{path}' criado.")

def create_site(root, files, extra_pages):
  """
  Cria as páginas de exemplo e a página 404 do sistema.

  Args:
    root (str): Diretório dos arquivos estáticos.
    files (str): Diretório dos arquivos do sistema.
    extra_pages (int): Páginas numeradas adicionais, úteis para forçar evictions no cache.
  """
  for name, content in PAGES.items():
    write_file(os.path.join(root, name), content)

  for i in range(extra_pages):
    write_file(os.path.join(root, "pages", f"page{i}.html"), f"<html><body>Página {i}</body></html>\n")

  write_file(os.path.join(files, "404.html"), NOT_FOUND_PAGE)

if __name__ == "__main__":
  parser = argparse.ArgumentParser(description="Cria um site de exemplo para o servidor.")
  parser.add_argument("--root", default="serverroot", help="Diretório dos arquivos estáticos.")
  parser.add_argument("--files", default="serverfiles", help="Diretório dos arquivos do sistema.")
  parser.add_argument("--pages", type=int, default=20, help="Número de páginas extras.")

  args = parser.parse_args()
  create_site(args.root, args.files, args.pages)
