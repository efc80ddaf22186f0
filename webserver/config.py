# webserver/config.py

"""
Arquivo de configuração central para o servidor HTTP.
"""

# Configurações de Rede
HOST = "0.0.0.0"                # Escuta em todas as interfaces de rede
PORT = 3490                     # Porta padrão
MAX_CONNECTIONS = 10            # Número máximo de conexões enfileiradas no socket
READ_TIMEOUT = 5                # Segundos que o servidor aguarda a requisição do cliente
RECV_BUFFER_SIZE = 65536        # Tamanho máximo lido de uma requisição (64 KB)

# Arquivos
SERVER_ROOT = "./serverroot"    # Diretório raiz para servir arquivos estáticos
SERVER_FILES = "./serverfiles"  # Arquivos do sistema (página 404)
NOT_FOUND_FILE = "404.html"     # Página 404, dentro de SERVER_FILES
INDEX_FILE = "index.html"       # Arquivo procurado quando o caminho é um diretório

# Cache
CACHE_CAPACITY = 10             # Número máximo de arquivos mantidos em memória

# Endpoint dinâmico /d20
D20_SIDES = 20

# Logs e métricas
LOG_FILE = "logs/server.log"
METRICS_CSV_FILE = "metrics/requests.csv"

# Códigos de saída
EXIT_LISTENER_FAILURE = 1       # Não foi possível abrir a porta
EXIT_MISSING_404 = 3            # Página 404 do sistema não encontrada
