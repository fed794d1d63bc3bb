import multiprocessing
import os

# Gunicorn configuration for the partnerhub API
wsgi_app = "wsgi:app"
bind = os.environ.get("PARTNERHUB_BIND", "0.0.0.0:8000")

# Requests are short database calls, except status updates and bureau
# registration, which wait on SendGrid before answering.
workers = int(os.environ.get("PARTNERHUB_WORKERS", multiprocessing.cpu_count() + 1))
worker_class = "gthread"
threads = int(os.environ.get("PARTNERHUB_THREADS", 4))
timeout = 60
graceful_timeout = 30
keepalive = 5

# Recycle workers to keep SQLAlchemy connection pools fresh
max_requests = 2000
max_requests_jitter = 200

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("PARTNERHUB_LOG_LEVEL", "info")

proc_name = "partnerhub"
