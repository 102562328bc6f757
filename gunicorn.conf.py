"""
Gunicorn configuration for production deployment
Run with: gunicorn app.main:app -c gunicorn.conf.py
"""
import os

# Server socket
bind = f"{os.getenv('HOST', '0.0.0.0')}:{os.getenv('PORT', '8000')}"
backlog = 2048

# Worker processes; each worker holds its own MongoDB client pool
workers = int(os.getenv("GUNICORN_WORKERS", 2))
worker_class = "uvicorn.workers.UvicornWorker"

# Worker lifecycle
max_requests = 1000
max_requests_jitter = 100

# Timeouts
timeout = 30
keepalive = 5
graceful_timeout = 30

proc_name = "jatrackr_api"

# Logging (application logs go through structlog on stdout)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()


def on_starting(server):
    server.log.info("Starting JATrackr API")


def worker_int(worker):
    worker.log.info("Worker received INT or QUIT signal")
