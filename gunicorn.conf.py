"""
Gunicorn configuration for Level CRE production deployment.

Usage:
    gunicorn levelcre.main:app -c gunicorn.conf.py
"""

import multiprocessing
import os

# Bind to all interfaces on port 8000
bind = "0.0.0.0:8000"

# Worker processes: CPU cores * 2 + 1 (Gunicorn recommendation).
# The memory backend keeps one dataset per process, so it runs a single worker.
if os.getenv("STORAGE_BACKEND", "database").strip().lower() == "memory":
    workers = 1
else:
    workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))

# Use Uvicorn's ASGI worker for FastAPI
worker_class = "uvicorn.workers.UvicornWorker"

# Request timeout (seconds)
timeout = 30

# Keep-alive connections (seconds)
keepalive = 5

# Logging
accesslog = "-"  # stdout
errorlog = "-"   # stderr
loglevel = "info"
