"""Gunicorn configuration for production deployment."""

import os

# Server socket
bind = os.environ.get('GUNICORN_BIND', '0.0.0.0:8000')

# SQLite allows a single writer: keep the worker count low and use threads
workers = int(os.environ.get('GUNICORN_WORKERS', 2))
threads = int(os.environ.get('GUNICORN_THREADS', 4))
worker_class = 'gthread'

# Backup imports replace the whole store in one request
timeout = 120
graceful_timeout = 30
keepalive = 5

# Logging (same folder as the application log)
_log_dir = os.environ.get('LOG_DIR', 'logs')
os.makedirs(_log_dir, exist_ok=True)
accesslog = os.path.join(_log_dir, 'gunicorn-access.log')
errorlog = os.path.join(_log_dir, 'gunicorn-error.log')
loglevel = os.environ.get('GUNICORN_LOG_LEVEL', 'info')
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(D)s'

proc_name = 'canoe-rentals'

# The app module runs load_dotenv() and builds the config once
preload_app = True

# Worker recycling
max_requests = 1000
max_requests_jitter = 50

# Request limits
limit_request_line = 8190
limit_request_fields = 100
limit_request_field_size = 8190
