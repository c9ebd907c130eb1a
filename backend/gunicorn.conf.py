# Entry point: gunicorn -c gunicorn.conf.py "freightmarket:create_app()"
import os

# Bind & workers (sync workers; one request per worker at a time)
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = 1
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr; the app itself emits JSON lines
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Trust proxy headers (ProxyFix handles X-Forwarded-For for rate limiting)
forwarded_allow_ips = "*"
proxy_protocol = False
