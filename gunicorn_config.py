"""
Gunicorn config: bind to 0.0.0.0 and PORT (default 3000).
"""
import os

bind = "0.0.0.0:{}".format(os.environ.get("PORT", "3000"))
workers = 1
threads = 2
timeout = 120
