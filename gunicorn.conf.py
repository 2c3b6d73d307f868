import os

bind = f"""[::]:{os.getenv("GUNICORN_PORT", "8001")}"""
workers = int(os.getenv("GUNICORN_NUM_WORKERS", "2"))
worker_class = "uvicorn.workers.UvicornWorker"
timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))
worker_tmp_dir = os.getenv("GUNICORN_WORKER_DIR")
loglevel = os.getenv("GUNICORN_LOGLEVEL", "INFO").lower()
wsgi_app = "main:app"
