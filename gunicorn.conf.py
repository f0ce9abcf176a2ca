import os

bind = f"""[::]:{os.getenv("GUNICORN_PORT", "8000")}"""
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.getenv("GUNICORN_NUM_WORKERS", "2"))
timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", "30"))
worker_tmp_dir = os.getenv("GUNICORN_WORKER_DIR")
loglevel = os.getenv("GUNICORN_LOGLEVEL", "INFO").lower()
