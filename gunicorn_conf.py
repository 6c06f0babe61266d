import multiprocessing

# Gunicorn configuration file
# gunicorn -c gunicorn_conf.py app.main:app

bind = "0.0.0.0:8000"

# Standard formula: (2 x num_cores) + 1
workers = multiprocessing.cpu_count() * 2 + 1
worker_class = "uvicorn.workers.UvicornWorker"

timeout = 60
keepalive = 5

# Logging
accesslog = "-" # Log to stdout
errorlog = "-"  # Log to stderr
loglevel = "info"

name = "team_task_manager"
reload = False
