"""Celery configuration for interview post-processing."""

from kombu import Exchange, Queue

from core.config import settings

broker_url = settings.celery_broker_url
result_backend = settings.celery_result_backend

# Task routing and serialization
task_serializer = "json"
accept_content = ["json"]
result_serializer = "json"
timezone = "UTC"
enable_utc = True

# Task execution settings
task_track_started = True
task_time_limit = 30 * 60  # 30 minutes hard limit
task_soft_time_limit = 25 * 60  # 25 minutes soft limit

# Acknowledge after the task finishes so a worker crash does not drop an interview
task_acks_late = True
worker_prefetch_multiplier = 1
worker_max_tasks_per_child = 200

# Queue configuration with routing
default_exchange = Exchange("jobx", type="direct")
task_default_queue = "default"
task_queues = (
    Queue("default", exchange=default_exchange, routing_key="default"),
    Queue("interview_processing", exchange=default_exchange, routing_key="interviews"),
)

task_routes = {
    "workers.tasks.interviews.*": {"queue": "interview_processing"},
}

# Result backend settings
result_expires = 24 * 3600
