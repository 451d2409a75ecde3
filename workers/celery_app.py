"""Celery app factory."""

from celery import Celery

celery_app = Celery("jobx_interview", include=["workers.tasks.interviews"])
celery_app.config_from_object("workers.celery_config")
