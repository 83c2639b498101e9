from celery import Celery

from eventhub.core.config import settings

celery_app = Celery(
    "eventhub",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["eventhub.worker.tasks"],
)
celery_app.conf.task_serializer = "json"
celery_app.conf.result_serializer = "json"
celery_app.conf.accept_content = ["json"]
celery_app.conf.task_ignore_result = True
