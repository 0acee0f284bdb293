import uuid
from django.db import models


class TaskList(models.Model):
    """
    A named list of tasks owned by a user.

    `creator` holds the owner's username; it is not linked to a User row.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, db_index=True)
    creator = models.CharField(max_length=150, db_index=True)
    shared = models.BooleanField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return f"{self.name} ({self.creator})"


class Task(models.Model):
    """
    A single task inside a list.

    `task_id` is the caller-supplied identifier used by clients for updates.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    # Store list_id as UUID field (no FK); deletes cascade in services
    list_id = models.UUIDField(db_index=True)
    done = models.BooleanField()
    task_id = models.CharField(max_length=255, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return self.name
