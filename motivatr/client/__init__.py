from motivatr.client.api_client import ClientError, MotivatrClient
from motivatr.client.state import (
    AppState,
    DateMarker,
    Streak,
    TaskFilter,
    View,
    date_marker,
    filtered_tasks,
    tasks_for_date,
)

__all__ = [
    "ClientError",
    "MotivatrClient",
    "AppState",
    "DateMarker",
    "Streak",
    "TaskFilter",
    "View",
    "date_marker",
    "filtered_tasks",
    "tasks_for_date",
]
