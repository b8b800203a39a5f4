from motivatr.crud.users import crud_user
from motivatr.crud.tasks import crud_task

__all__ = [
    "crud_user",
    "crud_task",
]
