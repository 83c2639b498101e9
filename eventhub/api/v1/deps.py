from typing import Annotated

from fastapi import Depends

from eventhub.notifications import NotificationDispatcher, get_dispatcher

Dispatcher = Annotated[NotificationDispatcher, Depends(get_dispatcher)]
