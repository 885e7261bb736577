"""Controllers, one per API resource group.

Each operation exists as a coroutine and as a blocking `*_sync` variant.
"""

from adapters.controllers.delivery_reports import DeliveryReportsController
from adapters.controllers.messages import MessagesController
from adapters.controllers.replies import RepliesController

__all__ = [
    "DeliveryReportsController",
    "MessagesController",
    "RepliesController",
]
