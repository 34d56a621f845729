from .link_registry import link_registry, LinkRegistry
from .line_service import line_service, LineService
from .store_service import reminder_store, ReminderStore
from .reminder_service import ReminderService, TriggerKind
from .linking_service import LinkingService
from .gemini_service import gemini_service
from .scheduler import reminder_scheduler

reminder_service = ReminderService(reminder_store, line_service, link_registry)
linking_service = LinkingService(link_registry, reminder_store, line_service)

__all__ = [
    'link_registry',
    'LinkRegistry',
    'line_service',
    'LineService',
    'reminder_store',
    'ReminderStore',
    'reminder_service',
    'ReminderService',
    'TriggerKind',
    'linking_service',
    'LinkingService',
    'gemini_service',
    'reminder_scheduler'
]
