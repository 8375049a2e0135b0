"""API route modules."""

from .events import router as events_router
from .health import router as health_router
from .scheduling import router as scheduling_router
from .workload import router as workload_router

__all__ = ["health_router", "events_router", "workload_router", "scheduling_router"]
